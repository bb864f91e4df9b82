# config/settings.py
import os
import sys
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.enums import CountMode, Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    PORT: int = Field(default=8080, validation_alias="PORT")
    BIND_ADDRESS: str = Field(default="0.0.0.0", validation_alias="BIND_ADDRESS")
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")

    # Image namespaces
    GARY_DIR: str = Field(default="gary_images", validation_alias="GARY_DIR")
    GOOBER_DIR: str = Field(default="goober_images", validation_alias="GOOBER_DIR")
    GARY_FALLBACK: str = Field(default="Gary76.jpg", validation_alias="GARY_FALLBACK")
    GOOBER_FALLBACK: str = Field(
        default="goober8.jpg", validation_alias="GOOBER_FALLBACK"
    )
    FALLBACK_DIR: Optional[str] = Field(default=None, validation_alias="FALLBACK_DIR")
    GARYURL: str = Field(
        default="http://localhost:8080/Gary", validation_alias="GARYURL"
    )
    GOOBERURL: str = Field(
        default="http://localhost:8080/Goober", validation_alias="GOOBERURL"
    )
    COUNT_MODE: CountMode = Field(default=CountMode.CACHED, validation_alias="COUNT_MODE")

    # Directory watching
    WATCH_ENABLED: bool = Field(default=True, validation_alias="WATCH_ENABLED")
    WATCH_DEBOUNCE_SECONDS: float = Field(
        default=0.25, ge=0, validation_alias="WATCH_DEBOUNCE_SECONDS"
    )

    # Line sources
    QUOTES_FILE: str = Field(default="quotes.json", validation_alias="QUOTES_FILE")
    JOKES_FILE: str = Field(default="jokes.json", validation_alias="JOKES_FILE")
    CACHE_LINES: bool = Field(default=False, validation_alias="CACHE_LINES")

    # Docs page; unset disables "/"
    DOCS_FILE: Optional[str] = Field(default=None, validation_alias="DOCS_FILE")

    # Logging knobs
    LOGGER_NAME: str = "gary-api"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("PORT")
    @classmethod
    def _check_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator(
        "BIND_ADDRESS",
        "GARY_DIR",
        "GOOBER_DIR",
        "GARY_FALLBACK",
        "GOOBER_FALLBACK",
        "QUOTES_FILE",
        "JOKES_FILE",
    )
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("FALLBACK_DIR", "DOCS_FILE", mode="before")
    @classmethod
    def _blank_is_unset(cls, v: Optional[str]) -> Optional[str]:
        # An exported-but-empty variable means "not configured"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def server_address(self) -> str:
        return f"{self.BIND_ADDRESS}:{self.PORT}"


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
