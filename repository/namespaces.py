# repository/namespaces.py
from typing import Final

GARY: Final[str] = "gary"
GOOBER: Final[str] = "goober"

# Static transfer prefixes mirror the namespace names with a capital letter
STATIC_PREFIXES: Final[dict[str, str]] = {
    GARY: "/Gary",
    GOOBER: "/Goober",
}
