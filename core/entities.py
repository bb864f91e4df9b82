# core/entities.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Namespace:
    """
    A named image collection: where its files live, what to answer when the
    directory is empty and how its files are addressed over HTTP.
    """

    name: str  # "gary" | "goober"
    directory: str
    fallback: str  # filename used when the cached listing is empty
    base_url: str
    static_prefix: str  # e.g. "/Gary"
    fallback_dir: Optional[str] = None  # where to look when `fallback` left `directory`


@dataclass(frozen=True)
class FallbackImage:
    """Fallback image bytes read once at startup."""

    filename: str
    content: bytes
    media_type: str
