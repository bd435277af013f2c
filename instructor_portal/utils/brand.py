"""Brand selection from request headers."""

from typing import Any, Literal, Mapping

Brand = Literal["gc", "ma"]

GUITAR_CENTER: Brand = "gc"
MUSIC_ARTS: Brand = "ma"


def resolve_brand(headers: Mapping[str, Any] | None, music_arts_referer_url: str | None) -> Brand:
    """Return ``ma`` when the request comes from the Music & Arts site.

    ``X-Referer-Override`` takes precedence over ``Referer`` so a brand can
    be chosen explicitly. Header names are matched case-insensitively.
    """
    normalized = {str(key).lower(): value for key, value in (headers or {}).items()}
    referer = normalized.get("x-referer-override") or normalized.get("referer")
    if music_arts_referer_url and referer == music_arts_referer_url:
        return MUSIC_ARTS
    return GUITAR_CENTER
