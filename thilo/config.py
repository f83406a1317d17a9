"""
Site build configuration for the THILO content pipeline.

Intent:
    Provide a single place to read the environment variables that control
    which CMS is queried, which locales are built and which brand color the
    theme is derived from.

Why:
    Centralising configuration keeps defaults explicit and lets tests exercise
    config behaviour without running a build.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
import re
from typing import Sequence
from urllib.parse import urlparse


API_BASE_URL_DEFAULT = "https://api.thilo.scouts.ch"
LOCALES_DEFAULT = ("de", "fr", "it")
DEFAULT_LOCALE = "de"
BRAND_COLOR_DEFAULT = "#521d3a"
HTTP_TIMEOUT_DEFAULT = 10

_LOCALE_RE = re.compile(r"^[a-z]{2}$")
_HEX_COLOR_RE = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)


@dataclass(frozen=True)
class SiteConfig:
    api_base_url: str
    locales: tuple[str, ...]
    default_locale: str
    http_timeout_seconds: int
    brand_color: str


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw!r}")
    if value <= 0 or value > 120:
        raise ValueError(f"{name} out of range (1..120), got: {value}")
    return value


def _parse_locales(raw: str | None) -> tuple[str, ...]:
    if raw is None or not raw.strip():
        return LOCALES_DEFAULT
    locales: list[str] = []
    for part in raw.split(","):
        loc = part.strip().lower()
        if not loc:
            continue
        if not _LOCALE_RE.match(loc):
            raise ValueError(f"THILO_LOCALES contains an invalid locale: {loc!r}")
        if loc not in locales:
            locales.append(loc)
    if not locales:
        raise ValueError("THILO_LOCALES must name at least one locale")
    return tuple(locales)


def _validate_base_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("THILO_API_BASE_URL must start with http:// or https://")
    return url.rstrip("/")


def load_site_config(
    *,
    locales: Sequence[str] | None = None,
    api_base_url: str | None = None,
    brand_color: str | None = None,
) -> SiteConfig:
    """
    Parse and validate site build configuration from environment variables.

    Keyword arguments override the matching variable (command line options)
    and pass through the same validation.

    Behavior:
        - `THILO_API_BASE_URL` selects the CMS (default: production API).
        - `THILO_LOCALES` is a comma-separated list (default: de,fr,it).
        - `THILO_DEFAULT_LOCALE` must be one of the configured locales; its
          pages live at the site root.
        - `THILO_HTTP_TIMEOUT` is clamped to 1..120 seconds.
        - `THILO_BRAND_COLOR` must be a #rrggbb hex color.
    """
    base_url = _validate_base_url(api_base_url or os.getenv("THILO_API_BASE_URL") or API_BASE_URL_DEFAULT)
    raw_locales = ",".join(locales) if locales else os.getenv("THILO_LOCALES")
    wanted = _parse_locales(raw_locales)

    default_locale = (os.getenv("THILO_DEFAULT_LOCALE") or DEFAULT_LOCALE).strip().lower()
    if default_locale not in wanted:
        raise ValueError(
            f"THILO_DEFAULT_LOCALE={default_locale!r} is not one of THILO_LOCALES {list(wanted)}"
        )

    color = (brand_color or os.getenv("THILO_BRAND_COLOR") or BRAND_COLOR_DEFAULT).strip()
    if not _HEX_COLOR_RE.match(color):
        raise ValueError("THILO_BRAND_COLOR must be a hex color like #521d3a")

    return SiteConfig(
        api_base_url=base_url,
        locales=wanted,
        default_locale=default_locale,
        http_timeout_seconds=_int_env("THILO_HTTP_TIMEOUT", HTTP_TIMEOUT_DEFAULT),
        brand_color=color,
    )


__all__ = [
    "API_BASE_URL_DEFAULT",
    "BRAND_COLOR_DEFAULT",
    "DEFAULT_LOCALE",
    "LOCALES_DEFAULT",
    "SiteConfig",
    "load_site_config",
]
