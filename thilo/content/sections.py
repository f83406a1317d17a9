"""
Section source: load the per-locale section lists from the CMS.

Why:
    Pages, navigation and the cross-locale mapping tables are all built from
    the CMS section lists. The fetch happens once per locale at build time.

Behavior:
    - One GET per locale: `{api_base_url}/sections?_locale=<locale>`.
    - A transport error, non-2xx status or non-JSON / non-list payload turns
      into a `SectionsFetchFailed` for that locale and is logged as a
      warning. Other locales are still fetched.
    - A single section or chapter missing `id`/`sorting` is skipped with a
      warning; the rest of the locale survives.
    - Missing `chapters` is treated as an empty list.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

import httpx

from thilo.config import SiteConfig, load_site_config
from .domain import Chapter, Section, SectionsFetched, SectionsFetchFailed, SectionsResult
from .slugs import slugify


logger = logging.getLogger("thilo.content")


class MalformedSectionPayload(ValueError):
    """The CMS answered with JSON that does not look like a section list."""


def _parse_chapter(raw: object) -> Chapter:
    if not isinstance(raw, dict):
        raise TypeError("chapter entry is not an object")
    return Chapter(
        id=int(raw["id"]),
        title=str(raw.get("title") or ""),
        slug=slugify(raw.get("title")),
        sorting=int(raw["sorting"]),
    )


def _parse_chapters(raw_chapters: Iterable[object], locale: str, section_id: int) -> tuple[Chapter, ...]:
    chapters: list[Chapter] = []
    for raw in raw_chapters:
        try:
            chapters.append(_parse_chapter(raw))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Skipping chapter in section %s (%s): %s", section_id, locale, exc.__class__.__name__
            )
    return tuple(chapters)


def parse_sections(payload: object, locale: str) -> tuple[Section, ...]:
    """Normalise a CMS section list into Section objects with derived slugs.

    A section lacking `id`/`sorting` is skipped, as is a chapter lacking
    them; the rest of the locale is kept and each skip is logged.

    Raises:
        MalformedSectionPayload: when the payload is not a list.
    """
    if not isinstance(payload, list):
        raise MalformedSectionPayload(f"expected a list, got {type(payload).__name__}")
    sections: list[Section] = []
    for position, raw in enumerate(payload):
        try:
            if not isinstance(raw, dict):
                raise TypeError("section entry is not an object")
            section_id = int(raw["id"])
            sorting = int(raw["sorting"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping section #%s (%s): %s", position, locale, exc.__class__.__name__)
            continue
        sections.append(
            Section(
                id=section_id,
                title=str(raw.get("title") or ""),
                slug=slugify(raw.get("title")),
                locale=locale,
                sorting=sorting,
                chapters=_parse_chapters(raw.get("chapters") or [], locale, section_id),
            )
        )
    return tuple(sections)


def fetch_sections(
    locale: str,
    *,
    client: httpx.Client,
    config: SiteConfig | None = None,
) -> SectionsResult:
    """Fetch and parse the section list for one locale.

    Returns SectionsFetched on success and SectionsFetchFailed otherwise; this
    function does not raise for network or payload problems.
    """
    cfg = config or load_site_config()
    url = f"{cfg.api_base_url}/sections"
    try:
        resp = client.get(url, params={"_locale": locale})
        resp.raise_for_status()
        sections = parse_sections(resp.json(), locale)
    except httpx.HTTPStatusError as exc:
        reason = f"http_{exc.response.status_code}"
    except httpx.HTTPError as exc:
        reason = exc.__class__.__name__
    except ValueError as exc:
        # json decode errors and MalformedSectionPayload
        reason = exc.__class__.__name__
    else:
        logger.info("Fetched %s sections for %s", len(sections), locale)
        return SectionsFetched(locale=locale, sections=sections)

    logger.warning("Failed to fetch sections for %s: %s", locale, reason)
    return SectionsFetchFailed(locale=locale, reason=reason)


def fetch_all_sections(
    locales: Iterable[str] | None = None,
    *,
    client: httpx.Client | None = None,
    config: SiteConfig | None = None,
) -> dict[str, SectionsResult]:
    """Fetch every locale independently; one failure never aborts the others."""
    cfg = config or load_site_config()
    wanted = tuple(locales) if locales is not None else cfg.locales
    if client is not None:
        return {loc: fetch_sections(loc, client=client, config=cfg) for loc in wanted}
    with httpx.Client(timeout=cfg.http_timeout_seconds, follow_redirects=True) as own_client:
        return {loc: fetch_sections(loc, client=own_client, config=cfg) for loc in wanted}


def sections_by_locale(results: Mapping[str, SectionsResult]) -> dict[str, tuple[Section, ...]]:
    """Flatten fetch results; failed locales contribute an empty list."""
    return {loc: result.sections for loc, result in results.items()}


def failed_locales(results: Mapping[str, SectionsResult]) -> list[str]:
    return [loc for loc, result in results.items() if not result.ok]


__all__ = [
    "MalformedSectionPayload",
    "failed_locales",
    "fetch_all_sections",
    "fetch_sections",
    "parse_sections",
    "sections_by_locale",
]
