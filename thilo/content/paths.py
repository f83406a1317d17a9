"""
Slug lookups and static page paths built on top of the mapping tables.

Expected usage:
    - The language switcher asks for the chapter slug in another locale.
    - The static generator asks for one page path per section and locale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .domain import Section
from .mappings import ChapterMappings, SectionMappings, chapter_key


@dataclass(frozen=True)
class SlugVariant:
    locale: str
    slug: str
    title: str = ""


@dataclass(frozen=True)
class PagePath:
    """One page to generate.

    Parameters:
        params: Route parameters; always `slug`, plus `lang` when the route
            carries the locale as a parameter.
        section: The locale variant rendered on this page.
        locale: Locale of the page.
    """

    params: dict = field(hash=False)
    section: Section
    locale: str


def all_slugs_for_section(section_id: str | int, section_mappings: SectionMappings) -> list[SlugVariant]:
    """Return every known locale slug of a section (empty list when unknown)."""
    entries = section_mappings.get(str(section_id)) or {}
    return [
        SlugVariant(locale=loc, slug=entry.get("slug", ""), title=entry.get("title", ""))
        for loc, entry in entries.items()
    ]


def resolve_chapter_slug(
    locale: str,
    chapter_slug: str,
    target_locale: str,
    chapter_mappings: ChapterMappings,
) -> Optional[str]:
    """Translate a chapter slug into `target_locale`.

    Returns the slug unchanged when source and target locale are equal, and
    None when no chapter with the same sorting exists in the target locale.
    """
    if locale == target_locale:
        return chapter_slug
    return (chapter_mappings.get(chapter_key(locale, chapter_slug)) or {}).get(target_locale)


def generate_section_paths(
    sections_by_locale: Mapping[str, Iterable[Section]],
    section_mappings: SectionMappings,
    *,
    include_locale_param: bool = False,
) -> list[PagePath]:
    """Build the list of section pages for a static build.

    The mapped slug wins over the section's own slug so both tables agree on
    URLs. Sections without any slug (empty titles) are skipped.
    """
    paths: list[PagePath] = []
    for locale, sections in sections_by_locale.items():
        for section in sections or ():
            variants = all_slugs_for_section(section.id, section_mappings)
            localized = next((v.slug for v in variants if v.locale == locale), None)
            slug = localized or section.slug
            if not slug:
                continue
            params = {"lang": locale, "slug": slug} if include_locale_param else {"slug": slug}
            paths.append(PagePath(params=params, section=section, locale=locale))
    return paths


__all__ = [
    "PagePath",
    "SlugVariant",
    "all_slugs_for_section",
    "generate_section_paths",
    "resolve_chapter_slug",
]
