"""
Cross-locale identity tables for sections and chapters.

Intent:
    The CMS delivers one flat section list per locale. Pages need to link to
    "the same section" or "the same chapter" in another locale, so we rebuild
    two lookup tables from scratch on every build:

    - section_mappings: "<section id>" -> locale -> {title, slug, url}
    - chapter_mappings: "<locale>_<chapter slug>" -> target locale -> slug

Matching rules:
    - Sections are grouped by their CMS `id` (shared by all translations).
    - Chapters carry no shared id; within one section group they are joined
      across locales on equal `sorting`. A chapter without a partner in some
      target locale simply gets no entry for that locale.
    - Duplicate `sorting` values inside one section: the chapter with the
      lowest `id` is the join partner.

Both functions here are pure; calling them twice with the same input yields
equal tables.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Mapping

from .domain import Chapter, Section


DEFAULT_LOCALE = "de"

SectionMappings = dict[str, dict[str, dict[str, str]]]
ChapterMappings = dict[str, dict[str, str]]


@dataclass(frozen=True)
class Mappings:
    section_mappings: SectionMappings
    chapter_mappings: ChapterMappings


def locale_root(locale: str, *, default_locale: str = DEFAULT_LOCALE) -> str:
    return "/" if locale == default_locale else f"/{locale}/"


def section_url(slug: str, locale: str, *, default_locale: str = DEFAULT_LOCALE) -> str:
    """Public URL of a section page: "/<slug>" or "/<locale>/<slug>"."""
    if locale == default_locale:
        return f"/{slug}"
    return f"/{locale}/{slug}"


def chapter_key(locale: str, chapter_slug: str) -> str:
    return f"{locale}_{chapter_slug}"


def _group_by_id(sections_by_locale: Mapping[str, Iterable[Section]]) -> dict[int, dict[str, Section]]:
    """Group locale variants by section id, keeping locale insertion order.

    A locale listing the same id twice keeps its first occurrence.
    """
    groups: dict[int, dict[str, Section]] = {}
    for locale, sections in sections_by_locale.items():
        for section in sections or ():
            members = groups.setdefault(section.id, {})
            members.setdefault(locale, section)
    return groups


def _sorting_index(group_id: int, members: Mapping[str, Section]) -> dict[tuple[int, str, int], Chapter]:
    """Index the chapters of one section group by (group id, locale, sorting)."""
    index: dict[tuple[int, str, int], Chapter] = {}
    for locale, section in members.items():
        for chapter in section.chapters:
            key = (group_id, locale, chapter.sorting)
            current = index.get(key)
            if current is None or chapter.id < current.id:
                index[key] = chapter
    return index


def build_mappings(
    sections_by_locale: Mapping[str, Iterable[Section]],
    *,
    default_locale: str = DEFAULT_LOCALE,
) -> Mappings:
    """Build the section and chapter mapping tables for one build.

    Parameters:
        sections_by_locale: Section lists per locale. Failed locales are
            passed as empty sequences.
        default_locale: Locale served at the site root (no URL prefix).

    Returns:
        Mappings with both tables. Tables are fresh dicts; the caller may
        mutate them without affecting later builds.
    """
    section_mappings: SectionMappings = {}
    chapter_mappings: ChapterMappings = defaultdict(dict)

    for group_id, members in _group_by_id(sections_by_locale).items():
        section_mappings[str(group_id)] = {
            locale: {
                "title": section.title,
                "slug": section.slug,
                "url": section_url(section.slug, locale, default_locale=default_locale),
            }
            for locale, section in members.items()
        }

        if len(members) < 2:
            continue
        index = _sorting_index(group_id, members)
        for from_locale, section in members.items():
            for chapter in section.chapters:
                for to_locale in members:
                    if to_locale == from_locale:
                        continue
                    match = index.get((group_id, to_locale, chapter.sorting))
                    if match is None:
                        continue
                    chapter_mappings[chapter_key(from_locale, chapter.slug)][to_locale] = match.slug

    return Mappings(section_mappings=section_mappings, chapter_mappings=dict(chapter_mappings))


def resolve_url(
    section_id: str | int,
    target_locale: str,
    section_mappings: Mapping[str, Mapping[str, Mapping[str, str]]],
    *,
    default_locale: str = DEFAULT_LOCALE,
) -> str:
    """Return the URL of a section in `target_locale`.

    Falls back to the locale root ("/" or "/<locale>/") when the section or
    its translation is unknown. Never raises.
    """
    entry = (section_mappings.get(str(section_id)) or {}).get(target_locale)
    if entry and entry.get("url"):
        return entry["url"]
    return locale_root(target_locale, default_locale=default_locale)


__all__ = [
    "ChapterMappings",
    "DEFAULT_LOCALE",
    "Mappings",
    "SectionMappings",
    "build_mappings",
    "chapter_key",
    "locale_root",
    "resolve_url",
    "section_url",
]
