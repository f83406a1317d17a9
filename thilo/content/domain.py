"""
Content domain types: sections, chapters and per-locale fetch results.

Design:
    - Value objects: Section, Chapter (frozen, hashable)
    - Result types: SectionsFetched, SectionsFetchFailed

Notes:
    A section's `id` and `sorting` are assigned by the CMS and shared by all
    translated variants of the same logical section. Chapters carry no
    cross-locale id guarantee; `sorting` is their join key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Chapter:
    id: int
    title: str
    slug: str
    sorting: int


@dataclass(frozen=True)
class Section:
    """One locale variant of a CMS section.

    Parameters:
        id: CMS id, identical across locale variants.
        title: Localised title.
        slug: Derived from `title` via `slugify`.
        locale: Locale this variant belongs to (e.g. "fr").
        sorting: CMS ordering key, identical across locale variants.
        chapters: Chapters in CMS order; use `sorting` for ordering.
    """

    id: int
    title: str
    slug: str
    locale: str
    sorting: int
    chapters: tuple[Chapter, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "locale": self.locale,
            "sorting": self.sorting,
            "chapters": [
                {"id": c.id, "title": c.title, "slug": c.slug, "sorting": c.sorting}
                for c in self.chapters
            ],
        }


# ----------------------------- Result types ---------------------------------


@dataclass(frozen=True)
class SectionsFetched:
    locale: str
    sections: tuple[Section, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SectionsFetchFailed:
    """A locale whose section list could not be loaded.

    The build continues with an empty list for this locale; `reason` is a
    short diagnostic (exception class or HTTP status), never a payload.
    """

    locale: str
    reason: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def sections(self) -> tuple[Section, ...]:
        return ()


SectionsResult = Union[SectionsFetched, SectionsFetchFailed]


__all__ = [
    "Chapter",
    "Section",
    "SectionsFetched",
    "SectionsFetchFailed",
    "SectionsResult",
]
