"""Content context: CMS sections, slugs and cross-locale mapping tables.

Re-export the common entry points for convenient imports in tests.
"""

from .domain import Chapter, Section, SectionsFetched, SectionsFetchFailed
from .mappings import Mappings, build_mappings, resolve_url
from .slugs import slugify

__all__ = [
    "Chapter",
    "Mappings",
    "Section",
    "SectionsFetched",
    "SectionsFetchFailed",
    "build_mappings",
    "resolve_url",
    "slugify",
]
