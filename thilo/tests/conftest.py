"""
Pytest configuration for thilo tests.

Why: Tests must not depend on the developer's shell environment or on the
real CMS. THILO_* variables are cleared for every test and HTTP calls go
through `httpx.MockTransport`.
"""
import os
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Make the package importable without an editable install
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from thilo.config import SiteConfig  # noqa: E402
from thilo.content.domain import Chapter, Section  # noqa: E402
from thilo.content.slugs import slugify  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_thilo_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("THILO_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def site_config() -> SiteConfig:
    return SiteConfig(
        api_base_url="https://cms.example.test",
        locales=("de", "fr", "it"),
        default_locale="de",
        http_timeout_seconds=5,
        brand_color="#521d3a",
    )


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an httpx.Client whose requests are answered by `handler`."""

    def _factory(handler):
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _factory


def _make_section(id: int, locale: str, title: str, sorting: int, chapters=()) -> Section:
    return Section(
        id=id,
        title=title,
        slug=slugify(title),
        locale=locale,
        sorting=sorting,
        chapters=tuple(
            Chapter(id=cid, title=ctitle, slug=slugify(ctitle), sorting=csort)
            for cid, ctitle, csort in chapters
        ),
    )


@pytest.fixture
def make_section() -> Callable[..., Section]:
    """Section factory: chapters are given as (id, title, sorting) tuples."""
    return _make_section
