"""
Build CLI: fetch, map and write the data files for one static build.

Why:
    The build must finish and write complete files for the healthy locales
    even when one locale cannot be fetched; the failure is reported, not fatal.
"""
from __future__ import annotations

import json
from pathlib import Path

import httpx
from click.testing import CliRunner

from thilo.tools import build_data as build_data_mod


PAYLOADS = {
    "de": [{"id": 1, "title": "Wölfe", "sorting": 1, "chapters": [{"id": 11, "title": "Knoten", "sorting": 1}]}],
    "fr": [{"id": 1, "title": "Louveteaux", "sorting": 1, "chapters": [{"id": 21, "title": "Noeuds", "sorting": 1}]}],
    "it": [{"id": 1, "title": "Lupetti", "sorting": 1, "chapters": [{"id": 31, "title": "Nodi", "sorting": 1}]}],
}


def _handler(request: httpx.Request) -> httpx.Response:
    locale = request.url.params["_locale"]
    if locale == "it":
        return httpx.Response(500)
    return httpx.Response(200, json=PAYLOADS[locale])


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_build_data_writes_all_artifacts(tmp_path, site_config, mock_client):
    with mock_client(_handler) as client:
        summary = build_data_mod.build_data(tmp_path, site_config, client=client)

    assert summary["failed_locales"] == ["it"]
    assert summary["sections"] == {"de": 1, "fr": 1, "it": 0}

    sections = _read(tmp_path / "sections.json")
    assert sections["it"] == []
    assert sections["de"][0]["slug"] == "wolfe"
    assert sections["de"][0]["chapters"] == [{"id": 11, "title": "Knoten", "slug": "knoten", "sorting": 1}]

    assert _read(tmp_path / "section-mappings.json") == {
        "1": {
            "de": {"title": "Wölfe", "slug": "wolfe", "url": "/wolfe"},
            "fr": {"title": "Louveteaux", "slug": "louveteaux", "url": "/fr/louveteaux"},
        }
    }
    assert _read(tmp_path / "chapter-mappings.json") == {
        "de_knoten": {"fr": "noeuds"},
        "fr_noeuds": {"de": "knoten"},
    }
    assert (tmp_path / "theme.css").read_text(encoding="utf-8").startswith(":root {")


def test_cli_reports_failed_locale_and_exits_zero(tmp_path, monkeypatch, mock_client):
    real_fetch_all = build_data_mod.fetch_all_sections

    def fake_fetch_all(locales, *, client=None, config=None):
        with mock_client(_handler) as mocked:
            return real_fetch_all(locales, client=mocked, config=config)

    monkeypatch.setattr(build_data_mod, "fetch_all_sections", fake_fetch_all)
    out = tmp_path / "data"

    result = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(out), "--brand-color", "#1d3a52", "--env-file", str(tmp_path / "missing.env")],
    )

    assert result.exit_code == 0, result.output
    assert "de=1, fr=1, it=0" in result.output
    assert "Failed locales (written as empty): it" in result.output
    assert "--color-primary: #1d3a52;" in (out / "theme.css").read_text(encoding="utf-8")


def test_cli_locale_option_limits_build(tmp_path, monkeypatch, mock_client):
    seen: list[tuple[str, ...]] = []
    real_fetch_all = build_data_mod.fetch_all_sections

    def fake_fetch_all(locales, *, client=None, config=None):
        seen.append(tuple(locales))
        with mock_client(_handler) as mocked:
            return real_fetch_all(locales, client=mocked, config=config)

    monkeypatch.setattr(build_data_mod, "fetch_all_sections", fake_fetch_all)

    result = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(tmp_path), "--locale", "fr", "--locale", "DE", "--env-file", str(tmp_path / "missing.env")],
    )

    assert result.exit_code == 0, result.output
    assert seen == [("fr", "de")]
    assert "Failed locales" not in result.output


def test_cli_invalid_environment_is_a_click_error(tmp_path, monkeypatch):
    monkeypatch.setenv("THILO_HTTP_TIMEOUT", "nope")

    result = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(tmp_path), "--env-file", str(tmp_path / "missing.env")],
    )

    assert result.exit_code != 0
    assert "THILO_HTTP_TIMEOUT" in result.output


def test_cli_rejects_locale_override_without_default_locale(tmp_path):
    result = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(tmp_path), "--locale", "fr", "--env-file", str(tmp_path / "missing.env")],
    )

    assert result.exit_code != 0
    assert "THILO_DEFAULT_LOCALE='de' is not one of THILO_LOCALES ['fr']" in result.output


def test_cli_rejects_invalid_locale_and_brand_color_overrides(tmp_path):
    bad_locale = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(tmp_path), "--locale", "de", "--locale", "deutsch", "--env-file", str(tmp_path / "missing.env")],
    )
    bad_color = CliRunner().invoke(
        build_data_mod.cli,
        ["--out", str(tmp_path), "--brand-color", "purple", "--env-file", str(tmp_path / "missing.env")],
    )

    assert bad_locale.exit_code != 0
    assert "invalid locale: 'deutsch'" in bad_locale.output
    assert bad_color.exit_code != 0
    assert "THILO_BRAND_COLOR" in bad_color.output
