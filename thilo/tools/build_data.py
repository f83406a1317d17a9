"""Fetch CMS sections and write the build-time data files for the static site.

Why:
    Page generation, the language switcher and the theme all read data that
    is derived once per build: the section lists per locale, the cross-locale
    mapping tables and the palette stylesheet.

Usage:
    python -m thilo.tools.build_data --out dist/data
    python -m thilo.tools.build_data --out dist/data --locale de --locale fr \
      --brand-color '#1d3a52'

Writes into --out:
    sections.json          locale -> list of sections (failed locales: [])
    section-mappings.json  "<section id>" -> locale -> {title, slug, url}
    chapter-mappings.json  "<locale>_<chapter slug>" -> locale -> slug
    theme.css              :root custom properties for the palette

Notes:
    - A locale that fails to load does not fail the build; it is reported and
      written as an empty list.
    - Environment variables (THILO_API_BASE_URL, THILO_LOCALES, ...) are read
      from the process environment and an optional .env file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv

from thilo.config import SiteConfig, load_site_config
from thilo.content.mappings import build_mappings
from thilo.content.sections import failed_locales, fetch_all_sections, sections_by_locale
from thilo.theme.colors import generate_theme_stylesheet


logger = logging.getLogger("thilo.tools.build_data")


def _load_config(locales: tuple[str, ...], brand_color: str | None, api_base_url: str | None) -> SiteConfig:
    try:
        return load_site_config(locales=locales, api_base_url=api_base_url, brand_color=brand_color)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def build_data(out_dir: Path, cfg: SiteConfig, *, client: httpx.Client | None = None) -> dict:
    """Run one build and write all data files; returns a summary dict."""
    results = fetch_all_sections(cfg.locales, client=client, config=cfg)
    by_locale = sections_by_locale(results)
    mappings = build_mappings(by_locale, default_locale=cfg.default_locale)

    out_dir.mkdir(parents=True, exist_ok=True)
    _write_json(out_dir / "sections.json", {loc: [s.to_dict() for s in secs] for loc, secs in by_locale.items()})
    _write_json(out_dir / "section-mappings.json", mappings.section_mappings)
    _write_json(out_dir / "chapter-mappings.json", mappings.chapter_mappings)
    (out_dir / "theme.css").write_text(generate_theme_stylesheet(cfg.brand_color), encoding="utf-8")

    summary = {
        "sections": {loc: len(secs) for loc, secs in by_locale.items()},
        "section_mappings": len(mappings.section_mappings),
        "chapter_mappings": len(mappings.chapter_mappings),
        "failed_locales": failed_locales(results),
    }
    logger.info("Built section mappings for %s sections", summary["section_mappings"])
    return summary


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--out", "out_dir", required=True, type=click.Path(file_okay=False, path_type=Path), help="Output directory for the data files.")
@click.option("--locale", "locales", multiple=True, help="Locale to build (repeatable); defaults to THILO_LOCALES.")
@click.option("--brand-color", required=False, help="Brand color (#rrggbb) for the theme palette.")
@click.option("--api-base-url", required=False, help="CMS base URL; defaults to THILO_API_BASE_URL.")
@click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Optional .env file to load first.")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
def cli(
    out_dir: Path,
    locales: tuple[str, ...],
    brand_color: str | None,
    api_base_url: str | None,
    env_file: Path | None,
    verbose: bool,
) -> None:
    """Fetch sections for all locales and write mapping tables and theme."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()
    cfg = _load_config(locales, brand_color, api_base_url)

    summary = build_data(out_dir, cfg)
    counts = ", ".join(f"{loc}={n}" for loc, n in summary["sections"].items())
    click.echo(
        f"Sections: {counts}; section mappings={summary['section_mappings']}, "
        f"chapter mappings={summary['chapter_mappings']}"
    )
    if summary["failed_locales"]:
        click.echo("Failed locales (written as empty): " + ", ".join(summary["failed_locales"]), err=True)


if __name__ == "__main__":  # pragma: no cover - manual entry
    cli()
