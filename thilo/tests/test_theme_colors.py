"""
Theme palette derived from the brand color.

Why:
    The whole site theme is generated from one CMS-configured color; invalid
    input must fall back to the default brand color instead of breaking CSS.
"""
from __future__ import annotations

import re

import pytest

from thilo.config import BRAND_COLOR_DEFAULT
from thilo.theme.colors import (
    generate_color_css_properties,
    generate_color_palette,
    generate_theme_stylesheet,
    hex_to_hsl,
    hsl_to_hex,
)


_HEX = re.compile(r"^#[0-9a-f]{6}$")


def test_hsl_round_trip_for_primaries():
    assert hex_to_hsl("#ff0000") == (0, 100, 50)
    assert hsl_to_hex(0, 100, 50) == "#ff0000"
    assert hsl_to_hex(0, 0, 100) == "#ffffff"
    assert hsl_to_hex(0, 0, 0) == "#000000"


def test_dark_brand_color_is_the_600_shade():
    palette = generate_color_palette("#521d3a")

    assert len(palette) == 24
    assert palette["primary"] == "#521d3a"
    assert palette["primary-600"] == "#521d3a"
    assert palette["primary-text"] == "#521d3a"
    assert palette["primary-fg"] != "#ffffff"
    assert all(_HEX.match(v) for v in palette.values())


def test_light_brand_color_is_the_400_shade_with_white_foreground():
    palette = generate_color_palette("#f0c040")

    assert palette["primary-400"] == "#f0c040"
    assert palette["primary-fg"] == "#ffffff"


def test_scale_gets_darker():
    palette = generate_color_palette("#3a7d44")
    lightness = [hex_to_hsl(palette[f"primary-{n}"])[2] for n in (50, 100, 200, 300, 700, 800, 900, 950)]
    assert lightness == sorted(lightness, reverse=True)


@pytest.mark.parametrize("value", [None, "", "red", "#12345", "#zzzzzz"])
def test_invalid_color_falls_back_to_default(value):
    assert generate_color_palette(value) == generate_color_palette(BRAND_COLOR_DEFAULT)


def test_css_properties():
    css = generate_color_css_properties("#521d3a")
    lines = css.split("\n  ")
    assert len(lines) == 24
    assert lines[0].startswith("--color-primary-50: #")
    assert "--color-primary: #521d3a;" in lines


def test_theme_stylesheet_wraps_root():
    sheet = generate_theme_stylesheet("#521d3a")
    assert sheet.startswith(":root {\n  --color-primary-50:")
    assert sheet.endswith("\n}\n")
