"""
Theme palette derived from a single brand color.

Behavior:
    - `generate_color_palette()` returns a Tailwind-style `primary-50` ..
      `primary-950` scale plus semantic aliases, interactive states and
      border/background/text variants.
    - The brand color is used verbatim where a shade should match it exactly
      (`primary`, `primary-text`, and `primary-400` or `primary-600`
      depending on its lightness).
    - Invalid colors fall back to BRAND_COLOR_DEFAULT.

Permissions:
    Pure computation; no external calls.
"""
from __future__ import annotations

import math
import re

from thilo.config import BRAND_COLOR_DEFAULT


_HEX_RE = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)


def _js_round(value: float) -> int:
    # Half-up rounding; Python's round() rounds half to even.
    return math.floor(value + 0.5)


def hex_to_hsl(hex_color: str) -> tuple[int, int, int]:
    """Convert "#rrggbb" to (hue 0..360, saturation 0..100, lightness 0..100)."""
    h_str = hex_color.lstrip("#")
    r = int(h_str[0:2], 16) / 255
    g = int(h_str[2:4], 16) / 255
    b = int(h_str[4:6], 16) / 255

    mx, mn = max(r, g, b), min(r, g, b)
    h = s = 0.0
    lightness = (mx + mn) / 2
    if mx != mn:
        d = mx - mn
        s = d / (2 - mx - mn) if lightness > 0.5 else d / (mx + mn)
        if mx == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif mx == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6
    return _js_round(h * 360), _js_round(s * 100), _js_round(lightness * 100)


def hsl_to_hex(h: float, s: float, lightness: float) -> str:
    lightness /= 100
    a = s * min(lightness, 1 - lightness) / 100

    def channel(n: int) -> str:
        k = (n + h / 30) % 12
        color = lightness - a * max(min(k - 3, 9 - k, 1), -1)
        return f"{_js_round(255 * color):02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def generate_color_palette(base_color: str | None) -> dict[str, str]:
    """Generate the `primary-*` palette for a brand color."""
    if not base_color or not _HEX_RE.match(base_color):
        base_color = BRAND_COLOR_DEFAULT

    h, s, lt = hex_to_hsl(base_color)
    is_light = lt > 50

    return {
        # Scale; lighter shades keep saturation and approach white
        "primary-50": hsl_to_hex(h, s, min(lt + 70, 98)),
        "primary-100": hsl_to_hex(h, s, min(lt + 60, 96)),
        "primary-200": hsl_to_hex(h, s, min(lt + 50, 93)),
        "primary-300": hsl_to_hex(h, s, min(lt + 40, 89)),
        "primary-400": base_color if is_light else hsl_to_hex(h, s, min(lt + 8, 70)),
        "primary-500": hsl_to_hex(h, min(s + 5, 100), max(lt - 5, 40)) if is_light else hsl_to_hex(h, s, lt),
        "primary-600": hsl_to_hex(h, min(s + 10, 100), max(lt - 15, 25)) if is_light else base_color,
        "primary-700": hsl_to_hex(h, min(s + 10, 100), max(lt - 18, 20)),
        "primary-800": hsl_to_hex(h, min(s + 15, 100), max(lt - 28, 15)),
        "primary-900": hsl_to_hex(h, min(s + 20, 100), max(lt - 38, 10)),
        "primary-950": hsl_to_hex(h, min(s + 25, 100), max(lt - 48, 5)),
        # Semantic aliases
        "primary": base_color,
        "primary-light": hsl_to_hex(h, max(s - 20, 10), min(lt + 20, 85)),
        "primary-dark": hsl_to_hex(h, min(s + 10, 100), max(lt - 20, 15)),
        # Interactive states
        "primary-hover": hsl_to_hex(h, min(s + 5, 100), max(lt - 5, 20)),
        "primary-active": hsl_to_hex(h, min(s + 8, 100), max(lt - 10, 15)),
        "primary-focus": hsl_to_hex(h, max(s - 10, 15), min(lt + 10, 75)),
        "primary-muted": hsl_to_hex(h, max(s - 35, 5), min(lt + 30, 92)),
        # Border and background
        "primary-border": hsl_to_hex(h, max(s - 25, 10), min(lt + 25, 85)),
        "primary-bg": hsl_to_hex(h, max(s - 35, 5), min(lt + 40, 95)),
        "primary-fg": "#ffffff" if is_light else hsl_to_hex(h, max(s - 30, 10), min(lt + 45, 95)),
        # Text
        "primary-text": base_color,
        "primary-text-light": hsl_to_hex(h, max(s - 10, 15), min(lt + 15, 70)),
        "primary-text-muted": hsl_to_hex(
            h, max(s - 20, 10), max(lt - 20, 30) if is_light else min(lt + 20, 70)
        ),
    }


def generate_color_css_properties(base_color: str | None) -> str:
    """Render the palette as CSS custom properties (`--color-<name>: <value>;`)."""
    palette = generate_color_palette(base_color)
    return "\n  ".join(f"--color-{key}: {value};" for key, value in palette.items())


def generate_theme_stylesheet(base_color: str | None) -> str:
    return ":root {\n  " + generate_color_css_properties(base_color) + "\n}\n"


__all__ = [
    "generate_color_css_properties",
    "generate_color_palette",
    "generate_theme_stylesheet",
    "hex_to_hsl",
    "hsl_to_hex",
]
