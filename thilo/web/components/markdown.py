"""
Markdown renderer for CMS chapter bodies with embedded quizzes.

Why:
    Authors write chapter bodies in the CMS as markdown. Two CMS conventions
    need special treatment on top of plain CommonMark:

    - A link to a quiz JSON document (href contains "quiz" and ".json") is an
      embedded quiz, not a link. The page shows a quiz widget in its place.
    - Image alt text may carry a caption directive and inline CSS, e.g.
      ``![caption: Logo; width: 300px;](logo.png)``.

Output model:
    `render_markdown()` returns an ordered tuple of render units: `HtmlUnit`
    for runs of ordinary blocks and `QuizUnit` for quiz placeholders. Units
    emitted for one paragraph holding a quiz link share a `group` key so the
    page can wrap them in a single region.

Parser configuration:
    - commonmark preset with tables, the CMS editor emits GFM tables.
    - html=True: raw HTML authored in the CMS is passed through.
    - linkify=False, typographer=False: keep output deterministic.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
import re
from typing import Optional, Sequence, Union

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token


# ----------------------------- Render units ---------------------------------


@dataclass(frozen=True)
class HtmlUnit:
    content: str
    group: Optional[int] = None

    kind = "html"


@dataclass(frozen=True)
class QuizUnit:
    source_url: str
    group: Optional[int] = None

    kind = "quiz"


RenderUnit = Union[HtmlUnit, QuizUnit]


# ----------------------------- Image / link rules ---------------------------

_CAPTION_RE = re.compile(r"caption:\s*([^;]+);", re.IGNORECASE)
_CAPTION_STRIP_RE = re.compile(r"caption:\s*[^;]+;\s*", re.IGNORECASE)
_CSS_DECL_RE = re.compile(r"^\s*([\w-]+)\s*:\s*(.+?)\s*$", re.ASCII)
_CSS_PROP_RE = re.compile(r"^[\w-]+$", re.ASCII)
_STYLE_TITLE_MARKERS = ("width:", "height:", "float:")


def is_external_href(href: str) -> bool:
    return href.startswith("http") or href.startswith("//")


def is_quiz_href(href: Optional[str]) -> bool:
    if not href:
        return False
    h = href.lower()
    return "quiz" in h and ".json" in h


def parse_css_declarations(text: str) -> Optional[str]:
    """Parse `prop: value; prop: value` into a normalised style string.

    Fragments that are not a valid declaration are dropped. Returns None
    when nothing valid remains.
    """
    valid: list[str] = []
    for fragment in text.split(";"):
        fragment = fragment.strip()
        if not fragment:
            continue
        m = _CSS_DECL_RE.match(fragment)
        if not m:
            continue
        name, value = m.group(1), m.group(2).strip()
        if _CSS_PROP_RE.match(name) and value:
            valid.append(f"{name}: {value}")
    return "; ".join(valid) if valid else None


@dataclass(frozen=True)
class ImageDirectives:
    alt: str
    style: Optional[str]


def parse_image_alt(alt_text: str) -> ImageDirectives:
    """Split image alt text into the visible alt/caption and a CSS style.

    Order:
        1. `caption: <text>;` sets the caption and is removed from the text.
        2. The remainder is parsed as CSS declarations.

    The alt becomes the caption when present, "" when the alt text held only
    CSS, and the untouched alt text otherwise.
    """
    remaining = alt_text or ""
    caption = None
    m = _CAPTION_RE.search(remaining)
    if m:
        caption = m.group(1).strip()
        remaining = _CAPTION_STRIP_RE.sub("", remaining, count=1).strip()

    style = parse_css_declarations(remaining)
    if caption is not None:
        alt = caption
    elif style:
        alt = ""
    else:
        alt = remaining
    return ImageDirectives(alt=alt, style=style)


def render_image(src: str, alt_text: str, title: Optional[str] = None) -> str:
    """Render an image with caption wrapper.

    A title that looks like inline CSS (older CMS entries store sizes there)
    is used as the style when the alt text did not provide one.
    """
    directives = parse_image_alt(alt_text)
    alt = escapeHtml(directives.alt)
    tag = f'<img src="{escapeHtml(src)}" alt="{alt}"'
    if directives.style:
        tag += f' style="{escapeHtml(directives.style)}"'
    elif title:
        if any(marker in title for marker in _STYLE_TITLE_MARKERS):
            tag += f' style="{escapeHtml(title)}"'
        else:
            tag += f' title="{escapeHtml(title)}"'
    tag += " />"
    return f'<span class="md-img-wrap">{tag} <caption>{alt}</caption></span>'


def _link_open(self, tokens: Sequence[Token], idx: int, options, env) -> str:
    token = tokens[idx]
    href = str(token.attrGet("href") or "")
    if is_external_href(href):
        token.attrSet("target", "_blank")
        token.attrSet("rel", "noopener noreferrer")
    return self.renderToken(tokens, idx, options, env)


def _image(self, tokens: Sequence[Token], idx: int, options, env) -> str:
    token = tokens[idx]
    alt_text = self.renderInlineAsText(token.children or [], options, env)
    title = token.attrGet("title")
    return render_image(str(token.attrGet("src") or ""), alt_text, str(title) if title else None)


def _build_parser() -> MarkdownIt:
    md = MarkdownIt(
        "commonmark",
        {
            "html": True,
            "linkify": False,
            "typographer": False,
        },
    ).enable("table")
    md.add_render_rule("link_open", _link_open)
    md.add_render_rule("image", _image)
    return md


_MD = _build_parser()


# ----------------------------- Token walking --------------------------------


def _split_subtrees(tokens: Sequence[Token]) -> list[list[Token]]:
    """Split a flat token list into its top-level subtrees.

    An opening token (nesting 1) starts a subtree that ends at its matching
    closing token; every other token at depth 0 is a subtree of its own.
    """
    subtrees: list[list[Token]] = []
    current: list[Token] = []
    depth = 0
    for token in tokens:
        current.append(token)
        depth += token.nesting
        if depth == 0:
            subtrees.append(current)
            current = []
    if current:
        subtrees.append(current)
    return subtrees


def _quiz_href(subtree: Sequence[Token]) -> Optional[str]:
    """Return the href when the subtree is a link pointing to a quiz."""
    head = subtree[0]
    if head.type != "link_open":
        return None
    href = head.attrGet("href")
    return str(href) if is_quiz_href(str(href or "")) else None


def _paragraph_children(block: Sequence[Token]) -> Optional[list[list[Token]]]:
    if len(block) != 3 or block[0].type != "paragraph_open" or block[1].type != "inline":
        return None
    return _split_subtrees(block[1].children or [])


def _is_blank(subtree: Sequence[Token]) -> bool:
    return all(t.type in {"softbreak", "hardbreak"} or (t.type == "text" and not t.content.strip()) for t in subtree)


_State = tuple[tuple[RenderUnit, ...], str]


def _flush(state: _State) -> tuple[RenderUnit, ...]:
    units, pending = state
    if pending.strip():
        return units + (HtmlUnit(pending),)
    return units


def _reduce_block(state: _State, item: tuple[int, list[Token]]) -> _State:
    index, block = item
    env: dict = {}
    children = _paragraph_children(block)
    quiz_children = [c for c in children or [] if _quiz_href(c)]

    if quiz_children:
        meaningful = [c for c in children if not _is_blank(c)]
        if len(meaningful) == 1:
            # The paragraph is just the quiz link.
            return _flush(state) + (QuizUnit(_quiz_href(meaningful[0]), group=index),), ""

        units = list(_flush(state))
        for child in children:
            href = _quiz_href(child)
            if href:
                units.append(QuizUnit(href, group=index))
                continue
            html = _MD.renderer.renderInline(child, _MD.options, env)
            # markdown-it opens emphasis runs with an empty text token
            if html:
                units.append(HtmlUnit(html, group=index))
        return tuple(units), ""

    units, pending = state
    return units, pending + _MD.renderer.render(block, _MD.options, env)


def render_markdown(src: Optional[str]) -> tuple[RenderUnit, ...]:
    """Render a CMS markdown body into an ordered tuple of render units.

    Parameters:
        src: Raw markdown string (may be empty or None).
    Returns:
        Units in source order. Runs of ordinary blocks are merged into one
        `HtmlUnit`; quiz links become `QuizUnit`s and are never merged into
        HTML. Empty input yields an empty tuple.
    """
    if not src:
        return ()
    tokens = _MD.parse(str(src), {})
    blocks = enumerate(_split_subtrees(tokens))
    return _flush(reduce(_reduce_block, blocks, ((), "")))


__all__ = [
    "HtmlUnit",
    "ImageDirectives",
    "QuizUnit",
    "RenderUnit",
    "is_external_href",
    "is_quiz_href",
    "parse_css_declarations",
    "parse_image_alt",
    "render_image",
    "render_markdown",
]
