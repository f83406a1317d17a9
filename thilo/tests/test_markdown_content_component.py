"""
MarkdownContent component — page assembly of render units.

Why:
    The page shows html units as blocks, quiz placeholders as widgets and
    wraps the units of one quiz paragraph in a single region so the text
    around an inline quiz stays together visually.
"""
from __future__ import annotations

from thilo.web.components import MarkdownContent, QuizWidget
from thilo.web.components.markdown import HtmlUnit, QuizUnit


QUIZ_URL = "/uploads/quiz_1.json"


def test_plain_units_render_as_blocks_inside_content_wrapper():
    html = MarkdownContent([HtmlUnit("<p>A</p>\n"), QuizUnit(QUIZ_URL)], class_name="chapter").render()

    assert html.startswith('<div class="markdown-content chapter">')
    assert "<div><p>A</p>\n</div>" in html
    assert f'<div class="quiz-loading" data-quiz-url="{QUIZ_URL}">Loading quiz...</div>' in html
    assert html.endswith("</div>")
    assert "markdownrenderer-quiz-wrapper" not in html


def test_grouped_units_share_one_wrapper_and_use_spans():
    units = [
        HtmlUnit("<h1>Knoten</h1>\n"),
        HtmlUnit("Teste dich ", group=1),
        QuizUnit(QUIZ_URL, group=1),
        HtmlUnit(" viel Erfolg", group=1),
    ]

    html = MarkdownContent(units).render()

    assert html.count('<div class="markdownrenderer-quiz-wrapper">') == 1
    wrapper = html[html.index("markdownrenderer-quiz-wrapper"):]
    assert wrapper.index("<span>Teste dich </span>") < wrapper.index("quiz-loading")
    assert wrapper.index("quiz-loading") < wrapper.index("<span> viel Erfolg</span>")


def test_quiz_loader_resolves_placeholders():
    seen: list[str] = []

    def loader(url: str) -> QuizWidget:
        seen.append(url)
        return QuizWidget(url, error="offline")

    html = MarkdownContent.from_markdown(f"Intro\n\n[Quiz]({QUIZ_URL})", quiz_loader=loader).render()

    assert seen == [QUIZ_URL]
    assert '<div class="quiz-error">Error loading quiz: offline</div>' in html
    assert "<div><p>Intro</p>\n</div>" in html


def test_quiz_only_paragraph_is_wrapped_like_inline_quizzes():
    html = MarkdownContent.from_markdown(f"Intro\n\n[Quiz]({QUIZ_URL})").render()

    assert html == (
        '<div class="markdown-content">'
        "<div><p>Intro</p>\n</div>"
        '<div class="markdownrenderer-quiz-wrapper">'
        f'<div class="quiz-loading" data-quiz-url="{QUIZ_URL}">Loading quiz...</div>'
        "</div>"
        "</div>"
    )
