"""
MarkdownContent component.

Assembles the render units of a chapter body into page HTML:

    <div class="markdown-content ...">
      <div>...html unit...</div>
      <div class="quiz-...">...quiz widget...</div>
      <div class="markdownrenderer-quiz-wrapper">   (one paragraph with a quiz)
        <span>text</span><div class="quiz-..."></div><span>text</span>
      </div>
    </div>

Quiz placeholders are resolved through `quiz_loader`; without a loader the
widget renders its loading state and the client script fetches the quiz.
"""

from __future__ import annotations

from itertools import groupby
from typing import Callable, Iterable, Optional

from .base import Component
from .markdown import QuizUnit, RenderUnit, render_markdown
from .quiz import QuizWidget


QuizLoader = Callable[[str], QuizWidget]


class MarkdownContent(Component):
    def __init__(
        self,
        units: Iterable[RenderUnit],
        *,
        quiz_loader: Optional[QuizLoader] = None,
        class_name: str = "",
    ) -> None:
        self.units = tuple(units)
        self.quiz_loader = quiz_loader
        self.class_name = class_name

    @classmethod
    def from_markdown(cls, src: str, **kwargs) -> "MarkdownContent":
        return cls(render_markdown(src), **kwargs)

    def _quiz(self, unit: QuizUnit) -> str:
        if self.quiz_loader is None:
            return QuizWidget(unit.source_url).render()
        return self.quiz_loader(unit.source_url).render()

    def _unit(self, unit: RenderUnit, *, inline: bool) -> str:
        if isinstance(unit, QuizUnit):
            return self._quiz(unit)
        return self.element("span" if inline else "div", unit.content)

    def render(self) -> str:
        parts = []
        for group, members in groupby(self.units, key=lambda u: u.group):
            if group is None:
                parts.extend(self._unit(u, inline=False) for u in members)
                continue
            parts.append(
                self.element(
                    "div",
                    *(self._unit(u, inline=True) for u in members),
                    class_="markdownrenderer-quiz-wrapper",
                )
            )
        return self.element("div", *parts, class_=self.classes("markdown-content", self.class_name))


__all__ = ["MarkdownContent", "QuizLoader"]
