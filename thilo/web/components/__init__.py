# THILO page components
# Pure Python components for HTML generation

from .base import Component
from .content import MarkdownContent
from .markdown import HtmlUnit, QuizUnit, render_markdown
from .quiz import QuizWidget, load_quiz_widget

__all__ = [
    "Component",
    "HtmlUnit",
    "MarkdownContent",
    "QuizUnit",
    "QuizWidget",
    "load_quiz_widget",
    "render_markdown",
]
