"""
QuizWidget component and quiz source.

Why:
    Chapter bodies embed quizzes by linking to a JSON document in the CMS
    upload folder. At build time we fetch that document and render a static
    quiz block; the client script attaches behaviour via `data-*` hooks.

Behavior:
    - `fetch_quiz()` loads and validates the JSON document and raises
      `QuizFetchError` on any failure.
    - `load_quiz_widget()` never raises: a failed fetch renders the error state.
    - `QuizWidget.render()` has three states: loading (no data yet, the
      client fetches `data-quiz-url`), error, and the quiz itself.

Security:
    Quiz texts come from the CMS and may contain inline markup. They are
    sanitised through a small inline whitelist before rendering.
"""

from __future__ import annotations

import logging
from typing import Optional

import bleach
import httpx

from .base import Component


logger = logging.getLogger("thilo.web.quiz")

_ALLOWED_TAGS = ["strong", "em", "b", "i", "u", "code", "br", "sub", "sup", "a"]
_ALLOWED_ATTRIBUTES = {"a": ["href", "title"]}
_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


class QuizFetchError(Exception):
    """Raised when a quiz document cannot be fetched or is not quiz-shaped."""


def clean_quiz_text(value: object) -> str:
    if value is None:
        return ""
    return bleach.clean(
        str(value),
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRIBUTES,
        protocols=_ALLOWED_PROTOCOLS,
        strip=True,
    ).strip()


def fetch_quiz(url: str, *, client: httpx.Client) -> dict:
    """Fetch a quiz document.

    Raises:
        QuizFetchError: transport error, non-2xx status, invalid JSON, or a
            document without a `questions` list.
    """
    try:
        resp = client.get(url)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as exc:
        raise QuizFetchError(f"Failed to fetch quiz: HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise QuizFetchError(f"Failed to fetch quiz: {exc.__class__.__name__}") from exc
    except ValueError as exc:
        raise QuizFetchError("Quiz document is not valid JSON") from exc
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise QuizFetchError("Quiz document has no questions")
    return data


class QuizWidget(Component):
    """Static rendering of a quiz document.

    Parameters:
        url: Source URL of the quiz JSON (kept as `data-quiz-url`).
        quiz: Parsed quiz document; None renders the loading state.
        error: Error message; takes precedence over `quiz`.
        shuffle: Forwarded to the client script as `data-shuffle`.
    """

    def __init__(
        self,
        url: str,
        *,
        quiz: Optional[dict] = None,
        error: Optional[str] = None,
        shuffle: bool = True,
    ) -> None:
        self.url = url or ""
        self.quiz = quiz
        self.error = error
        self.shuffle = shuffle

    def render(self) -> str:
        if self.error:
            return self.element("div", f"Error loading quiz: {self.escape(self.error)}", class_="quiz-error")
        if self.quiz is None:
            return self.element("div", "Loading quiz...", class_="quiz-loading", data_quiz_url=self.url)
        questions = [q for q in self.quiz.get("questions") or [] if isinstance(q, dict)]
        if not questions:
            return self.element("div", "No quiz data available", class_="quiz-error")

        parts = []
        title = clean_quiz_text(self.quiz.get("quizTitle"))
        if title:
            parts.append(self.element("h3", title, class_="quiz-title"))
        synopsis = clean_quiz_text(self.quiz.get("quizSynopsis"))
        if synopsis:
            parts.append(self.element("p", synopsis, class_="quiz-synopsis"))
        parts.append(self.element("ol", *(self._render_question(q) for q in questions), class_="quiz-questions"))
        return self.element(
            "div",
            *parts,
            class_="quiz-container",
            data_quiz_url=self.url,
            data_shuffle="true" if self.shuffle else "false",
        )

    def _render_question(self, question: dict) -> str:
        correct = question.get("correctAnswer")
        if isinstance(correct, list):
            correct_attr = ",".join(str(c) for c in correct)
        else:
            correct_attr = "" if correct is None else str(correct)
        answers = [
            self.element("li", clean_quiz_text(a), class_="quiz-answer", data_answer=i)
            for i, a in enumerate(question.get("answers") or [], start=1)
        ]
        parts = [
            self.element("p", clean_quiz_text(question.get("question")), class_="quiz-question__text"),
            self.element("ul", *answers, class_="quiz-answers"),
        ]
        explanation = clean_quiz_text(question.get("explanation"))
        if explanation:
            parts.append(self.element("p", explanation, class_="quiz-explanation", hidden=True))
        return self.element(
            "li",
            *parts,
            class_="quiz-question",
            data_answer_selection=question.get("answerSelectionType") or "single",
            data_correct=correct_attr,
        )


def load_quiz_widget(url: str, *, client: httpx.Client) -> QuizWidget:
    """Fetch a quiz and wrap it in a widget; failures render the error state."""
    try:
        quiz = fetch_quiz(url, client=client)
    except QuizFetchError as exc:
        logger.warning("Quiz unavailable url=%s: %s", url, exc)
        return QuizWidget(url, error=str(exc))
    return QuizWidget(url, quiz=quiz)


__all__ = [
    "QuizFetchError",
    "QuizWidget",
    "clean_quiz_text",
    "fetch_quiz",
    "load_quiz_widget",
]
