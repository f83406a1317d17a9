"""
Base class for the HTML components of the static site.

Intent:
    Pages are assembled at build time from small Python objects with a
    `render()` method instead of a template engine, so the markup of a
    chapter body, its quiz regions and the quiz widget is testable as plain
    strings.

Rules:
    - Attribute values are always escaped; `element()` children are trusted
      HTML that the caller already escaped or sanitised.
    - `class_` maps to `class`, other underscores become hyphens
      (`data_quiz_url` -> `data-quiz-url`).
"""

from typing import Any, Optional
import html


class Component:
    def render(self) -> str:
        raise NotImplementedError("Subclasses must implement render()")

    @staticmethod
    def escape(text: Optional[str]) -> str:
        """Escape HTML entities; None renders as an empty string."""
        return html.escape(str(text)) if text is not None else ""

    @staticmethod
    def classes(*names: str, **toggles: bool) -> str:
        """Join CSS classes, skipping empty names and falsy toggles.

        Example:
            >>> Component.classes("markdown-content", "", quiz_loaded=True, failed=False)
            'markdown-content quiz-loaded'
        """
        result = [n for n in names if n]
        result.extend(key.replace("_", "-") for key, on in toggles.items() if on)
        return " ".join(result)

    @staticmethod
    def attributes(**attrs: Any) -> str:
        """Render keyword arguments as an attribute string.

        True renders a bare boolean attribute; False and None are omitted.

        Example:
            >>> Component.attributes(class_="quiz-loading", data_quiz_url="/q.json", hidden=True)
            'class="quiz-loading" data-quiz-url="/q.json" hidden'
        """
        result = []
        for key, value in attrs.items():
            name = key[:-1] if key.endswith("_") else key.replace("_", "-")
            if value is True:
                result.append(name)
            elif value is not False and value is not None:
                result.append(f'{name}="{html.escape(str(value))}"')
        return " ".join(result)

    @classmethod
    def element(cls, tag: str, *children: str, **attrs: Any) -> str:
        """Wrap already-safe HTML children in `<tag ...>...</tag>`.

        Example:
            >>> Component.element("span", "Teste dich ")
            '<span>Teste dich </span>'
        """
        rendered = cls.attributes(**attrs)
        opening = f"<{tag} {rendered}>" if rendered else f"<{tag}>"
        return opening + "".join(children) + f"</{tag}>"
