"""URL slugs derived from CMS titles."""

from __future__ import annotations

import re
import unicodedata


_non_alnum = re.compile(r"[^a-z0-9]+")


def slugify(title: str | None) -> str:
    """Turn a CMS title into a URL slug.

    Rules:
    - Decompose accented characters and drop the combining marks
      ("Équipe" -> "equipe").
    - Lowercase.
    - Collapse every run of non-alphanumeric characters into a single "-".
    - Strip leading/trailing "-".

    Deterministic and total: empty or None input yields "".
    """
    if not title:
        return ""
    s = unicodedata.normalize("NFKD", str(title))
    s = "".join(c for c in s if not unicodedata.combining(c))
    s = s.replace("ß", "ss").lower()
    return _non_alnum.sub("-", s).strip("-")
