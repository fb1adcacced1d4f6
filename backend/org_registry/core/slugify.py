"""Free-text name to URL path segment."""
from __future__ import annotations

import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^\w.-]+", re.ASCII)
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def slugify(value: str | None = None) -> str:
    """
    Turn a display name into a slug: lowercase, made only of ``[a-z0-9_]``,
    dots and hyphens, without leading/trailing hyphens.

    >>> slugify("  Héllò! @WORLD.example-TEST  ")
    'hello-world.example-test'
    """
    text = unicodedata.normalize("NFKD", value or "")
    text = _COMBINING_MARKS.sub("", text)
    text = _WHITESPACE_RUN.sub("-", text)
    text = _DISALLOWED.sub("", text)
    return _EDGE_HYPHENS.sub("", text.lower())
