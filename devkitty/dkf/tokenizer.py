"""DKF tokenizer — flattens document text into whitespace-delimited tokens.

Braces are always isolated into their own tokens, whatever spacing the
author used around them. Quoted path strings are NOT kept together here;
the parser re-joins them.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Return ``text`` with braces padded and all whitespace collapsed."""
    text = text.replace("\r", "")
    text = text.replace("{", " { ").replace("}", " } ")
    text = text.replace("\n", " ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Split DKF text into its flat token sequence."""
    normalized = normalize(text)
    if not normalized:
        return []
    return normalized.split(" ")
