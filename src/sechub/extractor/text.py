"""
Text normalization shared by all extraction strategies.
"""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean_text(text: str) -> str:
    """Collapse whitespace runs, squeeze blank lines and trim.

    Whitespace (newlines included) collapses first, so the blank-line pass is
    a no-op on its output. Applying ``clean_text`` twice gives the same text.
    """
    if not text:
        return ""
    text = _WHITESPACE_RUN.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()
