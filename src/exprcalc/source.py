"""Source text normalization and span tracking for diagnostics."""

from __future__ import annotations

import re
from dataclasses import dataclass

_BLANK_RUN = re.compile(r"[ \t]+")


@dataclass(frozen=True)
class Span:
    """A half-open ``[start, end)`` range within the normalized source."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def text(self, source: str) -> str:
        """Extract the text covered by this span."""
        return source[self.start : self.end]


def normalize(text: str) -> str:
    """Collapse every run of spaces and tabs into a single space.

    All spans produced by the lexer, parser and evaluator are offsets into
    the string returned here, never into the caller's raw text.
    """
    return _BLANK_RUN.sub(" ", text)
