"""Error taxonomy and caret-style diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from exprcalc.source import Span


class ErrorKind(Enum):
    UNKNOWN_TOKEN = "unknown token"
    EMPTY_EXPRESSION = "empty expression"
    INVALID_LITERAL = "invalid literal"
    EXPECTED_TOKEN = "expected token"
    UNEXPECTED_TOKEN = "unexpected token"
    INVALID_EXPR = "invalid expression"
    DIVISION_BY_ZERO = "division by zero"
    OVERFLOW_UNDERFLOW = "overflow or underflow"
    UNEXPECTED_VALUE = "unexpected value"


# ANSI color codes
_RED = "\033[1;31m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class ErrorContext:
    """The normalized source text and the offending range within it."""

    source: str
    span: Span


@dataclass(frozen=True)
class Diagnostic:
    """A single failure: what went wrong and, usually, where."""

    kind: ErrorKind
    message: str
    context: ErrorContext | None = None

    @classmethod
    def plain(cls, kind: ErrorKind, message: str) -> Diagnostic:
        return cls(kind, message)

    @classmethod
    def located(
        cls, kind: ErrorKind, message: str, source: str, start: int, end: int,
    ) -> Diagnostic:
        return cls(kind, message, ErrorContext(source, Span(start, end)))

    @property
    def span(self) -> Span | None:
        return self.context.span if self.context is not None else None


class DiagnosticRenderer:
    """Renders diagnostics with a caret line under the offending text."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        header = f"{self._c(_RED)}error:{self._c(_RESET)} {diag.message}"
        if diag.context is None:
            return header

        span = diag.context.span
        padding = " " * span.start
        marks = "^" + "~" * max(0, len(span) - 1)
        return "\n".join([
            header,
            diag.context.source,
            f"{padding}{self._c(_RED)}{marks}{self._c(_RESET)}",
        ])


class CalcError(Exception):
    """Raised inside the pipeline; carries the diagnostic of the first failure."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"{diagnostic.kind.value}: {diagnostic.message}")

    @property
    def kind(self) -> ErrorKind:
        return self.diagnostic.kind
