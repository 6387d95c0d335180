"""Shared test helpers for the exprcalc test suite."""

from __future__ import annotations

from exprcalc.calculator import evaluate
from exprcalc.errors import Diagnostic, ErrorKind


def evaluate_ok(text: str) -> float:
    """Evaluate text, asserting success. Returns the value."""
    result = evaluate(text)
    assert result.ok, f"Unexpected error: {result.error}"
    assert result.value is not None
    return result.value


def evaluate_fails(text: str, kind: ErrorKind) -> Diagnostic:
    """Evaluate text, asserting it fails with the given error kind."""
    result = evaluate(text)
    assert result.error is not None, f"Expected {kind.name} but got value {result.value!r}"
    assert result.error.kind == kind, (
        f"Expected {kind.name} but got {result.error.kind.name}: {result.error.message}"
    )
    assert result.value is None
    return result.error


def span_of(diag: Diagnostic) -> tuple[int, int]:
    """Return the (start, end) offsets of a located diagnostic."""
    assert diag.context is not None, "diagnostic has no source context"
    return diag.context.span.start, diag.context.span.end
