"""Arithmetic expression evaluation with caret-located diagnostics."""

from __future__ import annotations

__version__ = "0.1.0"

from exprcalc.calculator import Evaluation, evaluate, format_number, render
from exprcalc.errors import CalcError, Diagnostic, ErrorContext, ErrorKind
from exprcalc.source import Span

__all__ = [
    "CalcError",
    "Diagnostic",
    "ErrorContext",
    "ErrorKind",
    "Evaluation",
    "Span",
    "evaluate",
    "format_number",
    "render",
]
