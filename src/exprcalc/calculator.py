"""Public entry points: evaluate an expression, render a diagnostic."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from exprcalc.ast_nodes import Expr
from exprcalc.errors import CalcError, Diagnostic, DiagnosticRenderer
from exprcalc.evaluator import Evaluator
from exprcalc.lexer import Lexer
from exprcalc.numeric import is_integer
from exprcalc.parser import Parser
from exprcalc.source import normalize
from exprcalc.tokens import Token

logger = logging.getLogger(__name__)

# Above this magnitude floats are no longer exact integers
_INTEGRAL_DISPLAY_LIMIT = 1e16


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one expression: a value or a diagnostic."""

    source: str
    value: float | None = None
    error: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, or raise CalcError carrying the diagnostic."""
        if self.error is not None:
            raise CalcError(self.error)
        assert self.value is not None
        return self.value


def tokenize(text: str) -> list[Token]:
    """Normalize and lex *text*. Raises CalcError."""
    return Lexer(normalize(text)).lex()


def parse(text: str) -> Expr:
    """Normalize, lex and parse *text* into an expression tree. Raises CalcError."""
    source = normalize(text)
    tokens = Lexer(source).lex()
    return Parser(tokens, source).parse()


def evaluate(text: str) -> Evaluation:
    """Evaluate *text*. Never raises CalcError; failures are returned."""
    source = normalize(text)
    try:
        tokens = Lexer(source).lex()
        logger.debug("lexed %d token(s) from %r", len(tokens), source)
        tree = Parser(tokens, source).parse()
        value = Evaluator(source).evaluate(tree)
    except CalcError as e:
        logger.debug("evaluation of %r failed: %s", source, e)
        return Evaluation(source, error=e.diagnostic)
    logger.debug("evaluated %r to %r", source, value)
    return Evaluation(source, value=value)


def render(diagnostic: Diagnostic, *, color: bool = False) -> str:
    return DiagnosticRenderer(color=color).render(diagnostic)


def format_number(value: float) -> str:
    """Format a result, dropping the decimal part of integral values."""
    if abs(value) < _INTEGRAL_DISPLAY_LIMIT and is_integer(value):
        return str(int(round(value)))
    return repr(value)
