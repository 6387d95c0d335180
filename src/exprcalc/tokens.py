"""Token kinds and token representation for the expression lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exprcalc.source import Span


class TokenKind(Enum):
    # Literals
    LITERAL = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()
    BANG = auto()

    # Functions
    ABS = auto()
    FLOOR = auto()
    CEIL = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span


OPERATORS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "^": TokenKind.CARET,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "!": TokenKind.BANG,
}

KEYWORDS: dict[str, TokenKind] = {
    "abs": TokenKind.ABS,
    "floor": TokenKind.FLOOR,
    "ceil": TokenKind.CEIL,
}

FUNCTION_KINDS: frozenset[TokenKind] = frozenset(KEYWORDS.values())
