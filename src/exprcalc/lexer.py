"""Lexer for arithmetic expressions.

Produces a list of spanned tokens from normalized source text. Whitespace
is skipped; the first unrecognized run of characters aborts lexing.
"""

from __future__ import annotations

from exprcalc.errors import CalcError, Diagnostic, ErrorKind
from exprcalc.source import Span
from exprcalc.tokens import KEYWORDS, OPERATORS, Token, TokenKind

_DIGITS = frozenset("0123456789")


class Lexer:
    """Tokenizes a normalized expression string."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        if not self.source:
            raise CalcError(Diagnostic.plain(
                ErrorKind.EMPTY_EXPRESSION, "Insert at least one character",
            ))

        while self.pos < len(self.source):
            ch = self.source[self.pos]
            word = self._keyword_at(self.pos)
            if self._at_literal(self.pos):
                self._lex_literal()
            elif ch in OPERATORS:
                self._advance()
                self._emit(OPERATORS[ch], self.pos - 1)
            elif word is not None:
                self._lex_keyword(word)
            elif ch.isspace():
                self._skip_spaces()
            else:
                self._lex_unknown()

        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _emit(self, kind: TokenKind, start: int) -> Token:
        tok = Token(kind, self.source[start:self.pos], Span(start, self.pos))
        self.tokens.append(tok)
        return tok

    def _at_literal(self, idx: int) -> bool:
        if idx >= len(self.source):
            return False
        ch = self.source[idx]
        if ch in _DIGITS:
            return True
        return ch == '.' and idx + 1 < len(self.source) and self.source[idx + 1] in _DIGITS

    def _keyword_at(self, idx: int) -> str | None:
        for word in KEYWORDS:
            if self.source.startswith(word, idx):
                return word
        return None

    def _starts_token(self, idx: int) -> bool:
        ch = self.source[idx]
        return (
            self._at_literal(idx)
            or ch in OPERATORS
            or ch.isspace()
            or self._keyword_at(idx) is not None
        )

    def _skip_spaces(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

    # ── Literals ─────────────────────────────────────────────────

    def _lex_literal(self) -> None:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in _DIGITS:
            self._advance()

        # A '.' only belongs to the literal when digits follow it
        if self._peek() == '.' and self._peek(1) in _DIGITS:
            self._advance()
            while self.pos < len(self.source) and self.source[self.pos] in _DIGITS:
                self._advance()

        self._emit(TokenKind.LITERAL, start)

    # ── Keywords ─────────────────────────────────────────────────

    def _lex_keyword(self, word: str) -> None:
        start = self.pos
        self.pos += len(word)
        self._emit(KEYWORDS[word], start)

    # ── Unknown input ────────────────────────────────────────────

    def _lex_unknown(self) -> None:
        start = self.pos
        self._advance()
        while self.pos < len(self.source) and not self._starts_token(self.pos):
            self._advance()
        self.tokens.clear()
        raise CalcError(Diagnostic.located(
            ErrorKind.UNKNOWN_TOKEN, "Unknown symbol found",
            self.source, start, self.pos,
        ))
