"""Parser for arithmetic expressions.

Transforms a token list into an expression tree by recursive descent over
the following grammar, lowest precedence first::

    EXPR      := MULDIV (('+' | '-') MULDIV)*
    MULDIV    := EXPONENT (('*' | '/') EXPONENT)*
    EXPONENT  := SIGN ('^' SIGN)?
    SIGN      := '-'? FACTORIAL
    FACTORIAL := ATOM '!'?
    ATOM      := LITERAL | '(' EXPR ')' | FUNCTION ATOM
    FUNCTION  := 'abs' | 'floor' | 'ceil'

The parser looks one token ahead, never backtracks, and stops at the
first error.
"""

from __future__ import annotations

from exprcalc.ast_nodes import BinaryOp, BinaryOperator, Expr, Literal, UnaryOp, UnaryOperator
from exprcalc.errors import CalcError, Diagnostic, ErrorKind
from exprcalc.source import Span
from exprcalc.tokens import FUNCTION_KINDS, Token, TokenKind

MAX_LITERAL_LENGTH = 20

_BINARY_OPS: dict[TokenKind, BinaryOperator] = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUB,
    TokenKind.STAR: BinaryOperator.MUL,
    TokenKind.SLASH: BinaryOperator.DIV,
    TokenKind.CARET: BinaryOperator.POW,
}

_FUNCTIONS: dict[TokenKind, UnaryOperator] = {
    TokenKind.ABS: UnaryOperator.ABS,
    TokenKind.FLOOR: UnaryOperator.FLOOR,
    TokenKind.CEIL: UnaryOperator.CEIL,
}

_DIGITS = frozenset("0123456789")


class Parser:
    """Parses a list of tokens into an expression tree."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _at(self, kind: TokenKind) -> bool:
        tok = self._current()
        return tok is not None and tok.kind == kind

    def _at_any(self, *kinds: TokenKind) -> bool:
        tok = self._current()
        return tok is not None and tok.kind in kinds

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _error(self, kind: ErrorKind, message: str, span: Span) -> CalcError:
        return CalcError(Diagnostic.located(
            kind, message, self.source, span.start, span.end,
        ))

    def _end_of_input(self) -> CalcError:
        last = max(0, len(self.source) - 1)
        return self._error(
            ErrorKind.EXPECTED_TOKEN, "Expected a token, found end of expression",
            Span(last, last + 1),
        )

    # ── Entry point ──────────────────────────────────────────────

    def parse(self) -> Expr:
        """Parse the whole token list; leftover tokens are an error."""
        expr = self._parse_expr()
        tok = self._current()
        if tok is not None:
            raise self._error(
                ErrorKind.UNEXPECTED_TOKEN,
                "Unexpected expression terminator found", tok.span,
            )
        return expr

    # ── Productions ──────────────────────────────────────────────

    def _parse_expr(self) -> Expr:
        left = self._parse_muldiv()
        while self._at_any(TokenKind.PLUS, TokenKind.MINUS):
            op_tok = self._advance()
            right = self._parse_muldiv()
            left = BinaryOp(_BINARY_OPS[op_tok.kind], left, right, op_tok)
        return left

    def _parse_muldiv(self) -> Expr:
        left = self._parse_exponent()
        while self._at_any(TokenKind.STAR, TokenKind.SLASH):
            op_tok = self._advance()
            right = self._parse_exponent()
            left = BinaryOp(_BINARY_OPS[op_tok.kind], left, right, op_tok)
        return left

    def _parse_exponent(self) -> Expr:
        """Parse ``SIGN ('^' SIGN)?``; the exponent side does not chain."""
        base = self._parse_sign()
        if self._at(TokenKind.CARET):
            op_tok = self._advance()
            exponent = self._parse_sign()
            return BinaryOp(BinaryOperator.POW, base, exponent, op_tok)
        return base

    def _parse_sign(self) -> Expr:
        if self._at(TokenKind.MINUS):
            tok = self._advance()
            operand = self._parse_factorial()
            return UnaryOp(UnaryOperator.NEG, operand, tok)
        return self._parse_factorial()

    def _parse_factorial(self) -> Expr:
        atom = self._parse_atom()
        if self._at(TokenKind.BANG):
            tok = self._advance()
            return UnaryOp(UnaryOperator.FACTORIAL, atom, tok)
        return atom

    def _parse_atom(self) -> Expr:
        tok = self._current()
        if tok is None:
            raise self._end_of_input()

        if tok.kind == TokenKind.LITERAL:
            self._advance()
            return Literal(self._convert_literal(tok), tok)

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            self._advance()
            expr = self._parse_expr()
            if not self._at(TokenKind.RPAREN):
                raise self._error(
                    ErrorKind.EXPECTED_TOKEN,
                    "Expected ')' to close this parenthesis", tok.span,
                )
            self._advance()
            return expr

        # abs / floor / ceil applied to the following atom
        if tok.kind in FUNCTION_KINDS:
            self._advance()
            operand = self._parse_atom()
            return UnaryOp(_FUNCTIONS[tok.kind], operand, tok)

        raise self._error(
            ErrorKind.INVALID_EXPR,
            f"Expected a number or '(', found {tok.value!r}", tok.span,
        )

    # ── Literals ─────────────────────────────────────────────────

    def _convert_literal(self, tok: Token) -> float:
        """Convert literal text to a number, digit by digit."""
        text = tok.value
        if len(text) > MAX_LITERAL_LENGTH:
            raise self._error(
                ErrorKind.INVALID_LITERAL,
                f"Literal is longer than {MAX_LITERAL_LENGTH} characters",
                tok.span,
            )

        whole, dot, fraction = text.partition('.')
        if (not whole and not fraction) or (dot and not fraction):
            raise self._invalid_literal(tok)

        integer_part = 0
        for ch in whole:
            if ch not in _DIGITS:
                raise self._invalid_literal(tok)
            integer_part = integer_part * 10 + int(ch)

        fraction_part = 0
        for ch in fraction:
            if ch not in _DIGITS:
                raise self._invalid_literal(tok)
            fraction_part = fraction_part * 10 + int(ch)

        return integer_part + fraction_part / 10 ** len(fraction)

    def _invalid_literal(self, tok: Token) -> CalcError:
        return self._error(
            ErrorKind.INVALID_LITERAL, f"Invalid literal {tok.value!r}", tok.span,
        )
