"""Tests for the recursive-descent parser."""

from __future__ import annotations

import pytest

from exprcalc.ast_nodes import (
    BinaryOp,
    BinaryOperator,
    Literal,
    UnaryOp,
    UnaryOperator,
)
from exprcalc.calculator import parse
from exprcalc.errors import CalcError, ErrorKind
from exprcalc.parser import MAX_LITERAL_LENGTH, Parser
from exprcalc.source import Span
from exprcalc.tokens import Token, TokenKind


def parse_error(source: str) -> CalcError:
    with pytest.raises(CalcError) as exc_info:
        parse(source)
    return exc_info.value


def error_span(err: CalcError) -> tuple[int, int]:
    span = err.diagnostic.span
    assert span is not None
    return span.start, span.end


class TestParserLiterals:
    def test_integer(self):
        expr = parse("42")
        assert isinstance(expr, Literal)
        assert expr.value == 42.0

    def test_decimal(self):
        expr = parse("12.5")
        assert isinstance(expr, Literal)
        assert expr.value == 12.5

    def test_leading_dot(self):
        expr = parse(".25")
        assert isinstance(expr, Literal)
        assert expr.value == 0.25

    def test_literal_keeps_token(self):
        expr = parse("  7")
        assert isinstance(expr, Literal)
        assert expr.token.kind == TokenKind.LITERAL
        assert expr.token.span == Span(1, 2)

    def test_max_length_literal(self):
        expr = parse("1" * MAX_LITERAL_LENGTH)
        assert isinstance(expr, Literal)
        assert expr.value == float("1" * MAX_LITERAL_LENGTH)

    def test_literal_too_long(self):
        err = parse_error("1" * (MAX_LITERAL_LENGTH + 1))
        assert err.kind == ErrorKind.INVALID_LITERAL
        assert error_span(err) == (0, MAX_LITERAL_LENGTH + 1)

    def test_literal_with_non_digit(self):
        tok = Token(TokenKind.LITERAL, "1a", Span(0, 2))
        with pytest.raises(CalcError) as exc_info:
            Parser([tok], "1a").parse()
        assert exc_info.value.kind == ErrorKind.INVALID_LITERAL


class TestParserPrecedence:
    def test_mul_binds_tighter_than_add(self):
        expr = parse("1 + 2 * 3")
        assert isinstance(expr, BinaryOp)
        assert expr.op == BinaryOperator.ADD
        assert isinstance(expr.left, Literal)
        assert isinstance(expr.right, BinaryOp)
        assert expr.right.op == BinaryOperator.MUL

    def test_left_associative_sub(self):
        expr = parse("1 - 2 - 3")
        assert isinstance(expr, BinaryOp)
        assert expr.op == BinaryOperator.SUB
        assert isinstance(expr.left, BinaryOp)
        assert expr.left.op == BinaryOperator.SUB
        assert isinstance(expr.right, Literal)

    def test_left_associative_div(self):
        expr = parse("8 / 2 / 2")
        assert isinstance(expr, BinaryOp)
        assert isinstance(expr.left, BinaryOp)
        assert expr.left.op == BinaryOperator.DIV

    def test_exponent_binds_tighter_than_mul(self):
        expr = parse("2 * 3 ^ 2")
        assert isinstance(expr, BinaryOp)
        assert expr.op == BinaryOperator.MUL
        assert isinstance(expr.right, BinaryOp)
        assert expr.right.op == BinaryOperator.POW

    def test_minus_is_looser_than_factorial(self):
        expr = parse("-5!")
        assert isinstance(expr, UnaryOp)
        assert expr.op == UnaryOperator.NEG
        assert isinstance(expr.operand, UnaryOp)
        assert expr.operand.op == UnaryOperator.FACTORIAL

    def test_signed_base(self):
        expr = parse("-2^2")
        assert isinstance(expr, BinaryOp)
        assert expr.op == BinaryOperator.POW
        assert isinstance(expr.left, UnaryOp)
        assert expr.left.op == UnaryOperator.NEG

    def test_signed_exponent(self):
        expr = parse("2^-3")
        assert isinstance(expr, BinaryOp)
        assert isinstance(expr.right, UnaryOp)
        assert expr.right.op == UnaryOperator.NEG

    def test_exponent_does_not_chain(self):
        err = parse_error("2^3^2")
        assert err.kind == ErrorKind.UNEXPECTED_TOKEN
        assert error_span(err) == (3, 4)

    def test_parentheses_group(self):
        expr = parse("(1 + 2) * 3")
        assert isinstance(expr, BinaryOp)
        assert expr.op == BinaryOperator.MUL
        assert isinstance(expr.left, BinaryOp)
        assert expr.left.op == BinaryOperator.ADD

    def test_operator_token_is_kept(self):
        expr = parse("10 / 2")
        assert isinstance(expr, BinaryOp)
        assert expr.token.kind == TokenKind.SLASH
        assert expr.token.span == Span(3, 4)


class TestParserFunctions:
    def test_abs_of_parenthesized(self):
        expr = parse("abs(-3)")
        assert isinstance(expr, UnaryOp)
        assert expr.op == UnaryOperator.ABS
        assert isinstance(expr.operand, UnaryOp)
        assert expr.operand.op == UnaryOperator.NEG

    def test_floor_of_literal(self):
        expr = parse("floor 2.5")
        assert isinstance(expr, UnaryOp)
        assert expr.op == UnaryOperator.FLOOR
        assert isinstance(expr.operand, Literal)

    def test_function_then_factorial(self):
        expr = parse("ceil(1.2)!")
        assert isinstance(expr, UnaryOp)
        assert expr.op == UnaryOperator.FACTORIAL
        assert isinstance(expr.operand, UnaryOp)
        assert expr.operand.op == UnaryOperator.CEIL

    def test_function_without_operand(self):
        err = parse_error("abs")
        assert err.kind == ErrorKind.EXPECTED_TOKEN
        assert error_span(err) == (2, 3)

    def test_function_followed_by_operator(self):
        err = parse_error("abs -3")
        assert err.kind == ErrorKind.INVALID_EXPR
        assert error_span(err) == (4, 5)


class TestParserErrors:
    def test_trailing_operator(self):
        err = parse_error("1+")
        assert err.kind == ErrorKind.EXPECTED_TOKEN
        assert error_span(err) == (1, 2)

    def test_unclosed_parenthesis_at_end(self):
        err = parse_error("(3+4")
        assert err.kind == ErrorKind.EXPECTED_TOKEN
        assert error_span(err) == (0, 1)

    def test_unclosed_parenthesis_before_token(self):
        err = parse_error("1 + (3+4 5")
        assert err.kind == ErrorKind.EXPECTED_TOKEN
        assert error_span(err) == (4, 5)

    def test_leftover_tokens(self):
        err = parse_error("1 1+1")
        assert err.kind == ErrorKind.UNEXPECTED_TOKEN
        assert error_span(err) == (2, 3)

    def test_leftover_close_paren(self):
        err = parse_error("1)")
        assert err.kind == ErrorKind.UNEXPECTED_TOKEN
        assert error_span(err) == (1, 2)

    def test_operator_where_atom_expected(self):
        err = parse_error("*2")
        assert err.kind == ErrorKind.INVALID_EXPR
        assert error_span(err) == (0, 1)

    def test_empty_parentheses(self):
        err = parse_error("()")
        assert err.kind == ErrorKind.INVALID_EXPR
        assert error_span(err) == (1, 2)

    def test_double_minus(self):
        err = parse_error("--5")
        assert err.kind == ErrorKind.INVALID_EXPR
        assert error_span(err) == (1, 2)

    def test_whitespace_only(self):
        err = parse_error("   ")
        assert err.kind == ErrorKind.EXPECTED_TOKEN
        assert error_span(err) == (0, 1)

    def test_errors_reference_normalized_source(self):
        err = parse_error("1   +")
        assert err.diagnostic.context is not None
        assert err.diagnostic.context.source == "1 +"
        assert error_span(err) == (2, 3)
