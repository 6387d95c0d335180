"""Tree-walking evaluator for parsed expressions.

Evaluation is a single depth-first pass. Operands are evaluated left to
right and the first failure is raised immediately, so the right operand of
a failing left operand is never visited.
"""

from __future__ import annotations

import math

from exprcalc.ast_nodes import BinaryOp, BinaryOperator, Expr, Literal, UnaryOp, UnaryOperator
from exprcalc.errors import CalcError, Diagnostic, ErrorKind
from exprcalc.numeric import (
    equal,
    is_integer,
    is_zero,
    remove_decimal_part,
    safe_add,
    safe_div,
    safe_mul,
    safe_sub,
)
from exprcalc.tokens import Token


class Evaluator:
    """Evaluates an expression tree against the source it was parsed from."""

    def __init__(self, source: str) -> None:
        self.source = source

    def evaluate(self, expr: Expr) -> float:
        match expr:
            case Literal():
                return expr.value
            case UnaryOp():
                return self._eval_unary(expr)
            case BinaryOp():
                return self._eval_binary(expr)
        raise TypeError(f"not an expression node: {type(expr).__name__}")

    def _error(self, kind: ErrorKind, message: str, tok: Token) -> CalcError:
        return CalcError(Diagnostic.located(
            kind, message, self.source, tok.span.start, tok.span.end,
        ))

    def _overflow(self, tok: Token) -> CalcError:
        return self._error(
            ErrorKind.OVERFLOW_UNDERFLOW, "Overflow/underflow detected", tok,
        )

    def _checked(self, result: float | None, tok: Token) -> float:
        if result is None:
            raise self._overflow(tok)
        return result

    # ── Unary operators ──────────────────────────────────────────

    def _eval_unary(self, node: UnaryOp) -> float:
        value = self.evaluate(node.operand)

        match node.op:
            case UnaryOperator.NEG:
                return -value
            case UnaryOperator.FACTORIAL:
                return self._factorial(value, node.token)
            case UnaryOperator.ABS:
                return math.fabs(value)
            case UnaryOperator.FLOOR:
                return float(math.floor(value))
            case UnaryOperator.CEIL:
                return float(math.ceil(value))
        raise TypeError(f"unknown unary operator: {node.op!r}")

    def _factorial(self, value: float, tok: Token) -> float:
        if value < 0:
            raise self._error(
                ErrorKind.UNEXPECTED_VALUE,
                "Factorial can't be applied to a negative value", tok,
            )
        # Non-integral operands are rounded to the nearest integer
        n = remove_decimal_part(value)
        result = 1.0
        while n > 1:
            result = self._checked(safe_mul(result, n), tok)
            n -= 1
        return result

    # ── Binary operators ─────────────────────────────────────────

    def _eval_binary(self, node: BinaryOp) -> float:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        tok = node.token

        match node.op:
            case BinaryOperator.ADD:
                return self._checked(safe_add(left, right), tok)
            case BinaryOperator.SUB:
                return self._checked(safe_sub(left, right), tok)
            case BinaryOperator.MUL:
                return self._checked(safe_mul(left, right), tok)
            case BinaryOperator.DIV:
                if is_zero(right):
                    raise self._error(
                        ErrorKind.DIVISION_BY_ZERO, "Division by 0 detected", tok,
                    )
                return self._checked(safe_div(left, right), tok)
            case BinaryOperator.POW:
                return self._power(left, right, tok)
        raise TypeError(f"unknown binary operator: {node.op!r}")

    def _power(self, base: float, exponent: float, tok: Token) -> float:
        if exponent < 0 or not is_integer(exponent):
            raise self._error(
                ErrorKind.UNEXPECTED_VALUE,
                "Exponent must be a non-negative integer", tok,
            )

        count = int(remove_decimal_part(exponent))
        if count == 0 or equal(base, 1.0):
            return 1.0
        if is_zero(base):
            return 0.0

        # Square-and-multiply; a square is only taken while bits remain
        result = 1.0
        factor = base
        while True:
            if count & 1:
                result = self._checked(safe_mul(result, factor), tok)
            count >>= 1
            if not count:
                return result
            factor = self._checked(safe_mul(factor, factor), tok)
