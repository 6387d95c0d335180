"""AST node definitions for arithmetic expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from exprcalc.tokens import Token

# ── Operators ────────────────────────────────────────────────────


class UnaryOperator(Enum):
    NEG = "-"
    FACTORIAL = "!"
    ABS = "abs"
    FLOOR = "floor"
    CEIL = "ceil"


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


# ── Expressions ──────────────────────────────────────────────────
# Each node keeps the token that introduced it so evaluation errors
# can point back at the operator or literal in the source.


@dataclass(frozen=True)
class Literal:
    value: float
    token: Token


@dataclass(frozen=True)
class UnaryOp:
    op: UnaryOperator
    operand: Expr
    token: Token


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: Expr
    right: Expr
    token: Token


Expr = Union[Literal, UnaryOp, BinaryOp]
