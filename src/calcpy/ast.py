from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class UnaryOpKind(str, Enum):
    PLUS = "+"
    MINUS = "-"


class BinaryOpKind(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


@dataclass(frozen=True, slots=True)
class Node:
    span: Span


@dataclass(frozen=True, slots=True)
class Num(Node):
    value: int


@dataclass(frozen=True, slots=True)
class UnaryOp(Node):
    """A prefix ``+`` or ``-`` applied to an atom."""

    operator: UnaryOpKind
    operand: Expr


@dataclass(frozen=True, slots=True)
class BinaryOp(Node):
    """A left-associative infix operation; span covers both operands."""

    operator: BinaryOpKind
    left: Expr
    right: Expr


Expr = Num | UnaryOp | BinaryOp
