from __future__ import annotations

from .ast import BinaryOp, BinaryOpKind, Expr, Num, UnaryOp, UnaryOpKind
from .errors import EvalError, EvalErrorKind


def evaluate(expr: Expr) -> int:
    """Reduce an expression tree to an integer, children before parents.

    Walks with an explicit stack, so tree depth is not bounded by the
    interpreter's recursion limit.
    """
    values: list[int] = []
    stack: list[tuple[Expr, bool]] = [(expr, False)]
    while stack:
        node, ready = stack.pop()

        if isinstance(node, Num):
            values.append(node.value)
        elif isinstance(node, UnaryOp):
            if not ready:
                stack.append((node, True))
                stack.append((node.operand, False))
                continue
            v = values.pop()
            values.append(-v if node.operator is UnaryOpKind.MINUS else v)
        elif isinstance(node, BinaryOp):
            if not ready:
                # Left operand is popped, and so evaluated, first.
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            right = values.pop()
            left = values.pop()
            values.append(_combine(node, left, right))
        else:
            raise TypeError(f"not an expression node: {type(node)!r}")

    return values[0]


def _combine(node: BinaryOp, left: int, right: int) -> int:
    if node.operator is BinaryOpKind.ADD:
        return left + right
    if node.operator is BinaryOpKind.SUB:
        return left - right
    if node.operator is BinaryOpKind.MUL:
        return left * right
    if right == 0:
        raise EvalError(kind=EvalErrorKind.DIVISION_BY_ZERO, span=node.span)
    return trunc_div(left, right)


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (``-7 / 2 == -3``)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q
