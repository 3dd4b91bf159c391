from __future__ import annotations

from . import ast as A


_PRECEDENCE = {
    A.BinaryOpKind.ADD: 1,
    A.BinaryOpKind.SUB: 1,
    A.BinaryOpKind.MUL: 2,
    A.BinaryOpKind.DIV: 2,
}


def format_expr(expr: A.Expr) -> str:
    """Canonical single-line source for ``expr``.

    Emits only the parentheses needed to reparse into the same tree. Spans are
    not preserved by formatting. Uses an explicit stack like ``evaluate``.
    """
    out: list[str] = []
    stack: list[tuple[A.Expr, bool]] = [(expr, False)]
    while stack:
        node, ready = stack.pop()

        if isinstance(node, A.Num):
            out.append(str(node.value))
        elif isinstance(node, A.UnaryOp):
            if not ready:
                stack.append((node, True))
                stack.append((node.operand, False))
                continue
            operand = out.pop()
            if not isinstance(node.operand, A.Num):
                operand = f"({operand})"
            out.append(node.operator.value + operand)
        elif isinstance(node, A.BinaryOp):
            if not ready:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            right = out.pop()
            left = out.pop()
            prec = _PRECEDENCE[node.operator]
            if _binds_looser(node.left, prec):
                left = f"({left})"
            # Left associative: an equal-precedence right operand needs parens too.
            if _binds_looser(node.right, prec + 1):
                right = f"({right})"
            out.append(f"{left} {node.operator.value} {right}")
        else:
            raise TypeError(f"not an expression node: {type(node)!r}")

    return out[0]


def _binds_looser(expr: A.Expr, prec: int) -> bool:
    return isinstance(expr, A.BinaryOp) and _PRECEDENCE[expr.operator] < prec
