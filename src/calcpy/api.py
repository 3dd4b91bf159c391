from __future__ import annotations

import logging
from pathlib import Path

from .ast import Expr
from .errors import CalcError, EvalError, SourceError
from .evaluator import evaluate
from .lexer import lex
from .parser import parse


logger = logging.getLogger("calcpy.api")


def parse_source(src: str) -> Expr:
    """Lex and parse one expression.

    Raises ``SourceError`` chained from the ``LexError`` or ``ParseError``.
    """
    try:
        tokens = lex(src)
        logger.debug("lexed %d token(s) from %r", len(tokens), src)
        expr = parse(tokens)
    except CalcError as e:
        raise SourceError.wrap(e) from e
    logger.debug("parsed %s spanning %s", type(expr).__name__, expr.span.format())
    return expr


def evaluate_source(src: str) -> int:
    """Run the whole pipeline; raises ``SourceError`` for the first failing stage."""
    expr = parse_source(src)
    try:
        value = evaluate(expr)
    except EvalError as e:
        raise SourceError.wrap(e) from e
    logger.debug("evaluated %r to %d", src, value)
    return value


def read_source(path: str | Path) -> str:
    p = Path(path).expanduser().resolve()
    return p.read_text(encoding="utf-8").rstrip("\n")


def parse_file(path: str | Path) -> Expr:
    return parse_source(read_source(path))


def evaluate_file(path: str | Path) -> int:
    return evaluate_source(read_source(path))
