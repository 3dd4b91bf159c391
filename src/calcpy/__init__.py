from __future__ import annotations

from .api import evaluate_file, evaluate_source, parse_file, parse_source
from .diagnostics import format_error, render_diagnostic
from .errors import CalcError, EvalError, LexError, ParseError, SourceError
from .evaluator import evaluate
from .format import format_expr
from .lexer import lex
from .parser import parse

__all__ = [
    "CalcError",
    "EvalError",
    "LexError",
    "ParseError",
    "SourceError",
    "evaluate",
    "evaluate_file",
    "evaluate_source",
    "format_error",
    "format_expr",
    "lex",
    "parse",
    "parse_file",
    "parse_source",
    "render_diagnostic",
]
