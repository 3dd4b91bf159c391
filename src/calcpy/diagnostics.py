"""Caret diagnostics for pipeline errors.

Keep this module dependency-light: the CLI imports it to report errors and it
only depends on the error taxonomy and spans.
"""

from __future__ import annotations

from .errors import (
    CalcError,
    LexError,
    LexErrorKind,
    ParseError,
    ParseErrorKind,
    SourceError,
    iter_causes,
)
from .spans import Span


def diagnostic_span(error: CalcError, source: str) -> Span:
    """Choose the span to underline for ``error`` within ``source``."""
    end = len(source.rstrip("\n"))
    if isinstance(error, SourceError):
        return diagnostic_span(error.error, source)
    if isinstance(error, ParseError):
        if error.kind is ParseErrorKind.REDUNDANT_EXPRESSION:
            return Span(error.span.start, max(end, error.span.end))
        if error.kind is ParseErrorKind.UNEXPECTED_EOF:
            return Span(end, end + 1)
    if isinstance(error, LexError) and error.kind is LexErrorKind.UNEXPECTED_EOF:
        return Span(end, end + 1)
    return error.span


def render_diagnostic(error: CalcError, source: str) -> str:
    """Render the source line holding the error and a caret line under it."""
    span = diagnostic_span(error, source)
    line_start = source.rfind("\n", 0, span.start) + 1
    line_end = source.find("\n", span.start)
    if line_end == -1:
        line_end = len(source)
    column = span.start - line_start
    width = max(1, min(span.end, line_end) - span.start)
    return f"{source[line_start:line_end]}\n{' ' * column}{'^' * width}"


def format_error(error: CalcError, source: str) -> str:
    """Full report: message, hint, caret diagnostic, then any causes."""
    lines = [f"error: {error.message()}"]
    if error.hint:
        lines.append(f"hint: {error.hint}")
    lines.append(render_diagnostic(error, source))
    for cause in list(iter_causes(error))[1:]:
        lines.append(f"caused by {cause}")
    return "\n".join(lines)
