from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .spans import Span
from .tokens import Token


class LexErrorKind(str, Enum):
    INVALID_CHAR = "invalid character"
    NUMBER_OVERFLOW = "number literal does not fit in 64 bits"
    UNEXPECTED_EOF = "unexpected end of input"


class ParseErrorKind(str, Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    NOT_AN_EXPRESSION_START = "not an expression"
    NOT_AN_OPERATOR = "not an operator"
    UNCLOSED_PAREN = "unclosed parenthesis"
    REDUNDANT_EXPRESSION = "redundant expression"
    UNEXPECTED_EOF = "unexpected end of input"


class EvalErrorKind(str, Enum):
    DIVISION_BY_ZERO = "division by zero"


class SourceErrorKind(str, Enum):
    LEX = "could not tokenize the input"
    PARSE = "could not parse the input"
    EVAL = "could not evaluate the input"


class CalcError(Exception):
    """Base for every error the pipeline raises; each carries a span."""

    kind: Enum
    span: Span
    hint: str | None

    def message(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        base = f"{self.span.format()}: {self.message()}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class LexError(CalcError):
    kind: LexErrorKind
    span: Span
    char: str | None = None  # only for INVALID_CHAR
    hint: str | None = None

    def message(self) -> str:
        if self.kind is LexErrorKind.INVALID_CHAR:
            return f"{self.kind.value} {self.char!r}"
        return self.kind.value


@dataclass(slots=True)
class ParseError(CalcError):
    kind: ParseErrorKind
    span: Span
    token: Token | None = None  # None for UNEXPECTED_EOF
    hint: str | None = None

    def message(self) -> str:
        if self.token is not None:
            return f"{self.kind.value}: {self.token.lexeme!r}"
        return self.kind.value


@dataclass(slots=True)
class EvalError(CalcError):
    kind: EvalErrorKind
    span: Span
    hint: str | None = None


@dataclass(slots=True)
class SourceError(CalcError):
    """Top-level pipeline failure, chained from the stage error that caused it.

    Raise it ``from error`` so the chain can be walked with ``iter_causes``.
    """

    kind: SourceErrorKind
    span: Span
    error: CalcError
    hint: str | None = None

    @classmethod
    def wrap(cls, error: CalcError) -> "SourceError":
        if isinstance(error, LexError):
            kind = SourceErrorKind.LEX
        elif isinstance(error, ParseError):
            kind = SourceErrorKind.PARSE
        else:
            kind = SourceErrorKind.EVAL
        return cls(kind=kind, span=error.span, error=error)


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` and then each explicitly chained ``__cause__``."""
    cur: BaseException | None = exc
    seen: set[int] = set()
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        yield cur
        cur = cur.__cause__
