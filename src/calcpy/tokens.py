from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    NUMBER = "NUMBER"

    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span
    value: int | None = None  # only for NUMBER

    def __post_init__(self) -> None:
        if (self.kind is TokenKind.NUMBER) != (self.value is not None):
            raise ValueError(f"{self.kind.value} token with value {self.value!r}")

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, {self.span.format()})"
