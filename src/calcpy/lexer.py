from __future__ import annotations

from dataclasses import dataclass

from .errors import LexError, LexErrorKind
from .spans import Span
from .tokens import Token, TokenKind


U64_MAX = 2**64 - 1
_U64_DIGITS = len(str(U64_MAX))

_DIGITS = "0123456789"
_WHITESPACE = " \t\n"
_SINGLE = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


@dataclass(slots=True)
class _Cursor:
    src: str
    i: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self) -> str:
        if self.eof():
            return ""
        return self.src[self.i]

    def take_while(self, chars: str) -> str:
        start = self.i
        while not self.eof() and self.src[self.i] in chars:
            self.i += 1
        return self.src[start : self.i]


def lex(src: str) -> list[Token]:
    """Split ``src`` into span-tagged tokens.

    Scans left to right in a single pass and stops at the first character that
    cannot start a token. Whitespace separates tokens but produces none.
    """
    cur = _Cursor(src=src)
    tokens: list[Token] = []

    while not cur.eof():
        ch = cur.peek()
        start = cur.i

        if ch in _WHITESPACE:
            cur.take_while(_WHITESPACE)
            continue

        if ch in _DIGITS:
            lexeme = cur.take_while(_DIGITS)
            span = Span(start, cur.i)
            # Longer digit runs always overflow; int() also rejects very long strings.
            digits = lexeme.lstrip("0")
            value = int(digits or "0") if len(digits) <= _U64_DIGITS else None
            if value is None or value > U64_MAX:
                raise LexError(
                    kind=LexErrorKind.NUMBER_OVERFLOW,
                    span=span,
                    hint=f"number literals must be at most {U64_MAX}",
                )
            tokens.append(Token(TokenKind.NUMBER, lexeme, span, value))
            continue

        k = _SINGLE.get(ch)
        if k is not None:
            cur.i += 1
            tokens.append(Token(k, ch, Span(start, cur.i)))
            continue

        raise LexError(
            kind=LexErrorKind.INVALID_CHAR,
            span=Span(start, start + 1),
            char=ch,
            hint="only digits, + - * / ( ) and whitespace are allowed",
        )

    return tokens
