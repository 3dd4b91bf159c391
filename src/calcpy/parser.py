from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import cast

from .ast import BinaryOp, BinaryOpKind, Expr, Num, UnaryOp, UnaryOpKind
from .errors import ParseError, ParseErrorKind
from .spans import Span
from .tokens import Token, TokenKind


_ADDITIVE = {
    TokenKind.PLUS: BinaryOpKind.ADD,
    TokenKind.MINUS: BinaryOpKind.SUB,
}
_MULTIPLICATIVE = {
    TokenKind.ASTERISK: BinaryOpKind.MUL,
    TokenKind.SLASH: BinaryOpKind.DIV,
}
_PREFIX = {
    TokenKind.PLUS: UnaryOpKind.PLUS,
    TokenKind.MINUS: UnaryOpKind.MINUS,
}


@dataclass(slots=True)
class Parser:
    """Precedence-climbing parser over a token list with one token of lookahead.

    Grammar, loosest binding first::

        expr  := term (('+' | '-') term)*
        term  := unary (('*' | '/') unary)*
        unary := ('+' | '-')? atom
        atom  := NUMBER | '(' expr ')'
    """

    tokens: Sequence[Token]
    i: int = 0

    def peek(self) -> Token | None:
        if self.i >= len(self.tokens):
            return None
        return self.tokens[self.i]

    def advance(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self.i += 1
        return tok

    def parse(self) -> Expr:
        expr = self._expr()
        tok = self.peek()
        if tok is not None:
            raise ParseError(
                kind=ParseErrorKind.REDUNDANT_EXPRESSION,
                span=tok.span,
                token=tok,
                hint="remove everything from here to the end, or join it with an operator",
            )
        return expr

    def _eof(self) -> ParseError:
        end = self.tokens[-1].span.end if self.tokens else 0
        return ParseError(kind=ParseErrorKind.UNEXPECTED_EOF, span=Span(end, end))

    def _expr(self) -> Expr:
        return self._fold(self._term, _ADDITIVE)

    def _term(self) -> Expr:
        return self._fold(self._unary, _MULTIPLICATIVE)

    def _fold(self, operand: Callable[[], Expr], table: dict[TokenKind, BinaryOpKind]) -> Expr:
        left = operand()
        while True:
            try:
                op = self._infix(table)
            except ParseError as e:
                if e.kind is ParseErrorKind.NOT_AN_OPERATOR:
                    break
                raise
            right = operand()
            left = BinaryOp(span=left.span.merge(right.span), operator=op, left=left, right=right)
        return left

    def _infix(self, table: dict[TokenKind, BinaryOpKind]) -> BinaryOpKind:
        tok = self.peek()
        op = table.get(tok.kind) if tok is not None else None
        if op is None:
            span = tok.span if tok is not None else self._eof().span
            raise ParseError(kind=ParseErrorKind.NOT_AN_OPERATOR, span=span, token=tok)
        self.advance()
        return op

    def _unary(self) -> Expr:
        tok = self.peek()
        op = _PREFIX.get(tok.kind) if tok is not None else None
        if tok is None or op is None:
            return self._atom()
        self.advance()
        operand = self._atom()
        return UnaryOp(span=tok.span.merge(operand.span), operator=op, operand=operand)

    def _atom(self) -> Expr:
        tok = self.advance()
        if tok is None:
            raise self._eof()

        if tok.kind is TokenKind.NUMBER:
            return Num(span=tok.span, value=cast(int, tok.value))

        if tok.kind is TokenKind.LPAREN:
            inner = self._expr()
            close = self.advance()
            if close is None:
                raise ParseError(
                    kind=ParseErrorKind.UNCLOSED_PAREN,
                    span=tok.span,
                    token=tok,
                    hint="add a closing )",
                )
            if close.kind is not TokenKind.RPAREN:
                raise ParseError(
                    kind=ParseErrorKind.UNEXPECTED_TOKEN,
                    span=close.span,
                    token=close,
                    hint=f"expected ) to close the ( at {tok.span.format()}",
                )
            # The parenthesized node spans its parentheses too.
            return replace(inner, span=tok.span.merge(close.span))

        raise ParseError(
            kind=ParseErrorKind.NOT_AN_EXPRESSION_START,
            span=tok.span,
            token=tok,
            hint="expected a number, a sign, or (",
        )


def parse(tokens: Sequence[Token]) -> Expr:
    """Parse a complete token sequence into a single expression tree."""
    return Parser(tokens).parse()
