from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) of offsets into the source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span: [{self.start}, {self.end})")

    def merge(self, other: Span) -> Span:
        return Span(min(self.start, other.start), max(self.end, other.end))

    def format(self) -> str:
        return f"{self.start}..{self.end}"


def merge(a: Span, b: Span) -> Span:
    return a.merge(b)
