"""Lexical token produced by the lexer."""
from __future__ import annotations

from dataclasses import dataclass

from questlang.core.types import TokenKind


@dataclass(frozen=True, slots=True)
class Token:
    """Single token tagged with its source position.

    ``start`` and ``end`` are UTF-8 byte offsets into the source text.
    """

    kind: TokenKind
    value: str
    line: int
    column: int
    start: int
    end: int

    def describe(self) -> str:
        return f"{self.kind.value} at {self.line}:{self.column}"
