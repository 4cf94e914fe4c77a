"""Single-pass lexer turning quest source text into position-tagged tokens."""
from __future__ import annotations

import logging
from typing import List

from questlang.core.types import KEYWORDS, SYMBOLS, TokenKind
from questlang.data.errors import LexError
from questlang.domain.defs import Token

logger = logging.getLogger(__name__)

_WHITESPACE = {" ", "\t", "\r"}


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_alpha(char: str) -> bool:
    """Latin and Cyrillic letters, ``ё``/``Ё`` and underscore."""
    return (
        "a" <= char <= "z"
        or "A" <= char <= "Z"
        or "а" <= char <= "я"
        or "А" <= char <= "Я"
        or char in ("ё", "Ё", "_")
    )


def is_alphanumeric(char: str) -> bool:
    return is_alpha(char) or is_digit(char)


class Lexer:
    """Greedy character classifier; comments are kept as COMMENT tokens.

    Token ``start``/``end`` are UTF-8 byte offsets; slicing uses character
    positions.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._offset = 0
        self._token_offset = 0
        self._line = 1
        self._column = 1
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Return every token in the source followed by a terminal EOF token."""
        self._position = 0
        self._offset = 0
        self._line = 1
        self._column = 1
        self._tokens = []
        while not self._is_at_end():
            self._scan_token()
        self._tokens.append(
            Token(TokenKind.EOF, "", self._line, self._column, self._offset, self._offset)
        )
        logger.debug("Tokenized %d characters into %d tokens", len(self._source), len(self._tokens))
        return self._tokens

    def _scan_token(self) -> None:
        start = self._position
        self._token_offset = self._offset
        line = self._line
        column = self._column
        char = self._advance()

        if char in _WHITESPACE:
            return
        if char == "\n":
            self._newline()
            return
        symbol_kind = SYMBOLS.get(char)
        if symbol_kind is not None:
            self._add(symbol_kind, char, line, column)
            return
        if char == "/" and self._peek() == "/":
            self._scan_comment(start, line, column)
            return
        if char == '"':
            self._scan_string(start, line, column)
            return
        if is_digit(char):
            self._scan_number(start, line, column)
            return
        if is_alpha(char):
            self._scan_identifier(start, line, column)
            return
        raise LexError(f"Unexpected character: {char} at {line}:{column}", line, column)

    def _scan_comment(self, start: int, line: int, column: int) -> None:
        while not self._is_at_end() and self._peek() != "\n":
            self._advance()
        self._add(TokenKind.COMMENT, self._source[start:self._position], line, column)

    def _scan_string(self, start: int, line: int, column: int) -> None:
        while not self._is_at_end() and self._peek() != '"':
            if self._advance() == "\n":
                self._newline()
        if self._is_at_end():
            raise LexError(f"Unterminated string at {line}:{column}", line, column)
        self._advance()
        self._add(TokenKind.STRING, self._source[start + 1:self._position - 1], line, column)

    def _scan_number(self, start: int, line: int, column: int) -> None:
        while is_digit(self._peek()):
            self._advance()
        if self._peek() == "." and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()
        self._add(TokenKind.NUMBER, self._source[start:self._position], line, column)

    def _scan_identifier(self, start: int, line: int, column: int) -> None:
        while is_alphanumeric(self._peek()):
            self._advance()
        value = self._source[start:self._position]
        kind = KEYWORDS.get(value, TokenKind.IDENTIFIER)
        self._add(kind, value, line, column)

    def _add(self, kind: TokenKind, value: str, line: int, column: int) -> None:
        self._tokens.append(Token(kind, value, line, column, self._token_offset, self._offset))

    def _advance(self) -> str:
        char = self._source[self._position]
        self._position += 1
        self._offset += len(char.encode("utf-8"))
        self._column += 1
        return char

    def _newline(self) -> None:
        self._line += 1
        self._column = 1

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _peek_next(self) -> str:
        if self._position + 1 >= len(self._source):
            return "\0"
        return self._source[self._position + 1]

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)


def tokenize(source: str) -> List[Token]:
    """Tokenize ``source``; raises LexError on invalid input."""
    return Lexer(source).tokenize()
