"""Custom exceptions for reading, lexing, parsing and loading quest sources."""


class QuestLangError(Exception):
    """Base exception for the QuestLang data layer."""


class LexError(QuestLangError):
    """Raised on an unexpected character or an unterminated string."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class ParseError(QuestLangError):
    """Raised on the first grammar violation; the parser does not recover."""

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        *,
        expected: str | None = None,
        got: str | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.expected = expected
        self.got = got


class SourceLoadError(QuestLangError):
    """Raised when a source file is missing or unreadable."""


class ModuleLoadError(QuestLangError):
    """Raised when an imported file cannot be used as a module."""
