from __future__ import annotations


class LenientError(Exception):
    """Base class for errors raised by the lenient transcoding pipeline."""


class ParseError(LenientError):
    """
    A converter could not interpret its input under the expected grammar.

    `line` and `column` are 1-based and optional; converters fill them in
    whenever the failing position is known.
    """

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @classmethod
    def at_offset(cls, message: str, text: str, offset: int) -> ParseError:
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return cls(message, line=line, column=column)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"


class WriteFailure(LenientError):
    """A save was rejected because its content could not be converted. Nothing was written."""


class UnknownLanguageError(LenientError, KeyError):
    """No converters are registered for the requested language tag."""

    def __init__(self, language: str) -> None:
        super().__init__(language)
        self.language = language

    def __str__(self) -> str:
        return f"No converters registered for language {self.language!r}"
