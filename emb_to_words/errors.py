"""
errors.py
---------
Exceptions raised while loading a vectors file or querying the table.
Everything derives from EmbeddingError so the CLI can catch it in one place.
"""
from __future__ import annotations


class EmbeddingError(Exception):
    """Base class for all load/query failures."""


class MalformedLineError(EmbeddingError):
    """A line of the vectors file could not be parsed."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class DimensionMismatchError(MalformedLineError):
    """A line has a different number of components than the first data line."""

    def __init__(self, line_number: int, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(line_number, f"expected {expected} values, got {actual}")


class UnknownWordError(EmbeddingError, KeyError):
    def __init__(self, word: str):
        self.word = word
        super().__init__(word)

    # KeyError.__str__ would repr() the word
    def __str__(self) -> str:
        return f"'{self.word}' not in vocabulary"


class EmptyQueryError(EmbeddingError):
    def __init__(self, message: str = "no query words given"):
        super().__init__(message)


class EmptyTableError(EmbeddingError):
    def __init__(self, message: str = "embedding table is empty"):
        super().__init__(message)
