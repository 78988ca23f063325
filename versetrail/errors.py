"""
Error taxonomy for VerseTrail.

Quiz answers are never errors; they come back as plain booleans or result
objects. Only content loading and persistence failures raise.
"""

from typing import Optional


class VersetrailError(Exception):
    """Base class for all VerseTrail errors."""


class ContentLoadError(VersetrailError):
    """A chapter or verse record is missing or malformed."""

    def __init__(self, message: str, chapter_id: int, verse_id: Optional[int] = None):
        super().__init__(message)
        self.chapter_id = chapter_id
        self.verse_id = verse_id


class PersistenceError(VersetrailError):
    """Reading or writing the progress store failed.

    The caller may retry the operation; nothing was saved.
    """

    retryable = True

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation
