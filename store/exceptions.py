"""
Error taxonomy for the reading store.

ValidationError — missing or malformed required input (client-attributable).
StorageError    — the underlying database call failed or timed out.
UnknownError    — anything else, surfaced with its message when available.
"""


class ReadingError(Exception):
    """Base class for every error raised by the reading store layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ReadingError):
    pass


class StorageError(ReadingError):
    pass


class UnknownError(ReadingError):
    pass
