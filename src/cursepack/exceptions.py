"""
exceptions.py

Centralized custom exception types for the library.

Every failure the loader, the envelope parsers and the fingerprint resolver can
report is one of the classes below. Each error carries an optional short code
and the underlying cause (an OSError, a JSONDecodeError, ...) for debugging.
"""

from typing import Optional


class CursePackError(Exception):
    """
    Base class for all library-specific exceptions.

    Attributes
    ----------
    message: str
        Human readable error message.
    code: Optional[str]
        Short machine-friendly error code (e.g. "read", "parse").
    cause: Optional[BaseException]
        Underlying exception that triggered this one, if any.
    """

    default_code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None, cause: Optional[BaseException] = None):
        self.message = message
        self.code = code if code is not None else self.default_code
        self.cause = cause
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"[{self.__class__.__name__}] {self.message}"
        if self.cause is not None:
            base += f": {self.cause}"
        return base

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} code={self.code!r} message={self.message!r}>"


class ReadError(CursePackError):
    """Storage could not be read (missing file, permission, bad encoding, broken zip)."""

    default_code = "read"


class ParseError(CursePackError):
    """Text is not JSON, or the JSON does not match the expected shape."""

    default_code = "parse"


class EmptyResultError(CursePackError):
    """A fingerprint lookup returned zero exact matches."""

    default_code = "empty"


__all__ = ["CursePackError", "ReadError", "ParseError", "EmptyResultError"]
