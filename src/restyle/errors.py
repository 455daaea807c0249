"""Style error types."""

from __future__ import annotations


class StyleError(ValueError):
    """Base class for all errors raised while parsing or applying styles."""


class StyleSyntaxError(StyleError):
    """Raised when style text is malformed (missing colon, key or value)."""

    def __init__(self, message: str, statement: str | None = None):
        self.statement = statement
        super().__init__(message)


class StyleValueError(StyleSyntaxError):
    """Raised when a structured value (color, insets, font, ...) is malformed."""

    def __init__(self, key: str, value: str, reason: str = ""):
        self.key = key
        self.value = value
        message = f"invalid value '{value}' for '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, statement=f"{key}: {value}")


class UnknownStyleError(StyleError):
    """Raised when a style key does not resolve to anything applicable."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"unknown style '{key}'")


class InvalidAssignmentError(StyleError):
    """Raised when a value cannot be written to a styleable slot.

    Covers read-only slots, values whose type does not fit the declared
    type of the slot, and prototypes that cannot be cloned.
    """

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)
