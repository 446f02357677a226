"""Crumb exception hierarchy.

Shared across Cookie, the parser, and the factory so every module
raises and catches the same types.
"""

from typing import Any


class CrumbError(Exception):
    """Base for all crumb-specific errors."""


class ConfigurationError(CrumbError):
    """Raised when ``CookieDefaults`` holds an invalid value."""


class ValidationError(CrumbError, ValueError):
    """A cookie attribute failed its validation rule.

    ``attribute`` names the offending field and ``value`` holds what was
    rejected, so callers can report the problem without parsing the message.
    """

    def __init__(self, message: str, *, attribute: str, value: Any = None) -> None:
        super().__init__(message)
        self.attribute = attribute
        self.value = value


class ParseError(ValidationError):
    """A raw ``Set-Cookie`` header value could not be turned into a Cookie.

    Subclasses ``ValidationError`` because attribute validation failures
    during parsing surface as ``ParseError`` too.
    """

    def __init__(self, message: str, *, raw: str, attribute: str = "header", value: Any = None) -> None:
        super().__init__(message, attribute=attribute, value=value)
        self.raw = raw
