"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from PxmlUserError.

Programming errors and bugs should NOT inherit from PxmlUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokens import Span


class PxmlUserError(Exception):
    """
    Base class for all user-facing errors in pxml.

    These errors indicate problems that the user can fix:
    malformed markup, invalid embedded expressions, bad configuration.
    """
    pass


class ParseError(PxmlUserError):
    """
    Positioned syntax error.

    Carries the span of the token that caused the failure.
    """

    def __init__(self, message: str, span: Span):
        super().__init__(f"{message} at {span.line}:{span.column}")
        self.message = message
        self.span = span
        self.line = span.line
        self.column = span.column
        self.position = span.position


class OrphanCloseTag(ParseError):
    """A close tag with no matching open tag in scope."""
    pass


class UnterminatedOpenTag(ParseError):
    """Input ended while an open tag still awaits its `>` or its close tag."""
    pass


class TagNameMismatch(ParseError):
    """A close tag naming a different tag than the enclosing open tag."""
    pass


class GrammarMismatch(ParseError):
    """None of the grammar alternatives matched at the current position."""
    pass


class MalformedAttribute(ParseError):
    """Leftover or invalid tokens inside an open tag's attribute range."""
    pass


class MalformedEmbeddedExpression(ParseError):
    """The interior of a delimited group is not a valid expression."""
    pass


class ConfigError(PxmlUserError, ValueError):
    """Invalid parser configuration."""
    pass


__all__ = [
    "PxmlUserError",
    "ParseError",
    "OrphanCloseTag",
    "UnterminatedOpenTag",
    "TagNameMismatch",
    "GrammarMismatch",
    "MalformedAttribute",
    "MalformedEmbeddedExpression",
    "ConfigError",
]
