"""
Unified test infrastructure for pxml.

This package contains common utilities and helpers
used across all tests to avoid code duplication.

Modules:
- token_utils: Test-side front end turning markup text into token trees
- file_utils: Utilities for creating config files
"""

from .token_utils import LexerError, MarkupLexer, tokenize, parse_markup
from .file_utils import write

__all__ = [
    # Token utilities
    "LexerError", "MarkupLexer", "tokenize", "parse_markup",

    # File utilities
    "write",
]
