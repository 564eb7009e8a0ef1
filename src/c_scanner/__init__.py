"""
C Scanner - Lexical Analysis for C Source Text
==============================================

This package turns raw C source text into a stream of typed tokens for
a downstream parser. It does not preprocess, parse or build an AST.

Main Components
---------------
- **lexer**: the pull-based ``Scanner``, ``TokenKind``, ``Token`` and the
  ``tokenize()`` convenience function
- **errors**: ``SourceLocation`` and the exception hierarchy used when a
  caller chooses to stop on illegal input
- **cli**: the ``cscan`` command-line tool

Quick Start
-----------
    >>> from c_scanner import Scanner, TokenKind
    >>> scanner = Scanner("x = 1;")
    >>> [t.kind.name for t in scanner.tokenize()]
    ['IDENT', 'EQUAL', 'INT_LITERAL', 'SEMICOLON', 'EOF']

Or from the command line:
    $ cscan hello.c
"""

__version__ = "1.0.0"

from c_scanner.errors import (
    ScannerError,
    CSyntaxError,
    IllegalCharacterError,
    UnterminatedCommentError,
    SourceLocation,
)
from c_scanner.lexer import (
    KEYWORDS,
    ScanOptions,
    Scanner,
    Token,
    TokenKind,
    tokenize,
)

__all__ = [
    # Version
    "__version__",
    # Scanner
    "Scanner",
    "ScanOptions",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "tokenize",
    # Errors
    "ScannerError",
    "CSyntaxError",
    "IllegalCharacterError",
    "UnterminatedCommentError",
    "SourceLocation",
]
