"""
C Scanner (Tokenizer)
=====================

This module implements a scanner for C source text. It converts the text
into a stream of tokens for a downstream parser, one token per pull.

Token Categories
----------------
- Keywords: the 32 C89 reserved words (int, char, return, while, ...)
- Identifiers: variable and function names
- Numbers: integer (123) and floating point (12.34, .5) literals
- Strings: "double quoted", taken verbatim (no escape processing)
- Operators: + - * / % = == < <= << > >= >> & && | || ! != ^ ~
- Punctuation: ; , ( ) { } :
- Preprocessor markers: #include, #define, ... (name only)
- Comments: // single line and /* block */, returned as tokens

Malformed Input
---------------
The scanner never raises. A character that starts no token, or a block
comment that runs off the end of the file, comes back as an ILLEGAL token
whose literal is a diagnostic message with the 1-based line and column.
The cursor always moves past the offending input, so scanning continues.
Callers that prefer to stop on the first problem can turn an ILLEGAL
token into an exception with ``Scanner.error_for()`` or use
``tokenize(source, ScanOptions(strict=True))``.

Number Quirks
-------------
| Input   | Tokens                              |
|---------|-------------------------------------|
| 12.34   | FLOAT_LITERAL '12.34'               |
| 1.2.3   | FLOAT_LITERAL '1.2.3'               |
| 1.2.3.4 | FLOAT_LITERAL '1.2.3', then '.4'    |
| .5      | FLOAT_LITERAL '.5'                  |
| a.b     | IDENT 'a', FLOAT_LITERAL '0.0', ... |

Character Width
---------------
The scanner walks a Python ``str``, so the cursor moves one code point at a
time everywhere. Letter and digit classification (``str.isalpha``,
``str.isdecimal``) and the verbatim string and directive scans see the
same units, and a non-ASCII letter such as 'é' continues an identifier as
one character. This differs from byte-wide scanning, where each byte of a
multi-byte UTF-8 sequence would be classified on its own. Decoding bytes
is the caller's job (``cscan --encoding``).

Example Usage
-------------
>>> from c_scanner.lexer import Scanner
>>> scanner = Scanner('int main() { return 42; }', "test.c")
>>> for token in scanner.tokenize():
...     print(token)
Token(INT, 'int', @0)
Token(IDENT, 'main', @4)
Token(LPAREN, '(', @8)
Token(RPAREN, ')', @9)
Token(LBRACE, '{', @11)
Token(RETURN, 'return', @13)
Token(INT_LITERAL, '42', @20)
Token(SEMICOLON, ';', @22)
Token(RBRACE, '}', @24)
Token(EOF, '', @25)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from c_scanner.errors import (
    CSyntaxError,
    IllegalCharacterError,
    SourceLocation,
    UnterminatedCommentError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for C source text.

    The set is closed: every token the scanner produces has exactly one
    of these kinds. Keywords get a kind of their own so the parser never
    has to compare identifier spellings.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input (repeatable)
    ILLEGAL = auto()        # Illegal input, literal is the diagnostic

    # === Identifiers and Literals ===
    IDENT = auto()          # Variable/function names
    INT_LITERAL = auto()    # 123
    FLOAT_LITERAL = auto()  # 12.34, .5
    STRING = auto()         # "..." (quotes stripped)

    # === Keywords - Types ===
    VOID = auto()
    CHAR = auto()
    SHORT = auto()
    INT = auto()
    LONG = auto()
    FLOAT = auto()
    DOUBLE = auto()
    SIGNED = auto()
    UNSIGNED = auto()
    STRUCT = auto()
    UNION = auto()
    ENUM = auto()
    TYPEDEF = auto()

    # === Keywords - Storage and Qualifiers ===
    AUTO = auto()
    REGISTER = auto()
    STATIC = auto()
    EXTERN = auto()
    CONST = auto()
    VOLATILE = auto()

    # === Keywords - Control Flow ===
    IF = auto()
    ELSE = auto()
    SWITCH = auto()
    CASE = auto()
    DEFAULT = auto()
    WHILE = auto()
    DO = auto()
    FOR = auto()
    GOTO = auto()
    BREAK = auto()
    CONTINUE = auto()
    RETURN = auto()

    # === Keywords - Other ===
    SIZEOF = auto()

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    PERCENT = auto()        # %

    # === Assignment and Comparison ===
    EQUAL = auto()          # =
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LESS = auto()           # <
    LTEQ = auto()           # <=
    GREATER = auto()        # >
    GTEQ = auto()           # >=

    # === Logical Operators ===
    ANDAND = auto()         # &&
    OROR = auto()           # ||
    BANG = auto()           # !

    # === Bitwise Operators ===
    AMPERSAND = auto()      # &
    PIPE = auto()           # |
    CARET = auto()          # ^
    TILDE = auto()          # ~
    LSHIFT = auto()         # <<
    RSHIFT = auto()         # >>

    # === Punctuation ===
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    COLON = auto()          # :
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }

    # === Preprocessor and Comments ===
    PREPROC = auto()        # #name
    COMMENT_SINGLE = auto() # // ...
    COMMENT_MULTI = auto()  # /* ... */

    @property
    def is_keyword(self) -> bool:
        """Return True if this kind is a reserved word."""
        return self in _KEYWORD_KINDS

    @property
    def is_literal(self) -> bool:
        """Return True for integer, float and string literals."""
        return self in (
            TokenKind.INT_LITERAL,
            TokenKind.FLOAT_LITERAL,
            TokenKind.STRING,
        )

    @property
    def is_operator(self) -> bool:
        """Return True for arithmetic, relational, logical and bitwise operators."""
        return self in _OPERATOR_KINDS

    @property
    def is_comment(self) -> bool:
        """Return True for both comment forms."""
        return self in (TokenKind.COMMENT_SINGLE, TokenKind.COMMENT_MULTI)


# =============================================================================
# Keyword Mapping
# =============================================================================

# Exact, case-sensitive spelling -> kind. Read-only for the process lifetime.
KEYWORDS: Mapping[str, TokenKind] = MappingProxyType({
    # Types
    "void": TokenKind.VOID,
    "char": TokenKind.CHAR,
    "short": TokenKind.SHORT,
    "int": TokenKind.INT,
    "long": TokenKind.LONG,
    "float": TokenKind.FLOAT,
    "double": TokenKind.DOUBLE,
    "signed": TokenKind.SIGNED,
    "unsigned": TokenKind.UNSIGNED,
    "struct": TokenKind.STRUCT,
    "union": TokenKind.UNION,
    "enum": TokenKind.ENUM,
    "typedef": TokenKind.TYPEDEF,

    # Storage and qualifiers
    "auto": TokenKind.AUTO,
    "register": TokenKind.REGISTER,
    "static": TokenKind.STATIC,
    "extern": TokenKind.EXTERN,
    "const": TokenKind.CONST,
    "volatile": TokenKind.VOLATILE,

    # Control flow
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "switch": TokenKind.SWITCH,
    "case": TokenKind.CASE,
    "default": TokenKind.DEFAULT,
    "while": TokenKind.WHILE,
    "do": TokenKind.DO,
    "for": TokenKind.FOR,
    "goto": TokenKind.GOTO,
    "break": TokenKind.BREAK,
    "continue": TokenKind.CONTINUE,
    "return": TokenKind.RETURN,

    # Other
    "sizeof": TokenKind.SIZEOF,
})

_KEYWORD_KINDS = frozenset(KEYWORDS.values())

_OPERATOR_KINDS = frozenset({
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH,
    TokenKind.PERCENT, TokenKind.EQUAL, TokenKind.EQEQ, TokenKind.NOTEQ,
    TokenKind.LESS, TokenKind.LTEQ, TokenKind.GREATER, TokenKind.GTEQ,
    TokenKind.ANDAND, TokenKind.OROR, TokenKind.BANG, TokenKind.AMPERSAND,
    TokenKind.PIPE, TokenKind.CARET, TokenKind.TILDE, TokenKind.LSHIFT,
    TokenKind.RSHIFT,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from C source text.

    Attributes:
        kind: The TokenKind classification
        literal: The matched text. Strings lose their quotes, preprocessor
            markers carry the directive name, comments carry their interior
            text and ILLEGAL tokens carry a diagnostic message.
        offset: Index of the token's first character in the source. Not
            part of equality, so ``Token(kind, literal)`` can be compared
            against scanned tokens directly.
    """
    kind: TokenKind
    literal: str
    offset: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        """Format token for debugging output."""
        return f"Token({self.kind.name}, {self.literal!r}, @{self.offset})"


# =============================================================================
# Scanner Options
# =============================================================================

@dataclass
class ScanOptions:
    """
    Options for the ``tokenize()`` convenience function.

    The pull operation (``Scanner.next_token``) has no options; these only
    shape the list that ``tokenize()`` builds from it.

    Attributes:
        filename: Name used in diagnostics
        include_comments: Keep COMMENT_SINGLE/COMMENT_MULTI tokens
        strict: Raise the first ILLEGAL token as a CSyntaxError instead of
            returning it
    """
    filename: str = "<input>"
    include_comments: bool = True
    strict: bool = False


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based scanner over a complete C source text.

    The scanner keeps the source, a cursor and the character under the
    cursor. Each call to ``next_token()`` skips whitespace and returns the
    next token. Once the end of input is reached every further call returns
    an EOF token.

    Usage:
        scanner = Scanner(source_text, filename)
        while (token := scanner.next_token()).kind is not TokenKind.EOF:
            ...

    Attributes:
        source: The source text being scanned
        filename: Name of the source file (for diagnostics)
    """

    WHITESPACE = " \t\r\n"

    # First character -> {lookahead character: two-character kind}
    LOOKAHEAD_OPERATORS = {
        "=": {"=": TokenKind.EQEQ},
        "<": {"=": TokenKind.LTEQ, "<": TokenKind.LSHIFT},
        ">": {"=": TokenKind.GTEQ, ">": TokenKind.RSHIFT},
        "&": {"&": TokenKind.ANDAND},
        "|": {"|": TokenKind.OROR},
        "!": {"=": TokenKind.NOTEQ},
    }

    SINGLE_CHAR_TOKENS = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        "%": TokenKind.PERCENT,
        "=": TokenKind.EQUAL,
        "<": TokenKind.LESS,
        ">": TokenKind.GREATER,
        "&": TokenKind.AMPERSAND,
        "|": TokenKind.PIPE,
        "!": TokenKind.BANG,
        "^": TokenKind.CARET,
        "~": TokenKind.TILDE,
        ";": TokenKind.SEMICOLON,
        ",": TokenKind.COMMA,
        ":": TokenKind.COLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the scanner with source text.

        Args:
            source: The complete C source text
            filename: Name of the source file (for diagnostics)
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._char = source[0] if source else ""

    @property
    def position(self) -> int:
        """Current cursor, an index into ``source``."""
        return self._pos

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """
        Advance past the next token and return it.

        Never raises. Returns EOF at (and after) the end of input.
        """
        self._skip_whitespace()

        start = self._pos
        char = self._char

        if not char:
            return Token(TokenKind.EOF, "", start)

        if char.isalpha():
            return self._scan_identifier(start)

        if char.isdecimal():
            return self._scan_number(start)

        if char == ".":
            return self._scan_leading_dot(start)

        if char == '"':
            return self._scan_string(start)

        if char == "/" and self._peek() in ("/", "*"):
            return self._scan_comment(start)

        if char == "#":
            return self._scan_directive(start)

        return self._scan_operator(start)

    def peek_token(self) -> Token:
        """Return the token ``next_token()`` would return, without consuming it."""
        saved_pos = self._pos
        saved_char = self._char
        try:
            return self.next_token()
        finally:
            self._pos = saved_pos
            self._char = saved_char

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until the end of input.

        Yields:
            Every remaining token, ending with a single EOF token
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def location_of(self, offset: int) -> SourceLocation:
        """
        Compute the 1-based line and column of a source offset.

        Rescans the text before ``offset`` for newlines, so it is only used
        on the diagnostic path.
        """
        line = self.source.count("\n", 0, offset) + 1
        column = offset - self.source.rfind("\n", 0, offset)
        return SourceLocation(self.filename, line, column)

    def error_for(self, token: Token) -> CSyntaxError:
        """
        Build the exception describing an ILLEGAL token.

        Args:
            token: An ILLEGAL token produced by this scanner

        Returns:
            UnterminatedCommentError or IllegalCharacterError

        Raises:
            ValueError: If the token is not ILLEGAL
        """
        if token.kind is not TokenKind.ILLEGAL:
            raise ValueError(f"not an illegal token: {token!r}")

        location = self.location_of(token.offset)
        source_line = self._line_text(token.offset)

        if self.source.startswith("/*", token.offset):
            return UnterminatedCommentError(location, source_line)
        return IllegalCharacterError(
            self.source[token.offset], location, source_line
        )

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _peek(self) -> str:
        """
        Look at the character after the current one without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + 1
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _seek(self, pos: int) -> None:
        """Move the cursor forward to ``pos``, clamped to the end of input."""
        self._pos = min(pos, len(self.source))
        if self._pos < len(self.source):
            self._char = self.source[self._pos]
        else:
            self._char = ""

    def _advance(self) -> None:
        """Consume the current character."""
        self._seek(self._pos + 1)

    def _skip_whitespace(self) -> None:
        while self._char and self._char in self.WHITESPACE:
            self._advance()

    def _skip_digits(self) -> None:
        while self._char.isdecimal():
            self._advance()

    def _line_text(self, offset: int) -> str:
        """Get the full line of source text containing ``offset``."""
        line_start = self.source.rfind("\n", 0, offset) + 1
        line_end = self.source.find("\n", offset)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start:line_end].rstrip("\r")

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_identifier(self, start: int) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter and continue with letters, digits
        and underscores. The whole spelling must match a keyword exactly.
        """
        while self._char and (
            self._char.isalpha() or self._char.isdecimal() or self._char == "_"
        ):
            self._advance()

        name = self.source[start:self._pos]
        return Token(KEYWORDS.get(name, TokenKind.IDENT), name, start)

    def _scan_number(self, start: int) -> Token:
        """
        Scan an integer or floating point literal starting with a digit.

        After the first decimal point one more point is accepted; anything
        past a second point belongs to the next token.
        """
        self._skip_digits()

        if self._char != ".":
            return Token(TokenKind.INT_LITERAL, self.source[start:self._pos], start)

        self._advance()  # consume the decimal point

        seen_dot = False
        while self._char.isdecimal() or (self._char == "." and not seen_dot):
            if self._char == ".":
                seen_dot = True
            self._advance()

        return Token(TokenKind.FLOAT_LITERAL, self.source[start:self._pos], start)

    def _scan_leading_dot(self, start: int) -> Token:
        """
        Scan a literal that starts with '.'.

        '.5' is a float with the source spelling. A point not followed by a
        digit is the degenerate float '0.0' and consumes only the point.
        """
        if not self._peek().isdecimal():
            self._advance()
            return Token(TokenKind.FLOAT_LITERAL, "0.0", start)

        self._advance()  # consume the point
        self._skip_digits()
        return Token(TokenKind.FLOAT_LITERAL, self.source[start:self._pos], start)

    def _scan_string(self, start: int) -> Token:
        """
        Scan a double-quoted string literal.

        The body is taken verbatim up to the next double quote. Without a
        closing quote the literal runs to the end of input.
        """
        body_start = start + 1
        end = self.source.find('"', body_start)

        if end == -1:
            self._seek(len(self.source))
            return Token(TokenKind.STRING, self.source[body_start:], start)

        self._seek(end + 1)
        return Token(TokenKind.STRING, self.source[body_start:end], start)

    def _scan_comment(self, start: int) -> Token:
        """Scan a // or /* */ comment. The literal is the stripped interior."""
        body_start = start + 2

        if self._peek() == "/":
            end = self.source.find("\n", body_start)
            if end == -1:
                end = len(self.source)
            self._seek(end)
            return Token(
                TokenKind.COMMENT_SINGLE,
                self.source[body_start:end].strip(),
                start,
            )

        end = self.source.find("*/", body_start)
        if end == -1:
            self._seek(len(self.source))
            location = self.location_of(start)
            logger.debug(f"Unterminated block comment at {location}")
            return Token(
                TokenKind.ILLEGAL,
                f"unterminated block comment starting at line {location.line}, "
                f"column {location.column}",
                start,
            )

        self._seek(end + 2)
        return Token(
            TokenKind.COMMENT_MULTI,
            self.source[body_start:end].strip(),
            start,
        )

    def _scan_directive(self, start: int) -> Token:
        """
        Scan a preprocessor marker.

        Only the directive name (the run of non-whitespace after '#') is
        consumed; the rest of the line is scanned as ordinary tokens.
        """
        self._advance()  # consume '#'
        while self._char and self._char not in self.WHITESPACE:
            self._advance()

        return Token(TokenKind.PREPROC, self.source[start + 1:self._pos], start)

    def _scan_operator(self, start: int) -> Token:
        """
        Scan an operator, punctuation or illegal character.

        Two-character operators are chosen by one character of lookahead;
        otherwise the single-character form is used.
        """
        char = self._char

        followers = self.LOOKAHEAD_OPERATORS.get(char)
        if followers is not None:
            next_char = self._peek()
            if next_char in followers:
                self._seek(start + 2)
                return Token(followers[next_char], char + next_char, start)

        self._advance()

        if char in self.SINGLE_CHAR_TOKENS:
            return Token(self.SINGLE_CHAR_TOKENS[char], char, start)

        location = self.location_of(start)
        logger.debug(f"Illegal character {char!r} at {location}")
        return Token(
            TokenKind.ILLEGAL,
            f"illegal character '{char}' at line {location.line}, "
            f"column {location.column}",
            start,
        )


# =============================================================================
# Convenience Function
# =============================================================================

def tokenize(source: str, options: Optional[ScanOptions] = None) -> list[Token]:
    """
    Scan a complete source text into a list of tokens.

    Args:
        source: The C source text
        options: Scan options (defaults to ScanOptions())

    Returns:
        All tokens, ending with EOF

    Raises:
        CSyntaxError: On the first ILLEGAL token, if ``options.strict``
    """
    if options is None:
        options = ScanOptions()

    scanner = Scanner(source, options.filename)
    tokens = []

    for token in scanner.tokenize():
        if token.kind is TokenKind.ILLEGAL and options.strict:
            raise scanner.error_for(token)
        if token.kind.is_comment and not options.include_comments:
            continue
        tokens.append(token)

    logger.debug(f"Scanned {len(tokens)} tokens from {options.filename}")
    return tokens
