"""
C Subset Lexer (Tokenizer)
==========================

This module converts C source text into a list of tokens for the parser.

Token Categories
----------------
- Identifiers: any run of alphabetic characters. Keywords such as
  'int', 'void' and 'return' are NOT separated out here; the parser
  decides what an identifier means from its text.
- Numbers: runs of decimal digits. The token keeps the literal text,
  conversion and range checking happen in the parser.
- Strings: "double quoted", no escape sequences.
- Punctuation: ( ) { } : , ; = + - * / . # < >

Error Handling
--------------
The lexer never stops on bad input. A character that starts no token
is recorded as an InvalidCharacterError in the diagnostic collector
and dropped, then scanning resumes with the next character.

Example Usage
-------------
>>> from minic.cfront.lexer import CLexer
>>> for token in CLexer('#include <stdio.h>', "main.c").tokenize():
...     print(token)
Token(HASH, '#', 1:1)
Token(IDENTIFIER, 'include', 1:2)
Token(LT, '<', 1:10)
Token(IDENTIFIER, 'stdio', 1:11)
Token(DOT, '.', 1:16)
Token(IDENTIFIER, 'h', 1:17)
Token(GT, '>', 1:18)
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from minic.errors import SourceLocation
from minic.cfront.errors import (
    DiagnosticCollector,
    InvalidCharacterError,
    UnterminatedStringError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class CTokenType(Enum):
    """Token types produced by CLexer."""

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Names and keywords alike
    NUMBER = auto()         # Decimal digit run
    STRING = auto()         # "..." (value excludes the quotes)

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    COLON = auto()          # :
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;

    # === Operators ===
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    DOT = auto()            # .

    # === Preprocessor and include paths ===
    HASH = auto()           # #
    LT = auto()             # <
    GT = auto()             # >


# Fixed table of single-character tokens
SINGLE_CHAR_TOKENS: dict[str, CTokenType] = {
    "(": CTokenType.LPAREN,
    ")": CTokenType.RPAREN,
    "{": CTokenType.LBRACE,
    "}": CTokenType.RBRACE,
    ":": CTokenType.COLON,
    ",": CTokenType.COMMA,
    ";": CTokenType.SEMICOLON,
    "=": CTokenType.ASSIGN,
    "+": CTokenType.PLUS,
    "-": CTokenType.MINUS,
    "*": CTokenType.STAR,
    "/": CTokenType.SLASH,
    ".": CTokenType.DOT,
    "#": CTokenType.HASH,
    "<": CTokenType.LT,
    ">": CTokenType.GT,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class CToken:
    """
    A single token from C source code.

    Attributes:
        type: The CTokenType classification
        value: The literal source text of the token
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: CTokenType
    value: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class CLexer:
    """
    Tokenizes C subset source code.

    Usage:
        diagnostics = DiagnosticCollector()
        tokens = CLexer(source_text, filename, diagnostics).tokenize()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        diagnostics: Collector receiving recoverable lexing errors
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.source = source
        self.filename = filename
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> list[CToken]:
        """
        Scan the whole source.

        Returns:
            Every token in source order. Whitespace-only input gives
            an empty list; there is no end-of-file token.
        """
        tokens: list[CToken] = []

        while True:
            self._skip_whitespace()
            if self._at_end():
                break

            token = self._scan_token()
            if token is not None:
                tokens.append(token)

        logger.debug("%s: %d tokens", self.filename, len(tokens))
        return tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string at end of source."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _advance_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while predicate holds and return them."""
        chars = []
        while not self._at_end() and predicate(self._peek()):
            chars.append(self._advance())
        return "".join(chars)

    def _skip_whitespace(self) -> None:
        self._advance_while(str.isspace)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(
        self,
        token_type: CTokenType,
        value: str,
        start_line: int,
        start_column: int,
    ) -> CToken:
        return CToken(
            type=token_type,
            value=value,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _scan_token(self) -> Optional[CToken]:
        """
        Scan the next token from source.

        Returns:
            The next CToken, or None if the character was rejected
        """
        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char.isalpha():
            name = self._advance_while(str.isalpha)
            return self._make_token(CTokenType.IDENTIFIER, name, start_line, start_column)

        if char.isdecimal():
            digits = self._advance_while(str.isdecimal)
            return self._make_token(CTokenType.NUMBER, digits, start_line, start_column)

        if char == '"':
            return self._scan_string(start_line, start_column)

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)

        # Unknown character: report and drop
        self._advance()
        self.diagnostics.add(InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        ))
        return None

    def _scan_string(self, start_line: int, start_column: int) -> CToken:
        """Scan a double-quoted string. Backslashes have no special meaning."""
        source_line = self._get_current_line()
        self._advance()  # consume opening "

        text = self._advance_while(lambda c: c != '"')

        if self._at_end():
            self.diagnostics.add(UnterminatedStringError(
                SourceLocation(self.filename, start_line, start_column),
                source_line,
            ))
        else:
            self._advance()  # consume closing "

        return self._make_token(CTokenType.STRING, text, start_line, start_column)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


def tokenize(
    source: str,
    filename: str = "<input>",
    diagnostics: Optional[DiagnosticCollector] = None,
) -> list[CToken]:
    """Tokenize source text in one call."""
    return CLexer(source, filename, diagnostics).tokenize()
