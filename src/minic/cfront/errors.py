"""
C Front-End Error Hierarchy
===========================

This module defines the exception hierarchy for the C front end.
All exceptions inherit from CFrontError, which itself inherits from
the base MinicError for consistent error handling across the toolchain.

Exception Hierarchy
-------------------
CFrontError (base for all front-end errors)
├── CSyntaxError - lexer and parser syntax errors
│   ├── InvalidCharacterError - unexpected character (reported, not raised)
│   ├── UnterminatedStringError - missing closing quote (reported, not raised)
│   ├── UnexpectedTokenError - token in the wrong structural position
│   ├── MissingTokenError - required token not found
│   ├── UnexpectedEOFError - token stream ended too early
│   ├── IntegerRangeError - numeric literal does not fit in an int
│   └── UnsupportedFeatureError - construct outside the language subset
├── CPreprocessorError - directive errors
│   ├── InvalidDirectiveError - unknown '#' directive
│   ├── InvalidIncludePathError - malformed <path>
│   └── CIncludeError - header not in the capability table
└── CRuntimeError - interpreter errors
    └── UnsupportedNodeError - node kind the interpreter cannot evaluate

Failure Policy
--------------
The three phases treat errors differently:

- The lexer never raises for bad input. Invalid characters are recorded
  in a DiagnosticCollector and skipped.
- The parser raises. The first structural problem aborts parsing and no
  partial AST is returned.
- The interpreter never raises for program content. Unknown headers and
  unsupported nodes are recorded and skipped.

Error Message Format
--------------------
    main.c:1:10: error: cannot include 'unknown.h': not a known library header
        #include <unknown.h>
                 ^
    hint: known headers: stdio.h
"""

import logging
from typing import Optional, List

from minic.errors import MinicError, SourceLocation


logger = logging.getLogger(__name__)


# =============================================================================
# Base Front-End Exception
# =============================================================================

class CFrontError(MinicError):
    """
    Base exception for all C front-end errors.

    Provides the common message layout: location prefix, the offending
    source line with a caret under the column, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            main.c:3:5: error: unexpected token '+'
                int + 1;
                    ^
            hint: expected function name
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class CSyntaxError(CFrontError):
    """
    Syntax error in C source code.

    Raised by the parser when the token stream does not match the
    grammar. The lexer creates instances of the subclasses below but
    only records them.
    """
    pass


class InvalidCharacterError(CSyntaxError):
    """
    Character that starts no token.

    The lexer records this and drops the character.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class UnterminatedStringError(CSyntaxError):
    """
    String literal without a closing quote.

    The lexer records this and keeps the text up to end of input.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class UnexpectedTokenError(CSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser encounters a token that doesn't match
    the expected grammar rule.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(CSyntaxError):
    """
    Required token is missing.

    Raised when a required token (like ')' or '}') is not found
    where expected.
    """

    def __init__(
        self,
        expected: str,
        found: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        message = f"expected '{expected}'"
        if found is not None:
            message += f" but found '{found}'"
        super().__init__(
            message,
            location=location,
            source_line=source_line,
        )


class UnexpectedEOFError(CSyntaxError):
    """Token stream ended in the middle of a construct."""

    def __init__(
        self,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        hint = f"expected {expected}" if expected else None
        super().__init__(
            "unexpected end of input",
            location=location,
            hint=hint,
        )


class IntegerRangeError(CSyntaxError):
    """Numeric literal outside the signed 32-bit range."""

    def __init__(
        self,
        literal: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        super().__init__(
            f"integer literal '{literal}' is too large for type 'int'",
            location=location,
            hint="int literals must fit in 32 bits (max 2147483647)",
            source_line=source_line,
        )


class UnsupportedFeatureError(CSyntaxError):
    """
    Unsupported language feature.

    Raised when the source code uses a C construct outside the subset:

    - #define macros
    - declarations other than functions
    - named function parameters
    """

    def __init__(
        self,
        feature: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        alternative: Optional[str] = None,
    ):
        self.feature = feature
        super().__init__(
            f"unsupported feature: {feature}",
            location=location,
            hint=alternative,
            source_line=source_line,
        )


# =============================================================================
# Preprocessor Errors
# =============================================================================

class CPreprocessorError(CFrontError):
    """Error in a '#' directive."""
    pass


class InvalidDirectiveError(CPreprocessorError):
    """Directive name is neither 'include' nor 'define'."""

    def __init__(
        self,
        directive: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.directive = directive
        super().__init__(
            f"invalid preprocessing directive '#{directive}'",
            location=location,
            hint="supported directives: #include",
            source_line=source_line,
        )


class InvalidIncludePathError(CPreprocessorError):
    """Token inside '<...>' that cannot be part of a header path."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"invalid file path component '{found}'",
            location=location,
            hint="header paths may contain letters, '/' and '.'",
            source_line=source_line,
        )


class CIncludeError(CPreprocessorError):
    """
    Error including a file.

    Raised (or recorded by the interpreter) when the requested header
    is not in the capability table.
    """

    def __init__(
        self,
        filename: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        known_headers: Optional[List[str]] = None,
    ):
        self.included_filename = filename
        self.reason = reason
        self.known_headers = known_headers or []

        hint = None
        if self.known_headers:
            hint = f"known headers: {', '.join(self.known_headers)}"

        super().__init__(
            f"cannot include '{filename}': {reason}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Runtime Errors (Interpreter)
# =============================================================================

class CRuntimeError(CFrontError):
    """Error while interpreting the AST."""
    pass


class UnsupportedNodeError(CRuntimeError):
    """Node kind the interpreter does not evaluate yet."""

    def __init__(
        self,
        node_kind: str,
        location: Optional[SourceLocation] = None,
    ):
        self.node_kind = node_kind
        super().__init__(
            f"evaluation of {node_kind} not supported yet",
            location=location,
        )


# =============================================================================
# Diagnostic Collection (for soft failures)
# =============================================================================

class DiagnosticCollector:
    """
    Collects recoverable errors for batch reporting.

    The lexer and interpreter record problems here and keep going.
    Every recorded error is also logged at WARNING level.

    Example:
        diagnostics = DiagnosticCollector()
        tokens = CLexer(source, "main.c", diagnostics).tokenize()

        if diagnostics.has_errors():
            print(diagnostics.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the collector.

        Args:
            max_errors: Errors kept before further ones are only counted
        """
        self.errors: List[CFrontError] = []
        self.max_errors = max_errors
        self._dropped = 0

    def add(self, error: CFrontError) -> None:
        """Record an error."""
        if error.location is not None:
            logger.warning("%s: %s", error.location, error.message)
        else:
            logger.warning("%s", error.message)
        if len(self.errors) >= self.max_errors:
            self._dropped += 1
            return
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of errors seen, including dropped ones."""
        return len(self.errors) + self._dropped

    def extend(self, other: "DiagnosticCollector") -> None:
        """Append every error from another collector without re-logging."""
        self.errors.extend(other.errors)
        self._dropped += other._dropped

    def report(self) -> str:
        """Format all errors for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self._dropped:
            lines.append(f"({self._dropped} more not shown)")

        count = self.error_count()
        error_word = "error" if count == 1 else "errors"
        lines.append(f"{count} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self._dropped = 0
