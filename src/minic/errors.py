"""
minic Error Hierarchy
=====================

This module defines the root of the exception hierarchy for minic.
All exceptions inherit from MinicError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
MinicError (base)
├── ConfigurationError - malformed capability table or options
└── CFrontError (C front end, see minic.cfront.errors)
    ├── CSyntaxError - lexer and parser errors
    ├── CPreprocessorError - directive and include errors
    └── CRuntimeError - interpreter errors

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MinicError(Exception):
    """
    Base exception for all minic errors.

    All exceptions in the toolchain inherit from this class, allowing
    callers to catch every toolchain error with a single except clause:

        try:
            ast = parse_source(source, "main.c")
        except MinicError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens, AST nodes and diagnostics all carry one of these so a
    problem can be traced back to the exact character that caused it.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(MinicError):
    """
    Invalid toolchain configuration.

    Raised when a capability table file is unreadable or malformed.
    """
    pass
