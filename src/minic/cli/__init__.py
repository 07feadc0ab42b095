"""
minic Command-Line Interface
============================

This package provides the command-line tools for minic:

- **mci**: lex, parse and interpret a C subset source file

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["mci"]
