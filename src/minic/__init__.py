"""
minic - Front-End Toolchain for a Small C Subset
================================================

minic lexes C source text, parses '#include' directives and minimal
function declarations into an abstract syntax tree, and interprets the
tree far enough to resolve includes against a standard-library
capability table.

Main Components
---------------
- **cfront**: lexer, parser, AST, interpreter and capability table
- **cli**: the `mci` command-line tool

Quick Start
-----------
    >>> from minic import run_source
    >>> result = run_source('#include <stdio.h>')
    >>> print(result.environment.dump())
    Environment (1 function)
      printf -> libc/printf

Or from the command line:
    $ mci main.c
"""

__version__ = "0.1.0"

from minic.errors import MinicError, ConfigurationError, SourceLocation
from minic.cfront import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    run_source,
    parse_source,
    interpret,
    CapabilityTable,
    HeaderSpec,
    DEFAULT_LIBC,
)

__all__ = [
    "__version__",
    "MinicError",
    "ConfigurationError",
    "SourceLocation",
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "run_source",
    "parse_source",
    "interpret",
    "CapabilityTable",
    "HeaderSpec",
    "DEFAULT_LIBC",
]
