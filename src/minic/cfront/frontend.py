"""
Front-End Pipeline
==================

This module provides the main interface to the C front end.
It orchestrates the three phases:

    Source → Lex → Parse → Interpret → Environment

Usage
-----
Command line:
    $ mci main.c

Programmatic:
    >>> from minic.cfront import run_source
    >>> result = run_source('#include <stdio.h>')
    >>> print(result.environment.dump())
    Environment (1 function)
      printf -> libc/printf

Error Handling
--------------
Lexing and interpretation record recoverable problems in
FrontendResult.diagnostics. A parse error is raised as CSyntaxError (or
CPreprocessorError) and no result is produced; the caller decides
whether to abort, report, or try again.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from minic.cfront.lexer import CLexer, CToken
from minic.cfront.parser import CParser
from minic.cfront.ast import AST
from minic.cfront.interpreter import Environment, Interpreter
from minic.cfront.libc import CapabilityTable, DEFAULT_LIBC
from minic.cfront.errors import DiagnosticCollector


logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        capabilities: Library headers the interpreter recognises
        comma_separated_arguments: Accept ',' between call arguments.
                     Off by default: arguments are parsed back to back.
    """
    capabilities: CapabilityTable = field(default_factory=lambda: DEFAULT_LIBC)
    comma_separated_arguments: bool = False


@dataclass
class FrontendResult:
    """
    Result of running the front end.

    Attributes:
        filename: Source filename
        tokens: Tokens produced by the lexer
        ast: The parsed tree
        environment: Environment after interpretation
        diagnostics: Recoverable errors from lexing and interpretation
    """
    filename: str = "<input>"
    tokens: list[CToken] = field(default_factory=list)
    ast: Optional[AST] = None
    environment: Optional[Environment] = None
    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)

    @property
    def token_count(self) -> int:
        return len(self.tokens)


class Frontend:
    """
    Runs the C subset front end.

    Example:
        frontend = Frontend()
        result = frontend.run_file("main.c")
        print(result.environment.dump())

    Attributes:
        options: Front-end configuration
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def lex(
        self,
        source: str,
        filename: str = "<input>",
        diagnostics: Optional[DiagnosticCollector] = None,
    ) -> list[CToken]:
        """Tokenize source. Never raises for bad input."""
        return CLexer(source, filename, diagnostics).tokenize()

    def parse(
        self,
        source: str,
        filename: str = "<input>",
        diagnostics: Optional[DiagnosticCollector] = None,
    ) -> AST:
        """
        Lex and parse source.

        Raises:
            CSyntaxError: If parsing fails
        """
        tokens = self.lex(source, filename, diagnostics)
        return self._parse_tokens(tokens, source, filename)

    def interpret(
        self,
        ast: AST,
        diagnostics: Optional[DiagnosticCollector] = None,
    ) -> Environment:
        """Interpret ast against the configured capability table."""
        return Interpreter(ast, self.options.capabilities, diagnostics).run()

    def run_source(self, source: str, filename: str = "<input>") -> FrontendResult:
        """
        Run all three phases.

        Raises:
            CSyntaxError: If parsing fails
        """
        result = FrontendResult(filename=filename)

        result.tokens = self.lex(source, filename, result.diagnostics)
        result.ast = self._parse_tokens(result.tokens, source, filename)
        result.environment = self.interpret(result.ast, result.diagnostics)

        logger.debug(
            "%s: %d tokens, %d statements, %d functions, %d diagnostics",
            filename,
            result.token_count,
            len(result.ast.statements()),
            len(result.environment),
            result.diagnostics.error_count(),
        )
        return result

    def run_file(self, filepath: str | Path) -> FrontendResult:
        """
        Read a source file and run all three phases.

        Raises:
            FileNotFoundError: If the source file does not exist
            CSyntaxError: If parsing fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.run_source(source, str(filepath))

    def _parse_tokens(self, tokens: list[CToken], source: str, filename: str) -> AST:
        parser = CParser(
            tokens,
            filename,
            source.split("\n"),
            comma_separated_arguments=self.options.comma_separated_arguments,
        )
        return parser.parse()


def run_source(
    source: str,
    filename: str = "<input>",
    options: Optional[FrontendOptions] = None,
) -> FrontendResult:
    """
    Convenience function to run the front end over source text.

    Raises:
        CSyntaxError: If parsing fails
    """
    return Frontend(options).run_source(source, filename)
