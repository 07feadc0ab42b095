"""
Tree-Walking Interpreter
========================

This module walks a parsed AST and evaluates what the language subset
can evaluate so far: include directives. Each included header that the
capability table recognises contributes its functions to the
environment. Everything else is reported and skipped.

Evaluation Rules
----------------
| Node             | Effect                                           |
|------------------|--------------------------------------------------|
| IncludeDirective | register the header's functions, or report it    |
| EndOfProgram     | none                                             |
| anything else    | UnsupportedNodeError recorded, node skipped      |

The interpreter never raises for program content; it always runs to the
end of the AST. The final Environment is its only result.

Example
-------
>>> from minic.cfront.parser import parse_source
>>> env = interpret(parse_source("#include <stdio.h>"))
>>> print(env.dump())
Environment (1 function)
  printf -> libc/printf
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from minic.cfront.ast import (
    AST,
    ASTNode,
    ASTVisitor,
    IncludeDirective,
    EndOfProgram,
)
from minic.cfront.errors import (
    CIncludeError,
    DiagnosticCollector,
    UnsupportedNodeError,
)
from minic.cfront.libc import CapabilityTable, DEFAULT_LIBC


logger = logging.getLogger(__name__)


# =============================================================================
# Environment
# =============================================================================

@dataclass(frozen=True)
class FunctionBinding:
    """A known function and where it resolves to."""
    name: str
    location: str


class Environment:
    """
    Append-only registry of known functions.

    Bindings are kept in registration order. Every registration appends,
    even when the same binding is already present; nothing is ever removed.
    """

    def __init__(self):
        self._functions: list[FunctionBinding] = []

    def register(self, name: str, location: str) -> FunctionBinding:
        """Append a binding and return it."""
        binding = FunctionBinding(name, location)
        self._functions.append(binding)
        logger.debug("Registered %s -> %s", name, location)
        return binding

    def lookup(self, name: str) -> Optional[FunctionBinding]:
        """Most recent binding for name, or None."""
        for binding in reversed(self._functions):
            if binding.name == name:
                return binding
        return None

    @property
    def functions(self) -> tuple[FunctionBinding, ...]:
        return tuple(self._functions)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[FunctionBinding]:
        return iter(tuple(self._functions))

    def dump(self) -> str:
        """Render the environment contents for display."""
        word = "function" if len(self._functions) == 1 else "functions"
        lines = [f"Environment ({len(self._functions)} {word})"]
        for binding in self._functions:
            lines.append(f"  {binding.name} -> {binding.location}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Environment({list(self._functions)!r})"


# =============================================================================
# Interpreter
# =============================================================================

class Interpreter(ASTVisitor):
    """
    Evaluates top-level AST nodes.

    Usage:
        interpreter = Interpreter(ast, capabilities=DEFAULT_LIBC)
        env = interpreter.run()
        if interpreter.diagnostics.has_errors():
            print(interpreter.diagnostics.report())

    Attributes:
        ast: The tree being evaluated
        capabilities: Headers the interpreter recognises
        env: Environment populated during run()
        diagnostics: Collector receiving recoverable evaluation errors
    """

    def __init__(
        self,
        ast: AST,
        capabilities: CapabilityTable = DEFAULT_LIBC,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.ast = ast
        self.capabilities = capabilities
        self.env = Environment()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def run(self) -> Environment:
        """Evaluate every top-level node in order and return the environment."""
        cursor = self.ast.cursor()
        while not cursor.at_end():
            self.visit(cursor.advance())

        logger.debug(
            "%s: evaluation finished with %d functions",
            self.ast.filename, len(self.env),
        )
        return self.env

    def generic_visit(self, node: ASTNode) -> None:
        """Nodes without a visit_ method are reported and skipped."""
        self.diagnostics.add(UnsupportedNodeError(
            node.__class__.__name__,
            location=node.location,
        ))

    def visit_EndOfProgram(self, node: EndOfProgram) -> None:
        pass

    def visit_IncludeDirective(self, node: IncludeDirective) -> None:
        header = self.capabilities.lookup(node.path)
        if header is None:
            self.diagnostics.add(CIncludeError(
                node.path,
                "not a known library header",
                location=node.location,
                known_headers=self.capabilities.header_names(),
            ))
            return

        for function in header.functions:
            self.env.register(function, header.location_of(function))


def interpret(
    ast: AST,
    capabilities: CapabilityTable = DEFAULT_LIBC,
    diagnostics: Optional[DiagnosticCollector] = None,
) -> Environment:
    """Run an Interpreter over ast and return the resulting environment."""
    return Interpreter(ast, capabilities, diagnostics).run()
