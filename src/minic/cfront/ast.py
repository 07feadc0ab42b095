"""
Abstract Syntax Tree (AST) Definitions
======================================

This module defines the AST node types produced by the parser and
consumed by the interpreter.

Node Hierarchy
--------------
ASTNode (base)
├── Declarations
│   ├── IncludeDirective - #include <path> / #include "path"
│   ├── FunctionNode - function definition
│   └── ParameterNode - function parameter (always empty today)
├── Statements
│   ├── ReturnStatement - return <expr>
│   ├── EmptyStatement - bare ';'
│   └── EndOfProgram - marker appended after the last statement
└── Expressions
    ├── CallExpression - name(args)
    ├── IdentifierExpression - bare name
    ├── StringLiteral - "text"
    └── NumberLiteral - integer constant

Design Notes
------------
- All nodes are frozen dataclasses; children are held in tuples so a
  node owns its subtree outright.
- Each node stores its source location, which is excluded from
  equality so tests can compare trees structurally.
- The AST itself is an immutable sequence. Consumers walk it with an
  ASTCursor, so the same tree can be traversed any number of times.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from minic.errors import SourceLocation
from minic.cfront.types import CType


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for nodes that produce a value."""
    pass


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for nodes that perform an action."""
    pass


@dataclass(frozen=True)
class Declaration(ASTNode):
    """Base class for nodes that introduce names."""
    pass


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class IncludeDirective(Declaration):
    """
    Preprocessor include.

    Attributes:
        path: Header path exactly as written, e.g. "stdio.h" or "sys/io.h"
    """
    path: str = ""


@dataclass(frozen=True)
class ParameterNode(Declaration):
    """
    Function parameter declaration.

    Attributes:
        name: Parameter name
        param_type: The C type of the parameter
    """
    name: str = ""
    param_type: CType = CType.INT


@dataclass(frozen=True)
class FunctionNode(Declaration):
    """
    Function definition.

    Attributes:
        name: Function name
        return_type: The return type
        parameters: Parameter declarations (empty for '()' and '(void)')
        body: Statements between the braces, in order
    """
    name: str = ""
    return_type: CType = CType.INT
    parameters: tuple[ParameterNode, ...] = ()
    body: tuple[ASTNode, ...] = ()


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ReturnStatement(Statement):
    """
    Return statement.

    Attributes:
        value: The expression following 'return'
    """
    value: Optional[ASTNode] = None


@dataclass(frozen=True)
class EmptyStatement(Statement):
    """A ';' parsed on its own."""
    pass


@dataclass(frozen=True)
class EndOfProgram(Statement):
    """Marker the parser appends after the last top-level statement."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class IdentifierExpression(Expression):
    """Bare identifier."""
    name: str = ""


@dataclass(frozen=True)
class StringLiteral(Expression):
    """Double-quoted string, quotes removed."""
    value: str = ""


@dataclass(frozen=True)
class NumberLiteral(Expression):
    """Integer constant, guaranteed to fit CType.INT."""
    value: int = 0


@dataclass(frozen=True)
class CallExpression(Expression):
    """
    Function call.

    Attributes:
        name: Name of the called function
        arguments: Argument expressions in source order
    """
    name: str = ""
    arguments: tuple[ASTNode, ...] = ()


# =============================================================================
# Program Container
# =============================================================================

@dataclass(frozen=True)
class AST:
    """
    Ordered, immutable sequence of top-level nodes.

    A well-formed AST produced by the parser always ends with an
    EndOfProgram node.

    Attributes:
        nodes: Top-level nodes in source order
        filename: Source the tree was parsed from
    """
    nodes: tuple[ASTNode, ...] = ()
    filename: str = "<input>"

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ASTNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> ASTNode:
        return self.nodes[index]

    def cursor(self) -> "ASTCursor":
        """Return a fresh cursor positioned at the first node."""
        return ASTCursor(self)

    def statements(self) -> tuple[ASTNode, ...]:
        """Top-level nodes without the trailing EndOfProgram marker."""
        return tuple(n for n in self.nodes if not isinstance(n, EndOfProgram))

    def dump(self) -> str:
        """Render the tree for debugging."""
        return ASTPrinter().print(self)


class ASTCursor:
    """
    Index-based forward cursor over an AST.

    Each node is handed out exactly once per cursor; the tree itself
    is never modified.

    Usage:
        cursor = ast.cursor()
        while not cursor.at_end():
            node = cursor.advance()
    """

    def __init__(self, ast: AST):
        self._nodes = ast.nodes
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._nodes)

    def peek(self, offset: int = 0) -> Optional[ASTNode]:
        """Look at the node at current position + offset without consuming it."""
        pos = self._pos + offset
        if pos >= len(self._nodes):
            return None
        return self._nodes[pos]

    def advance(self) -> Optional[ASTNode]:
        """Consume and return the current node, or None when exhausted."""
        if self.at_end():
            return None
        node = self._nodes[self._pos]
        self._pos += 1
        return node

    def __iter__(self) -> Iterator[ASTNode]:
        while not self.at_end():
            yield self.advance()


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about.

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_IncludeDirective(self, node):
                ...

        MyVisitor().visit(node)
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<ClassName>, falling back to generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit every child node held directly or in a tuple field."""
        for value in node.__dict__.values():
            if isinstance(value, ASTNode):
                self.visit(value)
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        print(ASTPrinter().print(ast))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, tree: AST | ASTNode) -> str:
        """Print a whole AST or a single node and return the text."""
        self.output = []
        self.indent_level = 0
        if isinstance(tree, AST):
            self._emit(f"Program ({tree.filename})")
            self._indent()
            for node in tree:
                self.visit(node)
            self._dedent()
        else:
            self.visit(tree)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def visit_IncludeDirective(self, node: IncludeDirective):
        self._emit(f"Include {node.path}")

    def visit_FunctionNode(self, node: FunctionNode):
        if node.parameters:
            params = ", ".join(f"{p.param_type} {p.name}" for p in node.parameters)
        else:
            params = "void"
        self._emit(f"Function: {node.return_type} {node.name}({params})")
        self._indent()
        for stmt in node.body:
            self.visit(stmt)
        self._dedent()

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit("Return")
        self._indent()
        self.visit(node.value)
        self._dedent()

    def visit_CallExpression(self, node: CallExpression):
        self._emit(f"Call {node.name}")
        self._indent()
        for arg in node.arguments:
            self.visit(arg)
        self._dedent()

    def visit_IdentifierExpression(self, node: IdentifierExpression):
        self._emit(f"Identifier {node.name}")

    def visit_StringLiteral(self, node: StringLiteral):
        self._emit(f"String {node.value!r}")

    def visit_NumberLiteral(self, node: NumberLiteral):
        self._emit(f"Int {node.value}")

    def visit_EmptyStatement(self, node: EmptyStatement):
        self._emit("Semicolon")

    def visit_EndOfProgram(self, node: EndOfProgram):
        self._emit("EOF")
