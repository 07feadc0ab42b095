"""
minic C Front End
=================

Lexer, parser and interpreter stub for a small subset of C.

Pipeline
--------
    C Source → Lexer → Parser → AST → Interpreter → Environment

The subset covers:
- #include <path> and #include "path" directives
- function definitions of the form  int name(void) { ... }
- return statements, function calls, identifiers, string and integer
  literals

Usage
-----
>>> from minic.cfront import parse_source, interpret
>>> ast = parse_source('#include <stdio.h>\\nint main(void){return 0;}')
>>> env = interpret(ast)
>>> [b.name for b in env]
['printf']
"""

from minic.cfront.frontend import Frontend, FrontendOptions, FrontendResult, run_source
from minic.cfront.errors import (
    CFrontError,
    CSyntaxError,
    CPreprocessorError,
    CRuntimeError,
    CIncludeError,
    InvalidCharacterError,
    UnterminatedStringError,
    UnexpectedTokenError,
    MissingTokenError,
    UnexpectedEOFError,
    IntegerRangeError,
    UnsupportedFeatureError,
    InvalidDirectiveError,
    InvalidIncludePathError,
    UnsupportedNodeError,
    DiagnosticCollector,
)
from minic.cfront.lexer import CLexer, CTokenType, CToken, tokenize
from minic.cfront.parser import CParser, parse_source
from minic.cfront.types import CType
from minic.cfront.ast import (
    AST,
    ASTCursor,
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    IncludeDirective,
    FunctionNode,
    ParameterNode,
    ReturnStatement,
    EmptyStatement,
    EndOfProgram,
    CallExpression,
    IdentifierExpression,
    StringLiteral,
    NumberLiteral,
)
from minic.cfront.libc import CapabilityTable, HeaderSpec, DEFAULT_LIBC
from minic.cfront.interpreter import Environment, FunctionBinding, Interpreter, interpret

__all__ = [
    # Pipeline
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "run_source",
    # Errors
    "CFrontError",
    "CSyntaxError",
    "CPreprocessorError",
    "CRuntimeError",
    "CIncludeError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "UnexpectedEOFError",
    "IntegerRangeError",
    "UnsupportedFeatureError",
    "InvalidDirectiveError",
    "InvalidIncludePathError",
    "UnsupportedNodeError",
    "DiagnosticCollector",
    # Lexer
    "CLexer",
    "CTokenType",
    "CToken",
    "tokenize",
    # Parser
    "CParser",
    "parse_source",
    # Types
    "CType",
    # AST
    "AST",
    "ASTCursor",
    "ASTNode",
    "ASTPrinter",
    "ASTVisitor",
    "IncludeDirective",
    "FunctionNode",
    "ParameterNode",
    "ReturnStatement",
    "EmptyStatement",
    "EndOfProgram",
    "CallExpression",
    "IdentifierExpression",
    "StringLiteral",
    "NumberLiteral",
    # Capability table
    "CapabilityTable",
    "HeaderSpec",
    "DEFAULT_LIBC",
    # Interpreter
    "Environment",
    "FunctionBinding",
    "Interpreter",
    "interpret",
]
