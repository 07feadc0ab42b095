"""
C Subset Recursive Descent Parser
=================================

This module implements a recursive descent parser for the C subset.
It takes the token list from the lexer and builds an AST.

Grammar (Simplified EBNF)
-------------------------
program         ::= statement*
statement       ::= directive | declaration | return_stmt | expression

directive       ::= '#' ( 'include' include_path | 'define' ... )
include_path    ::= '<' (IDENTIFIER | '/' | '.')* '>' | STRING

declaration     ::= TYPE IDENTIFIER '(' params block
params          ::= 'void' ')' | ')'
block           ::= '{' statement* '}'

return_stmt     ::= 'return' expression
expression      ::= primary ( '(' expression* ')' )?
primary         ::= IDENTIFIER | STRING | NUMBER | ';'

TYPE is an IDENTIFIER whose text is a type keyword ('int'). 'return',
'include', 'define' and 'void' are likewise recognised by their text.

Call arguments are parsed back to back. With comma_separated_arguments
enabled a single ',' between two arguments is also accepted.

Error Handling
--------------
Parsing stops at the first error. Every failure is raised as a
CSyntaxError (or CPreprocessorError for directives) carrying the
location of the offending token, and no partial AST is returned.

Example Usage
-------------
>>> from minic.cfront.parser import parse_source
>>> ast = parse_source('int main(void){return 0;}')
>>> print(ast.dump())
Program (<input>)
  Function: int main(void)
    Return
      Int 0
    Semicolon
  EOF
"""

import logging
from typing import Optional

from minic.errors import SourceLocation
from minic.cfront.lexer import CLexer, CToken, CTokenType
from minic.cfront.types import CType, is_type_keyword
from minic.cfront.ast import (
    AST,
    ASTNode,
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
from minic.cfront.errors import (
    DiagnosticCollector,
    UnexpectedTokenError,
    MissingTokenError,
    UnexpectedEOFError,
    IntegerRangeError,
    UnsupportedFeatureError,
    InvalidDirectiveError,
    InvalidIncludePathError,
)


logger = logging.getLogger(__name__)


# Tokens allowed inside an angle-bracket include path
INCLUDE_PATH_TOKENS = (CTokenType.IDENTIFIER, CTokenType.SLASH, CTokenType.DOT)

# Human-readable spelling of token types for error messages
TOKEN_SPELLING: dict[CTokenType, str] = {
    CTokenType.IDENTIFIER: "identifier",
    CTokenType.NUMBER: "number",
    CTokenType.STRING: "string",
    CTokenType.LPAREN: "(",
    CTokenType.RPAREN: ")",
    CTokenType.LBRACE: "{",
    CTokenType.RBRACE: "}",
    CTokenType.COLON: ":",
    CTokenType.COMMA: ",",
    CTokenType.SEMICOLON: ";",
    CTokenType.ASSIGN: "=",
    CTokenType.PLUS: "+",
    CTokenType.MINUS: "-",
    CTokenType.STAR: "*",
    CTokenType.SLASH: "/",
    CTokenType.DOT: ".",
    CTokenType.HASH: "#",
    CTokenType.LT: "<",
    CTokenType.GT: ">",
}


class CParser:
    """
    Recursive descent parser for the C subset.

    Attributes:
        tokens: Tokens to parse (from CLexer.tokenize)
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
        comma_separated_arguments: Accept ',' between call arguments
    """

    def __init__(
        self,
        tokens: list[CToken],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
        comma_separated_arguments: bool = False,
    ):
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self.comma_separated_arguments = comma_separated_arguments

        # Current position in token stream
        self._pos = 0

    def parse(self) -> AST:
        """
        Parse the whole token stream.

        Returns:
            AST whose last node is EndOfProgram

        Raises:
            CSyntaxError: On the first structural error
            CPreprocessorError: On a malformed directive
        """
        nodes: list[ASTNode] = []

        try:
            while not self._at_end():
                nodes.append(self._parse_statement())
        except RecursionError:
            raise self._nesting_too_deep() from None

        nodes.append(EndOfProgram(location=self._end_location()))
        logger.debug("%s: parsed %d top-level statements", self.filename, len(nodes) - 1)
        return AST(nodes=tuple(nodes), filename=self.filename)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens)

    def _peek(self, expected: Optional[str] = None) -> CToken:
        """
        Look at the current token without consuming it.

        Raises:
            UnexpectedEOFError: If no tokens remain
        """
        if self._at_end():
            raise UnexpectedEOFError(expected, self._end_location())
        return self.tokens[self._pos]

    def _advance(self, expected: Optional[str] = None) -> CToken:
        """
        Consume and return the current token.

        Raises:
            UnexpectedEOFError: If no tokens remain
        """
        token = self._peek(expected)
        self._pos += 1
        return token

    def _check(self, *types: CTokenType) -> bool:
        """Check if current token is one of the given types. False at end."""
        return not self._at_end() and self.tokens[self._pos].type in types

    def _expect(self, token_type: CTokenType) -> CToken:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the current token has another type
            UnexpectedEOFError: If no tokens remain
        """
        spelling = TOKEN_SPELLING[token_type]
        token = self._peek(f"'{spelling}'")
        if token.type != token_type:
            raise MissingTokenError(
                spelling,
                found=token.value,
                location=token.location,
                source_line=self._get_source_line(token.line),
            )
        return self._advance()

    def _unexpected(self, token: CToken, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            token.value,
            expected=expected,
            location=token.location,
            source_line=self._get_source_line(token.line),
        )

    def _nesting_too_deep(self) -> UnsupportedFeatureError:
        """Error for input nested deeper than the interpreter stack allows."""
        if self._at_end():
            location = self._end_location()
            source_line = None
        else:
            token = self.tokens[self._pos]
            location = token.location
            source_line = self._get_source_line(token.line)
        return UnsupportedFeatureError(
            "nesting too deep",
            location=location,
            source_line=source_line,
            alternative="split deeply nested calls or blocks into separate statements",
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _end_location(self) -> SourceLocation:
        """Location just past the last token."""
        if not self.tokens:
            return SourceLocation(self.filename, 1, 1)
        last = self.tokens[-1]
        return SourceLocation(self.filename, last.line, last.column + len(last.value))

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> ASTNode:
        token = self._peek("statement")

        if token.type == CTokenType.HASH:
            self._advance()
            return self._parse_directive(token)

        if token.type == CTokenType.IDENTIFIER and is_type_keyword(token.value):
            self._advance()
            return self._parse_declaration(token)

        if token.type == CTokenType.IDENTIFIER and token.value == "return":
            self._advance()
            return ReturnStatement(value=self._parse_expression(), location=token.location)

        return self._parse_expression()

    # =========================================================================
    # Directives
    # =========================================================================

    def _parse_directive(self, hash_token: CToken) -> ASTNode:
        """Parse the part of a directive after '#'."""
        name = self._expect(CTokenType.IDENTIFIER)

        if name.value == "include":
            return self._parse_include(hash_token)

        if name.value == "define":
            raise UnsupportedFeatureError(
                "#define",
                location=name.location,
                source_line=self._get_source_line(name.line),
                alternative="macros are not implemented; write the value out",
            )

        raise InvalidDirectiveError(
            name.value,
            location=name.location,
            source_line=self._get_source_line(name.line),
        )

    def _parse_include(self, hash_token: CToken) -> IncludeDirective:
        """
        Parse '#include <path>' or '#include "path"'.

        An angle-bracket path is the concatenation of the identifier,
        '/' and '.' tokens up to '>'.
        """
        opener = self._advance("'<' or a quoted path")

        if opener.type == CTokenType.STRING:
            return IncludeDirective(path=opener.value, location=hash_token.location)

        if opener.type != CTokenType.LT:
            raise self._unexpected(opener, "'<' or a quoted path after #include")

        parts = []
        while not self._check(CTokenType.GT):
            part = self._advance("'>'")
            if part.type not in INCLUDE_PATH_TOKENS:
                raise InvalidIncludePathError(
                    part.value,
                    location=part.location,
                    source_line=self._get_source_line(part.line),
                )
            parts.append(part.value)
        self._expect(CTokenType.GT)

        return IncludeDirective(path="".join(parts), location=hash_token.location)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_declaration(self, type_token: CToken) -> FunctionNode:
        """Parse what follows a type keyword. Only functions are supported."""
        name = self._expect(CTokenType.IDENTIFIER)
        after = self._advance("'('")

        if after.type != CTokenType.LPAREN:
            raise UnsupportedFeatureError(
                "variable declarations",
                location=after.location,
                source_line=self._get_source_line(after.line),
                alternative=f"only function declarations are supported; expected '(' after '{name.value}'",
            )

        return_type = CType.from_keyword(type_token.value)
        parameters = self._parse_parameter_list()
        body = self._parse_block()

        return FunctionNode(
            name=name.value,
            return_type=return_type,
            parameters=parameters,
            body=body,
            location=type_token.location,
        )

    def _parse_parameter_list(self) -> tuple[ParameterNode, ...]:
        """Parse 'void )' or ')'. The '(' is already consumed."""
        token = self._advance("')' or 'void'")

        if token.type == CTokenType.RPAREN:
            return ()

        if token.value == "void":
            self._expect(CTokenType.RPAREN)
            return ()

        raise UnsupportedFeatureError(
            "function parameters",
            location=token.location,
            source_line=self._get_source_line(token.line),
            alternative="declare the function with '(void)' or '()'",
        )

    def _parse_block(self) -> tuple[ASTNode, ...]:
        """Parse '{' statement* '}'."""
        self._expect(CTokenType.LBRACE)

        body = []
        while not self._check(CTokenType.RBRACE):
            if self._at_end():
                raise UnexpectedEOFError("'}'", self._end_location())
            body.append(self._parse_statement())
        self._expect(CTokenType.RBRACE)

        return tuple(body)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> ASTNode:
        """Parse a primary expression, turning it into a call if '(' follows."""
        primary = self._parse_primary()

        if not self._check(CTokenType.LPAREN):
            return primary

        open_paren = self._advance()
        if not isinstance(primary, IdentifierExpression):
            raise self._unexpected(open_paren, "function name before '('")

        arguments = []
        while not self._check(CTokenType.RPAREN):
            if self._at_end():
                raise UnexpectedEOFError("')'", self._end_location())
            if arguments and self.comma_separated_arguments and self._check(CTokenType.COMMA):
                self._advance()
            arguments.append(self._parse_expression())
        self._expect(CTokenType.RPAREN)

        return CallExpression(
            name=primary.name,
            arguments=tuple(arguments),
            location=primary.location,
        )

    def _parse_primary(self) -> ASTNode:
        token = self._advance("expression")

        if token.type == CTokenType.IDENTIFIER:
            return IdentifierExpression(name=token.value, location=token.location)

        if token.type == CTokenType.STRING:
            return StringLiteral(value=token.value, location=token.location)

        if token.type == CTokenType.NUMBER:
            value = int(token.value)
            if not CType.INT.fits(value):
                raise IntegerRangeError(
                    token.value,
                    location=token.location,
                    source_line=self._get_source_line(token.line),
                )
            return NumberLiteral(value=value, location=token.location)

        if token.type == CTokenType.SEMICOLON:
            return EmptyStatement(location=token.location)

        raise self._unexpected(token, "identifier, string, number or ';'")


# =============================================================================
# Convenience Function
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    diagnostics: Optional[DiagnosticCollector] = None,
    comma_separated_arguments: bool = False,
) -> AST:
    """
    Parse C source code into an AST.

    This is a convenience function that combines lexing and parsing.
    Lexer diagnostics go to the given collector (or are discarded after
    being logged).

    Raises:
        CSyntaxError: If parsing fails
        CPreprocessorError: If a directive is malformed
    """
    tokens = CLexer(source, filename, diagnostics).tokenize()
    parser = CParser(
        tokens,
        filename,
        source.split("\n"),
        comma_separated_arguments=comma_separated_arguments,
    )
    return parser.parse()
