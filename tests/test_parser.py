"""
Parser Test Suite
=================

Tests for the C subset recursive descent parser.

Test Organization
-----------------
- TestIncludeDirectives: '#include' in both forms
- TestFunctionDeclarations: 'int name(void) { ... }'
- TestExpressions: primaries and calls
- TestArgumentSeparators: opt-in ',' between call arguments
- TestParseErrors: every failure aborts with no AST
- TestParserDirect: CParser over hand-built tokens
"""

import pytest

from minic.cfront.parser import CParser, parse_source
from minic.cfront.lexer import CTokenType, CToken
from minic.cfront.types import CType
from minic.cfront.ast import (
    AST,
    IncludeDirective,
    FunctionNode,
    ReturnStatement,
    EmptyStatement,
    EndOfProgram,
    CallExpression,
    IdentifierExpression,
    StringLiteral,
    NumberLiteral,
)
from minic.cfront.errors import (
    CSyntaxError,
    CPreprocessorError,
    UnexpectedTokenError,
    MissingTokenError,
    UnexpectedEOFError,
    IntegerRangeError,
    UnsupportedFeatureError,
    InvalidDirectiveError,
    InvalidIncludePathError,
)


# =============================================================================
# Include Directive Tests
# =============================================================================

class TestIncludeDirectives:
    """Tests for '#include' parsing."""

    def test_angle_include(self):
        ast = parse_source("#include <stdio.h>")
        assert ast.nodes == (IncludeDirective("stdio.h"), EndOfProgram())

    def test_quoted_include(self):
        ast = parse_source('#include "foo.h"')
        assert ast.nodes == (IncludeDirective("foo.h"), EndOfProgram())

    def test_angle_include_with_directories(self):
        ast = parse_source("#include <sys/io.h>")
        assert ast[0] == IncludeDirective("sys/io.h")

    def test_several_includes(self):
        ast = parse_source('#include <stdio.h>\n#include "local.h"\n')
        assert ast.statements() == (
            IncludeDirective("stdio.h"),
            IncludeDirective("local.h"),
        )

    def test_include_location(self):
        ast = parse_source("\n  #include <stdio.h>", "main.c")
        assert str(ast[0].location) == "main.c:2:3"


# =============================================================================
# Function Declaration Tests
# =============================================================================

class TestFunctionDeclarations:
    """Tests for function definitions."""

    def test_main_with_void(self):
        ast = parse_source("int main(void){return 0;}")

        assert len(ast.statements()) == 1
        func = ast[0]
        assert isinstance(func, FunctionNode)
        assert func.name == "main"
        assert func.return_type == CType.INT
        assert func.parameters == ()
        assert func.body == (
            ReturnStatement(NumberLiteral(0)),
            EmptyStatement(),
        )

    def test_empty_parameter_list(self):
        func = parse_source("int main() { }")[0]
        assert func.name == "main"
        assert func.parameters == ()
        assert func.body == ()

    def test_body_with_call(self):
        func = parse_source('int main(void) { printf("hi"); return 0; }')[0]
        assert func.body == (
            CallExpression("printf", (StringLiteral("hi"),)),
            EmptyStatement(),
            ReturnStatement(NumberLiteral(0)),
            EmptyStatement(),
        )

    def test_nested_function(self):
        """Declarations inside a body are parsed recursively."""
        outer = parse_source("int outer(void) { int inner(void) { } }")[0]
        assert outer.body == (FunctionNode(name="inner", return_type=CType.INT),)

    def test_program_with_include_and_main(self):
        source = (
            "#include <stdio.h>\n"
            "\n"
            "int main(void) {\n"
            '    printf("Hello");\n'
            "    return 0;\n"
            "}\n"
        )
        ast = parse_source(source, "main.c")

        assert isinstance(ast[0], IncludeDirective)
        assert isinstance(ast[1], FunctionNode)
        assert isinstance(ast[2], EndOfProgram)
        assert ast[1].location.line == 3


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Tests for primary expressions and calls."""

    def test_identifier(self):
        assert parse_source("x")[0] == IdentifierExpression("x")

    def test_string(self):
        assert parse_source('"text"')[0] == StringLiteral("text")

    def test_number(self):
        assert parse_source("42")[0] == NumberLiteral(42)

    def test_semicolon(self):
        assert parse_source(";")[0] == EmptyStatement()

    def test_return_without_value_defaults_to_none(self):
        assert ReturnStatement().value is None

    def test_return_identifier(self):
        assert parse_source("return x")[0] == ReturnStatement(IdentifierExpression("x"))

    def test_call_without_arguments(self):
        assert parse_source("f()")[0] == CallExpression("f", ())

    def test_call_arguments_back_to_back(self):
        """Arguments follow each other with no separator."""
        call = parse_source('printf("%d" x 1)')[0]
        assert call == CallExpression("printf", (
            StringLiteral("%d"),
            IdentifierExpression("x"),
            NumberLiteral(1),
        ))

    def test_nested_call(self):
        call = parse_source("f(g())")[0]
        assert call == CallExpression("f", (CallExpression("g", ()),))

    def test_max_int(self):
        assert parse_source("2147483647")[0] == NumberLiteral(2147483647)

    def test_empty_source(self):
        assert parse_source("").nodes == (EndOfProgram(),)


# =============================================================================
# Argument Separator Tests
# =============================================================================

class TestArgumentSeparators:
    """',' between arguments is only accepted when enabled."""

    def test_comma_rejected_by_default(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source('printf("a", "b")')

    def test_comma_accepted_when_enabled(self):
        call = parse_source('printf("a", "b")', comma_separated_arguments=True)[0]
        assert call == CallExpression("printf", (StringLiteral("a"), StringLiteral("b")))

    def test_leading_comma_still_rejected(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("f(, a)", comma_separated_arguments=True)


# =============================================================================
# Parse Error Tests
# =============================================================================

class TestParseErrors:
    """Every parse error is raised; nothing is returned."""

    def test_integer_too_large(self):
        with pytest.raises(IntegerRangeError) as exc_info:
            parse_source("int main(void){return 2147483648;}")
        assert exc_info.value.literal == "2147483648"

    def test_missing_closing_paren(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("int main(void {return 0;}")
        assert exc_info.value.expected == ")"
        assert exc_info.value.found == "{"

    def test_missing_open_brace(self):
        with pytest.raises(MissingTokenError):
            parse_source("int main(void) return 0;")

    def test_named_parameter_unsupported(self):
        with pytest.raises(UnsupportedFeatureError):
            parse_source("int add(int a) { }")

    def test_variable_declaration_unsupported(self):
        with pytest.raises(UnsupportedFeatureError):
            parse_source("int x;")

    def test_declaration_needs_name(self):
        with pytest.raises(MissingTokenError):
            parse_source("int (void) { }")

    def test_define_unsupported(self):
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            parse_source("#define X 1")
        assert exc_info.value.feature == "#define"

    def test_unknown_directive(self):
        with pytest.raises(InvalidDirectiveError):
            parse_source("#pragma once")

    def test_invalid_include_path(self):
        with pytest.raises(InvalidIncludePathError):
            parse_source("#include <std-io.h>")

    def test_include_needs_path(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("#include stdio")

    def test_directive_errors_are_preprocessor_errors(self):
        with pytest.raises(CPreprocessorError):
            parse_source("#if X")

    def test_call_target_must_be_identifier(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source('"text"(x)')

    def test_unexpected_primary(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("+")

    @pytest.mark.parametrize("source", [
        "#",
        "#include",
        "#include <stdio",
        "int",
        "int main",
        "int main(",
        "int main(void",
        "int main(void){",
        "return",
        "f(",
    ])
    def test_premature_end_of_input(self, source):
        with pytest.raises(UnexpectedEOFError):
            parse_source(source)

    def test_all_errors_are_syntax_errors_or_directive_errors(self):
        for source in ("int x;", "#pragma", "f(", "int main(void {"):
            with pytest.raises((CSyntaxError, CPreprocessorError)):
                parse_source(source)

    def test_deep_nesting_is_a_syntax_error(self):
        depth = 5000
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            parse_source("f(" * depth + ")" * depth)
        assert exc_info.value.feature == "nesting too deep"
        assert isinstance(exc_info.value, CSyntaxError)

    def test_source_line_counts_newlines_only(self):
        """Form feeds do not start a new line in error context."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            parse_source("\f\nint x;", "main.c")
        message = str(exc_info.value)
        assert message.startswith("main.c:2:6:")
        assert "\n    int x;\n" in message

    def test_error_message_format(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("int main(void {}", "main.c")
        message = str(exc_info.value)
        assert message.splitlines() == [
            "main.c:1:15: error: expected ')' but found '{'",
            "    int main(void {}",
            "                  ^",
        ]


# =============================================================================
# Parser Construction Tests
# =============================================================================

class TestParserDirect:
    """Tests driving CParser with hand-built tokens."""

    def test_tokens_without_source_lines(self):
        tokens = [
            CToken(CTokenType.HASH, "#"),
            CToken(CTokenType.IDENTIFIER, "include"),
            CToken(CTokenType.STRING, "x.h"),
        ]
        ast = CParser(tokens).parse()
        assert ast.nodes == (IncludeDirective("x.h"), EndOfProgram())

    def test_result_is_immutable(self):
        ast = parse_source("#include <stdio.h>")
        assert isinstance(ast, AST)
        assert isinstance(ast.nodes, tuple)
        with pytest.raises(AttributeError):
            ast.nodes = ()
