"""
Tests for the front-end pipeline
================================

These tests verify that Frontend chains lexing, parsing and
interpretation, and that AST dumps render as expected.
"""

import pytest

import minic
from minic.cfront import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    run_source,
    CapabilityTable,
    HeaderSpec,
    CSyntaxError,
    MissingTokenError,
    UnexpectedTokenError,
    InvalidCharacterError,
    CIncludeError,
)
from minic.cfront.ast import ASTPrinter, ReturnStatement, NumberLiteral


HELLO = """\
#include <stdio.h>

int main(void) {
    printf("Hello, world!");
    return 0;
}
"""


# =============================================================================
# Pipeline Tests
# =============================================================================

class TestRunSource:
    """Tests for running all three phases over source text."""

    def test_include_only(self):
        result = run_source("#include <stdio.h>")

        assert isinstance(result, FrontendResult)
        assert result.token_count == 7
        assert result.environment.lookup("printf").location == "libc/printf"
        assert not result.diagnostics.has_errors()

    def test_hello_world(self):
        result = run_source(HELLO, "hello.c")

        assert result.filename == "hello.c"
        assert "printf" in result.environment
        # main itself is not evaluated yet
        assert result.diagnostics.error_count() == 1

    def test_lexer_and_interpreter_diagnostics_are_merged(self):
        result = run_source("#include <missing.h>\n@")

        kinds = [type(e) for e in result.diagnostics.errors]
        assert kinds == [InvalidCharacterError, CIncludeError]

    def test_parse_error_raises(self):
        with pytest.raises(MissingTokenError):
            run_source("int main(void {return 0;}")

    def test_top_level_function_exports(self):
        assert minic.run_source is run_source
        assert minic.__version__ == "0.1.0"


class TestOptions:
    """Tests for FrontendOptions."""

    def test_defaults(self):
        options = FrontendOptions()
        assert options.capabilities.header_names() == ["stdio.h"]
        assert options.comma_separated_arguments is False

    def test_custom_capabilities(self):
        table = CapabilityTable({"io.h": HeaderSpec("io.h", "io", ("put",))})
        result = run_source("#include <io.h>", options=FrontendOptions(capabilities=table))
        assert result.environment.lookup("put").location == "io/put"

    def test_comma_arguments(self):
        source = 'printf("a", "b")'
        with pytest.raises(UnexpectedTokenError):
            Frontend().parse(source)

        frontend = Frontend(FrontendOptions(comma_separated_arguments=True))
        ast = frontend.parse(source)
        assert len(ast[0].arguments) == 2


class TestRunFile:
    """Tests for running the front end over files on disk."""

    def test_run_file(self, tmp_path):
        path = tmp_path / "main.c"
        path.write_text(HELLO)

        result = Frontend().run_file(path)
        assert result.filename == str(path)
        assert result.ast.statements()[0].path == "stdio.h"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Source file not found"):
            Frontend().run_file(tmp_path / "nope.c")

    def test_error_carries_filename(self, tmp_path):
        path = tmp_path / "bad.c"
        path.write_text("int x;\n")

        with pytest.raises(CSyntaxError) as exc_info:
            Frontend().run_file(path)
        assert exc_info.value.location.filename == str(path)
        assert "int x;" in str(exc_info.value)


# =============================================================================
# AST Printer Tests
# =============================================================================

class TestASTDump:
    """Tests for the debugging tree printer."""

    def test_hello_world_dump(self):
        ast = Frontend().parse(HELLO, "hello.c")
        assert ast.dump() == "\n".join([
            "Program (hello.c)",
            "  Include stdio.h",
            "  Function: int main(void)",
            "    Call printf",
            "      String 'Hello, world!'",
            "    Semicolon",
            "    Return",
            "      Int 0",
            "    Semicolon",
            "  EOF",
        ])

    def test_empty_program(self):
        assert Frontend().parse("").dump() == "Program (<input>)\n  EOF"

    def test_single_node(self):
        text = ASTPrinter().print(ReturnStatement(NumberLiteral(7)))
        assert text == "Return\n  Int 7"

    def test_identifier(self):
        dump = Frontend().parse("f(x)").dump()
        assert "  Call f\n    Identifier x" in dump
