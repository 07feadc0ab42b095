"""
Tests for mci - the minic interpreter CLI
=========================================

These tests drive the click command through CliRunner and check the
printed environment, the debug dumps, and the exit codes.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from minic.cli.mci import main
from minic.cli.errors import ExitCode


HELLO = """\
#include <stdio.h>

int main(void) {
    printf("Hello");
    return 0;
}
"""


@pytest.fixture
def runner():
    return CliRunner()


# =============================================================================
# Interpretation
# =============================================================================

class TestInterpret:
    """Default mode prints the final environment."""

    def test_default_input_is_main_c(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("#include <stdio.h>\n")
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Environment (1 function)" in result.output
            assert "printf -> libc/printf" in result.output

    def test_named_input(self, runner):
        with runner.isolated_filesystem():
            Path("hello.c").write_text(HELLO)
            result = runner.invoke(main, ["hello.c"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "printf -> libc/printf" in result.output
            assert "evaluation of FunctionNode not supported yet" in result.output

    def test_unknown_header_still_succeeds(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("#include <unknown.h>\n")
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.SUCCESS
            assert "cannot include 'unknown.h'" in result.output
            assert "Environment (0 functions)" in result.output

    def test_verbose(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("#include <stdio.h>\n")
            result = runner.invoke(main, ["-v"])

            assert result.exit_code == ExitCode.SUCCESS
            assert "Interpreting main.c" in result.output
            assert "Known headers: stdio.h" in result.output


# =============================================================================
# Debug Dumps
# =============================================================================

class TestDumps:
    """--tokens and --ast stop before interpretation."""

    def test_tokens(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("#include <stdio.h>\n")
            result = runner.invoke(main, ["--tokens"])

            assert result.exit_code == ExitCode.SUCCESS
            assert "Token(HASH, '#', 1:1)" in result.output
            assert "Token(GT, '>', 1:18)" in result.output
            assert "Environment" not in result.output

    def test_ast(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text(HELLO)
            result = runner.invoke(main, ["--ast"])

            assert result.exit_code == ExitCode.SUCCESS
            assert "Program (main.c)" in result.output
            assert "  Function: int main(void)" in result.output
            assert "Environment" not in result.output

    def test_comma_args(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text('f("a", "b")\n')

            rejected = runner.invoke(main, ["--ast"])
            assert rejected.exit_code == ExitCode.BUILD_ERROR

            accepted = runner.invoke(main, ["--ast", "--comma-args"])
            assert accepted.exit_code == ExitCode.SUCCESS
            assert "Call f" in accepted.output


# =============================================================================
# Capability Tables
# =============================================================================

class TestLibcTable:
    """-L merges extra headers over the built-in table."""

    def test_extra_header(self, runner):
        with runner.isolated_filesystem():
            Path("libs.json").write_text(json.dumps({
                "headers": {"math.h": {"namespace": "libm", "functions": ["sqrt"]}}
            }))
            Path("main.c").write_text("#include <stdio.h>\n#include <math.h>\n")
            result = runner.invoke(main, ["-L", "libs.json"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Environment (2 functions)" in result.output
            assert "sqrt -> libm/sqrt" in result.output

    def test_malformed_table(self, runner):
        with runner.isolated_filesystem():
            Path("libs.json").write_text('{"headers": 3}')
            Path("main.c").write_text("#include <stdio.h>\n")
            result = runner.invoke(main, ["-L", "libs.json"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "Configuration error:" in result.output

    def test_table_must_exist(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("#include <stdio.h>\n")
            result = runner.invoke(main, ["-L", "nope.json"])

            assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# Errors and Exit Codes
# =============================================================================

class TestErrors:
    """Failures map onto the documented exit codes."""

    def test_missing_default_input(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Source file not found: main.c" in result.output

    def test_parse_error(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("int main(void {return 0;}\n")
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "main.c:1:15: error: expected ')' but found '{'" in result.output

    def test_lexer_errors_shown_with_parse_error(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("int main(void) { @ return 0;")
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "main.c:1:18: error: invalid character '@'" in result.output
            assert "unexpected end of input" in result.output
            assert result.output.index("invalid character") < result.output.index(
                "unexpected end of input"
            )

    def test_deep_nesting(self, runner):
        with runner.isolated_filesystem():
            Path("main.c").write_text("f(" * 5000 + ")" * 5000)
            result = runner.invoke(main, [])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "unsupported feature: nesting too deep" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "mci" in result.output
        assert "0.1.0" in result.output
