"""
mci - minic Interpreter Command-Line Interface
==============================================

Runs the C subset front end over a source file and prints the final
interpreter environment.

Usage Examples
--------------
Interpret main.c in the current directory:
    $ mci

Interpret a specific file:
    $ mci hello.c

Show tokens or the AST instead:
    $ mci --tokens hello.c
    $ mci --ast hello.c

Extra library headers:
    $ mci -L mylibs.json hello.c

Verbose mode:
    $ mci -v hello.c
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minic import __version__
from minic.errors import ConfigurationError
from minic.cfront import (
    CapabilityTable,
    DEFAULT_LIBC,
    DiagnosticCollector,
    Frontend,
    FrontendOptions,
)
from minic.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default="main.c",
    required=False,
)
@click.option(
    "-L", "--libc-table",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file of extra library headers, merged over the built-in table",
)
@click.option(
    "--comma-args",
    is_flag=True,
    help="Accept ',' between function call arguments",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print tokens and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mci")
def main(
    input_file: Path,
    libc_table: Optional[Path],
    comma_args: bool,
    tokens: bool,
    ast: bool,
    verbose: bool,
) -> None:
    """
    Interpret a C subset program.

    INPUT_FILE is the C source file to run (default: main.c).

    Each '#include' of a known library header registers the functions
    it exports. When the program has been processed the resulting
    environment is printed. Problems that do not stop interpretation
    are printed to stderr.

    \b
    Examples:
        mci                      # Runs main.c
        mci hello.c              # Runs hello.c
        mci --ast hello.c        # Dump the syntax tree
        mci -L libs.json a.c     # Add headers from libs.json

    \b
    Supported C subset:
        - #include <path> and #include "path"
        - int name(void) { ... } function definitions
        - return, function calls, identifiers, strings, integers
    """
    setup_logging(verbose)
    diagnostics = DiagnosticCollector()

    try:
        if not input_file.exists():
            raise FileNotFoundError(f"Source file not found: {input_file}")

        capabilities = DEFAULT_LIBC
        if libc_table is not None:
            capabilities = capabilities.merged(CapabilityTable.from_json_file(libc_table))

        options = FrontendOptions(
            capabilities=capabilities,
            comma_separated_arguments=comma_args,
        )
        frontend = Frontend(options)

        if verbose:
            click.echo(f"Interpreting {input_file}...", err=True)
            click.echo(f"Known headers: {', '.join(capabilities.header_names())}", err=True)

        source = input_file.read_text(encoding="utf-8")
        filename = str(input_file)

        # Token dump mode
        if tokens:
            for token in frontend.lex(source, filename, diagnostics):
                click.echo(repr(token))
            _report(diagnostics)
            return

        ast_tree = frontend.parse(source, filename, diagnostics)

        # AST dump mode
        if ast:
            click.echo(ast_tree.dump())
            _report(diagnostics)
            return

        env = frontend.interpret(ast_tree, diagnostics)
        _report(diagnostics)
        click.echo(env.dump())

    except ConfigurationError as e:
        handle_cli_exception(e, verbose, error_type="Configuration")
    except Exception as e:
        # Lexer diagnostics gathered before a parse failure
        _report(diagnostics)
        handle_cli_exception(e, verbose)


def _report(diagnostics: DiagnosticCollector) -> None:
    """Print recoverable diagnostics to stderr."""
    if diagnostics.has_errors():
        click.echo(diagnostics.report(), err=True)


if __name__ == "__main__":
    main()
