"""
qslex - qscript Token Dump
==========================

Scans a qscript source file and prints its token stream, one token per
line, or as JSON for other tools to consume.

Usage Examples
--------------
Basic dump:
    $ qslex orders.qs

JSON output:
    $ qslex --format json orders.qs > tokens.json

Reproduce the legacy scanner's quirks:
    $ qslex --legacy orders.qs

Verbose mode (debug logging and a summary line):
    $ qslex -v orders.qs
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from qscript import __version__
from qscript.cli.errors import handle_cli_exception
from qscript.options import ScannerOptions
from qscript.scanner import Scanner, Token

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def format_token(token: Token) -> str:
    """Format a token as 'line:column  KIND  'text''."""
    position = f"{token.line}:{token.column}"
    return f"{position:<10} {token.kind.name:<14} {token.text!r}"


def token_to_dict(token: Token) -> dict:
    return {
        "kind": token.kind.name,
        "text": token.text,
        "line": token.line,
        "column": token.column,
    }


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--legacy/--no-legacy",
    default=None,
    help="Reproduce the legacy scanner's permissive behavior "
         "(default: from QSCRIPT_LEGACY, else off)",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="qslex")
def main(
    input_file: Path,
    legacy: Optional[bool],
    output_format: str,
    verbose: bool,
) -> None:
    """
    Print the tokens of a qscript source file.

    INPUT_FILE is the qscript source file to scan.

    \b
    Examples:
        qslex orders.qs                 # One token per line
        qslex -f json orders.qs         # JSON array of tokens
        qslex --legacy orders.qs        # Legacy scanner behavior
    """
    setup_logging(verbose)

    overrides = {"filename": str(input_file)}
    if legacy is not None:
        overrides["legacy"] = legacy
    options = ScannerOptions.from_env(**overrides)

    try:
        logger.debug(f"Scanning {input_file} (legacy={options.legacy})")
        # Bytes, so carriage returns reach the scanner untranslated
        source = input_file.read_bytes().decode("utf-8")
        tokens = list(Scanner(source, options=options).tokenize())
    except Exception as e:
        handle_cli_exception(e, verbose)

    if output_format.lower() == "json":
        click.echo(json.dumps([token_to_dict(t) for t in tokens], indent=2))
    else:
        for token in tokens:
            click.echo(format_token(token))

    if verbose:
        click.echo(f"Scanned {len(tokens)} tokens from {input_file}", err=True)


if __name__ == "__main__":
    main()
