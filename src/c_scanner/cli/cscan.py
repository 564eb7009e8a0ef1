"""
cscan - C Scanner Command-Line Interface
========================================

This module implements the command-line driver for the C scanner. It reads
a source file, runs the scanner over it and prints one line per token:

    KIND<TAB>'literal'

Usage Examples
--------------
Print every token:
    $ cscan hello.c

Drop comments:
    $ cscan --no-comments hello.c

Stop at the first illegal token:
    $ cscan --strict hello.c

Verbose mode:
    $ cscan -v hello.c

Exit Codes
----------
0 when the file scanned cleanly, 1 when it contained illegal input,
2 when it could not be read (see ``c_scanner.cli.errors.ExitCode``).
"""

import codecs
import logging
import sys
from pathlib import Path

import click

from c_scanner import __version__
from c_scanner.cli.errors import ExitCode, handle_cli_exception
from c_scanner.lexer import Scanner, Token, TokenKind

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def validate_encoding(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Reject encoding names the codecs registry does not know."""
    try:
        codecs.lookup(value)
    except LookupError:
        raise click.BadParameter(f"unknown encoding '{value}'")
    return value


def format_token(token: Token) -> str:
    """Render a token as ``KIND<TAB>'literal'``."""
    return f"{token.kind.name}\t{token.literal!r}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--no-comments",
    is_flag=True,
    help="Do not print comment tokens",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Stop at the first illegal token and report it as an error",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    callback=validate_encoding,
    help="Text encoding of the input file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="cscan")
def main(
    input_file: Path,
    no_comments: bool,
    strict: bool,
    encoding: str,
    verbose: bool,
) -> None:
    """
    Print the token stream of a C source file.

    INPUT_FILE is the C source file to scan.

    \b
    Examples:
        cscan hello.c                # All tokens, comments included
        cscan --no-comments hello.c  # Skip comments
        cscan --strict hello.c       # Fail on the first illegal token
    """
    setup_logging(verbose)

    try:
        source = input_file.read_text(encoding=encoding)
        logger.debug(f"Read {len(source)} characters from {input_file}")

        scanner = Scanner(source, str(input_file))
        count = 0
        illegal = 0

        for token in scanner.tokenize():
            if token.kind is TokenKind.EOF:
                break
            if token.kind is TokenKind.ILLEGAL:
                if strict:
                    raise scanner.error_for(token)
                illegal += 1
            if no_comments and token.kind.is_comment:
                continue
            click.echo(format_token(token))
            count += 1

        if verbose:
            click.echo(f"Scanned {count} tokens from {input_file}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)

    if illegal:
        click.echo(
            f"{input_file}: {illegal} illegal token(s)",
            err=True,
        )
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
