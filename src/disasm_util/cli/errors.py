"""
Unified CLI Error Handling
==========================

Provides consistent error messages and exit codes for the CLI.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from disasm_util.errors import ListingError, ObjdumpError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    PARSE_ERROR = 1      # objdump output did not match the listing grammar
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error
    TOOL_ERROR = 4       # objdump missing, failed, or wrote to stderr


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, ListingError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    elif isinstance(error, ObjdumpError):
        # objdump's own diagnostics are passed through unchanged
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.TOOL_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        # A saved listing that is not UTF-8 text
        click.echo(f"Error: input is not valid UTF-8 ({error.reason})", err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    elif isinstance(error, OSError):
        # Missing input files, unwritable output paths
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
