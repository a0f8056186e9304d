"""
disasm-util - Normalized objdump Listing
========================================

This module implements the command-line interface for disasm-util. It runs
objdump on an object file, drops addresses and raw bytes, groups the
instructions by section and symbol, sorts both by name and prints the
result. Two builds of the same code can then be compared with plain diff.

Usage Examples
--------------
Normalize an object file:
    $ disasm-util build/main.o

Use a cross objdump:
    $ disasm-util firmware.elf -e /opt/arm/bin/arm-none-eabi-objdump

Write to a file:
    $ disasm-util build/main.o -o main.lst

Keep operands and comments:
    $ disasm-util build/main.o --operands --comments

Normalize a listing saved earlier with objdump -d --no-addresses
--no-show-raw-insn:
    $ disasm-util main.dis --listing

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

import logging
from pathlib import Path
from typing import Optional

import click

from disasm_util import __version__
from disasm_util.cli.errors import handle_cli_exception
from disasm_util.config import DisasmConfig
from disasm_util.listing import Disassembly
from disasm_util.objdump import disassemble

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "obj_file",
    metavar="OBJ-FILE",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-e", "--executable",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use the objdump executable FILE (default: objdump on PATH)",
)
@click.option(
    "-o", "--out",
    "output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Place the output into FILE (default: stdout)",
)
@click.option(
    "--listing",
    is_flag=True,
    help="OBJ-FILE is saved objdump output; do not run objdump",
)
@click.option(
    "--operands/--no-operands",
    default=None,
    help="Keep instruction operands in the output (default: opcodes only)",
)
@click.option(
    "--comments/--no-comments",
    default=None,
    help="Keep objdump's '#' comments in the output",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="disasm-util")
def main(
    obj_file: Path,
    executable: Optional[Path],
    output: Optional[Path],
    listing: bool,
    operands: Optional[bool],
    comments: Optional[bool],
    verbose: bool,
) -> None:
    """
    Disassemble OBJ-FILE into a normalized, address-free listing.

    Sections and the symbols inside them are sorted by name and only the
    opcode of each instruction is kept, so the output is stable across
    rebuilds and can be compared with diff.

    Settings can also come from the environment: DISASM_UTIL_OBJDUMP,
    DISASM_UTIL_TIMEOUT, DISASM_UTIL_INCLUDE_OPERANDS and
    DISASM_UTIL_INCLUDE_COMMENTS. Command-line options take precedence.
    """
    setup_logging(verbose)

    config = DisasmConfig.from_env()
    if executable is not None:
        config.objdump = str(executable)
    if operands is not None:
        config.include_operands = operands
    if comments is not None:
        config.include_comments = comments

    try:
        if listing:
            logger.debug(f"Reading saved listing {obj_file}")
            disasm = Disassembly.from_file(obj_file)
        else:
            disasm = disassemble(obj_file, config)

        result = disasm.render(config.render_options())

        if output:
            output.write_text(result, encoding="utf-8")
            logger.debug(f"Output written to: {output}")
        else:
            click.echo(result, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
