"""
objdump Runner
==============

Runs GNU objdump on an object file and returns its disassembly text.

The flags ask objdump for output without addresses or raw instruction
bytes, which is what the listing parser expects:

    objdump -d --no-addresses --no-show-raw-insn <object file>

Anything written to objdump's error channel is treated as fatal, even when
the process exits with status 0; objdump reports unknown file formats and
truncated sections that way.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from pathlib import Path
from typing import Optional, Sequence, Union
import logging
import subprocess

from disasm_util.config import DEFAULT_OBJDUMP_FLAGS, DisasmConfig
from disasm_util.errors import ObjdumpError, ObjdumpNotFoundError
from disasm_util.listing import Disassembly

logger = logging.getLogger(__name__)


def build_command(
    obj_file: Union[str, Path],
    executable: str = "objdump",
    flags: Sequence[str] = DEFAULT_OBJDUMP_FLAGS,
) -> list[str]:
    """Return the objdump command line for obj_file."""
    return [executable, *flags, str(obj_file)]


def run_objdump(
    obj_file: Union[str, Path],
    executable: str = "objdump",
    flags: Sequence[str] = DEFAULT_OBJDUMP_FLAGS,
    timeout: Optional[float] = 60.0,
) -> str:
    """
    Disassemble obj_file with objdump and return the text it printed.

    Args:
        obj_file: Object file or executable to disassemble
        executable: objdump name (searched on PATH) or path
        flags: Flags placed before obj_file
        timeout: Seconds to wait before giving up (None waits forever)

    Returns:
        objdump's standard output, decoded as UTF-8

    Raises:
        ObjdumpNotFoundError: If the executable cannot be started
        ObjdumpError: If objdump times out, writes to stderr, exits with a
                      non-zero status, or prints invalid UTF-8
    """
    cmd = build_command(obj_file, executable, flags)
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.warning(f"objdump executable not found: {executable}")
        raise ObjdumpNotFoundError(executable, command=cmd)
    except subprocess.TimeoutExpired:
        logger.warning(f"objdump timed out after {timeout}s")
        raise ObjdumpError(f"'{executable}' timed out after {timeout}s", command=cmd)

    try:
        stdout = result.stdout.decode("utf-8")
        stderr = result.stderr.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ObjdumpError(
            f"'{executable}' produced output that is not valid UTF-8: {e}",
            command=cmd,
            return_code=result.returncode,
        )

    if stderr:
        logger.warning(f"objdump reported errors (exit status {result.returncode})")
        raise ObjdumpError(
            stderr.strip(),
            command=cmd,
            stderr=stderr,
            return_code=result.returncode,
        )

    if result.returncode != 0:
        raise ObjdumpError(
            f"'{executable}' exited with status {result.returncode}",
            command=cmd,
            return_code=result.returncode,
        )

    logger.debug(f"objdump produced {len(stdout)} characters")
    return stdout


def disassemble(
    obj_file: Union[str, Path],
    config: Optional[DisasmConfig] = None,
) -> Disassembly:
    """
    Run objdump on obj_file and parse the result into a sorted Disassembly.

    Raises:
        ObjdumpError: If running objdump fails
        ListingError: If the output cannot be parsed
    """
    config = config or DisasmConfig()
    text = run_objdump(
        obj_file,
        executable=config.objdump,
        flags=config.objdump_flags,
        timeout=config.timeout,
    )
    return Disassembly.from_text(text)
