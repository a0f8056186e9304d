"""
Disasm-Util Configuration
=========================

Configuration for running objdump and rendering the normalized listing.
Values can come from:
- Default values (defined here)
- Environment variables (DisasmConfig.from_env)
- Command-line options (applied by the CLI on top of the above)

Environment variables (all optional):
    DISASM_UTIL_OBJDUMP: objdump executable name or path
    DISASM_UTIL_TIMEOUT: seconds to wait for objdump
    DISASM_UTIL_INCLUDE_OPERANDS: keep operands in the output (1/true/yes/on)
    DISASM_UTIL_INCLUDE_COMMENTS: keep comments in the output (1/true/yes/on)

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from dataclasses import dataclass, field
from typing import List
import os


# Flags giving address-free, raw-byte-free disassembly text
DEFAULT_OBJDUMP_FLAGS = ("-d", "--no-addresses", "--no-show-raw-insn")

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class RenderOptions:
    """
    Controls which instruction fields survive rendering.

    The canonical listing keeps only the opcode. Operands carry register
    allocation and relocation noise, so they are opt-in.

    Attributes:
        include_operands: Render "<opcode> <operands>"
        include_comments: Append "  # <comment>" when a comment was parsed
    """
    include_operands: bool = False
    include_comments: bool = False


CANONICAL = RenderOptions()


@dataclass
class DisasmConfig:
    """
    Settings shared by the objdump runner and the CLI.

    Attributes:
        objdump: objdump executable name (looked up on PATH) or path
        objdump_flags: Flags passed before the object file
        timeout: Seconds to wait for objdump before giving up
        include_operands: See RenderOptions
        include_comments: See RenderOptions
    """

    objdump: str = "objdump"
    objdump_flags: List[str] = field(
        default_factory=lambda: list(DEFAULT_OBJDUMP_FLAGS)
    )
    timeout: float = 60.0
    include_operands: bool = False
    include_comments: bool = False

    @classmethod
    def from_env(cls) -> "DisasmConfig":
        """
        Create a DisasmConfig from environment variables.

        Unset variables keep their defaults; an unparsable timeout is ignored.
        """
        config = cls()

        if objdump := os.environ.get("DISASM_UTIL_OBJDUMP"):
            config.objdump = objdump

        if timeout := os.environ.get("DISASM_UTIL_TIMEOUT"):
            try:
                config.timeout = float(timeout)
            except ValueError:
                pass  # Ignore invalid values

        if operands := os.environ.get("DISASM_UTIL_INCLUDE_OPERANDS"):
            config.include_operands = operands.strip().lower() in _TRUTHY

        if comments := os.environ.get("DISASM_UTIL_INCLUDE_COMMENTS"):
            config.include_comments = comments.strip().lower() in _TRUTHY

        return config

    def render_options(self) -> RenderOptions:
        """Return the RenderOptions matching this configuration."""
        return RenderOptions(
            include_operands=self.include_operands,
            include_comments=self.include_comments,
        )
