"""
Instruction
===========

One disassembled line reduced to its salient fields. Addresses and raw
bytes never reach this record: objdump is run with --no-addresses and
--no-show-raw-insn, and the parser drops anything else that varies between
builds.

Usage:
    instr = Instruction("bnd jmp", "<_init+0x20>")
    str(instr)                                   # "bnd jmp\\n"
    instr.render(RenderOptions(include_operands=True))
                                                 # "bnd jmp <_init+0x20>\\n"

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from dataclasses import dataclass
from typing import Optional

from disasm_util.config import CANONICAL, RenderOptions


@dataclass(frozen=True)
class Instruction:
    """
    A single instruction of a symbol.

    Attributes:
        opcode: Mnemonic, possibly multi-word (e.g. "rep stos", "bnd jmp")
        operands: Operand text as printed by objdump (may be empty)
        comment: Text after '#' with surrounding whitespace removed (may be empty)
    """
    opcode: str
    operands: str = ""
    comment: str = ""

    def render(self, options: Optional[RenderOptions] = None) -> str:
        """Format as one listing line, terminated by a newline."""
        options = options or CANONICAL

        text = self.opcode
        if options.include_operands and self.operands:
            text = f"{text} {self.operands}" if text else self.operands
        if options.include_comments and self.comment:
            text = f"{text}  # {self.comment}" if text else f"# {self.comment}"
        return f"{text}\n"

    def __str__(self) -> str:
        return self.render()
