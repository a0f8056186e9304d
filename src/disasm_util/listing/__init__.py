"""
Disasm-Util Listing Module
==========================

This module models a normalized objdump listing as a tree:

    Disassembly -> Section -> Symbol -> Instruction

and parses objdump output into it. Every level renders back to text with
4 spaces of indentation per level.

Usage:
    from disasm_util.listing import Disassembly

    listing = Disassembly.from_text(objdump_output)
    print(listing, end="")

    # Keep operands as well as opcodes
    from disasm_util.config import RenderOptions
    listing.render(RenderOptions(include_operands=True))

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from .instruction import Instruction
from .symbol import Symbol
from .section import Section
from .disassembly import Disassembly

__all__ = [
    "Instruction",
    "Symbol",
    "Section",
    "Disassembly",
]
