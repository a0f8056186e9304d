"""
Symbol
======

A function or label boundary inside a section (objdump's "<name>:" lines),
grouping the instructions that follow it. Instructions stay in source order.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from dataclasses import dataclass, field
from typing import List, Optional

from disasm_util.config import RenderOptions
from disasm_util.listing.formatting import indent
from disasm_util.listing.instruction import Instruction


@dataclass
class Symbol:
    """
    Named, ordered sequence of instructions.

    Attributes:
        name: Symbol name including the angle brackets, e.g. "<main>"
        instructions: Instructions in the order they were disassembled
    """
    name: str
    instructions: List[Instruction] = field(default_factory=list)

    def __post_init__(self):
        self.name = self.name.strip()

    def add_instruction(self, instruction: Instruction) -> None:
        self.instructions.append(instruction)

    def render(self, options: Optional[RenderOptions] = None) -> str:
        """
        Format as "<name>:" followed by the indented instructions.

            <main>:
                push
                mov
        """
        body = "".join(instr.render(options) for instr in self.instructions)
        return f"{self.name}:\n{indent(body)}"

    def __str__(self) -> str:
        return self.render()
