"""
Section
=======

A binary section as reported by objdump ("Disassembly of section .text:"),
holding the symbols found in it.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from dataclasses import dataclass, field
from typing import List, Optional

from disasm_util.config import RenderOptions
from disasm_util.errors import MissingSymbolError
from disasm_util.listing.formatting import indent
from disasm_util.listing.instruction import Instruction
from disasm_util.listing.symbol import Symbol


@dataclass
class Section:
    """
    Named collection of symbols.

    Symbols are appended in source order while parsing and sorted by name
    once parsing is complete. Duplicate names are kept.

    Attributes:
        name: Section name, e.g. ".text"
        symbols: Symbols belonging to this section
    """
    name: str
    symbols: List[Symbol] = field(default_factory=list)

    def __post_init__(self):
        self.name = self.name.strip()

    def add_symbol(self, symbol: Symbol) -> None:
        self.symbols.append(symbol)

    def current_symbol(self) -> Symbol:
        """
        Return the symbol instructions are currently added to (the last one).

        Raises:
            MissingSymbolError: If no symbol has been added yet
        """
        if not self.symbols:
            raise MissingSymbolError()
        return self.symbols[-1]

    def add_instruction(self, instruction: Instruction) -> None:
        """
        Append an instruction to the current symbol.

        Raises:
            MissingSymbolError: If no symbol has been added yet
        """
        self.current_symbol().add_instruction(instruction)

    def sort_symbols(self) -> None:
        """Sort symbols by name. Stable, so duplicates keep source order."""
        self.symbols.sort(key=lambda symbol: symbol.name)

    def render(self, options: Optional[RenderOptions] = None) -> str:
        """
        Format as "<name>:" followed by the indented symbol blocks.

            .text:
                <main>:
                    push
        """
        body = "".join(symbol.render(options) for symbol in self.symbols)
        return f"{self.name}:\n{indent(body)}"

    def __str__(self) -> str:
        return self.render()
