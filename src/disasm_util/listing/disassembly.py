"""
Disassembly Listing Parser
==========================

Parses the text produced by:

    objdump -d --no-addresses --no-show-raw-insn <object file>

into a tree of sections, symbols and instructions, then sorts it so that
two builds of the same code produce the same listing.

Input Grammar
-------------
Blank lines are ignored everywhere. The first remaining line is the header:

    build/main.o:     file format elf64-x86-64

Every other line is one of (checked in this order):

    Disassembly of section .text:       section marker
    <main>:                             symbol marker
        push   %rbp                     instruction (leading whitespace)

An instruction line is cut at the first "#" into code and comment; the
code is cut at its last whitespace into opcode and operands. The opcode
may hold only lowercase letters, digits and spaces, so prefixed mnemonics
such as "bnd jmp" stay whole.

Parsing is fail-fast: the first line that breaks the grammar or the
section -> symbol -> instruction ordering raises a ListingError.

Usage:
    >>> listing = Disassembly.from_text(objdump_output)
    >>> print(listing, end="")
    .text:
        <main>:
            push
            mov

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging
import re

from disasm_util.config import RenderOptions
from disasm_util.errors import (
    EmptyInputError,
    MalformedHeaderError,
    MissingSectionError,
    MissingSymbolError,
    UnrecognizedLineError,
)
from disasm_util.listing.instruction import Instruction
from disasm_util.listing.section import Section
from disasm_util.listing.symbol import Symbol

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Line Patterns
# =============================================================================
# Section and symbol markers are matched against the stripped line.
# Instructions are split by parse_instruction() on the raw line; the
# leading whitespace is what tells them apart from a mangled marker.
# =============================================================================

SECTION_PATTERN = re.compile(r"Disassembly of section (?P<name>[A-Za-z0-9.]+):")

SYMBOL_PATTERN = re.compile(r"(?P<name><.*>):")

# An instruction's opcode, after the operand token and comment are split off
OPCODE_PATTERN = re.compile(r"[a-z0-9\s]+")

HEADER_FORMAT_PREFIX = "file format "


def parse_instruction(line: str) -> Optional[Instruction]:
    """
    Split an instruction line into opcode, operands and comment.

    The line is cut at the first '#' (the rest is the comment), the left
    part is stripped and cut again at its last whitespace run: the final
    token is the operand text, everything before it the opcode. A left part
    without whitespace is a bare opcode.

        "\\tbnd jmp <_init+0x20>"   -> ("bnd jmp", "<_init+0x20>", "")
        "\\tjr ra"                  -> ("jr", "ra", "")
        "\\tnop#x"                  -> ("nop", "", "x")

    Returns:
        The Instruction, or None if the line has no leading whitespace or
        the opcode holds anything but lowercase letters, digits and spaces
    """
    if not line[:1].isspace():
        return None

    left, _, comment = line.partition("#")
    parts = left.strip().rsplit(None, 1)
    opcode = parts[0] if parts else ""
    operands = parts[1] if len(parts) > 1 else ""

    if not OPCODE_PATTERN.fullmatch(opcode):
        return None
    return Instruction(opcode=opcode, operands=operands, comment=comment.strip())


# =============================================================================
# Disassembly
# =============================================================================

@dataclass
class Disassembly:
    """
    Root of the parsed listing.

    Attributes:
        file_name: Object file name from the header line (verbatim)
        file_format: Binary format from the header line, e.g. "elf64-x86-64"
        sections: Sections in source order until sort() is called
    """
    file_name: str = ""
    file_format: str = ""
    sections: List[Section] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> "Disassembly":
        """
        Parse a complete objdump listing held in a string.

        Raises:
            ListingError: On the first line that cannot be parsed
        """
        return cls.from_lines(text.split("\n"))

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "Disassembly":
        """
        Parse an objdump listing saved to disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ListingError: On the first line that cannot be parsed
        """
        filepath = Path(filepath)
        with filepath.open("r", encoding="utf-8") as f:
            return cls.from_lines(f)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Disassembly":
        """
        Parse an objdump listing from any iterable of lines.

        Trailing line terminators are ignored, so an open text file can be
        passed directly. The resulting tree is already sorted.

        Raises:
            EmptyInputError: If there are no non-blank lines
            MalformedHeaderError: If the first line is not an objdump header
            UnrecognizedLineError: If a body line matches no grammar
            MissingSectionError: If a symbol precedes every section marker
            MissingSymbolError: If an instruction precedes every symbol
        """
        disasm = cls()

        numbered = (
            (number, line.rstrip("\r\n"))
            for number, line in enumerate(lines, start=1)
            if line.strip()
        )

        first = next(numbered, None)
        if first is None:
            raise EmptyInputError()
        disasm._process_first_line(*first)

        for number, line in numbered:
            disasm._process_other_line(number, line)

        disasm.sort()

        logger.debug(
            f"Parsed {disasm.file_name}: {len(disasm.sections)} sections, "
            f"{disasm.symbol_count()} symbols, "
            f"{disasm.instruction_count()} instructions"
        )
        return disasm

    def _process_first_line(self, number: int, line: str) -> None:
        file_name, sep, rest = line.partition(":")
        rest = rest.strip()
        if not sep or not rest.startswith(HEADER_FORMAT_PREFIX):
            raise MalformedHeaderError(line, line_number=number)

        self.file_name = file_name
        self.file_format = rest[len(HEADER_FORMAT_PREFIX):].strip()
        logger.debug(f"Header: file '{self.file_name}', format '{self.file_format}'")

    def _process_other_line(self, number: int, line: str) -> None:
        stripped = line.strip()

        match = SECTION_PATTERN.fullmatch(stripped)
        if match:
            logger.debug(f"line {number}: section {match.group('name')}")
            self.add_section(Section(match.group("name")))
            return

        match = SYMBOL_PATTERN.fullmatch(stripped)
        if match:
            self.add_symbol(Symbol(match.group("name")), line_number=number)
            return

        instruction = parse_instruction(line)
        if instruction is None:
            raise UnrecognizedLineError(line, line_number=number)
        self.add_instruction(instruction, line_number=number)

    # -------------------------------------------------------------------------
    # Tree Building
    # -------------------------------------------------------------------------

    def add_section(self, section: Section) -> None:
        self.sections.append(section)

    def current_section(self, item: str = "symbol", line_number: Optional[int] = None) -> Section:
        """
        Return the section new content goes into (the last one).

        Raises:
            MissingSectionError: If no section has been added yet
        """
        if not self.sections:
            raise MissingSectionError(item, line_number=line_number)
        return self.sections[-1]

    def add_symbol(self, symbol: Symbol, line_number: Optional[int] = None) -> None:
        """
        Append a symbol to the current section.

        Raises:
            MissingSectionError: If no section has been added yet
        """
        self.current_section("symbol", line_number).add_symbol(symbol)

    def add_instruction(self, instruction: Instruction, line_number: Optional[int] = None) -> None:
        """
        Append an instruction to the current symbol of the current section.

        Raises:
            MissingSectionError: If no section has been added yet
            MissingSymbolError: If the current section has no symbol yet
        """
        section = self.current_section("instruction", line_number)
        if not section.symbols:
            raise MissingSymbolError(line_number=line_number)
        section.add_instruction(instruction)

    # -------------------------------------------------------------------------
    # Normalization
    # -------------------------------------------------------------------------

    def sort(self) -> None:
        """
        Sort symbols within each section, then the sections, by name.

        Both sorts are stable and compare names by code point, so the
        operation is idempotent.
        """
        for section in self.sections:
            section.sort_symbols()
        self.sections.sort(key=lambda section: section.name)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def symbol_count(self) -> int:
        return sum(len(section.symbols) for section in self.sections)

    def instruction_count(self) -> int:
        return sum(
            len(symbol.instructions)
            for section in self.sections
            for symbol in section.symbols
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, options: Optional[RenderOptions] = None) -> str:
        """
        Format the whole listing: every section in order, nothing else.

        The header line is not reproduced, so listings of the same code
        built under different file names compare equal.
        """
        return "".join(section.render(options) for section in self.sections)

    def __str__(self) -> str:
        return self.render()
