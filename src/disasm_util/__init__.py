"""
Disasm-Util - Normalized objdump Listings
=========================================

This package turns the output of GNU objdump into a listing that can be
compared across builds: addresses and raw bytes are dropped, instructions
are grouped under their section and symbol, and sections and symbols are
sorted by name.

Main Components
---------------
- **listing**: the parser and the Disassembly -> Section -> Symbol ->
  Instruction tree it builds, with deterministic rendering
- **objdump**: runs objdump with the flags the parser expects
- **config**: objdump and rendering settings (also from the environment)
- **cli**: the disasm-util command

Quick Start
-----------
Parse objdump output you already have:
    >>> from disasm_util import Disassembly
    >>> listing = Disassembly.from_text(text)
    >>> print(listing, end="")

Run objdump and parse in one step:
    >>> from disasm_util import disassemble
    >>> listing = disassemble("build/main.o")

Or use the command-line tool:
    $ disasm-util build/main.o -o main.lst

Version History
---------------
0.1.0 - Initial release

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from disasm_util.config import DisasmConfig, RenderOptions
from disasm_util.errors import (
    DisasmError,
    ListingError,
    EmptyInputError,
    MalformedHeaderError,
    UnrecognizedLineError,
    MissingSectionError,
    MissingSymbolError,
    ObjdumpError,
    ObjdumpNotFoundError,
)
from disasm_util.listing import (
    Disassembly,
    Section,
    Symbol,
    Instruction,
)
from disasm_util.objdump import disassemble, run_objdump

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "DisasmConfig",
    "RenderOptions",
    # Listing tree
    "Disassembly",
    "Section",
    "Symbol",
    "Instruction",
    # objdump
    "disassemble",
    "run_objdump",
    # Exception hierarchy
    "DisasmError",
    "ListingError",
    "EmptyInputError",
    "MalformedHeaderError",
    "UnrecognizedLineError",
    "MissingSectionError",
    "MissingSymbolError",
    "ObjdumpError",
    "ObjdumpNotFoundError",
]
