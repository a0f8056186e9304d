"""
Disasm-Util Command-Line Interface
==================================

This package provides the command-line tool for disasm-util:

- **disasm-util**: run objdump on an object file (or read a saved listing)
  and print the normalized, address-free disassembly

The tool is implemented as a Click-based CLI application with
consistent error reporting and exit codes (see cli.errors).

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

__all__ = ["disasm"]
