"""
Disasm-Util Error Hierarchy
===========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from DisasmError, allowing callers to catch every
package error with a single except clause if desired.

Exception Hierarchy
-------------------
DisasmError (base)
├── ListingError (objdump listing parsing)
│   ├── EmptyInputError - input has no non-blank lines
│   ├── MalformedHeaderError - first line is not "<file>: file format <fmt>"
│   ├── UnrecognizedLineError - body line matches no known grammar
│   ├── MissingSectionError - symbol or instruction before any section
│   └── MissingSymbolError - instruction before any symbol
└── ObjdumpError (running the external objdump tool)
    └── ObjdumpNotFoundError - executable could not be started

Parsing is fail-fast: the first ListingError aborts the whole parse and no
partial tree is returned.

Error messages follow this format when the input line is known:
    line 12: error: unrecognized format for the following line: '...'

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

from typing import Optional, Sequence


# =============================================================================
# Base Exception Class
# =============================================================================

class DisasmError(Exception):
    """
    Base exception for all disasm-util errors.

        try:
            listing = Disassembly.from_text(text)
        except DisasmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Listing Parser Exceptions
# =============================================================================

class ListingError(DisasmError):
    """
    Base exception for errors found while parsing an objdump listing.

    Attributes:
        message: The error description
        line_number: 1-based line number in the original input (optional)
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: error: {self.message}"
        return self.message


class EmptyInputError(ListingError):
    """Raised when the input yields no non-blank lines at all."""

    def __init__(self):
        super().__init__("the input does not contain any text")


class MalformedHeaderError(ListingError):
    """
    The first line is not an objdump header.

    objdump starts every listing with a line such as:

        build/main.o:     file format elf64-x86-64

    Raised when the ':' separator or the 'file format ' prefix is missing.
    """

    def __init__(self, header: str, line_number: Optional[int] = None):
        self.header = header
        super().__init__("incorrect format for the first line", line_number)


class UnrecognizedLineError(ListingError):
    """
    A body line matches none of the section, symbol or instruction grammars.

    The offending text is kept verbatim in `line` for diagnostics.
    """

    def __init__(self, line: str, line_number: Optional[int] = None):
        self.line = line
        super().__init__(
            f"unrecognized format for the following line: '{line}'",
            line_number,
        )


class MissingSectionError(ListingError):
    """
    A symbol (or instruction) appeared before any section marker.

    Args:
        item: What was being added ("symbol" or "instruction")
    """

    def __init__(self, item: str = "symbol", line_number: Optional[int] = None):
        self.item = item
        super().__init__(
            f"attempted to add {_article(item)} {item} without first defining a section",
            line_number,
        )


class MissingSymbolError(ListingError):
    """An instruction appeared in a section before any symbol marker."""

    def __init__(self, line_number: Optional[int] = None):
        super().__init__(
            "attempted to add an instruction without first defining a symbol",
            line_number,
        )


def _article(word: str) -> str:
    return "an" if word[:1] in "aeiou" else "a"


# =============================================================================
# objdump Exceptions
# =============================================================================

class ObjdumpError(DisasmError):
    """
    Running objdump failed or produced diagnostics.

    Any output on objdump's error channel is treated as fatal, even when
    the process exits successfully.

    Attributes:
        command: The command line that was executed
        stderr: Text objdump wrote to its error channel
        return_code: Process exit status (None if it never finished)
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        stderr: str = "",
        return_code: Optional[int] = None,
    ):
        self.message = message
        self.command = list(command) if command else []
        self.stderr = stderr
        self.return_code = return_code
        super().__init__(message)


class ObjdumpNotFoundError(ObjdumpError):
    """The objdump executable could not be found or started."""

    def __init__(self, executable: str, command: Optional[Sequence[str]] = None):
        self.executable = executable
        super().__init__(
            f"'{executable}' was not found! Check your PATH or explicitly "
            f"provide an executable",
            command=command,
        )
