"""
Indentation helper shared by the listing renderers.

Rendering is bottom-up: each level renders its children, then shifts every
non-empty line right by INDENT. Nesting therefore composes, so instructions
inside a symbol inside a section end up 8 spaces deep.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

import textwrap

INDENT = "    "


def _has_text(line: str) -> bool:
    return line.rstrip("\r\n") != ""


def indent(text: str) -> str:
    """Prefix every non-empty line of text with INDENT."""
    return textwrap.indent(text, INDENT, predicate=_has_text)
