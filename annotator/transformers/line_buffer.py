"""
Mutable line buffer for one file's injection pass.

Holds the file's lines together with the property → line-index map and
keeps the two consistent: every insertion shifts each stored index at or
after the insertion point down by one.  A buffer lives only as long as
one file is being processed.
"""

from __future__ import annotations

from annotator.configs.config import LINE_TERMINATOR
from annotator.transformers.property_locator import index_properties, split_lines


class LineBuffer:
    """
    Lines of a source file plus the index of its property declarations.

    Attributes:
        lines:      Current file lines, without terminators.
        properties: Lower-cased property name → current line index.
        inserted:   Marker lines inserted so far, in insertion order.
    """

    def __init__(self, content: str) -> None:
        self.lines: list[str] = split_lines(content)
        self.properties: dict[str, int] = index_properties(self.lines)
        self.inserted: list[str] = []

    @property
    def changed(self) -> bool:
        return bool(self.inserted)

    def line_of(self, property_name: str) -> int | None:
        """Current line index of ``property_name`` (case-insensitive), if declared."""
        return self.properties.get(property_name.lower())

    def attribute_block(self, idx: int) -> list[str]:
        """
        Return the attribute lines stacked directly above line ``idx``.

        Walks upwards while lines start with ``[``; stops at the first blank,
        comment, or code line.
        """
        block = []
        i = idx - 1
        while i >= 0 and self.lines[i].lstrip().startswith("["):
            block.append(self.lines[i])
            i -= 1
        return block

    def has_marker_above(self, idx: int, marker: str) -> bool:
        return any(marker in line for line in self.attribute_block(idx))

    def insert_above(self, idx: int, marker: str) -> None:
        """
        Insert ``marker`` at ``idx`` with the indentation of the line it lands on.

        The previous occupant of ``idx`` (the declaration) moves to ``idx + 1``
        and every tracked index ``>= idx`` is shifted accordingly.
        """
        target = self.lines[idx]
        indent = target[: len(target) - len(target.lstrip())]
        self.lines.insert(idx, indent + marker)
        for name, line_no in self.properties.items():
            if line_no >= idx:
                self.properties[name] = line_no + 1
        self.inserted.append(marker)

    def text(self) -> str:
        return LINE_TERMINATOR.join(self.lines)
