"""
Property-line locator.

Finds C# auto-property declarations with line-level regular expressions
instead of a parser.  Only the single-line shape is recognised::

    public int CustomerId { get; set; }
    public Company? Company { get; set; }

A declaration spread over several lines, or with a type containing
whitespace (``Dictionary<int, string>``), does not match and simply gets
no markers.
"""

from __future__ import annotations

import re

from annotator.configs.config import LINE_TERMINATOR
from annotator.utils.identifiers import to_pascal

_PROPERTY_RE = re.compile(
    r"^\s*public\s+[^\s]+\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"\s*\{\s*get;\s*set;\s*\}\s*$"
)


def split_lines(content: str) -> list[str]:
    """Split ``content`` into lines, treating ``\\r\\n``, ``\\r`` and ``\\n`` alike."""
    normalized = content.replace("\r\n", LINE_TERMINATOR).replace("\r", LINE_TERMINATOR)
    return normalized.split(LINE_TERMINATOR)


def index_properties(lines: list[str]) -> dict[str, int]:
    """
    Map each declared property name to its line index.

    Keys are lower-cased so lookups are case-insensitive.  If a name is
    declared twice (nested classes), the later line wins.
    """
    index: dict[str, int] = {}
    for i, line in enumerate(lines):
        m = _PROPERTY_RE.match(line)
        if m:
            index[m.group("name").lower()] = i
    return index


def _navigation_re(type_name: str) -> re.Pattern:
    t = re.escape(type_name)
    return re.compile(
        rf"^\s*public\s+{t}\??\s+{t}\s*\{{\s*get;\s*set;\s*\}}\s*$"
    )


def find_navigation(lines: list[str], ref_table: str) -> int | None:
    """
    Return the line index of the navigation property for ``ref_table``.

    A navigation property is one whose type and name both equal the
    PascalCase form of the referenced table, e.g. ``public Company Company
    { get; set; }`` for ``COMPANY``.  Matching is case-sensitive and the
    first such line wins.
    """
    type_name = to_pascal(ref_table)
    if not type_name:
        return None
    pattern = _navigation_re(type_name)
    for i, line in enumerate(lines):
        if pattern.match(line):
            return i
    return None
