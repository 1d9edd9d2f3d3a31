"""
Identifier helpers for the annotator.

Maps Oracle catalog names (``CUSTOMER_ID``, ``order line``) onto the
PascalCase names C# DTO properties use, so that a column can be matched
against the property declared for it.

Usage:
    from annotator.utils.identifiers import to_pascal

    prop = to_pascal("CUSTOMER_ID")   # → "CustomerId"
    prop = to_pascal("ID")            # → "Id"
"""

from __future__ import annotations

import re

_SEPARATOR_RE = re.compile(r"[_\s]+")


def to_pascal(raw: str) -> str:
    """
    Convert a catalog name into a PascalCase identifier.

    Splits on runs of underscores/whitespace, drops empty segments, then
    upper-cases the first character of each segment and lower-cases the rest.
    ``str.upper``/``str.lower`` are locale-independent, so the result is
    the same on every machine.

    Args:
        raw: Column or table name as stored in the catalog.

    Returns:
        The PascalCase identifier, or ``""`` for empty input.
    """
    parts = [p for p in _SEPARATOR_RE.split(raw) if p]
    return "".join(p[0].upper() + p[1:].lower() for p in parts)


def join_pascal(names: list[str]) -> str:
    """Convert each name and join with commas, keeping the given order."""
    return ",".join(to_pascal(n) for n in names)
