"""
Table-name extraction from a DTO's ``[Table]`` attribute.

Recognised forms (attribute name case-insensitive)::

    [Table("CUSTOMERS")]
    [Table(Name = "CUSTOMERS")]
    [Table(Name = "CUSTOMERS", Schema = "SALES")]

Only the first ``[Table]`` attribute in the file counts.  A file declaring
several is processed against the first one, without warning.
"""

from __future__ import annotations

import re

_TABLE_RE = re.compile(
    r'\[Table\s*\(\s*(?:Name\s*=\s*)?"(?P<table>[^"]+)"(?P<rest>[^\]]*)',
    re.IGNORECASE,
)
_SCHEMA_ARG_RE = re.compile(r'Schema\s*=\s*"(?P<schema>[^"]+)"', re.IGNORECASE)


def parse_table_name(content: str) -> str | None:
    """
    Return the table named by the first ``[Table]`` attribute in ``content``.

    Returns ``None`` when there is no such attribute or its name is blank;
    the caller treats the file as not mapped and skips it.
    """
    m = _TABLE_RE.search(content)
    if m is None or not m.group("table").strip():
        return None
    return m.group("table")


def parse_table_schema(content: str) -> str | None:
    """Return the ``Schema = "..."`` argument of the first ``[Table]`` attribute, if any."""
    m = _TABLE_RE.search(content)
    if m is None:
        return None
    s = _SCHEMA_ARG_RE.search(m.group("rest"))
    return s.group("schema") if s else None
