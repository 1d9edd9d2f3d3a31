"""
Marker injector: turns ``TableMetadata`` into linq2db mapping attributes
inserted above the DTO properties they describe.

Marker kinds::

    [PrimaryKey]
    [Column(Name = "CUSTOMER_ID")]
    [Association(ThisKey = "CompanyId", OtherKey = "Id", CanBeNull = true)]

Order of operations (one pass over one ``LineBuffer``):
  1. Primary keys: ``[PrimaryKey]`` then ``[Column]`` on the key property.
  2. Foreign-key columns: ``[Column]`` on each local key property.
  3. Associations: ``[Association]`` on the navigation property of each
     foreign key, when the file already declares one.

Each insertion is skipped when the same marker already sits in the
attribute block above its target, which makes a second run over the
output a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from annotator.models.models import ForeignKey, TableMetadata
from annotator.transformers.line_buffer import LineBuffer
from annotator.transformers.property_locator import find_navigation
from annotator.utils.identifiers import join_pascal, to_pascal

logger = logging.getLogger(__name__)

PRIMARY_KEY_MARKER = "[PrimaryKey]"
ASSOCIATION_PREFIX = "[Association("


def column_marker(column: str) -> str:
    return f'[Column(Name = "{column}")]'


def association_marker(fk: ForeignKey) -> str:
    """
    Build the ``[Association]`` line for ``fk``.

    Key lists follow ``fk.pairs`` order on both sides.  ``ThisKey`` names
    are derived from the column names even when the DTO has no property
    for them.
    """
    this_keys = join_pascal(fk.this_columns)
    other_keys = join_pascal(fk.ref_columns)
    return (
        f'[Association(ThisKey = "{this_keys}", '
        f'OtherKey = "{other_keys}", CanBeNull = true)]'
    )


@dataclass
class InjectionResult:
    """
    Outcome of ``inject_annotations``.

    Attributes:
        changed:  True if at least one marker was inserted.
        text:     The new file content, or the untouched input if not changed.
        inserted: Marker lines inserted, in insertion order.
    """
    changed: bool
    text: str
    inserted: list[str] = field(default_factory=list)


def inject_annotations(content: str, meta: TableMetadata) -> InjectionResult:
    """
    Insert mapping markers for ``meta`` into ``content``.

    Args:
        content: Full DTO source text.
        meta:    Keys of the table the DTO maps.

    Returns:
        ``InjectionResult``.  When nothing was inserted, ``text`` is
        ``content`` itself, byte for byte.  Otherwise ``text`` is the
        rewritten file joined with ``\\n``.
    """
    buf = LineBuffer(content)

    for col in meta.primary_keys:
        prop = to_pascal(col)
        _inject_on_property(buf, prop, PRIMARY_KEY_MARKER)
        _inject_on_property(buf, prop, column_marker(col))

    for fk in meta.foreign_keys:
        for this_col in fk.this_columns:
            _inject_on_property(buf, to_pascal(this_col), column_marker(this_col))

    for fk in meta.foreign_keys:
        _inject_association(buf, fk)

    if not buf.changed:
        return InjectionResult(changed=False, text=content)

    logger.debug("%s: %d marker(s) inserted", meta.table, len(buf.inserted))
    return InjectionResult(changed=True, text=buf.text(), inserted=list(buf.inserted))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _inject_on_property(buf: LineBuffer, prop: str, marker: str) -> bool:
    idx = buf.line_of(prop)
    if idx is None:
        logger.debug("No single-line property %s; skipping %s", prop, marker)
        return False
    if buf.has_marker_above(idx, marker):
        return False
    buf.insert_above(idx, marker)
    return True


def _inject_association(buf: LineBuffer, fk: ForeignKey) -> bool:
    if not fk.pairs:
        return False
    idx = find_navigation(buf.lines, fk.ref_table)
    if idx is None:
        logger.debug("%s: no navigation property for %s", fk.name, fk.ref_table)
        return False
    if buf.has_marker_above(idx, ASSOCIATION_PREFIX):
        return False
    buf.insert_above(idx, association_marker(fk))
    return True
