"""
Core data models for the annotator.

ForeignKey     : one referential constraint with its ordered column pairs.
TableMetadata  : primary and foreign keys of a single Oracle table.

Ordering contract
-----------------
``primary_keys`` and every ``ForeignKey.pairs`` list are kept in the
catalog's key-position order.  Composite associations render their
``ThisKey`` / ``OtherKey`` lists from ``pairs`` directly, so both sides
line up only as long as nobody sorts or dedupes these lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ForeignKey:
    """
    A referential (``CONSTRAINT_TYPE = 'R'``) constraint.

    Attributes:
        name:       Constraint name from ``ALL_CONSTRAINTS``.
        this_table: Referencing (child) table.
        ref_table:  Referenced (parent) table.
        pairs:      ``(this_column, ref_column)`` tuples in key-position order.
    """

    name: str
    this_table: str
    ref_table: str
    pairs: list[tuple[str, str]] = field(default_factory=list)

    @property
    def this_columns(self) -> list[str]:
        return [this_col for this_col, _ in self.pairs]

    @property
    def ref_columns(self) -> list[str]:
        return [ref_col for _, ref_col in self.pairs]


@dataclass
class TableMetadata:
    """
    Key metadata for one Oracle table.

    Attributes:
        table:        Table name as declared in the DTO's ``[Table]`` attribute.
        primary_keys: Primary-key column names, ordered by ``POSITION``.
        foreign_keys: Foreign keys, in the order the catalog returned them.
    """

    table: str
    primary_keys: list[str] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the catalog reported no keys at all for the table."""
        return not self.primary_keys and not self.foreign_keys
