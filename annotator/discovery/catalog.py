"""
Catalog metadata loader: reads primary and foreign keys from the Oracle
data dictionary and shapes them into ``TableMetadata``.

Three round trips per table:
  1. Primary-key columns, ordered by ``POSITION``.
  2. Foreign-key headers: constraint name, child table, parent table.
  3. Foreign-key column pairs, child and parent columns joined on equal
     ``POSITION`` so composite keys pair up correctly.

Column rows whose constraint has no header row are ignored.

Dictionary views used:
    ALL_CONSTRAINTS   OWNER, CONSTRAINT_NAME, CONSTRAINT_TYPE, TABLE_NAME,
                      R_OWNER, R_CONSTRAINT_NAME
    ALL_CONS_COLUMNS  OWNER, CONSTRAINT_NAME, TABLE_NAME, COLUMN_NAME, POSITION
"""

from __future__ import annotations

import logging

import oracledb

from annotator.configs.exceptions import MetadataUnavailable
from annotator.discovery.base import AbstractMetadataProvider
from annotator.models.models import ForeignKey, TableMetadata

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Dictionary queries
# ---------------------------------------------------------------------------
_PK_SQL = """
SELECT acc.COLUMN_NAME
FROM ALL_CONSTRAINTS ac
JOIN ALL_CONS_COLUMNS acc
  ON acc.OWNER = ac.OWNER
 AND acc.CONSTRAINT_NAME = ac.CONSTRAINT_NAME
WHERE ac.OWNER = :owner
  AND ac.CONSTRAINT_TYPE = 'P'
  AND ac.TABLE_NAME = :table_name
ORDER BY acc.POSITION
"""

_FK_HEADER_SQL = """
SELECT a.CONSTRAINT_NAME,
       a.TABLE_NAME,
       a_r.TABLE_NAME
FROM ALL_CONSTRAINTS a
JOIN ALL_CONSTRAINTS a_r
  ON a_r.OWNER = a.R_OWNER
 AND a_r.CONSTRAINT_NAME = a.R_CONSTRAINT_NAME
WHERE a.OWNER = :owner
  AND a.CONSTRAINT_TYPE = 'R'
  AND a.TABLE_NAME = :table_name
"""

_FK_COLUMNS_SQL = """
SELECT acc.CONSTRAINT_NAME,
       acc.COLUMN_NAME,
       acc_r.COLUMN_NAME
FROM ALL_CONS_COLUMNS acc
JOIN ALL_CONSTRAINTS ac
  ON ac.OWNER = acc.OWNER
 AND ac.CONSTRAINT_NAME = acc.CONSTRAINT_NAME
JOIN ALL_CONS_COLUMNS acc_r
  ON acc_r.OWNER = ac.R_OWNER
 AND acc_r.CONSTRAINT_NAME = ac.R_CONSTRAINT_NAME
 AND acc_r.POSITION = acc.POSITION
WHERE ac.OWNER = :owner
  AND ac.CONSTRAINT_TYPE = 'R'
  AND acc.TABLE_NAME = :table_name
ORDER BY acc.CONSTRAINT_NAME, acc.POSITION
"""


class OracleCatalogProvider(AbstractMetadataProvider):
    """
    ``AbstractMetadataProvider`` backed by an open ``oracledb`` connection.

    The connection is borrowed, never closed here; the caller owns its
    lifetime.

    Args:
        connection: Open ``oracledb`` connection (or any compatible mock).
    """

    def __init__(self, connection) -> None:
        self._connection = connection

    def load_table_metadata(self, schema: str, table: str) -> TableMetadata:
        owner = schema.upper()
        params = {"owner": owner, "table_name": table}

        cursor = self._connection.cursor()
        try:
            cursor.execute(_PK_SQL, params)
            primary_keys = [row[0] for row in cursor.fetchall()]

            cursor.execute(_FK_HEADER_SQL, params)
            headers = _index_headers(cursor.fetchall())

            cursor.execute(_FK_COLUMNS_SQL, params)
            foreign_keys = _group_pairs(cursor.fetchall(), headers)
        except oracledb.Error as e:
            raise MetadataUnavailable(str(e), schema=owner, table=table) from e
        finally:
            cursor.close()

        logger.debug(
            "Loaded %s.%s: pk=%s, fk=%s",
            owner, table, primary_keys, [fk.name for fk in foreign_keys],
        )
        return TableMetadata(
            table=table,
            primary_keys=primary_keys,
            foreign_keys=foreign_keys,
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _index_headers(rows: list[tuple]) -> dict[str, tuple[str, str]]:
    """Map upper-cased constraint name → ``(this_table, ref_table)``."""
    return {name.upper(): (this_table, ref_table) for name, this_table, ref_table in rows}


def _group_pairs(
    rows: list[tuple],
    headers: dict[str, tuple[str, str]],
) -> list[ForeignKey]:
    """
    Fold ``(constraint, this_column, ref_column)`` rows into ``ForeignKey``
    objects, keeping the first-seen order of constraints and the row order
    of pairs within each constraint.
    """
    by_name: dict[str, ForeignKey] = {}
    for constraint, this_col, ref_col in rows:
        header = headers.get(constraint.upper())
        if header is None:
            continue
        fk = by_name.get(constraint.upper())
        if fk is None:
            this_table, ref_table = header
            fk = ForeignKey(name=constraint, this_table=this_table, ref_table=ref_table)
            by_name[constraint.upper()] = fk
        fk.pairs.append((this_col, ref_col))
    return list(by_name.values())
