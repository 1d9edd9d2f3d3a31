"""
Column-existence check: does every column a DTO maps exist in Oracle?

Independent of the injector.  It reads the markers a DTO already carries
(``[Table]`` and ``[Column]``), asks ``ALL_TAB_COLUMNS`` what the table
really has, and reports what is missing.  Useful after a schema change,
or as a gate in a build pipeline via ``raise_if_any_missing``.

Name comparison:
  - Default: both sides upper-cased, since unquoted Oracle identifiers
    are stored upper-case.
  - ``respect_quoted_identifiers=True``: exact comparison, for schemas
    built with quoted mixed-case names.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import oracledb

from annotator.configs.config import AnnotatorConfig
from annotator.configs.exceptions import MetadataUnavailable, SchemaDriftError
from annotator.transformers.table_name import parse_table_name, parse_table_schema
from annotator.utils.files import find_source_files, read_source

logger = logging.getLogger(__name__)

_COLUMN_RE = re.compile(
    r'\[Column\s*\(\s*(?:Name\s*=\s*)?"(?P<column>[^"]+)"',
    re.IGNORECASE,
)

_CURRENT_USER_SQL = "SELECT USER FROM DUAL"

_TAB_COLUMNS_SQL = """
SELECT COLUMN_NAME
FROM ALL_TAB_COLUMNS
WHERE OWNER = :owner
  AND TABLE_NAME = :table_name
"""


@dataclass
class TableCheckResult:
    """
    Result of checking one DTO against the catalog.

    Attributes:
        entity:          DTO file name the mapping came from.
        schema:          Owner that was queried.
        table:           Table that was queried.
        missing_columns: Mapped columns absent from ``ALL_TAB_COLUMNS``, sorted.
    """
    entity: str
    schema: str | None
    table: str
    missing_columns: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing_columns

    def __str__(self) -> str:
        head = f"[{self.entity}] {self.schema}.{self.table} => "
        if self.ok:
            return head + "OK"
        return head + "Missing: " + ", ".join(self.missing_columns)


def parse_mapped_columns(content: str) -> list[str]:
    """Return column names from ``[Column]`` markers, in file order, without repeats."""
    seen: dict[str, None] = {}
    for m in _COLUMN_RE.finditer(content):
        seen.setdefault(m.group("column"), None)
    return list(seen)


class ColumnExistenceValidator:
    """
    Checks DTO column mappings against ``ALL_TAB_COLUMNS``.

    Args:
        connection: Open ``oracledb`` connection (or any compatible mock).
        respect_quoted_identifiers: Compare names exactly instead of
            upper-casing both sides.
    """

    def __init__(self, connection, respect_quoted_identifiers: bool = False) -> None:
        self._connection = connection
        self._respect_quoted = respect_quoted_identifiers
        self._current_user: str | None = None

    def _norm(self, name: str) -> str:
        return name if self._respect_quoted else name.upper()

    def current_user(self) -> str:
        """Session user, queried once and cached; the default owner."""
        if self._current_user is None:
            cursor = self._connection.cursor()
            try:
                cursor.execute(_CURRENT_USER_SQL)
                row = cursor.fetchone()
            except oracledb.Error as e:
                raise MetadataUnavailable(f"Could not resolve session user: {e}") from e
            finally:
                cursor.close()
            self._current_user = row[0] if row else ""
        return self._current_user

    def fetch_columns(self, owner: str, table: str) -> set[str]:
        cursor = self._connection.cursor()
        try:
            cursor.execute(_TAB_COLUMNS_SQL, {"owner": owner, "table_name": table})
            rows = cursor.fetchall()
        except oracledb.Error as e:
            raise MetadataUnavailable(str(e), schema=owner, table=table) from e
        finally:
            cursor.close()
        return {self._norm(r[0]) for r in rows}

    def check_content(
        self,
        content: str,
        entity: str,
        schema: str | None = None,
    ) -> TableCheckResult | None:
        """
        Check one DTO's text.

        Owner resolution: ``Schema =`` argument of ``[Table]``, then
        ``schema``, then the session user.

        Returns:
            ``TableCheckResult``, or ``None`` if the text has no ``[Table]``.
        """
        table = parse_table_name(content)
        if table is None:
            return None

        owner = parse_table_schema(content) or schema or self.current_user()
        owner = self._norm(owner)
        table = self._norm(table)

        mapped = [self._norm(c) for c in parse_mapped_columns(content)]
        db_columns = self.fetch_columns(owner, table)
        missing = sorted({c for c in mapped if c not in db_columns})

        return TableCheckResult(
            entity=entity, schema=owner, table=table, missing_columns=missing,
        )

    def validate(
        self,
        root_dir: Path | str,
        config: AnnotatorConfig,
        schema: str | None = None,
    ) -> list[TableCheckResult]:
        """Check every mapped DTO under ``root_dir``; files without ``[Table]`` are skipped."""
        results = []
        for path in find_source_files(root_dir, config):
            result = self.check_content(read_source(path), path.name, schema)
            if result is None:
                logger.debug("%s has no [Table]; not checked", path.name)
                continue
            if not result.ok:
                logger.warning("%s", result)
            results.append(result)
        return results


def raise_if_any_missing(results: list[TableCheckResult]) -> None:
    """
    Raise if any checked table is missing mapped columns.

    Raises:
        SchemaDriftError: Listing every offending ``TableCheckResult``.
    """
    offenders = [r for r in results if not r.ok]
    if offenders:
        raise SchemaDriftError("Columns missing in the database:", offenders=offenders)
