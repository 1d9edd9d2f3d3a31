"""
Reusable Oracle mock objects for catalog and column-check tests.

``MockConnection`` hands out ``MockCursor`` objects that share one result
pool, so consecutive ``execute`` calls (even across cursors) consume the
queued result sets in order.  Pass ``error`` to make every ``execute``
raise, e.g. ``oracledb.DatabaseError("ORA-00942: table or view does not exist")``.
"""

from __future__ import annotations

from typing import Any


class MockCursor:
    """
    Fake Oracle cursor.

    Accepts either::

        MockCursor(query_results=[[("ID",)]])     # private copy
        MockCursor(shared_results=some_list)      # shared reference
    """

    def __init__(
        self,
        shared_results: list[list[tuple]] | None = None,
        error: Exception | None = None,
        *,
        query_results: list[list[tuple]] | None = None,
    ) -> None:
        if shared_results is not None:
            self._shared_results = shared_results
        elif query_results is not None:
            self._shared_results = list(query_results)
        else:
            self._shared_results = []

        self._error = error
        self.executed: list[tuple[str, Any]] = []
        self._current_results: list[tuple] = []
        self.closed: bool = False

    def execute(self, sql: str, params=None) -> None:
        if self.closed:
            raise RuntimeError("MockCursor: execute() called on closed cursor.")
        self.executed.append((sql.strip(), params))
        if self._error is not None:
            raise self._error
        self._current_results = self._shared_results.pop(0) if self._shared_results else []

    def fetchall(self) -> list[tuple]:
        return list(self._current_results)

    def fetchone(self) -> tuple | None:
        return self._current_results[0] if self._current_results else None

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    @property
    def executed_sql(self) -> list[str]:
        return [sql for sql, _ in self.executed]


class MockConnection:
    """
    Fake Oracle connection.

    Every call to ``cursor()`` returns a fresh ``MockCursor`` sharing the
    connection's result pool.  ``cursor_obj`` is the most recent cursor.
    """

    def __init__(
        self,
        query_results: list[list[tuple]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._shared_results: list[list[tuple]] = list(query_results or [])
        self._error = error
        self.cursors: list[MockCursor] = []
        self.closed: bool = False

    @property
    def cursor_obj(self) -> MockCursor | None:
        return self.cursors[-1] if self.cursors else None

    def cursor(self) -> MockCursor:
        cur = MockCursor(shared_results=self._shared_results, error=self._error)
        self.cursors.append(cur)
        return cur

    @property
    def executed(self) -> list[tuple[str, Any]]:
        return [e for cur in self.cursors for e in cur.executed]

    def close(self) -> None:
        self.closed = True


def make_catalog_results(
    primary_keys: list[str],
    foreign_keys: list[dict] | None = None,
    table: str = "CUSTOMERS",
) -> list[list[tuple]]:
    """
    Build the three result sets ``OracleCatalogProvider`` consumes, in order:
    PK columns, FK headers, FK column pairs.

    Each foreign key dict: ``{"name": ..., "ref_table": ..., "pairs": [(this, ref), ...]}``.
    """
    foreign_keys = foreign_keys or []
    pk_rows = [(c,) for c in primary_keys]
    header_rows = [(fk["name"], table, fk["ref_table"]) for fk in foreign_keys]
    column_rows = [
        (fk["name"], this_col, ref_col)
        for fk in sorted(foreign_keys, key=lambda f: f["name"])
        for this_col, ref_col in fk["pairs"]
    ]
    return [pk_rows, header_rows, column_rows]
