"""
Catalog metadata loader: test_catalog.py

Covers (mocked DB):
  - PK columns returned in query order (POSITION order from Oracle)
  - Owner upper-cased, table passed through as declared
  - FK headers + column rows folded into ForeignKey objects
  - Composite FK pairs keep POSITION order
  - Column rows without a header row are ignored
  - Constraint name matching between headers and columns is case-insensitive
  - No keys → empty TableMetadata
  - oracledb.Error during a query → MetadataUnavailable with schema/table
  - Cursor closed on success and on failure
"""

from __future__ import annotations

import sys
import pathlib

_root = str(pathlib.Path(__file__).parent.parent)
if _root not in sys.path:
    sys.path.insert(0, _root)

import oracledb
import pytest

from tests.fixtures.oracle_mocks import MockConnection, make_catalog_results

from annotator.configs.exceptions import AnnotatorError, MetadataUnavailable
from annotator.discovery.catalog import OracleCatalogProvider


# ============================================================================
# Happy path
# ============================================================================

class TestLoadTableMetadata:
    def test_primary_keys_in_order(self):
        conn = MockConnection(make_catalog_results(["ORDER_ID", "LINE_NO"]))
        meta = OracleCatalogProvider(conn).load_table_metadata("sales", "ORDER_LINES")
        assert meta.table == "ORDER_LINES"
        assert meta.primary_keys == ["ORDER_ID", "LINE_NO"]
        assert meta.foreign_keys == []

    def test_three_queries_with_binds(self):
        conn = MockConnection(make_catalog_results(["ID"]))
        OracleCatalogProvider(conn).load_table_metadata("sales", "Customers")
        executed = conn.executed
        assert len(executed) == 3
        for _, params in executed:
            assert params == {"owner": "SALES", "table_name": "Customers"}
        assert "CONSTRAINT_TYPE = 'P'" in executed[0][0]
        assert "ORDER BY acc.POSITION" in executed[0][0]
        assert "R_CONSTRAINT_NAME" in executed[1][0]
        assert "acc_r.POSITION = acc.POSITION" in executed[2][0]

    def test_foreign_keys_grouped(self):
        results = make_catalog_results(
            ["CUSTOMER_ID"],
            [
                {"name": "FK_CUST_COMPANY", "ref_table": "COMPANY",
                 "pairs": [("COMPANY_ID", "ID")]},
                {"name": "FK_CUST_REGION", "ref_table": "REGION",
                 "pairs": [("REGION_CODE", "CODE"), ("COUNTRY_CODE", "COUNTRY")]},
            ],
        )
        meta = OracleCatalogProvider(MockConnection(results)).load_table_metadata("S", "CUSTOMERS")
        assert [fk.name for fk in meta.foreign_keys] == ["FK_CUST_COMPANY", "FK_CUST_REGION"]
        company, region = meta.foreign_keys
        assert company.this_table == "CUSTOMERS"
        assert company.ref_table == "COMPANY"
        assert company.pairs == [("COMPANY_ID", "ID")]
        assert region.pairs == [("REGION_CODE", "CODE"), ("COUNTRY_CODE", "COUNTRY")]

    def test_column_rows_without_header_ignored(self):
        results = [
            [],
            [("FK_A", "T", "PARENT")],
            [("FK_A", "P_ID", "ID"), ("FK_ORPHAN", "X_ID", "ID")],
        ]
        meta = OracleCatalogProvider(MockConnection(results)).load_table_metadata("S", "T")
        assert [fk.name for fk in meta.foreign_keys] == ["FK_A"]

    def test_constraint_name_match_case_insensitive(self):
        results = [
            [],
            [("fk_a", "T", "PARENT")],
            [("FK_A", "P_ID", "ID")],
        ]
        meta = OracleCatalogProvider(MockConnection(results)).load_table_metadata("S", "T")
        assert meta.foreign_keys[0].pairs == [("P_ID", "ID")]

    def test_no_keys(self):
        meta = OracleCatalogProvider(MockConnection([[], [], []])).load_table_metadata("S", "T")
        assert meta.is_empty

    def test_cursor_closed(self):
        conn = MockConnection(make_catalog_results(["ID"]))
        OracleCatalogProvider(conn).load_table_metadata("S", "T")
        assert conn.cursor_obj.closed
        assert not conn.closed


# ============================================================================
# Failure
# ============================================================================

class TestMetadataUnavailable:
    def _failing(self):
        return MockConnection(error=oracledb.DatabaseError("ORA-00942: table or view does not exist"))

    def test_driver_error_wrapped(self):
        with pytest.raises(MetadataUnavailable) as exc_info:
            OracleCatalogProvider(self._failing()).load_table_metadata("sales", "NOPE")
        err = exc_info.value
        assert err.schema == "SALES"
        assert err.table == "NOPE"
        assert "ORA-00942" in str(err)
        assert "table=SALES.NOPE" in str(err)
        assert isinstance(err, AnnotatorError)

    def test_cursor_closed_on_failure(self):
        conn = self._failing()
        with pytest.raises(MetadataUnavailable):
            OracleCatalogProvider(conn).load_table_metadata("S", "T")
        assert conn.cursor_obj.closed
