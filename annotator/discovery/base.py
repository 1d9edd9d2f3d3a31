"""
Abstract base class for catalog metadata providers.

The orchestrator and the injector only ever see ``TableMetadata``; where it
comes from is behind this interface.  ``OracleCatalogProvider`` is the
production implementation; tests plug in a static provider.

Usage:
    provider = OracleCatalogProvider(connection)
    meta = provider.load_table_metadata("SALES", "CUSTOMERS")
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from annotator.models.models import TableMetadata


class AbstractMetadataProvider(ABC):
    """
    Interface for anything that can describe a table's keys.

    Implementations must return primary keys ordered by key position and
    foreign keys whose ``pairs`` are ordered by key position, and must raise
    ``MetadataUnavailable`` when the schema/table cannot be queried.
    """

    @abstractmethod
    def load_table_metadata(self, schema: str, table: str) -> TableMetadata:
        """
        Return primary and foreign key metadata for ``schema.table``.

        Raises:
            MetadataUnavailable: If the catalog query fails.
        """
