"""
Custom exceptions for the DTO annotator.

Hierarchy:
    AnnotatorError
    ├── ConnectionFailure     Catalog connection could not be opened.
    ├── MetadataUnavailable   Catalog query for one table failed.
    ├── WriteFailure          The annotated copy could not be written.
    └── SchemaDriftError      Mapped columns are missing from the catalog.

"No [Table] declared" and "nothing to inject" are per-file outcomes, not
errors; see ``annotator.pipeline``.
"""


class AnnotatorError(Exception):
    """Base class for all annotator errors."""


class ConnectionFailure(AnnotatorError):
    """
    Raised when the catalog connection (or its session setup) fails.

    Args:
        message: Human-readable description of the failure.
        dsn: The DSN that was being connected to.
    """

    def __init__(self, message: str, dsn: str | None = None) -> None:
        super().__init__(message)
        self.dsn = dsn

    def __str__(self) -> str:
        base = super().__str__()
        if self.dsn:
            return f"{base} | dsn={self.dsn}"
        return base


class MetadataUnavailable(AnnotatorError):
    """
    Raised when primary/foreign key metadata cannot be read for a table.

    Args:
        message: Human-readable description (usually the driver message).
        schema: Owner the query ran against.
        table: Table whose constraints were requested.
    """

    def __init__(
        self,
        message: str,
        schema: str | None = None,
        table: str | None = None,
    ) -> None:
        super().__init__(message)
        self.schema = schema
        self.table = table

    def __str__(self) -> str:
        base = super().__str__()
        if self.schema and self.table:
            return f"{base} | table={self.schema}.{self.table}"
        if self.table:
            return f"{base} | table={self.table}"
        return base


class WriteFailure(AnnotatorError):
    """
    Raised when the annotated copy of a source file cannot be written.

    Args:
        message: Human-readable description.
        path: Destination path of the failed write.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            return f"{base} | path={self.path}"
        return base


class SchemaDriftError(AnnotatorError):
    """
    Raised by the column check when mapped columns do not exist in Oracle.

    Args:
        message: Human-readable summary.
        offenders: The failing ``TableCheckResult`` objects.
    """

    def __init__(self, message: str, offenders: list | None = None) -> None:
        super().__init__(message)
        self.offenders = list(offenders or [])

    def __str__(self) -> str:
        base = super().__str__()
        if not self.offenders:
            return base
        lines = [base] + [f" - {r}" for r in self.offenders]
        return "\n".join(lines)
