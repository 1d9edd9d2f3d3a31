"""
Orchestrator for the DTO annotator.

For every ``*<suffix>`` file under the root directory:

  1. Read the file.
  2. Extract the ``[Table]`` name → skip the file if there is none.
  3. Load primary/foreign keys from the metadata provider.
  4. Inject markers → stop here if nothing changed.
  5. Write ``<stem>.novo<ext>`` next to the original (skipped in dry_run).

Failure policy:
  - Any exception inside steps 1-5 is caught, logged, and recorded on that
    file's ``AnnotateResult`` with outcome ``"error"``.  The next file is
    still attempted.
  - There are no retries; each file is attempted once per run.
  - The original file is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from annotator.configs.config import AnnotatorConfig
from annotator.discovery.base import AbstractMetadataProvider
from annotator.transformers.marker_injector import inject_annotations
from annotator.transformers.table_name import parse_table_name
from annotator.utils.files import find_source_files, read_source, write_annotated

logger = logging.getLogger(__name__)

Outcome = Literal["no_table", "unchanged", "written", "dry_run", "error"]


# ---------------------------------------------------------------------------
# Result object
# ---------------------------------------------------------------------------

@dataclass
class AnnotateResult:
    """
    Summary of a single file's run.

    Attributes:
        path:        The DTO file that was examined.
        table:       Table from its ``[Table]`` attribute, or ``None``.
        status:      Human-readable status for the summary line.
        outcome:     Machine-readable outcome.
        output_path: Annotated copy written (or that would be written in dry-run).
        error:       Exception that stopped this file, if any.
    """
    path: Path
    table: str | None
    status: str
    outcome: Outcome
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.outcome != "error"

    def __str__(self) -> str:
        line = f"{self.path.name}: {self.status}"
        if self.table is not None:
            line += f" (Table: {self.table})"
        return line


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def run(
    root_dir: Path | str,
    schema: str,
    provider: AbstractMetadataProvider,
    config: AnnotatorConfig,
) -> list[AnnotateResult]:
    """
    Annotate every matching DTO under ``root_dir``.

    Args:
        root_dir: Directory searched recursively.
        schema:   Oracle owner the tables live in.
        provider: Source of key metadata.
        config:   Supplies the suffix filter, output marker and ``dry_run``.

    Returns:
        One ``AnnotateResult`` per file, in processing order.  Empty if no
        file matched.
    """
    files = find_source_files(root_dir, config)
    if not files:
        logger.warning(
            "No files ending with '%s' found under %s", config.file_suffix, root_dir,
        )
        return []

    logger.info("Found %d candidate file(s) under %s", len(files), root_dir)
    return [annotate_file(path, schema, provider, config) for path in files]


def annotate_file(
    path: Path | str,
    schema: str,
    provider: AbstractMetadataProvider,
    config: AnnotatorConfig,
) -> AnnotateResult:
    """Run steps 1-5 for one file.  Never raises; errors land on the result."""
    path = Path(path)
    table = None
    try:
        content = read_source(path)
        table = parse_table_name(content)
        if table is None:
            return AnnotateResult(path, None, "No [Table] - skipped", "no_table")

        meta = provider.load_table_metadata(schema, table)
        if meta.is_empty:
            logger.warning("%s: no keys found for %s.%s", path.name, schema, table)
        injected = inject_annotations(content, meta)
        if not injected.changed:
            return AnnotateResult(path, table, "Nothing to inject", "unchanged")

        output_path = config.output_path_for(path)
        if config.dry_run:
            logger.info(
                "Dry-run: %s would get %d marker(s)", path.name, len(injected.inserted),
            )
            return AnnotateResult(
                path, table,
                f"DRY-RUN: would write {output_path.name} with annotations",
                "dry_run",
                output_path=output_path,
            )

        written = write_annotated(path, injected.text, config)
        logger.info("Wrote %s (%d marker(s))", written, len(injected.inserted))
        return AnnotateResult(
            path, table,
            f"Annotations injected into {written.name}",
            "written",
            output_path=written,
        )

    except Exception as e:
        logger.error("Failed to annotate %s: %s", path.name, e)
        return AnnotateResult(path, table, f"Error: {e}", "error", error=e)
