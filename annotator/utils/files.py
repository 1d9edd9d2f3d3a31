"""
File operations for the annotator.

Finds candidate DTO files under a root directory and writes the annotated
copy next to each original.  The original file is never modified, moved,
or deleted.  Write errors fail loudly as ``WriteFailure`` rather than
being swallowed; the orchestrator decides what to do with them.
"""

from __future__ import annotations

from pathlib import Path

from annotator.configs.config import OUTPUT_ENCODING, SOURCE_ENCODING, AnnotatorConfig
from annotator.configs.exceptions import WriteFailure


def find_source_files(root_dir: Path | str, config: AnnotatorConfig) -> list[Path]:
    """
    Recursively list files under ``root_dir`` ending with ``config.file_suffix``.

    Copies written by an earlier run (``*.novo.cs``) are left out so that a
    loose suffix such as ``.cs`` does not feed the tool its own output.

    Returns:
        Matching paths, sorted for a stable processing and report order.
    """
    root = Path(root_dir)
    return sorted(
        p for p in root.rglob(f"*{config.file_suffix}")
        if p.is_file() and not config.is_generated(p)
    )


def read_source(path: Path | str) -> str:
    """
    Read a DTO file as text.

    Newlines are kept exactly as stored (``newline=""``) so that an unchanged
    file can be compared byte-for-byte with the injector's output.
    """
    with open(path, "r", encoding=SOURCE_ENCODING, newline="") as f:
        return f.read()


def write_annotated(
    source_path: Path | str,
    text: str,
    config: AnnotatorConfig,
) -> Path:
    """
    Write ``text`` to the annotated copy of ``source_path``.

    An existing copy from a previous run is overwritten.

    Args:
        source_path: The original DTO file.
        text:        Full annotated file content.
        config:      Supplies ``output_marker``.

    Returns:
        The path that was written.

    Raises:
        WriteFailure: If the file cannot be written.
    """
    dest = config.output_path_for(source_path)
    try:
        with open(dest, "w", encoding=OUTPUT_ENCODING, newline="") as f:
            f.write(text)
    except OSError as e:
        raise WriteFailure(f"Failed to write annotated copy: {e}", path=str(dest)) from e
    return dest
