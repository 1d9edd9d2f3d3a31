"""
Annotator configuration.

All tuneable constants live here. Import from this module everywhere;
never hardcode suffixes, marker names, or line terminators inline.

Usage:
    from annotator.configs.config import AnnotatorConfig
    cfg = AnnotatorConfig()                     # defaults
    cfg = AnnotatorConfig(file_suffix="Dto.cs")

Environment overrides (optional) can be loaded via .env / os.environ before
constructing the config object; this module does not load .env itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_FILE_SUFFIX: str = "DTO.cs"
"""Only files whose name ends with this suffix are scanned."""

DEFAULT_OUTPUT_MARKER: str = ".novo"
"""Inserted between stem and extension of the generated file: ``X.cs`` → ``X.novo.cs``."""

LINE_TERMINATOR: str = "\n"
"""Every rewritten file is joined with this terminator, whatever the input used."""

SOURCE_ENCODING: str = "utf-8-sig"
"""Read encoding. Tolerates the BOM Visual Studio writes on C# files."""

OUTPUT_ENCODING: str = "utf-8"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass(slots=True)
class AnnotatorConfig:
    """
    Runtime configuration for the annotator.

    Attributes:
        file_suffix: File-name suffix filter used when walking ``root_dir``.
        output_marker: Inserted before the extension of the generated copy.
            Files already carrying it are never picked up as inputs.
        dry_run: If True, report what would be written but write nothing.
        call_timeout_ms: Round-trip timeout applied to the catalog connection.
            ``0`` leaves the driver default (no timeout) in place.
        respect_quoted_identifiers: Column check only. If True, compare mapped
            and catalog names exactly instead of upper-casing both sides.
    """

    file_suffix: str = field(
        default_factory=lambda: os.environ.get("FILE_SUFFIX", DEFAULT_FILE_SUFFIX)
    )
    output_marker: str = field(
        default_factory=lambda: os.environ.get("OUTPUT_MARKER", DEFAULT_OUTPUT_MARKER)
    )
    dry_run: bool = field(default_factory=lambda: _env_flag("DRY_RUN"))
    call_timeout_ms: int = field(
        default_factory=lambda: int(os.environ.get("DB_CALL_TIMEOUT_MS", "0"))
    )
    respect_quoted_identifiers: bool = field(
        default_factory=lambda: _env_flag("RESPECT_QUOTED_IDENTIFIERS")
    )

    def output_path_for(self, source_path: Path | str) -> Path:
        """
        Return the path of the annotated copy written next to ``source_path``.

        ``CustomerDTO.cs`` → ``CustomerDTO.novo.cs`` with the default marker.
        """
        source = Path(source_path)
        return source.with_name(f"{source.stem}{self.output_marker}{source.suffix}")

    def is_generated(self, path: Path | str) -> bool:
        """True if ``path`` looks like a copy this tool wrote on an earlier run."""
        p = Path(path)
        return p.stem.endswith(self.output_marker)
