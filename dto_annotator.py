"""
DTO Annotator: inject linq2db mapping attributes into C# DTOs from the
Oracle catalog.

Reads every ``*DTO.cs`` file under a directory, looks up the primary and
foreign keys of the table named in its ``[Table]`` attribute, and writes a
``*.novo.cs`` copy with ``[PrimaryKey]`` / ``[Column]`` / ``[Association]``
lines above the matching properties.  Originals are never touched.

Credentials:
    --conn user/password@host:port/service
or, when --conn is omitted, the environment (a .env file is loaded first):
    DB_DSN        Oracle DSN string  (e.g. localhost:1521/XEPDB1)
    DB_USER       Oracle username
    DB_PASSWORD   Oracle password

Other environment variables:
    FILE_SUFFIX                 Default for --suffix (DTO.cs)
    OUTPUT_MARKER               Inserted before the extension (.novo)
    DRY_RUN                     "true" behaves like --dry-run
    DB_CALL_TIMEOUT_MS          Round-trip timeout for catalog queries
    RESPECT_QUOTED_IDENTIFIERS  "true" makes `check` compare names exactly

Commands:
    annotate  Inject markers and write *.novo.cs copies.
    check     Verify that every [Column] a DTO maps exists in ALL_TAB_COLUMNS.

Usage examples:
    python dto_annotator.py annotate --root-dir src/Dtos --schema SALES \\
        --conn scott/tiger@localhost:1521/XEPDB1 --dry-run

    python dto_annotator.py check --root-dir src/Dtos --schema SALES --strict

Exit codes:
    0  Run completed (per-file errors are listed in the summary)
    1  check --strict found missing columns
    2  Configuration / argument / connection error
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys

from dotenv import load_dotenv

from annotator.configs.config import AnnotatorConfig
from annotator.configs.exceptions import AnnotatorError, SchemaDriftError
from annotator.discovery.catalog import OracleCatalogProvider
from annotator.discovery.column_check import ColumnExistenceValidator, raise_if_any_missing
from annotator.pipeline import run

logger = logging.getLogger("dto_annotator")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Config: env vars + CLI overrides
# ---------------------------------------------------------------------------

def _build_config(args: argparse.Namespace) -> AnnotatorConfig:
    """
    Priority order for each setting:
      1. CLI flag (--suffix, --dry-run)
      2. Environment variable
      3. AnnotatorConfig default
    """
    config = AnnotatorConfig()
    overrides: dict = {}
    if getattr(args, "suffix", None):
        overrides["file_suffix"] = args.suffix
    if getattr(args, "dry_run", False):
        overrides["dry_run"] = True
    return dataclasses.replace(config, **overrides) if overrides else config


# ---------------------------------------------------------------------------
# Oracle connection: --conn, else DB_DSN / DB_USER / DB_PASSWORD
# ---------------------------------------------------------------------------

def _build_connection(args: argparse.Namespace, config: AnnotatorConfig):
    """
    Open the catalog connection.  Exits 2 on missing credentials or a
    failed connect.
    """
    from annotator.discovery.oracle_client import connect, parse_connect_string

    if args.conn:
        try:
            user, password, dsn = parse_connect_string(args.conn)
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(2)
    else:
        dsn = os.environ.get("DB_DSN")
        user = os.environ.get("DB_USER")
        password = os.environ.get("DB_PASSWORD")
        missing = [k for k, v in [("DB_DSN", dsn), ("DB_USER", user), ("DB_PASSWORD", password)] if not v]
        if missing:
            print(
                f"ERROR: No --conn given and missing environment variable(s): "
                f"{', '.join(missing)}",
                file=sys.stderr,
            )
            sys.exit(2)

    try:
        return connect(dsn=dsn, user=user, password=password,
                       call_timeout_ms=config.call_timeout_ms)
    except AnnotatorError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)


def _close(conn) -> None:
    try:
        conn.close()
    except Exception as e:
        logger.warning("Error closing connection: %s", e)


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------

def _cmd_annotate(args: argparse.Namespace) -> int:
    config = _build_config(args)
    conn = _build_connection(args, config)
    try:
        results = run(
            root_dir=args.root_dir,
            schema=args.schema,
            provider=OracleCatalogProvider(conn),
            config=config,
        )
    finally:
        _close(conn)

    if not results:
        print(f"No files ending with '{config.file_suffix}' found in {args.root_dir}.")
        return 0

    print("\nSummary:")
    for r in results:
        print(f"- {r}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    config = _build_config(args)
    conn = _build_connection(args, config)
    try:
        validator = ColumnExistenceValidator(
            conn, respect_quoted_identifiers=config.respect_quoted_identifiers,
        )
        results = validator.validate(args.root_dir, config, schema=args.schema)
    except AnnotatorError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    finally:
        _close(conn)

    for r in results:
        print(r)

    if args.strict:
        try:
            raise_if_any_missing(results)
        except SchemaDriftError as e:
            print(str(e), file=sys.stderr)
            return 1
    return 0


# ---------------------------------------------------------------------------
# Argument parser (importable for tests)
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dto-annotator",
        description="Inject [PrimaryKey]/[Column]/[Association] into C# DTOs and save as *.novo.cs",
        epilog=(
            "Credentials come from --conn or from DB_DSN, DB_USER, DB_PASSWORD\n"
            "(environment or .env file)."
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    def _common_args(p):
        p.add_argument("--root-dir", required=True, dest="root_dir",
                       help="Root directory to scan")
        p.add_argument("--suffix", default=None,
                       help="File-name suffix to include (default: DTO.cs)")
        p.add_argument("--conn", default=None,
                       help="Oracle connection string user/password@dsn")

    p_annotate = sub.add_parser("annotate", help="Inject markers into DTO copies")
    _common_args(p_annotate)
    p_annotate.add_argument("--schema", required=True, help="Oracle schema/owner")
    p_annotate.add_argument("--dry-run", action="store_true", dest="dry_run",
                            help="Don't write files, only report")

    p_check = sub.add_parser("check", help="Check mapped columns exist in Oracle")
    _common_args(p_check)
    p_check.add_argument("--schema", default=None,
                         help="Oracle schema/owner (default: [Table] Schema, then session user)")
    p_check.add_argument("--strict", action="store_true",
                         help="Exit 1 if any mapped column is missing")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    handlers = {"annotate": _cmd_annotate, "check": _cmd_check}
    sys.exit(handlers[args.command](args))


if __name__ == "__main__":
    main()
