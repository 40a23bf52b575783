"""Command-line interface.

This module implements:
- ``list``: scan the database directory and print or export the catalog
- ``get``: retrieve loci by accession from the catalogued databases
- ``make-dbs``: find unformatted FASTA files and format them with makeblastdb
"""

from __future__ import annotations

import argparse
import logging
import textwrap

from .blast_tools import require_blast_plus
from .config import get_bin_dir, get_database_dir
from .confirm import AutoConfirm, ConsolePrompt
from .errors import CatalogError, NoDatabaseFound
from .io_utils import export_catalog
from .registry import DatabaseRegistry
from .shell import ToolRunner
from . import __version__


def build_parser():
    class _Fmt(argparse.ArgumentDefaultsHelpFormatter, argparse.RawDescriptionHelpFormatter):
        """Help formatter combining defaults + multi-line descriptions."""

    description = (
        "blastdb_catalog: catalog of the BLAST+ databases in a directory.\n\n"
        "Lists databases, retrieves sequences by accession across all of them and\n"
        "formats FASTA files that are not BLAST databases yet.\n"
        "NCBI BLAST+ (blastdbcmd, makeblastdb) is required."
    )
    epilog = textwrap.dedent(
        """\
        Examples:
          # Show every database found under the default directory
          blastdb-catalog list

          # Export the catalog as a spreadsheet
          blastdb-catalog --database-dir /data/blastdb list --output catalog.xlsx

          # Retrieve two sequences, the second one only from residue 10 to 50
          blastdb-catalog get "XP_001,XP_002:10-50"

          # Format all unformatted FASTA files without asking
          blastdb-catalog make-dbs --yes
        """
    )

    p = argparse.ArgumentParser(
        prog="blastdb-catalog",
        description=description,
        epilog=epilog,
        formatter_class=_Fmt,
    )
    p.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show program version and exit.",
    )
    p.add_argument("--database-dir", help="Directory scanned (recursively) for BLAST databases and FASTA files.")
    p.add_argument("--bin", help="Directory containing the BLAST+ executables (default: PATH).")
    p.add_argument(
        "--print-database-dir",
        action="store_true",
        help="Print the resolved database directory and exit.",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity.",
    )

    sub = p.add_subparsers(dest="command")

    p_list = sub.add_parser("list", help="List the databases in the catalog.", formatter_class=_Fmt)
    p_list.add_argument("--output", help="Write the catalog to this file instead of printing it.")
    p_list.add_argument("--format", choices=["excel", "parquet"], help="Format used with --output (default: from the file extension).")

    p_get = sub.add_parser("get", help="Retrieve sequences by accession.", formatter_class=_Fmt)
    p_get.add_argument("loci", help="Comma-separated accessions, each optionally followed by :start-stop.")

    p_make = sub.add_parser("make-dbs", help="Format FASTA files that are not BLAST databases yet.", formatter_class=_Fmt)
    p_make.add_argument("--yes", action="store_true", help="Do not ask; use suggested titles and no taxid.")

    return p


def cmd_list(registry: DatabaseRegistry, a) -> int:
    registry.scan()
    if a.output:
        try:
            fmt = export_catalog(registry.to_frame(), a.output, a.format)
        except ValueError as e:
            raise SystemExit(str(e))
        print(f"Catalog written to: {a.output} ({fmt})", flush=True)
        return 0
    for db in registry:
        print(db, flush=True)
    return 0


def cmd_get(registry: DatabaseRegistry, a) -> int:
    registry.scan()
    out = registry.resolve(a.loci)
    if out:
        print(out, flush=True)
    return 0


def cmd_make_dbs(registry: DatabaseRegistry, a) -> int:
    logger = logging.getLogger("blastdb_catalog")
    try:
        registry.scan()
    except NoDatabaseFound:
        # Nothing formatted yet; every FASTA is a candidate.
        logger.info("No BLAST database yet in %s", registry.database_dir)
    confirm = AutoConfirm() if a.yes else ConsolePrompt()
    done = registry.format_databases(confirm, progress=a.yes)
    if not done:
        print("No FASTA files to format.", flush=True)
        return 0
    registry.scan()
    print(f"\nFormatted {len(done)} FASTA file(s):", flush=True)
    for path, seq_type in done:
        state = "OK" if path in registry else "not found by blastdbcmd"
        print(f"  - {path} ({seq_type})  →  {state}", flush=True)
    return 0


COMMANDS = {
    "list": cmd_list,
    "get": cmd_get,
    "make-dbs": cmd_make_dbs,
}


def main(argv=None):
    p = build_parser()
    a = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, a.log_level), format="%(levelname)s: %(message)s")

    database_dir = get_database_dir(a.database_dir)
    if a.print_database_dir:
        print(database_dir)
        return 0
    if not a.command:
        p.print_help()
        return 2

    runner = ToolRunner(get_bin_dir(a.bin))
    require_blast_plus(runner)

    registry = DatabaseRegistry(database_dir, runner=runner)
    try:
        return COMMANDS[a.command](registry, a)
    except CatalogError as e:
        raise SystemExit(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
