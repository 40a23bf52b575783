"""Database directory and BLAST+ location.

The database directory defaults to a per-user folder, with optional overrides
via the BLASTDB_CATALOG_DATABASE_DIR environment variable or the
--database-dir CLI argument. BLAST+ executables are taken from PATH unless
BLASTDB_CATALOG_BIN or --bin names a directory holding them.
"""

from __future__ import annotations

import os
from pathlib import Path


ENV_DATABASE_DIR = "BLASTDB_CATALOG_DATABASE_DIR"
ENV_BIN = "BLASTDB_CATALOG_BIN"


def default_database_dir() -> str:
    """Return the directory scanned for databases when none is given."""
    env = os.environ.get(ENV_DATABASE_DIR)
    if env:
        return os.path.abspath(os.path.expanduser(env))
    return os.path.join(str(Path.home()), ".blastdb_catalog", "db")


def get_database_dir(database_dir: str | None = None, ensure: bool = False) -> str:
    """Resolve the database directory and optionally create it."""
    p = os.path.abspath(os.path.expanduser(database_dir)) if database_dir else default_database_dir()
    if ensure:
        os.makedirs(p, exist_ok=True)
    return p


def get_bin_dir(bin_dir: str | None = None) -> str | None:
    """Resolve the BLAST+ bin directory; None means use PATH."""
    p = bin_dir or os.environ.get(ENV_BIN)
    if not p:
        return None
    p = os.path.abspath(os.path.expanduser(p))
    if not os.path.isdir(p):
        raise SystemExit(f"BLAST+ bin directory does not exist: {p}")
    return p
