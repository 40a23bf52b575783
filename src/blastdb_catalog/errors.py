"""Exceptions raised by the catalog.

A missing accession is not an error: lookups return None for it. Everything
here is fatal for the operation that raised it.
"""

from __future__ import annotations

from typing import Sequence


class CatalogError(Exception):
    """Base class for catalog errors."""


class DatabaseToolFailure(CatalogError):
    """A BLAST+ executable exited abnormally or could not be started."""

    def __init__(self, cmd: Sequence[str], stderr: str = "", returncode: int | None = None):
        self.cmd = list(cmd)
        self.stderr = stderr or ""
        self.returncode = returncode
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"Command failed: {' '.join(self.cmd)}"
        if self.returncode is not None:
            msg += f" (exit status {self.returncode})"
        if self.stderr.strip():
            msg += f"\n{self.stderr.strip()}"
        return msg


class BlastDatabaseError(DatabaseToolFailure):
    """blastdbcmd reported a problem with one of the databases while listing them."""

    def _message(self) -> str:
        return (
            "BLAST database error while running:\n"
            f"  {' '.join(self.cmd)}\n"
            f"{self.stderr.strip()}\n"
            "Make sure all databases were formatted with BLAST+ and are not corrupt."
        )


class NoDatabaseFound(CatalogError):
    """The database directory does not contain any BLAST database."""

    def __init__(self, database_dir: str):
        self.database_dir = database_dir
        super().__init__(f"No BLAST database found in: {database_dir}")
