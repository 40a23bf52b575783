"""The catalog of BLAST databases under one directory.

This module:
- Scans the database directory with ``blastdbcmd -list`` and registers every
  database found (multi-volume fragments excluded)
- Retrieves loci by accession from the registered databases
- Finds FASTA files in the directory that are not formatted yet and formats
  them with ``makeblastdb``

Formatted database files must sit next to their source FASTA, with the same
dirname and basename, for a FASTA to be recognised as already formatted. They
must also be built with ``-parse_seqids`` for retrieval to work; files
formatted here always are.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import os
import threading
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from .confirm import Confirmer, Proposal
from .database import Database, database_id
from .errors import BlastDatabaseError, DatabaseToolFailure, NoDatabaseFound
from .io_utils import derive_title, is_multipart_database_name, probably_fasta, sample_sequences
from .sequence import NUCLEOTIDE, PROTEIN, guess_type
from .shell import ToolRunner

# blastdbcmd -list output: path, title, type, #sequences, #residues, date.
LIST_OUTFMT = "%f\t%t\t%p\t%n\t%l\t%d"
LIST_COLS = ["name", "title", "type", "nsequences", "ncharacters", "updated_on"]
DATABASE_ERROR = "BLAST Database error"

NOT_FOUND = "# ERROR: {locus} not found in any database"


class DatabaseRegistry:
    """Ordered collection of :class:`Database` keyed by database id.

    Registration order decides which database answers when an accession is
    present in more than one of them. Accessions should therefore be unique
    across the catalog; this is not checked.
    """

    def __init__(self, database_dir: str, runner: ToolRunner | None = None):
        self.database_dir = database_dir
        self.runner = runner or ToolRunner()
        self._collection: Dict[str, Database] = {}
        self._lock = threading.RLock()

    # Collection

    def register(self, database: Database) -> None:
        with self._lock:
            self._collection[database.id] = database

    def lookup_by_ids(self, ids) -> List[Optional[Database]]:
        if isinstance(ids, str):
            ids = [ids]
        with self._lock:
            return [self._collection.get(i) for i in ids]

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._collection)

    def all(self) -> List[Database]:
        with self._lock:
            return list(self._collection.values())

    def __iter__(self) -> Iterator[Database]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._collection)

    def __contains__(self, path: str) -> bool:
        return database_id(path) in self._collection

    def first(self) -> Optional[Database]:
        dbs = self.all()
        return dbs[0] if dbs else None

    def clear(self) -> None:
        with self._lock:
            self._collection.clear()

    def group_by(self, key: Callable[[Database], object]) -> Dict[object, List[Database]]:
        groups: Dict[object, List[Database]] = {}
        for db in self.all():
            groups.setdefault(key(db), []).append(db)
        return groups

    def to_json(self) -> str:
        return json.dumps([db.to_dict() for db in self.all()])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([db.to_dict() for db in self.all()], columns=LIST_COLS + ["id", "category"])

    # Retrieval

    def resolve(self, loci: str | None) -> str | None:
        """Retrieve the given loci from the catalogued databases.

        ``loci`` is a comma separated string such as
        ``"accession_1,accession_2:start-stop,accession_3"``. Returns FASTA
        text with the sequences in the requested order; a locus found in no
        database is replaced by a ``# ERROR: ...`` comment line. Each locus is
        taken from the first database, in registration order, that has it.
        """
        if not loci:
            return None
        # Double commas are typos in external input; drop the empty pieces.
        parts = [p for p in loci.split(",") if p]
        dbs = self.all()
        seqs = []
        for locus in parts:
            accession, _, coords = locus.partition(":")
            seq = None
            for db in dbs:
                seq = db.retrieve(accession, coords or None)
                if seq:
                    break
            seqs.append(seq or NOT_FOUND.format(locus=locus))
        return "\n".join(seqs)

    # Scanning

    def list_databases(self) -> str:
        """Run ``blastdbcmd -recursive -list`` over the database directory."""
        cmd = ["blastdbcmd", "-recursive", "-list", self.database_dir, "-list_outfmt", LIST_OUTFMT]
        try:
            out, err = self.runner(cmd)
        except DatabaseToolFailure as e:
            raise BlastDatabaseError(e.cmd, e.stderr, e.returncode) from e
        if DATABASE_ERROR in err:
            raise BlastDatabaseError(cmd, err)
        return out

    def scan(self) -> int:
        """Register every database under the directory; return how many were registered."""
        logger = logging.getLogger("blastdb_catalog")
        out = self.list_databases()
        if not out.strip():
            raise NoDatabaseFound(self.database_dir)
        df = pd.read_csv(io.StringIO(out), sep="\t", names=LIST_COLS, index_col=False,
                         dtype=str, na_filter=False, quoting=csv.QUOTE_NONE)
        df = df.fillna("")
        for c in ("nsequences", "ncharacters"):
            df[c] = pd.to_numeric(df[c], errors="coerce").fillna(0).astype(int)
        n = 0
        for row in df.itertuples(index=False):
            if is_multipart_database_name(row.name):
                logger.debug("Skipping volume of multi-part database: %s", row.name)
                continue
            self.register(Database(
                row.name, row.title, row.type,
                row.nsequences, row.ncharacters, row.updated_on,
                runner=self.runner,
            ))
            n += 1
        logger.info("Found %d BLAST database(s) in %s", n, self.database_dir)
        return n

    # Formatting

    def find_unformatted_fastas(self) -> List[Tuple[str, str]]:
        """Return ``(path, sequence_type)`` for FASTA files that need formatting."""
        logger = logging.getLogger("blastdb_catalog")
        found: List[Tuple[str, str]] = []
        for root, dirs, files in os.walk(self.database_dir):
            dirs.sort()
            for fn in sorted(files):
                path = os.path.join(root, fn)
                if path in self:
                    continue
                if not probably_fasta(path):
                    continue
                seq_type = guess_sequence_type(path)
                if seq_type is None:
                    logger.debug("Could not determine sequence type, skipping: %s", path)
                    continue
                found.append((path, seq_type))
        return found

    def format_database(self, path: str, seq_type: str, confirm: Confirmer) -> bool:
        """Offer ``path`` for formatting and run makeblastdb if accepted."""
        logger = logging.getLogger("blastdb_catalog")
        proposal = Proposal(file=path, type=seq_type, title=derive_title(os.path.basename(path)))
        decision = confirm.propose(proposal)
        if not decision.accepted:
            logger.info("Not formatting: %s", path)
            return False
        cmd = ["makeblastdb", "-parse_seqids", "-hash_index", "-in", path,
               "-dbtype", seq_type[:4], "-title", decision.title or proposal.title,
               "-taxid", str(proposal.taxid if decision.taxid is None else decision.taxid)]
        out, err = self.runner(cmd)
        for line in (out + err).splitlines():
            if line.strip():
                logger.info("makeblastdb: %s", line)
        return True

    def format_databases(self, confirm: Confirmer, progress: bool = False) -> List[Tuple[str, str]]:
        """Format every unformatted FASTA the confirmer accepts.

        Returns the ``(path, sequence_type)`` pairs that were formatted. Call
        :meth:`scan` afterwards to register the new databases.
        """
        todo = self.find_unformatted_fastas()
        done = []
        for path, seq_type in tqdm(todo, desc="makeblastdb", unit="file",
                                   dynamic_ncols=True, disable=not progress):
            if self.format_database(path, seq_type, confirm):
                done.append((path, seq_type))
        return done


def guess_sequence_type(path: str) -> str | None:
    """Guess protein or nucleotide from the start of a FASTA file.

    Every sampled sequence long enough to classify must agree; otherwise the
    file is ambiguous and None is returned.
    """
    types = {guess_type(s) for s in sample_sequences(path)} - {None}
    if len(types) == 1 and types <= {PROTEIN, NUCLEOTIDE}:
        return types.pop()
    return None
