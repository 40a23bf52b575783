"""One formatted BLAST database.

A :class:`Database` is created from one line of ``blastdbcmd -list`` output
and never changes afterwards. Its identity is the MD5 digest of its name
(the database path), so two entries with the same name are the same
database whatever their other attributes say.

Sequence retrieval relies on the database having been formatted with
``makeblastdb -parse_seqids``.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from .errors import DatabaseToolFailure
from .sequence import NUCLEOTIDE, PROTEIN
from .shell import ToolRunner


class Category(str, Enum):
    SINGLE_AMPLIFIED_GENOME = "Single_Amplified_Genome"
    COASSEMBLED_GENOME = "Coassembled_Genomes"
    PREDICTED_GENE = "Predicted_Gene"
    PREDICTED_PROTEIN = "Predicted_Protein"
    REFERENCE_GENOME = "Reference_Genome"
    UNCLASSIFIED = "NA"


# Checked top to bottom against the database name; first hit wins.
CATEGORY_PATTERNS: Tuple[Tuple[str, Category], ...] = (
    ("SAG", Category.SINGLE_AMPLIFIED_GENOME),
    ("coassembly", Category.COASSEMBLED_GENOME),
    ("coas_trans", Category.PREDICTED_GENE),
    ("protein", Category.PREDICTED_PROTEIN),
    ("reference_genome", Category.REFERENCE_GENOME),
)

SEQUENCE_TYPES = (PROTEIN, NUCLEOTIDE)

# blastdbcmd's ways of saying the accession is not in the database.
_ABSENT_RE = re.compile(r"Entry not found|Skipped \S+|No valid entries", re.I)


def classify(name: str) -> Category:
    for pattern, category in CATEGORY_PATTERNS:
        if pattern in name:
            return category
    return Category.UNCLASSIFIED


def database_id(name: str) -> str:
    return hashlib.md5(name.encode("utf-8")).hexdigest()


@dataclass(frozen=True, eq=False)
class Database:
    name: str
    title: str
    type: str
    nsequences: int = 0
    ncharacters: int = 0
    updated_on: str = ""
    runner: ToolRunner = field(default_factory=ToolRunner, repr=False)
    category: Category = field(init=False)
    id: str = field(init=False)

    def __post_init__(self):
        seq_type = str(self.type).strip().lower()
        if seq_type not in SEQUENCE_TYPES:
            raise ValueError(f"Unknown sequence type for database {self.name}: {self.type!r}")
        object.__setattr__(self, "type", seq_type)
        object.__setattr__(self, "nsequences", int(self.nsequences))
        object.__setattr__(self, "ncharacters", int(self.ncharacters))
        object.__setattr__(self, "updated_on", str(self.updated_on).strip())
        object.__setattr__(self, "category", classify(self.name))
        object.__setattr__(self, "id", database_id(self.name))

    def _blastdbcmd(self, accession: str, coords: str | None = None) -> str | None:
        cmd = ["blastdbcmd", "-db", self.name, "-entry", accession]
        if coords:
            cmd += ["-range", coords]
        try:
            out, _ = self.runner(cmd)
        except DatabaseToolFailure as e:
            if e.returncode is not None and _ABSENT_RE.search(e.stderr):
                return None
            raise
        return out

    def retrieve(self, accession: str, coords: str | None = None) -> str | None:
        """Return the FASTA record for ``accession`` (optionally a ``start-stop``
        range of it), or None if this database does not have it."""
        out = self._blastdbcmd(accession, coords)
        if not out:
            return None
        return out.rstrip("\n") or None

    def contains(self, accession: str) -> bool:
        return bool(self._blastdbcmd(accession))

    __contains__ = contains

    def __eq__(self, other):
        if isinstance(other, Database):
            return self.id == other.id
        if isinstance(other, str):
            return self.id == database_id(other)
        return NotImplemented

    def __hash__(self):
        # Same hash as the bare name, which compares equal.
        return hash(self.name)

    def __str__(self):
        return f"{self.type}: {self.title} {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "type": self.type,
            "nsequences": self.nsequences,
            "ncharacters": self.ncharacters,
            "updated_on": self.updated_on,
            "id": self.id,
            "category": self.category.value,
        }
