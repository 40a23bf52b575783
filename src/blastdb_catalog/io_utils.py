"""I/O helpers.

FASTA sniffing and sampling, database name checks, title suggestions and
catalog table export.
"""

from __future__ import annotations
import os, re
from typing import List

import pandas as pd

SAMPLE_SIZE = 32_768  # ~546 lines of 60 residues

# e.g. /db/nr.00, /db/img3.5.finished.faa.01, /mnt/blast-db/refseq_genomic.100
# but not /db/nr or /db/nr00
_MULTIPART_RE = re.compile(r".+/\S+\.\d{2,3}$")
_DEFLINE_RE = re.compile(r"^>.+$", re.M)
_DOT_BETWEEN_WORDS_RE = re.compile(r"(\D)\.(?=\D)")
_VERSION_RE = re.compile(r"\W*(\d+([.-]\d+)+)\W*")

def is_multipart_database_name(name: str) -> bool:
    """True if ``name`` looks like one volume of a multi-volume database."""
    return _MULTIPART_RE.match(name or "") is not None

def probably_fasta(path: str) -> bool:
    """True if the first byte of the file is '>'."""
    with open(path, "rb") as fh:
        return fh.read(1) == b">"

def sample_sequences(path: str, size: int = SAMPLE_SIZE) -> List[str]:
    """Read the first ``size`` bytes and split them on FASTA definition lines.

    Returns the non-empty chunks between deflines. For a file that is not
    FASTA this is just the portion read, wrapped in a list.
    """
    with open(path, "rb") as fh:
        head = fh.read(size).decode("utf-8", errors="replace")
    return [s for s in _DEFLINE_RE.split(head) if s]

def derive_title(filename: str) -> str:
    """Suggest a readable database title from a FASTA file name.

    Cobs1.4.proteins.fasta -> Cobs 1.4 proteins
    S_invicta.xx.2.5.small.nucl.fa -> S invicta xx 2.5 small nucl
    """
    t = filename.replace('"', "'")
    t = os.path.splitext(t)[0]
    t = t.replace("_", " ")
    t = _DOT_BETWEEN_WORDS_RE.sub(r"\1 ", t)
    t = _VERSION_RE.sub(r" \1 ", t)
    return t.strip()

EXPORT_FORMATS = {".xlsx": "excel", ".parquet": "parquet"}

def export_catalog(df: pd.DataFrame, path: str, fmt: str | None = None) -> str:
    """Write the catalog table to ``path`` and return the format used.

    Without ``fmt`` the format follows the file extension (.xlsx or .parquet).
    """
    fmt = fmt or EXPORT_FORMATS.get(os.path.splitext(path)[1].lower())
    if fmt == "parquet":
        df.to_parquet(path, index=False)
    elif fmt == "excel":
        df.to_excel(path, index=False, sheet_name="databases")
    else:
        raise ValueError(f"Cannot tell the export format of {path}; use .xlsx or .parquet")
    return fmt
