"""Sequence type guessing.

Decides whether a raw sequence string looks like protein or nucleotide from
its residue composition.
"""

from __future__ import annotations

import re
from collections import Counter

PROTEIN = "protein"
NUCLEOTIDE = "nucleotide"

# Below this many informative residues we do not guess.
MIN_LENGTH = 10
# Share of A/C/G/T/U above which a sequence is called nucleotide.
NUCLEOTIDE_FRACTION = 0.9

_NOISE_RE = re.compile(r"[\s\d*\-NXnx]")
_NUCLEOTIDES = frozenset("ACGTU")


def composition(seq: str) -> Counter:
    """Upper-cased residue counts."""
    return Counter(seq.upper())


def guess_type(seq: str) -> str | None:
    """Return "protein", "nucleotide" or None when the sequence is too short to tell."""
    cleaned = _NOISE_RE.sub("", seq or "")
    if len(cleaned) < MIN_LENGTH:
        return None
    counts = composition(cleaned)
    nt = sum(n for res, n in counts.items() if res in _NUCLEOTIDES)
    return NUCLEOTIDE if nt / len(cleaned) >= NUCLEOTIDE_FRACTION else PROTEIN
