import pytest

from blastdb_catalog.sequence import composition, guess_type


@pytest.mark.parametrize("seq", [
    "ACGTACGTACGTACGT",
    "acgtacgtac gtacgt\n",
    "ACGUACGUACGUACGU",
    "ACGTNNNNNNNNNNNNACGTACGTAC",
    "ACGT-ACGT-ACGT-ACGT",
])
def test_nucleotide(seq):
    assert guess_type(seq) == "nucleotide"


@pytest.mark.parametrize("seq", [
    "MKVLAAGIVGLLLAQWERTY",
    "mstnpkpqrktkrntnrrpqdvkfpgg*",
])
def test_protein(seq):
    assert guess_type(seq) == "protein"


@pytest.mark.parametrize("seq", ["", "\n", "ACGT", "NNNNNNNNNNNNNNNNXXXX", None])
def test_too_short(seq):
    assert guess_type(seq) is None


def test_composition():
    assert composition("acgA") == {"A": 2, "C": 1, "G": 1}
