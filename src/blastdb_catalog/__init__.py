"""blastdb_catalog

Keeps a catalog of the BLAST+ databases found under a directory.
This package provides a registry to look up sequences by accession across
all catalogued databases, and a pipeline that finds unformatted FASTA files
and turns them into BLAST databases with makeblastdb.
"""

__all__ = ["blast_tools","cli","config","confirm","database","errors","io_utils","registry","sequence","shell"]


__version__ = "1.0.0"
