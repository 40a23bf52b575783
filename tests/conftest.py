import pytest

from blastdb_catalog.errors import DatabaseToolFailure


class FakeBlast:
    """Stands in for ToolRunner: answers blastdbcmd and makeblastdb from memory."""

    def __init__(self, listing="", list_err="", entries=None):
        self.listing = listing
        self.list_err = list_err
        # {database name: {accession: FASTA record}}
        self.entries = entries or {}
        self.broken = set()
        self.calls = []

    def executable(self, name):
        return name

    def __call__(self, args, cwd=None):
        args = list(args)
        self.calls.append(args)
        if args[0] == "blastdbcmd" and "-list" in args:
            return self.listing, self.list_err
        if args[0] == "blastdbcmd":
            db = args[args.index("-db") + 1]
            acc = args[args.index("-entry") + 1]
            if db in self.broken:
                raise DatabaseToolFailure(args, "BLAST Database error: Could not open database", 2)
            rec = self.entries.get(db, {}).get(acc)
            if rec is None:
                raise DatabaseToolFailure(args, "Error: [blastdbcmd] Entry not found in BLAST database", 1)
            if "-range" in args:
                start, stop = (int(x) for x in args[args.index("-range") + 1].split("-"))
                header, seq = rec.split("\n", 1)
                seq = seq.replace("\n", "")[start - 1:stop]
                return f"{header}:{start}-{stop}\n{seq}\n", ""
            return rec + "\n", ""
        if args[0] == "makeblastdb":
            # The new database shows up in the next listing, like on disk.
            path = args[args.index("-in") + 1]
            title = args[args.index("-title") + 1]
            seq_type = "Protein" if args[args.index("-dbtype") + 1] == "prot" else "Nucleotide"
            self.listing += f"{path}\t{title}\t{seq_type}\t0\t0\tJan 1, 2024  1:00 PM\n"
            return "Building a new DB\n", ""
        raise AssertionError(f"unexpected command: {args}")

    def commands(self, tool):
        return [c for c in self.calls if c[0] == tool]


@pytest.fixture
def fake_blast():
    return FakeBlast()
