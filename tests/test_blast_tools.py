import pytest

from blastdb_catalog.blast_tools import require_blast_plus, tool_version
from blastdb_catalog.errors import DatabaseToolFailure


class VersionRunner:
    def __init__(self, versions):
        self.versions = versions
        self.calls = []

    def executable(self, name):
        return f"/opt/blast/bin/{name}"

    def __call__(self, args, cwd=None):
        self.calls.append(list(args))
        v = self.versions.get(args[0])
        if v is None:
            raise DatabaseToolFailure(args, "No such file or directory")
        return f"{args[0]}: {v}+\n Package: blast {v}, build Oct 19 2023 11:12:03\n", ""


def test_tool_version():
    runner = VersionRunner({"blastdbcmd": "2.15.0"})
    assert tool_version(runner, "blastdbcmd") == (2, 15, 0)
    assert runner.calls == [["blastdbcmd", "-version"]]


def test_tool_version_missing():
    assert tool_version(VersionRunner({}), "blastdbcmd") is None


def test_tool_version_unparseable():
    def runner(args, cwd=None):
        return "something else\n", ""

    assert tool_version(runner, "makeblastdb") is None


def test_require_ok():
    require_blast_plus(VersionRunner({"blastdbcmd": "2.15.0", "makeblastdb": "2.15.0"}))


def test_require_missing():
    with pytest.raises(SystemExit, match="/opt/blast/bin/makeblastdb"):
        require_blast_plus(VersionRunner({"blastdbcmd": "2.15.0"}))


def test_require_too_old():
    with pytest.raises(SystemExit, match="2.10.0"):
        require_blast_plus(VersionRunner({"blastdbcmd": "2.2.31", "makeblastdb": "2.15.0"}))
