"""BLAST+ tool discovery and version checks.

blastdb_catalog needs blastdbcmd (listing and sequence retrieval) and
makeblastdb (formatting). Both must come from BLAST+ 2.10.0 or newer.
"""

from __future__ import annotations

import re

from .errors import DatabaseToolFailure
from .shell import ToolRunner


MIN_VERSION = (2, 10, 0)
REQUIRED_TOOLS = ("blastdbcmd", "makeblastdb")

# e.g. "blastdbcmd: 2.15.0+"
_TOOL_VERSION_RE = re.compile(r"^\S+:\s*(\d+)\.(\d+)\.(\d+)\+?", re.M)


def tool_version(runner: ToolRunner, tool: str) -> tuple[int, int, int] | None:
    """Version reported by ``<tool> -version``, or None if the tool cannot be run."""
    try:
        out, err = runner([tool, "-version"])
    except DatabaseToolFailure:
        return None
    m = _TOOL_VERSION_RE.search(out) or _TOOL_VERSION_RE.search(err)
    return tuple(int(g) for g in m.groups()) if m else None


def require_blast_plus(runner: ToolRunner | None = None, min_version: tuple[int, int, int] = MIN_VERSION) -> None:
    """Exit unless blastdbcmd and makeblastdb are installed and recent enough."""
    runner = runner or ToolRunner()
    wanted = ".".join(str(x) for x in min_version)
    for tool in REQUIRED_TOOLS:
        v = tool_version(runner, tool)
        if v is None:
            raise SystemExit(
                f"Not found '{runner.executable(tool)}'. Install NCBI BLAST+ (>= {wanted}) or point --bin at its bin directory."
            )
        if v < min_version:
            raise SystemExit(
                f"BLAST+ {wanted}+ is required. Detected: {tool}={'.'.join(str(x) for x in v)}. "
                "Please upgrade BLAST+ and try again."
            )
