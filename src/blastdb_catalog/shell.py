"""Running BLAST+ executables.

Commands are always passed as argument lists (never through a shell), so
accessions and paths coming from outside cannot inject anything.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Sequence, Tuple

from .errors import DatabaseToolFailure


class ToolRunner:
    """Run a BLAST+ tool and return ``(stdout, stderr)``.

    If ``bin_dir`` is set, the executable is looked up there first; otherwise
    it is resolved from PATH. A non-zero exit status or a missing executable
    raises :class:`DatabaseToolFailure`. Calls block until the process exits.
    """

    def __init__(self, bin_dir: str | None = None):
        self.bin_dir = os.path.abspath(os.path.expanduser(bin_dir)) if bin_dir else None

    def executable(self, name: str) -> str:
        if self.bin_dir:
            cand = os.path.join(self.bin_dir, name)
            if os.path.isfile(cand):
                return cand
        return name

    def __call__(self, args: Sequence[str], cwd: str | None = None) -> Tuple[str, str]:
        cmd = [self.executable(args[0])] + [str(a) for a in args[1:]]
        logging.getLogger("blastdb_catalog").debug("CMD: %s", " ".join(cmd))
        try:
            r = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise DatabaseToolFailure(cmd, str(e)) from e
        if r.returncode != 0:
            raise DatabaseToolFailure(cmd, r.stderr, r.returncode)
        return r.stdout or "", r.stderr or ""
