"""Operator confirmation before formatting a FASTA file.

The formatting pipeline asks a confirmer ``propose(proposal) -> Decision``.
:class:`ConsolePrompt` asks a person on the terminal; :class:`AutoConfirm`
accepts every proposal with its defaults (non-interactive runs, tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol


@dataclass(frozen=True)
class Proposal:
    """What is about to be formatted, plus the defaults offered to the operator."""

    file: str
    type: str
    title: str
    taxid: int = 0


@dataclass(frozen=True)
class Decision:
    """Accept or decline. A title or taxid left as None keeps the proposal's value."""

    accepted: bool
    title: Optional[str] = None
    taxid: Optional[int] = None


class Confirmer(Protocol):
    def propose(self, proposal: Proposal) -> Decision: ...


class AutoConfirm:
    """Accept everything with the suggested title and taxid."""

    def propose(self, proposal: Proposal) -> Decision:
        return Decision(True, proposal.title, proposal.taxid)


class ConsolePrompt:
    """Ask on the terminal.

    Anything but an answer containing 'n' proceeds. An empty title keeps the
    suggestion; an empty taxid means 0 (no taxid). A closed stdin counts as an
    empty answer, so the defaults are accepted.
    """

    def __init__(self, ask: Callable[[str], str] = input, say: Callable[..., None] = print):
        self.ask = ask
        self.say = say

    def _ask(self, prompt: str) -> str:
        try:
            return self.ask(prompt).strip()
        except EOFError:
            return ""

    def propose(self, proposal: Proposal) -> Decision:
        self.say()
        self.say()
        self.say(f"FASTA file: {proposal.file}")
        self.say(f"FASTA type: {proposal.type}")
        response = self._ask("Proceed? [y/n] (Default: y): ")
        if "n" in response.lower():
            return Decision(False)
        title = self._ask(f"Enter a database title or will use '{proposal.title}': ")
        return Decision(True, title or proposal.title, self._taxid(proposal.taxid))

    def _taxid(self, default: int) -> int:
        while True:
            s = self._ask("Enter taxid (optional): ")
            if not s:
                return default
            try:
                return int(s)
            except ValueError:
                self.say("taxid should be a number")
