from blastdb_catalog.confirm import AutoConfirm, ConsolePrompt, Decision, Proposal

PROPOSAL = Proposal(file="/db/genome.fa", type="nucleotide", title="genome")


def scripted(*answers):
    answers = list(answers)
    said = []
    prompt = ConsolePrompt(ask=lambda _: answers.pop(0), say=lambda *a: said.append(" ".join(map(str, a))))
    return prompt, said


def test_auto_confirm():
    assert AutoConfirm().propose(PROPOSAL) == Decision(True, "genome", 0)


def test_console_defaults():
    prompt, said = scripted("", "", "")
    assert prompt.propose(PROPOSAL) == Decision(True, "genome", 0)
    assert "FASTA file: /db/genome.fa" in said
    assert "FASTA type: nucleotide" in said


def test_console_overrides():
    prompt, _ = scripted("y", "Human genome", "9606")
    assert prompt.propose(PROPOSAL) == Decision(True, "Human genome", 9606)


def test_console_declined():
    prompt, _ = scripted("N")
    assert prompt.propose(PROPOSAL).accepted is False


def test_console_taxid_retry():
    prompt, said = scripted("", "", "human", "9606")
    assert prompt.propose(PROPOSAL).taxid == 9606
    assert "taxid should be a number" in said


def closed_stdin(_):
    raise EOFError


def test_console_closed_stdin_accepts_defaults():
    prompt = ConsolePrompt(ask=closed_stdin, say=lambda *a: None)
    assert prompt.propose(PROPOSAL) == Decision(True, "genome", 0)


def test_console_stdin_closes_at_taxid():
    answers = ["y", "Fly genome"]

    def ask(_):
        if not answers:
            raise EOFError
        return answers.pop(0)

    prompt = ConsolePrompt(ask=ask, say=lambda *a: None)
    assert prompt.propose(PROPOSAL) == Decision(True, "Fly genome", 0)


def test_decision_defaults_keep_proposal():
    assert Decision(True) == Decision(True, None, None)
