"""
Tests for the command line tools.
"""

import json

from ..cli import main
from ..engine_core import commit, generate_shuffled_deck

SERVER = "test_server_seed_123456789"
CLIENT = "test_client_seed"


def _run(capsys, *argv):
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, (json.loads(out) if out.strip().startswith("{") else out)


class TestGenerate:

    def test_seed(self, capsys):
        code, data = _run(capsys, "seed")
        assert code == 0
        assert commit(data["server_seed"]) == data["server_seed_hash"]

    def test_client_seed(self, capsys):
        code, data = _run(capsys, "seed", "--client")
        assert code == 0
        assert len(data["client_seed"]) == 32

    def test_commit(self, capsys):
        code, data = _run(capsys, "commit", "test_seed_12345")
        assert code == 0
        assert data["server_seed_hash"] == (
            "a425b68cff299292836db62314c82057313f1ea507985e19c66fa5e4369f5392"
        )

    def test_roll(self, capsys):
        code, data = _run(capsys, "roll", SERVER, CLIENT, "1")
        assert code == 0
        assert data["outcome"] == 73
        assert data["range"] == 100

    def test_slots(self, capsys):
        code, data = _run(capsys, "slots", "slot_server_seed", "slot_client_seed", "100")
        assert code == 0
        assert data["reels"] == [1, 6, 7]

    def test_deck(self, capsys):
        code, data = _run(capsys, "deck", SERVER, CLIENT, "1")
        assert code == 0
        assert data["deck"] == generate_shuffled_deck(SERVER, CLIENT, 1)

    def test_invalid_range(self, capsys):
        assert main(["roll", SERVER, CLIENT, "1", "--range", "0"]) == 1
        assert "range" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestVerify:

    def test_outcome_valid(self, capsys):
        code, data = _run(
            capsys, "verify", "outcome", SERVER, commit(SERVER), CLIENT, "1", "73"
        )
        assert code == 0
        assert data["is_valid"] is True

    def test_outcome_tampered(self, capsys):
        code, data = _run(
            capsys, "verify", "outcome", SERVER, commit(SERVER), CLIENT, "1", "74"
        )
        assert code == 1
        assert data["failure"] == "outcome_mismatch"

    def test_slots_wrong_seed(self, capsys):
        code, data = _run(
            capsys, "verify", "slots", "other", commit("slot_server_seed"),
            "slot_client_seed", "100", "1", "6", "7",
        )
        assert code == 1
        assert data["failure"] == "tampered_seed"

    def test_deck_valid(self, capsys):
        cards = [str(c) for c in generate_shuffled_deck(SERVER, CLIENT, 2)]
        code, data = _run(
            capsys, "verify", "deck", SERVER, commit(SERVER), CLIENT, "2", *cards
        )
        assert code == 0
        assert data["is_valid"] is True

    def test_unencodable_seed_reports_failure(self, capsys):
        code, data = _run(
            capsys, "verify", "outcome", "seed\udcff", commit(SERVER), CLIENT, "1", "73"
        )
        assert code == 1
        assert data["failure"] == "invalid_input"

    def test_unencodable_seed_on_roll(self, capsys):
        assert main(["roll", "seed\udcff", CLIENT, "1"]) == 1
        assert "UTF-8" in capsys.readouterr().err
