"""Unit tests for CLI command handling."""

from __future__ import annotations

import pytest

from cli.main import main
from store.sequence_store import SequenceStore


@pytest.fixture
def store_file(tmp_path):
    """Saved store with two anonymous sequences and one labeled sequence."""
    store = SequenceStore()
    store.load(list("cpwps"), list("psswr"))
    store.add(rates=[0.1, 0.5, "0.9"])
    return store.save(tmp_path / "store.json")


def test_cli_list_prints_slot_table(store_file, capsys) -> None:
    """List should print one table row per slot."""
    exit_code = main(["list", str(store_file)])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and "| 2     | rates | 3 |" in lines


def test_cli_dump_prints_delimited_values(store_file, capsys) -> None:
    """Dump should print the selected sequence on one line."""
    exit_code = main(["dump", str(store_file), "--label", "rates", "--delim", ";"])

    assert exit_code == 0 and capsys.readouterr().out == "0.1;0.5;0.9\n"


def test_cli_check_reports_predicates(store_file, capsys) -> None:
    """Check should print each predicate outcome."""
    exit_code = main(["check", str(store_file), "--label", "rates"])

    assert exit_code == 0 and capsys.readouterr().out.splitlines() == [
        "full\ttrue",
        "numeric\ttrue",
        "proportions\ttrue",
    ]


def test_cli_lag_prints_realigned_sequences(store_file, capsys) -> None:
    """Lag should print target and response after realignment."""
    exit_code = main(["lag", str(store_file), "--lag=1", "--loop"])

    assert exit_code == 0 and capsys.readouterr().out.splitlines() == ["s c p w p", "p s s w r"]


def test_cli_reports_missing_label(store_file, capsys) -> None:
    """Unknown labels should exit with status one and a message."""
    exit_code = main(["dump", str(store_file), "--label", "missing"])

    assert exit_code == 1 and "missing" in capsys.readouterr().err


def test_cli_reports_missing_file(tmp_path, capsys) -> None:
    """Missing store files should exit with status one."""
    exit_code = main(["list", str(tmp_path / "absent.json")])

    assert exit_code == 1 and "absent.json" in capsys.readouterr().err
