"""Unit tests for reconstruct_path."""
import pytest

from pathsearch import CostLedger, LedgerEntry, PathReconstructionError, reconstruct_path


def make_ledger(entries, state_key=None):
    ledger = CostLedger(state_key)
    for state, (previous, cost) in entries.items():
        ledger.record(state, previous, cost)
    return ledger


def test_walks_back_to_start():
    ledger = make_ledger({"A": (None, 0), "B": ("A", 1), "C": ("B", 3)})
    assert reconstruct_path(ledger, "C", "A") == [("A", 0), ("B", 1), ("C", 3)]


def test_goal_is_start():
    ledger = make_ledger({"A": (None, 0)})
    assert reconstruct_path(ledger, "A", "A") == [("A", 0)]


def test_plain_dict_ledger():
    ledger = {1: LedgerEntry(None, 0), 2: LedgerEntry(1, 4)}
    assert reconstruct_path(ledger, 2, 1) == [(1, 0), (2, 4)]


def test_uses_state_key_for_start():
    ledger = make_ledger({"a": (None, 0), "b": ("A", 2)}, state_key=str.lower)
    path = reconstruct_path(ledger, "b", "a", state_key=str.lower)
    assert [step.cost for step in path] == [0, 2]


def test_cycle_without_start_raises():
    ledger = make_ledger({"S": (None, 0), "A": ("B", 1), "B": ("A", 2)})
    with pytest.raises(PathReconstructionError, match="does not reach"):
        reconstruct_path(ledger, "A", "S")


def test_missing_predecessor_raises():
    ledger = make_ledger({"S": (None, 0), "B": ("Z", 2)})
    with pytest.raises(PathReconstructionError, match="no ledger entry"):
        reconstruct_path(ledger, "B", "S")


def test_chain_ending_in_none_raises():
    ledger = make_ledger({"S": (None, 0), "X": (None, 0), "B": ("X", 2)})
    with pytest.raises(PathReconstructionError):
        reconstruct_path(ledger, "B", "S")


def test_error_is_an_assertion_error():
    assert issubclass(PathReconstructionError, AssertionError)
