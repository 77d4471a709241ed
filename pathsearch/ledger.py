"""Per-query record of the best known (predecessor, cost) for each state."""
from collections.abc import Mapping

from .common import LedgerEntry


class CostLedger(Mapping):
    """Read-only mapping state -> LedgerEntry(previous, cost).

    Lookups go through state_key, so any state equal to a recorded one finds
    its entry. Iteration yields the states in the order they were first recorded.
    """

    def __init__(self, state_key=None):
        self._state_key = state_key or (lambda s: s)
        self._entries = {}  # {state_key: (state, LedgerEntry)}

    def record(self, state, previous, cost):
        key = self._state_key(state)
        stored = self._entries.get(key)
        # keep the first instance seen so iteration is stable
        first = stored[0] if stored is not None else state
        self._entries[key] = (first, LedgerEntry(previous, cost))

    def entry(self, state):
        """Return the LedgerEntry for state, or None if it was never recorded."""
        stored = self._entries.get(self._state_key(state))
        return stored[1] if stored is not None else None

    def __getitem__(self, state):
        stored = self._entries.get(self._state_key(state))
        if stored is None:
            raise KeyError(state)
        return stored[1]

    def __contains__(self, state):
        return self._state_key(state) in self._entries

    def __iter__(self):
        return (state for state, _ in self._entries.values())

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        items = ", ".join(f"{state!r}: {entry!r}" for state, entry in self._entries.values())
        return f"CostLedger({{{items}}})"
