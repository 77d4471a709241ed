"""Shared types, options and helpers for the search strategies."""
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, NamedTuple, Optional, Protocol, Tuple


class SearchError(Exception):
    """Base class for errors raised by the search engine."""


class NoPathError(SearchError, LookupError):
    """The frontier was exhausted before the goal was reached."""

    def __init__(self, message="Unable to find path to 'end'."):
        super().__init__(message)


class ExpansionError(SearchError, TypeError):
    """The neighbor expansion callback broke its contract."""


class PathReconstructionError(SearchError, AssertionError):
    """The predecessor chain in the ledger does not lead back to the start."""


def _identity(value):
    return value


@dataclass(frozen=True)
class SearchOptions:
    """Configuration shared by every query.

    state_key maps a state to the hashable identity used for equality,
    cost_key maps a cost to the value used for ordering.
    initial_cost is the cost recorded for the start state.
    """
    state_key: Callable[[Any], Hashable] = _identity
    cost_key: Callable[[Any], Any] = _identity
    initial_cost: Any = 0


DEFAULT_OPTIONS = SearchOptions()


class LedgerEntry(NamedTuple):
    previous: Any
    cost: Any


class PathStep(NamedTuple):
    state: Any
    cost: Any


class Expander(Protocol):
    def expand(self, state: Any, cost: Any) -> Iterable[Tuple]:
        """Return the neighbor records of state given the cost so far."""
        ...


def as_expand_fn(expand) -> Callable[[Any, Any], Iterable[Tuple]]:
    """Accept either a plain callable or an object with an expand() method."""
    if expand is None:
        raise ValueError("expand must not be None")
    method = getattr(expand, "expand", None)
    if callable(method):
        return method
    if callable(expand):
        return expand
    raise TypeError(f"expand must be callable or provide expand(), got {type(expand).__name__}")


def callback_name(fn) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


def reconstruct_path(ledger, goal, start, state_key: Optional[Callable] = None):
    """Walk predecessor links from goal back to start.

    Args:
        ledger: mapping of state -> LedgerEntry(previous, cost)
        goal: the state the search finished on
        start: the state the search began from
        state_key: identity function used to recognise the start state
    Returns:
        list of PathStep(state, cost) ordered start -> goal, both inclusive
    """
    state_key = state_key or _identity
    start_key = state_key(start)
    path = []
    current = goal
    # a valid chain visits each ledger entry at most once
    for _ in range(len(ledger)):
        try:
            entry = ledger[current]
        except KeyError:
            raise PathReconstructionError(f"State {current!r} has no ledger entry") from None
        path.append(PathStep(current, entry.cost))
        if state_key(current) == start_key:
            path.reverse()
            return path
        current = entry.previous
    raise PathReconstructionError(f"Predecessor chain from {goal!r} does not reach {start!r}")
