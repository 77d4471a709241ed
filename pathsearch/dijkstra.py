"""Dijkstra's algorithm over a lazily expanded graph.

The graph is never stored: ``expand(state, cost)`` is called once per
finalized state and returns ``(next_state, next_cost)`` pairs, where
``next_cost`` is the cumulative cost of reaching ``next_state`` through
``state``. Costs must be non-negative and additive.
"""
from .driver import DIJKSTRA, MODE_COST, MODE_MAP, MODE_PATH, SearchDriver


def goal_predicate(end=None, predicate=None, options=None):
    """Turn the end/predicate pair accepted by every query into one predicate."""
    if end is None and predicate is None:
        raise ValueError("Either end or predicate must be given")
    if end is not None and predicate is not None:
        raise ValueError("Only one of end or predicate may be given")
    if predicate is not None:
        if not callable(predicate):
            raise TypeError("predicate must be callable")
        return predicate
    state_key = options.state_key if options is not None else (lambda s: s)
    end_key = state_key(end)
    return lambda state: state_key(state) == end_key


def shortest_path_cost(start, expand, end=None, *, predicate=None, options=None):
    """
    Minimal cost from start to end (or to the first state matching predicate).
    Args:
        start: initial state
        expand: callable (state, cost) -> iterable of (next_state, next_cost),
            or an object with such an expand() method
        end: target state
        predicate: alternative to end, called with each finalized state
        options: SearchOptions
    Returns:
        cost of the cheapest path
    Raises:
        NoPathError: no reachable state satisfies the goal
    """
    is_goal = goal_predicate(end, predicate, options)
    return SearchDriver(start, expand, DIJKSTRA, options).run(MODE_COST, is_goal)


def shortest_path(start, expand, end=None, *, predicate=None, options=None):
    """
    Cheapest path from start to end (or to the first state matching predicate).
    Returns:
        list of PathStep(state, cost) from start to the goal inclusive, each
        paired with the cumulative cost of reaching it
    """
    is_goal = goal_predicate(end, predicate, options)
    return SearchDriver(start, expand, DIJKSTRA, options).run(MODE_PATH, is_goal)


def shortest_paths(start, expand, *, options=None):
    """
    Cheapest (previous, cost) for every state reachable from start.

    Explores until the frontier is empty, so it only terminates when the
    reachable set is finite. The start state maps to (None, initial_cost).
    Returns:
        CostLedger mapping state -> LedgerEntry(previous, cost)
    """
    return SearchDriver(start, expand, DIJKSTRA, options).run(MODE_MAP)
