"""A* search over a lazily expanded graph.

``expand(state, cost)`` returns ``(next_state, next_cost, best_guess)``
triples. ``best_guess`` is the estimated total cost of a path to the goal
through ``next_state``; the frontier orders entries by best guess first and
cumulative cost second. With an admissible estimate the result is optimal;
otherwise it may not be, but the search still terminates on finite graphs.
"""
from .dijkstra import goal_predicate
from .driver import ASTAR, MODE_COST, MODE_PATH, SearchDriver


def astar_path_cost(start, expand, end=None, *, predicate=None, options=None):
    """Cost of the path A* finds from start to end (or to the first state matching predicate)."""
    is_goal = goal_predicate(end, predicate, options)
    return SearchDriver(start, expand, ASTAR, options).run(MODE_COST, is_goal)


def astar_path(start, expand, end=None, *, predicate=None, options=None):
    """
    Path A* finds from start to end (or to the first state matching predicate).
    Returns:
        list of PathStep(state, cost) from start to the goal inclusive
    """
    is_goal = goal_predicate(end, predicate, options)
    return SearchDriver(start, expand, ASTAR, options).run(MODE_PATH, is_goal)
