"""
The single relaxation loop behind every shortest-path query.

Dijkstra finalizes a state the first time it is dequeued and never enqueues a
state that already has a ledger entry. A* enqueues every neighbor and instead
checks each dequeued entry against the ledger, skipping it unless the state is
new or was reached more cheaply than before.
"""
import logging
from dataclasses import dataclass
from typing import Any, NamedTuple

from .common import (
    DEFAULT_OPTIONS,
    ExpansionError,
    NoPathError,
    as_expand_fn,
    callback_name,
    reconstruct_path,
)
from .frontier import UpdatablePriorityQueue
from .ledger import CostLedger

logger = logging.getLogger(__name__)

DIJKSTRA = "dijkstra"
ASTAR = "astar"

MODE_COST = "cost"
MODE_PATH = "path"
MODE_MAP = "map"


class _Reached(NamedTuple):
    previous: Any
    cost: Any


class _Estimated(NamedTuple):
    previous: Any
    best_guess: Any
    cost: Any


@dataclass
class SearchStats:
    expanded: int = 0
    enqueued: int = 0
    stale: int = 0


class SearchDriver:
    """Runs one search to completion. A driver instance is used for a single query."""

    def __init__(self, start, expand, strategy=DIJKSTRA, options=None):
        if start is None:
            raise ValueError("start must not be None")
        if strategy not in (DIJKSTRA, ASTAR):
            raise ValueError(f"Unknown strategy: {strategy}")
        self.start = start
        self.expand = as_expand_fn(expand)
        self.strategy = strategy
        self.options = options or DEFAULT_OPTIONS
        self.stats = SearchStats()

        state_key = self.options.state_key
        cost_key = self.options.cost_key
        self.ledger = CostLedger(state_key)
        if strategy == DIJKSTRA:
            priority_key = lambda p: cost_key(p.cost)
        else:
            priority_key = lambda p: (cost_key(p.best_guess), cost_key(p.cost))
        self.frontier = UpdatablePriorityQueue(priority_key, state_key)

    def run(self, mode, is_goal=None):
        """Search from start.

        Args:
            mode: MODE_COST, MODE_PATH or MODE_MAP
            is_goal: predicate ending the search; ignored (and must be None) for MODE_MAP
        Returns:
            the goal cost, the list of PathStep, or the full CostLedger
        """
        if mode == MODE_MAP:
            if self.strategy != DIJKSTRA:
                raise ValueError("Full-map search is only defined for Dijkstra")
            is_goal = None
        elif mode in (MODE_COST, MODE_PATH):
            if is_goal is None:
                raise ValueError("A goal predicate is required")
        else:
            raise ValueError(f"Unknown mode: {mode}")

        logger.debug("Starting %s search (%s) from %r", self.strategy, mode, self.start)
        if self.strategy == DIJKSTRA:
            goal, cost = self._run_dijkstra(is_goal)
        else:
            goal, cost = self._run_astar(is_goal)
        logger.debug("Finished %s search: %r, %d states recorded", self.strategy, self.stats, len(self.ledger))

        if mode == MODE_MAP:
            return self.ledger
        if mode == MODE_COST:
            return cost
        return reconstruct_path(self.ledger, goal, self.start, self.options.state_key)

    def _run_dijkstra(self, is_goal):
        current = self.start
        reached = _Reached(None, self.options.initial_cost)
        while True:
            self.ledger.record(current, reached.previous, reached.cost)
            if is_goal is not None and is_goal(current):
                return current, reached.cost

            for next_state, cost in self._neighbors(current, reached.cost, 2):
                if next_state not in self.ledger:
                    if self.frontier.enqueue_minimum(next_state, _Reached(current, cost)):
                        self.stats.enqueued += 1

            item = self.frontier.try_dequeue()
            if item is None:
                if is_goal is None:
                    return None, None
                raise NoPathError()
            current, reached = item

    def _run_astar(self, is_goal):
        cost_key = self.options.cost_key
        current = self.start
        reached = _Estimated(None, None, self.options.initial_cost)
        while True:
            old = self.ledger.entry(current)
            # a null recorded cost ranks below every other cost
            if old is None or (old.cost is not None and cost_key(reached.cost) < cost_key(old.cost)):
                self.ledger.record(current, reached.previous, reached.cost)
                if is_goal(current):
                    return current, reached.cost

                for next_state, cost, best_guess in self._neighbors(current, reached.cost, 3):
                    if self.frontier.enqueue_minimum(next_state, _Estimated(current, best_guess, cost)):
                        self.stats.enqueued += 1
            else:
                self.stats.stale += 1
                logger.debug("Discarding stale entry for %r (cost %r >= %r)", current, reached.cost, old.cost)

            item = self.frontier.try_dequeue()
            if item is None:
                raise NoPathError()
            current, reached = item

    def _neighbors(self, state, cost, arity):
        records = self.expand(state, cost)
        if records is None:
            raise ExpansionError(f"{callback_name(self.expand)}() returned None for state {state!r}")
        self.stats.expanded += 1
        for record in records:
            try:
                size = len(record)
            except TypeError:
                size = None
            if size != arity:
                raise ExpansionError(
                    f"{callback_name(self.expand)}() produced {record!r} for state {state!r}; "
                    f"expected a {arity}-tuple"
                )
            yield record
