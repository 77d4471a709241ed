"""Shortest-path search over implicit, lazily expanded state graphs."""

from .common import (
    SearchOptions,
    LedgerEntry,
    PathStep,
    Expander,
    SearchError,
    NoPathError,
    ExpansionError,
    PathReconstructionError,
    reconstruct_path,
)
from .frontier import UpdatablePriorityQueue
from .ledger import CostLedger
from .driver import SearchDriver, SearchStats
from .dijkstra import shortest_path_cost, shortest_path, shortest_paths
from .astar import astar_path_cost, astar_path

__all__ = [
    "SearchOptions",
    "LedgerEntry",
    "PathStep",
    "Expander",
    "SearchError",
    "NoPathError",
    "ExpansionError",
    "PathReconstructionError",
    "reconstruct_path",
    "UpdatablePriorityQueue",
    "CostLedger",
    "SearchDriver",
    "SearchStats",
    "shortest_path_cost",
    "shortest_path",
    "shortest_paths",
    "astar_path_cost",
    "astar_path",
]
