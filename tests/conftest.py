"""Shared fixtures and graph helpers for the search tests."""
import random

import pytest


def edges_to_expand(edges):
    """Build a Dijkstra expansion callback from {state: [(next, edge_cost), ...]}."""
    def expand(state, cost):
        return [(nxt, cost + w) for nxt, w in edges.get(state, [])]
    return expand


def edges_to_astar_expand(edges, heuristic=None):
    """Build an A* expansion callback; best guess is cost + heuristic(next)."""
    heuristic = heuristic or (lambda s: 0)

    def expand(state, cost):
        return [(nxt, cost + w, cost + w + heuristic(nxt)) for nxt, w in edges.get(state, [])]
    return expand


def random_graph(seed, n_nodes=7, edge_prob=0.35, max_cost=9):
    rng = random.Random(seed)
    edges = {}
    for a in range(n_nodes):
        for b in range(n_nodes):
            if a != b and rng.random() < edge_prob:
                edges.setdefault(a, []).append((b, rng.randint(0, max_cost)))
    return edges


def brute_force_cost(edges, start, end):
    """Minimum cost over all simple paths start -> end, or None."""
    best = None
    stack = [(start, 0, {start})]
    while stack:
        node, cost, seen = stack.pop()
        if node == end:
            best = cost if best is None else min(best, cost)
            continue
        for nxt, w in edges.get(node, []):
            if nxt not in seen:
                stack.append((nxt, cost + w, seen | {nxt}))
    return best


@pytest.fixture
def line_graph():
    return {"A": [("B", 1)], "B": [("C", 1)]}


@pytest.fixture
def cycle_graph():
    return {"A": [("B", 1)], "B": [("A", 1), ("C", 5)]}


@pytest.fixture
def triangle_graph():
    return {
        "A": [("B", 1), ("C", 1)],
        "B": [("A", 1), ("C", 1)],
        "C": [("A", 1), ("B", 1)],
    }


@pytest.fixture
def problem_file(tmp_path):
    path = tmp_path / "problem.txt"
    path.write_text(
        "Nodes:\n"
        "1: (4,1)\n"
        "2: (2,2)\n"
        "3: (4,4)\n"
        "4: (6,3)\n"
        "5: (5,6)\n"
        "6: (7,5)\n"
        "Edges:\n"
        "(2,1): 4\n"
        "(3,1): 5\n"
        "(1,3): 5\n"
        "(2,3): 4\n"
        "(3,2): 5\n"
        "(4,1): 6\n"
        "(1,4): 6\n"
        "(4,3): 5\n"
        "(3,5): 6\n"
        "(5,3): 6\n"
        "(4,5): 7\n"
        "(5,4): 8\n"
        "(6,3): 7\n"
        "(3,6): 7\n"
        "Origin:\n"
        "2\n"
        "Destinations:\n"
        "5; 4\n"
    )
    return path


@pytest.fixture
def road_config(tmp_path):
    path = tmp_path / "roads.txt"
    path.write_text(
        "# small road network\n"
        "[NODES]\n"
        "1, -37.8136, 144.9631, Central (CBD)\n"
        "2, -37.8180, 144.9691, Flinders St\n"
        "3, -37.8100, 144.9700, Parliament\n"
        "4, -37.8200, 144.9800, Richmond\n"
        "\n"
        "[WAYS]\n"
        "10, 1, 2, Swanston St, primary, 3.0\n"
        "11, 1, 3, Bourke St (east, upper), secondary, 2.0\n"
        "12, 3, 4, Wellington Pde, primary, 4.0\n"
        "13, 2, 4, Flinders St, primary, 2.5\n"
        "\n"
        "[META]\n"
        "START, 1\n"
        "GOAL, 4\n"
        "ACCIDENT_MULTIPLIER, 0.5\n"
    )
    return path
