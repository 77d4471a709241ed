import argparse
import logging
import sys
import time
import tracemalloc

import psutil

import file_reader
from pathsearch import NoPathError, astar_path, shortest_path, shortest_paths
from util import FormatBytes, GraphReader

logger = logging.getLogger(__name__)

METHODS = ("DIJKSTRA", "AS", "MAP")


class CountingExpander:
    """Wraps an expansion callback and counts how many states it expanded."""
    def __init__(self, fn):
        self.fn = fn
        self.calls = 0

    def expand(self, state, cost):
        self.calls += 1
        return self.fn(state, cost)


class Problem:
    """A start, a set of goals and the two expansion callbacks for one input file."""
    def __init__(self, origin, destinations, neighbors, neighbors_with_estimate):
        self.origin = origin
        self.destinations = set(destinations)
        self.neighbors = neighbors
        self.neighbors_with_estimate = neighbors_with_estimate


def _is_road_config(filename):
    with open(filename, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                return line.startswith('[')
    return False


def load_problem(filename, accidents=()):
    """Read either a problem file (Nodes:/Edges:/...) or a road config ([NODES]/[WAYS]/[META]).

    accidents: (way_id, severity) pairs applied to a road config before searching,
    scaled by its ACCIDENT_MULTIPLIER (1.0 when the file has none).
    """
    if _is_road_config(filename):
        nodes_df, ways_df, start, goals, accident_multiplier = file_reader.parse_config_file(filename)
        if accident_multiplier is None:
            accident_multiplier = 1.0
        for way_id, severity in accidents:
            file_reader.apply_accident(ways_df, way_id, severity, accident_multiplier)
            logger.info("Accident on way %s (severity %s)", way_id, severity)
        network = file_reader.RoadNetwork(nodes_df, ways_df, goals)
        return Problem(start, goals, network.expand, network.expand_with_estimate)
    if accidents:
        raise ValueError("Accidents can only be applied to road config files")
    graph = GraphReader(filename).read_problem()
    return Problem(graph.origin, graph.destinations, graph.neighbors, graph.neighbors_with_estimate)


def run_method(problem, method):
    """Run one search method on a problem.

    Returns: (result, nodes_expanded) where result is a list of PathStep for
    DIJKSTRA/AS and the full ledger for MAP.
    """
    if method == "MAP":
        counter = CountingExpander(problem.neighbors)
        return shortest_paths(problem.origin, counter), counter.calls

    if method == "DIJKSTRA":
        counter = CountingExpander(problem.neighbors)
        search_fn = shortest_path
    elif method == "AS":
        counter = CountingExpander(problem.neighbors_with_estimate)
        search_fn = astar_path
    else:
        raise ValueError(f"Unknown method: {method}")
    path = search_fn(problem.origin, counter, predicate=lambda n: n in problem.destinations)
    return path, counter.calls


def _execute_with_metrics(run_fn, *args):
    """Run a search function and collect runtime and memory metrics.

    Returns: (result, runtime_seconds, peak_tracemalloc_bytes, rss_after_bytes)
    - peak_tracemalloc_bytes: peak Python allocations measured by tracemalloc
    - rss_after_bytes: process RSS at end (approx OS memory usage)
    """
    tracemalloc.start()
    proc = psutil.Process()
    t0 = time.perf_counter()
    try:
        result = run_fn(*args)
    finally:
        dt = time.perf_counter() - t0
        _cur, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
    rss_after = proc.memory_info().rss
    return result, dt, peak, rss_after


def _print_metrics(metrics_mode, line):
    if metrics_mode == "stdout":
        print(line)
    elif metrics_mode == "stderr":
        print(line, file=sys.stderr)


def main(filename, method, metrics_mode="none", accidents=()):
    """Main function to run the search algorithm.

    metrics_mode: "none" | "stderr" | "stdout"
    - When not "none", prints a single metrics line in addition to the normal output
    accidents: (way_id, severity) pairs, see load_problem
    Returns the process exit status.
    """
    method = method.upper()
    if method not in METHODS:
        print(f"Unknown method: {method}")
        return 2

    try:
        problem = load_problem(filename, accidents)
    except FileNotFoundError:
        print(f"Error: File not found: {filename}")
        return 1
    except (ValueError, KeyError) as e:
        print(f"Error: {e}")
        return 2
    if problem.origin is None:
        print(f"Error: No origin in {filename}")
        return 1
    logger.info("Problem File: %s, Method: %s, Origin: %s, Destinations: %s",
                filename, method, problem.origin, sorted(problem.destinations, key=str))

    print(f"{filename} {method}")
    try:
        (result, nodes_expanded), runtime_s, peak_bytes, rss_after = _execute_with_metrics(run_method, problem, method)
    except NoPathError:
        logger.info("No destination reachable from %s", problem.origin)
        print("None 0 ")
        return 0
    metrics_line = (
        f"Metrics: method={method} nodes_expanded={nodes_expanded} "
        f"runtime_ms={(runtime_s*1000):.3f} peak_py_mem={FormatBytes(peak_bytes)} "
        f"rss_now={FormatBytes(rss_after)}"
    )

    if method == "MAP":
        for node, entry in result.items():
            print(f"{node} <- {entry.previous} cost={entry.cost}")
        print(f"Number of Nodes visited:{nodes_expanded}")
        _print_metrics(metrics_mode, metrics_line)
        return 0

    goal_node, total_cost = result[-1]
    path_str = " -> ".join(str(step.state) for step in result)
    print(f"Goal node reached:{goal_node}")
    print(f"Number of Nodes visited:{nodes_expanded}")
    print(f"{path_str}")
    print(f"Total path cost:{total_cost}")
    _print_metrics(metrics_mode, metrics_line)
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Shortest path search over a problem file")
    parser.add_argument("filename", help="problem file (Nodes:/Edges: format) or road config ([NODES]/[WAYS] format)")
    parser.add_argument("method", help="one of " + ", ".join(METHODS))
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--metrics", "-m", dest="metrics_mode", action="store_const", const="stderr",
                       default="none", help="print a metrics line on stderr")
    group.add_argument("--metrics-stdout", dest="metrics_mode", action="store_const", const="stdout",
                       help="print a metrics line on stdout")
    parser.add_argument("--accident", nargs=2, action="append", type=float, default=[],
                        metavar=("WAY_ID", "SEVERITY"),
                        help="scale a way's travel time by an accident (road configs only, repeatable)")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    accidents = [(int(way_id), severity) for way_id, severity in args.accident]
    sys.exit(main(args.filename, args.method, args.metrics_mode, accidents))
