import logging
import math

logger = logging.getLogger(__name__)


class Node:
    """Represents a node in the 2D graph."""
    def __init__(self, node_id, x, y):
        self.id = int(node_id)
        self.x = int(x)
        self.y = int(y)

    def __repr__(self):
        return f"Node {self.id}: ({self.x},{self.y})"

class Graph:
    """Represents the complete directed graph."""
    def __init__(self):
        self.nodes = {}           # {node_id: Node_object}
        self.adjacency = {}       # {from_node_id: [(to_node_id, cost), ...]}
        self.origin = None        # Origin node ID
        self.destinations = set() # Set of destination node IDs

    def add_node(self, node):
        """Adds a Node object to the graph."""
        self.nodes[node.id] = node
        if node.id not in self.adjacency:
            self.adjacency[node.id] = []

    def add_edge(self, from_id, to_id, cost):
        """Adds a directed edge and its cost."""
        if from_id in self.adjacency:
            self.adjacency[from_id].append((to_id, cost))
        else:
            self.adjacency[from_id] = [(to_id, cost)]

    def get_coordinates(self, node_id):
        """Returns the (x, y) coordinates of a node."""
        node = self.nodes.get(node_id)
        return (node.x, node.y) if node else None

    def neighbors(self, node_id, cost):
        """Expansion callback for Dijkstra: (neighbor, cumulative cost) sorted by neighbor id."""
        return [(to_id, cost + edge_cost)
                for to_id, edge_cost in sorted(self.adjacency.get(node_id, []), key=lambda x: x[0])]

    def estimate(self, node_id):
        """Straight-line distance from node_id to the closest destination."""
        coords = self.get_coordinates(node_id)
        goal_coords = [c for c in (self.get_coordinates(d) for d in self.destinations) if c is not None]
        if coords is None or not goal_coords:
            return 0
        return min(math.hypot(coords[0] - gx, coords[1] - gy) for gx, gy in goal_coords)

    def neighbors_with_estimate(self, node_id, cost):
        """Expansion callback for A*: (neighbor, cumulative cost, cost + estimate)."""
        return [(to_id, g, g + self.estimate(to_id)) for to_id, g in self.neighbors(node_id, cost)]

    def path_cost(self, path):
        """Calculate total cost of edges in the given path."""
        total = 0
        for from_node, to_node in zip(path, path[1:]):
            edge_cost = None
            for neighbor, cost in self.adjacency.get(from_node, []):
                if neighbor == to_node:
                    edge_cost = cost if edge_cost is None else min(edge_cost, cost)
            if edge_cost is None:
                return None  # Edge not found
            total += edge_cost
        return total


class GraphReader:
    """Handles parsing the problem specification file."""

    SECTIONS = {
        "Nodes:": "NODES",
        "Edges:": "EDGES",
        "Origin:": "ORIGIN",
        "Destinations:": "DESTINATIONS",
    }

    def __init__(self, filename):
        self.filename = filename
        self.graph = Graph()

    def read_problem(self):
        """Reads the file and populates the Graph object.

        Raises FileNotFoundError if the file does not exist; malformed lines
        are logged and skipped.
        """
        with open(self.filename, 'r') as f:
            lines = [line.strip() for line in f if line.strip()]

        current_section = None
        for line in lines:
            header = next((h for h in self.SECTIONS if line.startswith(h)), None)
            if header is not None:
                current_section = self.SECTIONS[header]
                # allow "Origin: 2" on a single line
                line = line[len(header):].strip()
                if not line:
                    continue

            try:
                self._parse_line(current_section, line)
            except (ValueError, IndexError) as e:
                logger.warning("Error parsing %s line '%s': %s", (current_section or "unknown").lower(), line, e)

        return self.graph

    def _parse_line(self, section, line):
        if section == "NODES":
            # Example: 1: (4,1)
            parts = line.split(':')
            node_id = int(parts[0].strip())
            x, y = map(int, parts[1].strip().strip('()').split(','))
            self.graph.add_node(Node(node_id, x, y))
        elif section == "EDGES":
            # Example: (2,1): 4
            parts = line.split(':')
            cost = int(parts[1].strip())
            from_id, to_id = map(int, parts[0].strip().strip('()').split(','))
            if cost < 0:
                raise ValueError(f"negative edge cost {cost}")
            self.graph.add_edge(from_id, to_id, cost)
        elif section == "ORIGIN":
            # Example: 2
            self.graph.origin = int(line)
        elif section == "DESTINATIONS":
            # Example: 5; 4
            dest_ids = [int(d.strip()) for d in line.split(';') if d.strip()]
            self.graph.destinations.update(dest_ids)
        else:
            raise ValueError("line outside of any section")


def FormatBytes(n_bytes: int) -> str:
    """Convert number of bytes to human-readable in KB/MB with 2 decimals.

    Args:
        n_bytes (int): Number of bytes.

    Returns:
        str: Human-readable string representation.
    """
    if n_bytes < 1024:
        return f"{n_bytes} B"
    kb = n_bytes / 1024.0
    if kb < 1024:
        return f"{kb:.2f} KB"
    mb = kb / 1024.0
    if mb < 1024:
        return f"{mb:.2f} MB"
    gb = mb / 1024.0
    return f"{gb:.2f} GB"
