import logging
import math

import pandas as pd

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def split_csv_allow_commas(line, min_fields):
    parts = []
    buf = []
    depth = 0
    for ch in line:
        if ch == '(':
            depth += 1
            buf.append(ch)
        elif ch == ')':
            depth = max(depth - 1, 0)
            buf.append(ch)
        elif ch == ',' and depth == 0:
            parts.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if buf:
        parts.append("".join(buf).strip())
    if len(parts) < min_fields:
        raise ValueError(f"Line '{line}' parsed into too few fields: {parts}")
    return parts


def _to_node_id(value):
    value = str(value).strip()
    try:
        return int(value)
    except ValueError:
        return value


def parse_config_file(path):
    """Parses a road network config file

    Args:
        path (string): Filepath to the configuration txt file

    Returns:
        nodes: Pandas DataFrame of nodes (index: node id, columns: lat, lon, label)
        ways: Pandas DataFrame of ways (columns: id, from, to, name, type, base_time, accident_severity, final_time)
        start: start node id
        goals: list of goal node ids
        accident_multiplier: float or None
    """
    section = None
    nodes = {}
    ways = []
    start = None
    goals = []
    accident_multiplier = None

    def is_header(line):
        return line.startswith("[") and line.endswith("]")

    def ignore(line):
        return (not line.strip()) or line.strip().startswith("#")

    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if ignore(line):
                continue
            if is_header(line):
                section = line.upper()
                continue

            if section == "[NODES]":
                p = split_csv_allow_commas(line, 4)
                nid = _to_node_id(p[0])
                nodes[nid] = {"id": nid, "lat": float(p[1]), "lon": float(p[2]), "label": p[3]}

            elif section == "[WAYS]":
                p = split_csv_allow_commas(line, 6)
                base_time = float(p[5])
                if base_time < 0:
                    raise ValueError(f"Way {p[0]} has negative base_time {base_time}")
                ways.append({
                    "id": int(p[0]),
                    "from": _to_node_id(p[1]),
                    "to": _to_node_id(p[2]),
                    "name": p[3],
                    "type": p[4],
                    "base_time": base_time,
                    "accident_severity": 0.0,
                    "final_time": base_time,
                })

            elif section == "[META]":
                p = [x.strip() for x in line.split(",")]
                key = p[0].upper()
                if key == "START":
                    start = _to_node_id(p[1])
                elif key == "GOAL":
                    goals = [_to_node_id(g) for g in p[1:] if g]
                elif key == "ACCIDENT_MULTIPLIER":
                    accident_multiplier = float(p[1])

            else:
                logger.debug("Ignoring line in section %s: %s", section, line)

    nodes_df = pd.DataFrame.from_dict(nodes, orient="index",
                                      columns=["id", "lat", "lon", "label"])
    nodes_df.index.name = "id"
    ways_df = pd.DataFrame(ways, columns=["id", "from", "to", "name", "type",
                                          "base_time", "accident_severity", "final_time"])
    return nodes_df, ways_df, start, goals, accident_multiplier


def apply_accident(ways_df, way_id, accident_severity, accident_multiplier):
    """Scale the travel time of a way by an accident's severity (in place)."""
    mask = ways_df["id"] == way_id
    if not mask.any():
        raise KeyError(f"Unknown way id: {way_id}")
    ways_df.loc[mask, "accident_severity"] = float(accident_severity)
    ways_df.loc[mask, "final_time"] = ways_df.loc[mask, "base_time"] * (1 + accident_severity * accident_multiplier)


def haversine_km(a, b):
    """Great-circle distance between (lat, lon) pairs a and b in kilometres."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    h = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


class RoadNetwork:
    """Lazily expanded view of a ways table.

    final_time of each way is the edge cost. The A* estimate is the straight-line
    time to the closest goal at max_speed_kmh, with times in minutes.
    """

    def __init__(self, nodes_df, ways_df, goals=(), max_speed_kmh=100.0):
        self.nodes_df = nodes_df
        self.goals = list(goals)
        self.max_speed_kmh = max_speed_kmh
        self.adjacency = {}
        ordered = ways_df.sort_values(["from", "to"], kind="stable")
        for from_id, to_id, time in zip(ordered["from"], ordered["to"], ordered["final_time"]):
            self.adjacency.setdefault(_to_node_id(from_id), []).append((_to_node_id(to_id), float(time)))

    def get_coordinates(self, node_id):
        if node_id not in self.nodes_df.index:
            return None
        row = self.nodes_df.loc[node_id]
        return (float(row["lat"]), float(row["lon"]))

    def expand(self, node_id, cost):
        return [(to_id, cost + time) for to_id, time in self.adjacency.get(node_id, [])]

    def estimate(self, node_id):
        coords = self.get_coordinates(node_id)
        goal_coords = [c for c in (self.get_coordinates(g) for g in self.goals) if c is not None]
        if coords is None or not goal_coords:
            return 0.0
        km = min(haversine_km(coords, gc) for gc in goal_coords)
        return km / self.max_speed_kmh * 60.0

    def expand_with_estimate(self, node_id, cost):
        return [(to_id, g, g + self.estimate(to_id)) for to_id, g in self.expand(node_id, cost)]
