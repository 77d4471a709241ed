"""Tests for the search.py command-line entry point."""
import pytest

import search


def test_dijkstra_output(problem_file, capsys):
    assert search.main(str(problem_file), "dijkstra") == 0
    lines = capsys.readouterr().out.splitlines()

    assert lines == [
        f"{problem_file} DIJKSTRA",
        "Goal node reached:4",
        "Number of Nodes visited:3",
        "2 -> 1 -> 4",
        "Total path cost:10",
    ]


def test_astar_output(problem_file, capsys):
    assert search.main(str(problem_file), "AS") == 0
    out = capsys.readouterr().out

    assert out.startswith(f"{problem_file} AS\n")
    assert "Total path cost:10" in out


def test_map_output(problem_file, capsys):
    assert search.main(str(problem_file), "MAP") == 0
    out = capsys.readouterr().out

    assert "2 <- None cost=0" in out
    assert "6 <- 3 cost=11" in out
    assert "Number of Nodes visited:6" in out


def test_unreachable_destination(tmp_path, capsys):
    path = tmp_path / "island.txt"
    path.write_text("Nodes:\n1: (0,0)\n2: (1,1)\nEdges:\n(2,1): 1\nOrigin:\n1\nDestinations:\n2\n")

    assert search.main(str(path), "DIJKSTRA") == 0
    assert capsys.readouterr().out.splitlines() == [f"{path} DIJKSTRA", "None 0 "]


def test_missing_file(tmp_path, capsys):
    assert search.main(str(tmp_path / "nope.txt"), "DIJKSTRA") == 1
    assert "File not found" in capsys.readouterr().out


def test_unknown_method(problem_file, capsys):
    assert search.main(str(problem_file), "DFS") == 2
    assert "Unknown method: DFS" in capsys.readouterr().out


def test_metrics_on_stderr(problem_file, capsys):
    search.main(str(problem_file), "DIJKSTRA", metrics_mode="stderr")
    captured = capsys.readouterr()

    assert "Metrics: method=DIJKSTRA nodes_expanded=3" in captured.err
    assert "Metrics:" not in captured.out


def test_road_config(road_config, capsys):
    assert search.main(str(road_config), "DIJKSTRA") == 0
    lines = capsys.readouterr().out.splitlines()

    assert "1 -> 2 -> 4" in lines
    assert "Total path cost:5.5" in lines


@pytest.mark.parametrize("argv, mode", [
    (["p.txt", "AS"], "none"),
    (["p.txt", "AS", "--metrics"], "stderr"),
    (["p.txt", "AS", "-m"], "stderr"),
    (["p.txt", "AS", "--metrics-stdout"], "stdout"),
])
def test_parse_args(argv, mode):
    args = search.parse_args(argv)
    assert args.filename == "p.txt"
    assert args.method == "AS"
    assert args.metrics_mode == mode


def test_road_config_with_accident(road_config, capsys):
    # ACCIDENT_MULTIPLIER 0.5, severity 2 doubles way 13 (2 -> 4) to 5.0
    assert search.main(str(road_config), "DIJKSTRA", accidents=[(13, 2.0)]) == 0
    lines = capsys.readouterr().out.splitlines()

    assert "1 -> 3 -> 4" in lines
    assert "Total path cost:6.0" in lines


def test_accident_on_unknown_way(road_config, capsys):
    assert search.main(str(road_config), "DIJKSTRA", accidents=[(99, 1.0)]) == 2
    assert "Unknown way id: 99" in capsys.readouterr().out


def test_accident_needs_road_config(problem_file, capsys):
    assert search.main(str(problem_file), "DIJKSTRA", accidents=[(1, 1.0)]) == 2
    assert "road config" in capsys.readouterr().out


def test_parse_accident_args():
    args = search.parse_args(["roads.txt", "AS", "--accident", "13", "2", "--accident", "10", "0.5"])
    assert args.accident == [[13.0, 2.0], [10.0, 0.5]]
