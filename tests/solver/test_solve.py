"""End-to-end tests for the pipeline."""

import tempfile
from pathlib import Path

import pytest

from user_graph.config import RunConfig
from user_graph.errors import IoError, ParseError
from user_graph.solver.solve import main_solve, solve

SCENARIO_LINES = [
    '{"inputs": [["A", 1.0]], "outputs": [["B", 0.5], ["C", 0.5]]}\n',
    '{"inputs": [["B", 1.0], ["D", 1.0]], "outputs": [["E", 2.0]]}\n',
    '{"inputs": [["C", 1.0]], "outputs": [["D", 0.3]]}\n',
]


def write_transactions(directory: str, name: str, lines: list[str]) -> Path:
    path = Path(directory) / f"transactions-{name}.txt"
    path.write_text("".join(lines), encoding="utf-8")
    return path


def test_solve_reference_scenario() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = write_transactions(tmp_dir, "ref", SCENARIO_LINES)
        result = solve(str(path), multigraph=True)

    assert list(result.loaded.addresses) == ["A", "B", "C", "D", "E"]
    assert result.clustering.clusters == [[0], [1, 3], [2], [4]]
    assert list(result.user_graph.iter_edges()) == [
        (0, 1, 0.5),
        (0, 2, 0.5),
        (1, 3, 2.0),
        (2, 1, 0.3),
    ]
    assert [r.cluster_id for r in result.stats.richest_clusters] == [3, 2, 0, 1]
    assert [r.richness for r in result.stats.richest_clusters] == pytest.approx(
        [2.0, 0.2, -1.0, -1.2]
    )
    assert sum(len(entries) for entries in result.user_graph.multigraph_edges) == 4


def test_main_solve_writes_reports() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        write_transactions(tmp_dir, "ref", SCENARIO_LINES)
        config = RunConfig(name="ref", output_dir=tmp_dir, multigraph=True)
        main_solve(config)

        edge_list = config.user_graph_path.read_text(encoding="utf-8")
        stats = config.stats_path.read_text(encoding="utf-8")
        multigraph = config.multigraph_path.read_text(encoding="utf-8")

    assert edge_list == "from to weight\n0 1 0.5\n0 2 0.5\n1 3 2\n2 1 0.3\n"
    assert stats == (
        "Number of transactions: 3\n"
        "Number of unique addresses: 5\n"
        "Number of clusters: 4\n"
        "Largest clusters and number of addresses:\n"
        "  1:2\n"
        "  0:1\n"
        "  2:1\n"
        "  3:1\n"
        "Number of User Graph edges: 4\n"
        "Richest clusters and input-output total:\n"
        "  3 2 0\n"
        "  2 0.5 0.3\n"
        "  0 0 1\n"
        "  1 0.8 2\n"
    )
    assert multigraph.splitlines()[0] == "from to weight"


def test_main_solve_skips_multigraph_by_default() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        write_transactions(tmp_dir, "ref", SCENARIO_LINES)
        config = RunConfig(name="ref", output_dir=tmp_dir)
        main_solve(config)
        assert not config.multigraph_path.exists()


def test_empty_input_produces_empty_outputs() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        write_transactions(tmp_dir, "empty", [])
        config = RunConfig(name="empty", output_dir=tmp_dir)
        result = main_solve(config)

        assert result.stats.num_clusters == 0
        assert result.stats.num_edges == 0
        assert config.user_graph_path.read_text(encoding="utf-8") == "from to weight\n"


def test_malformed_input_aborts_before_writing() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        write_transactions(tmp_dir, "bad", [SCENARIO_LINES[0], "{oops\n"])
        config = RunConfig(name="bad", output_dir=tmp_dir)
        with pytest.raises(ParseError):
            main_solve(config)
        assert not config.stats_path.exists()


def test_missing_input_raises_io_error() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        with pytest.raises(IoError):
            solve(str(Path(tmp_dir) / "transactions-none.txt"))
