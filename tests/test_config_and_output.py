"""
Tests for configuration loading, JSON export and snapshot rendering.
"""

from compareGraph.core.build_graph import ALL_CATEGORIES, GraphBuilder, GraphData
from compareGraph.core.layout import ForceSimulation
from compareGraph.utils import load_json, save_json
from compareGraph.utils.config_manager import API_URL_ENV, ConfigManager
from compareGraph.visualize import render_snapshot
from conftest import make_record, make_store


def test_defaults_without_config_file(tmp_path):
    manager = ConfigManager(config_dir=str(tmp_path))

    layout = manager.get_layout_config()

    assert layout["link_distance"] == 150.0
    assert layout["charge_strength"] == -800.0
    assert manager.get_session_config()["graph_mode"] == "full"
    assert manager.get_section("unknown") == {}


def test_yaml_values_override_defaults(tmp_path):
    (tmp_path / "graph_config.yaml").write_text(
        "layout:\n  link_distance: 90\nsession:\n  graph_mode: root\n",
        encoding="utf-8"
    )
    manager = ConfigManager(config_dir=str(tmp_path))

    assert manager.get_layout_config()["link_distance"] == 90
    assert manager.get_layout_config()["alpha_min"] == 0.001
    assert manager.get_session_config()["graph_mode"] == "root"


def test_api_url_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv(API_URL_ENV, "http://localhost:9999")
    manager = ConfigManager(config_dir=str(tmp_path))

    assert manager.get_catalog_config()["base_url"] == "http://localhost:9999"


def test_sections_are_copies(tmp_path):
    manager = ConfigManager(config_dir=str(tmp_path))

    manager.get_layout_config()["link_distance"] = 1

    assert manager.get_layout_config()["link_distance"] == 150.0


def test_snapshot_export_and_render(tmp_path):
    store = make_store(make_record("A", name="Alpha", comparisons=["B", "C"]), make_record("B", name="Beta"))
    graph = GraphBuilder().build(store, ALL_CATEGORIES)
    simulation = ForceSimulation(graph, width=640, height=480, seed=9)
    simulation.run(max_ticks=50)
    positions = simulation.positions_by_id()

    json_path = tmp_path / "out" / "graph.json"
    save_json(graph.to_dict(positions), str(json_path))
    snapshot = load_json(str(json_path))
    assert [node["id"] for node in snapshot["nodes"]] == ["A", "B", "C"]
    assert all("x" in node and "y" in node for node in snapshot["nodes"])

    image_path = tmp_path / "out" / "graph.png"
    assert render_snapshot(graph, positions, image_path, width=640, height=480, title="Alpha")
    assert image_path.exists()
    assert image_path.stat().st_size > 0


def test_empty_graph_is_not_rendered(tmp_path):
    image_path = tmp_path / "empty.png"

    assert render_snapshot(GraphData(), {}, image_path) is False
    assert not image_path.exists()
