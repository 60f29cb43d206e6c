"""
Tests for the force-directed layout.
"""

import numpy as np
import pytest

from compareGraph.core.build_graph import ALL_CATEGORIES, GraphBuilder, GraphData
from compareGraph.core.layout import ForceSimulation
from conftest import make_record, make_store


# Only the collision force acts with these settings
COLLISION_ONLY = {"charge_strength": 0.0, "center_strength": 0.0, "link_distance": 150.0}


def _graph(*records):
    return GraphBuilder().build(make_store(*records), ALL_CATEGORIES)


def _distance(simulation, a, b):
    (ax, ay), (bx, by) = simulation.position(a), simulation.position(b)
    return float(np.hypot(ax - bx, ay - by))


def test_seed_scatters_around_center():
    graph = _graph(make_record("A", comparisons=["B", "C", "D"]))
    simulation = ForceSimulation(graph, width=800, height=600, seed=7)

    assert simulation.positions.shape == (4, 2)
    assert np.allclose(simulation.velocities, 0.0)
    assert simulation.alpha == 1.0
    assert np.linalg.norm(simulation.positions.mean(axis=0) - np.array([400.0, 300.0])) < 150


def test_ghost_nodes_are_smaller():
    graph = _graph(make_record("A", comparisons=["ghost"]))
    simulation = ForceSimulation(graph, seed=1, config={"main_radius": 35.0, "ghost_radius": 25.0})

    assert simulation.radii.tolist() == [35.0, 25.0]


def test_collision_separates_overlapping_nodes():
    graph = _graph(make_record("A"), make_record("B"))
    simulation = ForceSimulation(graph, seed=1, config=COLLISION_ONLY)
    simulation.positions[:] = [[100.0, 100.0], [110.0, 100.0]]

    simulation.tick()

    assert _distance(simulation, "A", "B") == pytest.approx(70.0)


def test_collision_never_moves_pinned_node():
    graph = _graph(make_record("A"), make_record("B"))
    simulation = ForceSimulation(graph, seed=1, config=COLLISION_ONLY)
    simulation.positions[:] = [[300.0, 300.0], [305.0, 300.0]]

    simulation.drag_move("A", 300.0, 300.0)
    simulation.tick()

    assert simulation.position("A") == (300.0, 300.0)
    assert _distance(simulation, "A", "B") == pytest.approx(70.0)


def test_repulsion_pushes_nodes_apart():
    graph = _graph(make_record("A"), make_record("B"))
    simulation = ForceSimulation(graph, seed=1, config={"center_strength": 0.0})
    simulation.positions[:] = [[400.0, 300.0], [500.0, 300.0]]

    for _ in range(5):
        simulation.tick()

    assert _distance(simulation, "A", "B") > 100.0


def test_link_spring_settles_near_link_distance():
    graph = _graph(make_record("A", comparisons=["B"]))
    simulation = ForceSimulation(graph, seed=3, config={"charge_strength": 0.0, "center_strength": 0.0})
    simulation.positions[:] = [[100.0, 300.0], [700.0, 300.0]]

    simulation.run(max_ticks=1000)

    assert _distance(simulation, "A", "B") == pytest.approx(150.0, abs=2.0)


def test_simulation_settles_and_stops_moving():
    graph = _graph(make_record("A", comparisons=["B", "C"]), make_record("B", comparisons=["C"]))
    simulation = ForceSimulation(graph, seed=11)

    ticks = simulation.run(max_ticks=2000)
    assert simulation.settled
    assert 0 < ticks < 2000

    before = simulation.positions.copy()
    assert simulation.tick() is False
    assert np.array_equal(before, simulation.positions)


def test_reheat_resumes_ticking():
    graph = _graph(make_record("A", comparisons=["B"]))
    simulation = ForceSimulation(graph, seed=5)
    simulation.run(max_ticks=2000)
    assert simulation.settled

    simulation.reheat()

    assert not simulation.settled
    assert simulation.tick() is True


def test_dragged_node_tracks_pointer_then_resumes():
    graph = _graph(make_record("A", comparisons=["B", "C"]))
    simulation = ForceSimulation(graph, width=800, height=600, seed=2)
    for _ in range(20):
        simulation.tick()

    simulation.drag_start("A")
    assert simulation.pinned_ids == ["A"]
    for x, y in [(500.0, 300.0), (520.0, 310.0), (610.0, 90.0)]:
        simulation.drag_move("A", x, y)
        simulation.tick()
        assert simulation.position("A") == (x, y)

    simulation.drag_end("A")
    assert simulation.pinned_ids == []
    released_at = simulation.position("A")
    simulation.tick()
    assert simulation.position("A") != released_at


def test_drag_keeps_simulation_warm():
    graph = _graph(make_record("A", comparisons=["B"]))
    simulation = ForceSimulation(graph, seed=4)
    simulation.run(max_ticks=2000)
    assert simulation.settled

    simulation.drag_start("B")
    for _ in range(400):
        simulation.tick()

    assert not simulation.settled
    assert simulation.alpha >= simulation.drag_alpha_target - 1e-9

    simulation.drag_end("B")
    assert simulation.alpha_target == 0.0
    simulation.run(max_ticks=2000)
    assert simulation.settled


def test_other_nodes_react_to_pinned_node():
    graph = _graph(make_record("A", comparisons=["B"]))
    simulation = ForceSimulation(graph, seed=6, config={"charge_strength": 0.0, "center_strength": 0.0})
    simulation.positions[:] = [[100.0, 300.0], [250.0, 300.0]]

    simulation.drag_move("A", 0.0, 300.0)
    for _ in range(200):
        simulation.tick()

    assert simulation.position("A") == (0.0, 300.0)
    assert simulation.position("B")[0] < 250.0


def test_unknown_node_cannot_be_dragged():
    simulation = ForceSimulation(_graph(make_record("A")), seed=1)

    with pytest.raises(KeyError):
        simulation.drag_start("missing")


def test_empty_graph_is_settled():
    simulation = ForceSimulation(GraphData(), seed=1)

    assert simulation.settled
    assert simulation.tick() is False
    assert simulation.positions_by_id() == {}
