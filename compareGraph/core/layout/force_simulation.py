"""
Force-directed layout for the comparison graph.

One simulation instance lives per graph build. Each tick combines a link
spring, an all-pairs repulsion and a centering pull into node velocities,
integrates them, and finally separates overlapping nodes by displacing them.
An alpha scalar decays every tick; once it falls below alpha_min the
simulation is settled and stops moving nodes until it is reheated.
"""

import numpy as np
from typing import Dict, List, Any, Optional, Tuple
from loguru import logger
from tqdm import tqdm

from compareGraph.core.build_graph import GraphData, GhostNode
from compareGraph.utils.config_manager import config_manager


# Squared distance below which repulsion stops growing
DISTANCE_MIN2 = 1.0
# Squared distance under which two nodes count as coincident
COINCIDENT_D2 = 1e-12
JIGGLE_SCALE = 1e-3


class ForceSimulation:
    """
    Force Simulation

    Positions, velocities and pins are numpy arrays indexed like
    `node_ids`. A pinned node takes its pin position every tick, is excluded
    from integration and never moves during collision resolution, while other
    nodes keep reacting to it.
    """

    def __init__(
        self,
        graph: GraphData,
        width: Optional[float] = None,
        height: Optional[float] = None,
        config: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize and seed a simulation.

        Args:
            graph: Nodes and links to lay out
            width: Canvas width (uses session config if None)
            height: Canvas height (uses session config if None)
            config: Overrides of the layout configuration
            seed: Random seed for the initial scatter
        """
        self.config = config_manager.get_layout_config()
        if config:
            self.config.update(config)
        session_config = config_manager.get_session_config()
        width = width if width is not None else session_config.get("canvas_width", 960)
        height = height if height is not None else session_config.get("canvas_height", 640)

        self.link_distance = float(self.config.get("link_distance", 150.0))
        self.charge_strength = float(self.config.get("charge_strength", -800.0))
        self.center_strength = float(self.config.get("center_strength", 0.1))
        self.alpha_min = float(self.config.get("alpha_min", 0.001))
        self.alpha_decay = float(self.config.get("alpha_decay", 0.0228))
        self.velocity_decay = float(self.config.get("velocity_decay", 0.4))
        self.drag_alpha_target = float(self.config.get("drag_alpha_target", 0.3))
        self.collision_iterations = int(self.config.get("collision_iterations", 1))
        self.max_ticks = int(self.config.get("max_ticks", 500))
        main_radius = float(self.config.get("main_radius", 35.0))
        ghost_radius = float(self.config.get("ghost_radius", 25.0))

        self.node_ids: List[str] = graph.node_ids()
        self.index: Dict[str, int] = {node_id: i for i, node_id in enumerate(self.node_ids)}
        self.radii = np.array(
            [ghost_radius if isinstance(node, GhostNode) else main_radius for node in graph.nodes],
            dtype=float
        )

        pairs = [(self.index[link.source], self.index[link.target]) for link in graph.links
                 if link.source in self.index and link.target in self.index]
        self.link_source = np.array([s for s, _ in pairs], dtype=int)
        self.link_target = np.array([t for _, t in pairs], dtype=int)
        self._init_link_weights()

        self.center = np.array([width / 2.0, height / 2.0], dtype=float)
        self.rng = np.random.default_rng(seed)

        count = len(self.node_ids)
        spread = float(self.config.get("seed_spread", 30.0)) * np.sqrt(max(count, 1))
        self.positions = self.center + self.rng.normal(0.0, spread, size=(count, 2))
        self.velocities = np.zeros((count, 2), dtype=float)
        self.pins = np.full((count, 2), np.nan)

        self.alpha = 1.0
        self.alpha_target = 0.0
        self.tick_count = 0

        logger.debug(f"Seeded simulation with {count} nodes and {len(pairs)} links")

    def _init_link_weights(self) -> None:
        """Spring strength 1/min(degree) and degree-proportional bias per link."""
        if len(self.link_source) == 0:
            self.link_strength = np.zeros(0)
            self.link_bias = np.zeros(0)
            return
        degree = np.bincount(
            np.concatenate([self.link_source, self.link_target]),
            minlength=len(self.node_ids)
        ).astype(float)
        source_degree = degree[self.link_source]
        target_degree = degree[self.link_target]
        self.link_strength = 1.0 / np.minimum(source_degree, target_degree)
        self.link_bias = source_degree / (source_degree + target_degree)

    # ------------------------------------------------------------------
    # State

    @property
    def pinned_mask(self) -> np.ndarray:
        return ~np.isnan(self.pins[:, 0])

    @property
    def pinned_ids(self) -> List[str]:
        return [self.node_ids[i] for i in np.flatnonzero(self.pinned_mask)]

    @property
    def settled(self) -> bool:
        if not self.node_ids:
            return True
        return self.alpha < self.alpha_min and not self.pinned_mask.any()

    def reheat(self, alpha: float = 1.0) -> None:
        self.alpha = max(self.alpha, alpha)

    def position(self, node_id: str) -> Tuple[float, float]:
        x, y = self.positions[self._node_index(node_id)]
        return float(x), float(y)

    def positions_by_id(self) -> Dict[str, Tuple[float, float]]:
        return {node_id: (float(x), float(y)) for node_id, (x, y) in zip(self.node_ids, self.positions)}

    def _node_index(self, node_id: str) -> int:
        if node_id not in self.index:
            raise KeyError(f"Node '{node_id}' is not part of this layout")
        return self.index[node_id]

    # ------------------------------------------------------------------
    # Dragging

    def drag_start(self, node_id: str) -> None:
        """Pin a node at its current position and keep the simulation warm."""
        i = self._node_index(node_id)
        self.pins[i] = self.positions[i]
        self.velocities[i] = 0.0
        self.alpha_target = self.drag_alpha_target
        self.reheat(self.drag_alpha_target)
        logger.debug(f"Pinned '{node_id}' at {tuple(self.pins[i])}")

    def drag_move(self, node_id: str, x: float, y: float) -> None:
        """Move a pinned node to the pointer; pins it first if needed."""
        i = self._node_index(node_id)
        if np.isnan(self.pins[i, 0]):
            self.drag_start(node_id)
        self.pins[i] = (x, y)
        self.positions[i] = (x, y)
        self.velocities[i] = 0.0

    def drag_end(self, node_id: str) -> None:
        """Release a pinned node back to the forces."""
        i = self._node_index(node_id)
        self.pins[i] = np.nan
        if not self.pinned_mask.any():
            self.alpha_target = 0.0
        logger.debug(f"Released '{node_id}'")

    # ------------------------------------------------------------------
    # Ticking

    def tick(self) -> bool:
        """
        Advance the simulation by one step.

        Returns:
            False when the simulation is settled and nothing moved
        """
        if self.settled:
            return False

        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

        self._jiggle_coincident()
        self._apply_link_force()
        self._apply_repulsion()
        self._apply_centering()
        self._integrate()
        for _ in range(self.collision_iterations):
            self._apply_collision()

        self.tick_count += 1
        return True

    def run(self, max_ticks: Optional[int] = None, show_progress: bool = False) -> int:
        """
        Tick until settled.

        Args:
            max_ticks: Upper bound on ticks (uses config if None)
            show_progress: Display a tqdm progress bar

        Returns:
            Number of ticks performed
        """
        max_ticks = max_ticks if max_ticks is not None else self.max_ticks
        performed = 0
        for _ in tqdm(range(max_ticks), desc="Settling layout", disable=not show_progress):
            if not self.tick():
                break
            performed += 1
        logger.debug(f"Layout ran {performed} ticks, alpha={self.alpha:.4f}, settled={self.settled}")
        return performed

    def _jiggle(self, count: int) -> np.ndarray:
        return (self.rng.random((count, 2)) - 0.5) * JIGGLE_SCALE

    def _jiggle_coincident(self) -> None:
        """Nudge free nodes that sit exactly on top of another node."""
        count = len(self.node_ids)
        if count < 2:
            return
        diff = self.positions[None, :, :] - self.positions[:, None, :]
        d2 = (diff ** 2).sum(axis=-1)
        coincident = np.triu(d2 < COINCIDENT_D2, k=1)
        if not coincident.any():
            return
        movers = np.unique(np.nonzero(coincident)[1])
        movers = movers[~self.pinned_mask[movers]]
        self.positions[movers] += self._jiggle(len(movers))

    def _apply_link_force(self) -> None:
        if len(self.link_source) == 0:
            return
        source, target = self.link_source, self.link_target
        delta = (self.positions[target] + self.velocities[target]) - (self.positions[source] + self.velocities[source])
        distance = np.linalg.norm(delta, axis=1)
        zero = distance == 0
        if zero.any():
            delta[zero] = self._jiggle(int(zero.sum()))
            distance = np.linalg.norm(delta, axis=1)

        factor = (distance - self.link_distance) / distance * self.alpha * self.link_strength
        delta *= factor[:, None]
        np.add.at(self.velocities, target, -delta * self.link_bias[:, None])
        np.add.at(self.velocities, source, delta * (1.0 - self.link_bias)[:, None])

    def _apply_repulsion(self) -> None:
        count = len(self.node_ids)
        if count < 2:
            return
        # diff[i, j] points from node i to node j
        diff = self.positions[None, :, :] - self.positions[:, None, :]
        d2 = np.maximum((diff ** 2).sum(axis=-1), DISTANCE_MIN2)
        np.fill_diagonal(d2, np.inf)
        weight = self.charge_strength * self.alpha / d2
        self.velocities += (diff * weight[:, :, None]).sum(axis=1)

    def _apply_centering(self) -> None:
        free = ~self.pinned_mask
        if not free.any():
            return
        shift = (self.positions.mean(axis=0) - self.center) * self.center_strength
        self.positions[free] -= shift

    def _integrate(self) -> None:
        pinned = self.pinned_mask
        free = ~pinned
        self.velocities[free] *= (1.0 - self.velocity_decay)
        self.positions[free] += self.velocities[free]
        self.positions[pinned] = self.pins[pinned]
        self.velocities[pinned] = 0.0

    def _apply_collision(self) -> None:
        """Push overlapping pairs apart until they touch; pinned nodes hold still."""
        count = len(self.node_ids)
        if count < 2:
            return
        diff = self.positions[None, :, :] - self.positions[:, None, :]
        distance = np.sqrt((diff ** 2).sum(axis=-1))
        min_distance = self.radii[:, None] + self.radii[None, :]
        overlapping = np.triu(distance < min_distance, k=1)
        if not overlapping.any():
            return

        pinned = self.pinned_mask
        squared = self.radii ** 2
        for i, j in zip(*np.nonzero(overlapping)):
            if pinned[i] and pinned[j]:
                continue
            delta = self.positions[j] - self.positions[i]
            dist = float(np.hypot(delta[0], delta[1]))
            if dist == 0.0:
                delta = self._jiggle(1)[0]
                dist = float(np.hypot(delta[0], delta[1]))
            push = min_distance[i, j] - dist
            if push <= 0:
                continue
            unit = delta / dist
            if pinned[i]:
                share_i, share_j = 0.0, 1.0
            elif pinned[j]:
                share_i, share_j = 1.0, 0.0
            else:
                total = squared[i] + squared[j]
                share_i, share_j = squared[j] / total, squared[i] / total
            self.positions[i] -= unit * push * share_i
            self.positions[j] += unit * push * share_j
