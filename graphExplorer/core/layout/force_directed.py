"""
Force-directed layout of the nodes currently drawn in the viewport.
"""

import math
import numpy as np
from typing import Dict, Any, List, Optional
from loguru import logger
from tqdm import tqdm

from graphExplorer.core.graph_model.graph_model import GraphModel
from graphExplorer.core.graph_model.nodes import Coordinates, Node
from graphExplorer.utils.config_manager import config_manager


# Rows of the pairwise repulsion matrix held in memory at once
REPULSION_BLOCK_SIZE = 512


class ForceDirectedLayout:
    """
    Force-directed layout engine

    Each iteration accumulates an inverse-distance repulsion between every
    pair of visible nodes and an attraction along every incident edge, keeps
    nodes inside a circle around the canvas center and moves them by the
    dampened force. There is no convergence criterion: a run always performs
    its full iteration budget.
    """

    def __init__(self, model: GraphModel, config: Optional[Dict[str, Any]] = None,
                 block_size: int = REPULSION_BLOCK_SIZE):
        """
        Initialize layout engine

        Args:
            model: Graph model whose visible nodes are laid out
            config: Layout parameters (uses the 'layout' config section if None)
            block_size: Rows of the pairwise repulsion computed at once
        """
        self.model = model
        self.block_size = max(1, int(block_size))

        if config is None:
            config = config_manager.get_layout_config()
        else:
            defaults = config_manager.get_environment_config("layout")
            defaults.update(config)
            config = defaults

        self.iterations = int(config['iterations'])
        self.iterations_click = int(config['iterations_click'])
        self.repulsive_strength = float(config['repulsive_strength'])
        self.attractive_strength = float(config['attractive_strength'])
        self.dampening_effect = float(config['dampening_effect'])
        self.border_ratio = float(config['border_ratio'])
        self.show_progress = bool(config.get('show_progress', False))

        if self.attractive_strength == 0:
            raise ValueError("attractive_strength must not be 0")
        if self.dampening_effect == 0:
            raise ValueError("dampening_effect must not be 0")
        if self.border_ratio == 0:
            raise ValueError("border_ratio must not be 0")

    @property
    def center(self) -> float:
        return self.model.canvas_size / 2

    @property
    def max_distance(self) -> float:
        """Radius of the circle around the canvas center nodes are kept in"""
        border = self.model.canvas_size / self.border_ratio
        return math.sqrt(border ** 2 + border ** 2)

    def run_initial(self) -> Dict[str, Any]:
        """Automatic layout performed right after the graph is loaded"""
        return self.run(self.iterations)

    def run(self, iterations: Optional[int] = None) -> Dict[str, Any]:
        """
        Run the layout for a fixed number of iterations

        Args:
            iterations: Iteration budget (uses the user-triggered default if None)

        Returns:
            Dictionary with run statistics
        """
        if iterations is None:
            iterations = self.iterations_click

        moved = 0
        with self.model.lock:
            node_count = len(self.model.visible_nodes())
            for _ in tqdm(range(iterations), desc="Force-directed layout", disable=not self.show_progress):
                moved = self.step()

        logger.info(f"Layout finished: {iterations} iterations over {node_count} nodes, "
                    f"{moved} nodes moved in the last iteration")
        return {
            'iterations': iterations,
            'nodes': node_count,
            'moved_last_iteration': moved,
        }

    def step(self) -> int:
        """
        Perform one iteration

        Returns:
            Number of nodes that moved
        """
        nodes = self.model.visible_nodes()
        if not nodes:
            return 0

        positions = np.array([[node.position.x, node.position.y] for node in nodes], dtype=float)

        forces = self._repulsive_forces(positions)
        forces += self._attractive_forces(nodes, positions)

        moved = 0
        for i, node in enumerate(nodes):
            position = self._contain(positions[i])

            force_x = math.trunc(forces[i, 0] / self.dampening_effect)
            force_y = math.trunc(forces[i, 1] / self.dampening_effect)

            # Sub-pixel moves are suppressed
            if abs(force_x) > 1 or abs(force_y) > 1:
                position = self._contain(position + np.array([force_x, force_y], dtype=float))
                moved += 1

            new_position = Coordinates(float(position[0]), float(position[1]))
            if new_position != node.position:
                node.position = new_position

        return moved

    def _repulsive_forces(self, positions: np.ndarray) -> np.ndarray:
        """
        Inverse-distance repulsion summed over every other node

        Rows are processed in blocks so that peak memory stays at
        O(block_size * n) instead of O(n^2).
        """
        forces = np.zeros_like(positions)

        for start in range(0, len(positions), self.block_size):
            block = positions[start:start + self.block_size]

            # delta[i, j] = position_i - position_j
            delta = block[:, None, :] - positions[None, :, :]
            distance = np.sqrt((delta ** 2).sum(axis=2))

            with np.errstate(divide='ignore', invalid='ignore'):
                scale = np.where(distance > 0, self.repulsive_strength / distance, 0.0)

            forces[start:start + self.block_size] = np.floor(delta * scale[:, :, None]).sum(axis=1)

        return forces

    def _attractive_forces(self, nodes: List[Node], positions: np.ndarray) -> np.ndarray:
        """Attraction toward the neighbours along every incident edge"""
        forces = np.zeros_like(positions)

        for i, node in enumerate(nodes):
            neighbours = [edge.from_node for edge in node.in_edges] + [edge.to_node for edge in node.out_edges]

            for neighbour in neighbours:
                if neighbour is None:
                    continue
                other = neighbour.anchor.position

                dx = positions[i, 0] - other.x
                dy = positions[i, 1] - other.y
                distance = math.sqrt(dx ** 2 + dy ** 2)

                # Grows with distance; tuned by hand, not Hookean
                forces[i, 0] += math.floor(-1 * dx * (distance / self.attractive_strength) + 0.5)
                forces[i, 1] += math.floor(-1 * dy * (distance / self.attractive_strength) + 0.5)

        return forces

    def _contain(self, position: np.ndarray) -> np.ndarray:
        """Pull a position back onto the boundary circle if it lies outside"""
        delta = position - self.center
        distance = math.sqrt(delta[0] ** 2 + delta[1] ** 2)
        max_distance = self.max_distance

        if distance > max_distance:
            ratio = max_distance / distance
            return self.center + delta * ratio
        return position
