import logging
import weakref
from dataclasses import dataclass, field
from typing import List

import numpy as np

from maze_paths.algo.compare import Comparison, compare_strategies
from maze_paths.core.grid import Coord, Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FrameSnapshot:
    """Everything a renderer needs for one frame, computed once per grid revision."""
    revision: int
    cell_types: np.ndarray = field(repr=False)
    dijkstra_path: List[Coord] = field(repr=False)
    astar_path: List[Coord] = field(repr=False)
    dijkstra_distances: np.ndarray = field(repr=False)
    astar_distances: np.ndarray = field(repr=False)
    comparison: Comparison = field(repr=False)


class SnapshotCache:
    """
    Hands the renderer the same snapshot every frame until the grid's
    cell types change. Entries die with their grid.
    """

    def __init__(self, heuristic: str = "manhattan"):
        self.heuristic = heuristic
        self._entries = weakref.WeakKeyDictionary()
        self.recomputed = 0

    def get(self, grid: Grid) -> FrameSnapshot:
        snap = self._entries.get(grid)
        if snap is not None and snap.revision == grid.revision:
            return snap

        comparison = compare_strategies(grid, heuristic=self.heuristic)
        # Copy so later edits to the grid don't leak into an old frame
        cell_types = grid.as_array().copy()
        cell_types.flags.writeable = False
        snap = FrameSnapshot(
            revision=grid.revision,
            cell_types=cell_types,
            dijkstra_path=comparison.dijkstra.path,
            astar_path=comparison.astar.path,
            dijkstra_distances=comparison.dijkstra.state.distance_field(),
            astar_distances=comparison.astar.state.distance_field(),
            comparison=comparison,
        )
        self._entries[grid] = snap
        self.recomputed += 1
        logger.debug(f"Recomputed snapshot for grid revision {grid.revision}")
        return snap

    def invalidate(self, grid: Grid):
        self._entries.pop(grid, None)
