import math
from array import array
from typing import Optional

import numpy as np

from maze_paths.core.grid import Coord

# Dense-array sentinels; never exposed through the accessors
UNREACHED = -1
NO_PREDECESSOR = -1


class SearchState:
    """
    Per-run search annotations (distance, predecessor, closed flag) for one
    grid. Every strategy run allocates a fresh instance, so nothing carries
    over from an earlier run against the same grid.
    """
    __slots__ = ('size', 'strategy', 'distance', 'predecessor', 'visited')

    def __init__(self, size: int, strategy: str = ""):
        self.size = size
        self.strategy = strategy
        n = size * size
        self.distance = array('i', [UNREACHED] * n)
        # Flat index of the parent cell
        self.predecessor = array('i', [NO_PREDECESSOR] * n)
        self.visited = array('B', [0] * n)

    def _index(self, x: int, y: int) -> int:
        if 0 <= x < self.size and 0 <= y < self.size:
            return y * self.size + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get_distance(self, x: int, y: int) -> float:
        d = self.distance[self._index(x, y)]
        return math.inf if d == UNREACHED else d

    def get_predecessor(self, x: int, y: int) -> Optional[Coord]:
        p = self.predecessor[self._index(x, y)]
        if p == NO_PREDECESSOR:
            return None
        return p % self.size, p // self.size

    def is_visited(self, x: int, y: int) -> bool:
        return self.visited[self._index(x, y)] != 0

    def is_reached(self, x: int, y: int) -> bool:
        return self.distance[self._index(x, y)] != UNREACHED

    @property
    def expanded_count(self) -> int:
        return self.visited.count(1)

    def distance_field(self) -> np.ndarray:
        """(size, size) float array indexed [y, x]; unreached cells are inf."""
        raw = np.frombuffer(self.distance, dtype=np.intc).reshape(self.size, self.size)
        field = raw.astype(np.float64)
        field[raw == UNREACHED] = np.inf
        return field

    def __eq__(self, other):
        if not isinstance(other, SearchState):
            return NotImplemented
        return (self.size == other.size
                and self.distance == other.distance
                and self.predecessor == other.predecessor
                and self.visited == other.visited)

    __hash__ = None
