from abc import ABC, abstractmethod
from typing import Iterator, Optional
from maze_paths.core.grid import Grid


class Generator(ABC):
    # Yield a progress string every this many placements
    YIELD_EVERY = 100

    def __init__(self, grid: Grid, seed: Optional[int] = None):
        self.grid = grid
        self.seed = seed
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings while it works.
        Cell types are written in-place on self.grid.
        """

    def run_all(self) -> Grid:
        for _ in self.run():
            pass
        return self.grid
