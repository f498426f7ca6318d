import logging
import random
from typing import Iterator, Optional

from maze_paths.algo.base import Generator
from maze_paths.core.config import DEFAULT_WALL_DENSITY, Density, MazeConfig
from maze_paths.core.grid import CellType, Grid

logger = logging.getLogger(__name__)


class ObstacleScatter(Generator):
    """
    Drops walls (and optionally checkpoints) on uniformly random cells, then
    forces START/END into the corners. Makes no attempt to keep END
    reachable.
    """

    def __init__(self, grid: Grid, seed: Optional[int] = None,
                 wall_density: Density = DEFAULT_WALL_DENSITY,
                 checkpoint_count: Optional[int] = None):
        super().__init__(grid, seed)
        self.config = MazeConfig(grid.size, wall_density, checkpoint_count, seed).validate()

    def _scatter(self, rng: random.Random, samples: int, cell_type: CellType) -> Iterator[str]:
        size = self.grid.size
        for _ in range(samples):
            # Repeated picks just overwrite the same cell
            x = rng.randrange(size)
            y = rng.randrange(size)
            self.grid.set_type(x, y, cell_type)

            self.step_count += 1
            if self.step_count % self.YIELD_EVERY == 0:
                yield f"Placing {cell_type.name.lower()}s... {self.step_count}"

    def run(self) -> Iterator[str]:
        rng = random.Random(self.seed)
        walls = self.config.wall_samples
        checkpoints = self.config.checkpoint_samples

        logger.debug(f"Scattering {walls} walls and {checkpoints} checkpoints "
                     f"on {self.grid.size}x{self.grid.size} (seed={self.seed})")

        yield from self._scatter(rng, walls, CellType.WALL)
        yield from self._scatter(rng, checkpoints, CellType.CHECKPOINT)

        # Must come after random placement: endpoints always win
        self.grid.place_endpoints((0, 0), (self.grid.size - 1, self.grid.size - 1))
        yield "Done"


def build_maze(size: int, seed: Optional[int] = None,
               wall_density: Density = DEFAULT_WALL_DENSITY,
               checkpoint_count: Optional[int] = None,
               event_writer=None) -> Grid:
    # Validate before allocating anything
    MazeConfig(size, wall_density, checkpoint_count, seed).validate()
    grid = Grid(size, event_writer=event_writer)
    return ObstacleScatter(grid, seed=seed, wall_density=wall_density,
                           checkpoint_count=checkpoint_count).run_all()
