import logging
import math
import time
from dataclasses import dataclass, field
from typing import List

from maze_paths.algo.solvers import AStar, Dijkstra, Solver
from maze_paths.core.grid import Coord, Grid
from maze_paths.core.search import SearchState

logger = logging.getLogger(__name__)


@dataclass
class StrategyResult:
    name: str
    distance: float
    path: List[Coord] = field(repr=False)
    expanded: int
    elapsed: float
    state: SearchState = field(repr=False, compare=False)

    @property
    def reached(self) -> bool:
        return not math.isinf(self.distance)

    @property
    def path_length(self) -> int:
        return len(self.path)


@dataclass
class Comparison:
    dijkstra: StrategyResult
    astar: StrategyResult
    heuristic: str

    @property
    def reachable(self) -> bool:
        return self.dijkstra.reached

    @property
    def divergent(self) -> bool:
        """True when A* settled on a longer path than Dijkstra's optimum."""
        return (self.reachable and self.astar.reached
                and self.astar.path_length > self.dijkstra.path_length)

    def rows(self):
        return [self.dijkstra, self.astar]


def _measure(solver: Solver, grid: Grid) -> StrategyResult:
    t_start = time.perf_counter()
    state = solver.run_all()
    elapsed = time.perf_counter() - t_start
    return StrategyResult(
        name=solver.name,
        distance=state.get_distance(*grid.end),
        path=list(solver.path),
        expanded=solver.expanded_count,
        elapsed=elapsed,
        state=state,
    )


def compare_strategies(grid: Grid, heuristic: str = "manhattan") -> Comparison:
    # Each solver allocates its own SearchState, so order doesn't matter
    result = Comparison(
        dijkstra=_measure(Dijkstra(grid), grid),
        astar=_measure(AStar(grid, heuristic=heuristic), grid),
        heuristic=heuristic,
    )
    if result.divergent:
        logger.info(f"A* ({heuristic}) path is longer than Dijkstra's: "
                    f"{result.astar.path_length} vs {result.dijkstra.path_length} cells")
    return result
