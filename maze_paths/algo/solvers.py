import heapq
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterator, List, Optional

from maze_paths.algo.path import reconstruct_path
from maze_paths.core.grid import Coord, Grid
from maze_paths.core.search import UNREACHED, SearchState

logger = logging.getLogger(__name__)


def manhattan(a: Coord, b: Coord) -> int:
    # Overestimates under 8-way unit-cost moves: a diagonal step costs 1
    # but can cut this by 2
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def zero(a: Coord, b: Coord) -> int:
    return 0


HEURISTICS: Dict[str, Callable[[Coord, Coord], int]] = {
    "manhattan": manhattan,
    "chebyshev": chebyshev,
    "zero": zero,
}


class Solver(ABC):
    name = "solver"
    # Yield a progress string every this many expansions
    YIELD_EVERY = 100

    def __init__(self, grid: Grid, event_writer=None):
        self.grid = grid
        self.state: Optional[SearchState] = None
        self.path: List[Coord] = []
        self.expanded_count = 0
        self.event_writer = event_writer

    @abstractmethod
    def run(self, start: Optional[Coord] = None, end: Optional[Coord] = None) -> Iterator[str]:
        pass

    def run_all(self, start: Optional[Coord] = None, end: Optional[Coord] = None) -> SearchState:
        """Drains run(); the returned state is only valid once this returns."""
        for _ in self.run(start, end):
            pass
        return self.state


class AStar(Solver):
    name = "astar"

    def __init__(self, grid: Grid, heuristic: str = "manhattan", event_writer=None):
        super().__init__(grid, event_writer)
        if heuristic not in HEURISTICS:
            raise ValueError(f"Unknown heuristic '{heuristic}' (choose from {', '.join(HEURISTICS)})")
        self.heuristic_name = heuristic
        self._heuristic = HEURISTICS[heuristic]
        if heuristic == "chebyshev":
            logger.info("A* using chebyshev heuristic; results will match Dijkstra, not the manhattan default")

    def heuristic(self, a: Coord, b: Coord) -> int:
        return self._heuristic(a, b)

    def run(self, start: Optional[Coord] = None, end: Optional[Coord] = None) -> Iterator[str]:
        grid = self.grid
        start = grid.start if start is None else start
        end = grid.end if end is None else end

        # Fresh per-run state; the previous run's annotations are left alone
        state = SearchState(grid.size, strategy=self.name)
        self.state = state
        grid.search = state
        self.path = []
        self.expanded_count = 0

        start_idx = grid.get_index(*start)
        end_idx = grid.get_index(*end)
        state.distance[start_idx] = 0

        # Priority Queue: (priority, x, y)
        open_set = [(self.heuristic(start, end), start[0], start[1])]
        distance = state.distance
        visited = state.visited
        size = grid.size

        while open_set:
            _, cx, cy = heapq.heappop(open_set)
            curr_idx = cy * size + cx

            # Lazy deletion: an older, cheaper entry already closed this cell
            if visited[curr_idx]:
                continue
            visited[curr_idx] = 1
            self.expanded_count += 1

            if self.event_writer:
                self.event_writer.log_expand(cx, cy)

            if curr_idx == end_idx:
                break

            new_d = distance[curr_idx] + 1
            for nx, ny in grid.get_open_neighbors(cx, cy):
                n_idx = ny * size + nx
                # Closed cells are relaxed too; they just never get expanded again
                old_d = distance[n_idx]
                if old_d == UNREACHED or new_d < old_d:
                    distance[n_idx] = new_d
                    state.predecessor[n_idx] = curr_idx
                    heapq.heappush(open_set, (new_d + self.heuristic((nx, ny), end), nx, ny))

                    if self.event_writer:
                        self.event_writer.log_relax(nx, ny)

            if self.expanded_count % self.YIELD_EVERY == 0:
                yield f"Expanded: {self.expanded_count}"

        reached = visited[end_idx] != 0
        if reached:
            self.path = reconstruct_path(grid, end, state)
            self.path.reverse()
            if self.event_writer:
                for px, py in self.path:
                    self.event_writer.log_path_add(px, py)

        logger.debug(f"{self.name}: expanded {self.expanded_count}, "
                     f"distance to {end} = {state.get_distance(*end)}")
        yield "Solved" if reached else "Unreachable"


class Dijkstra(AStar):
    """ Uniform-cost search is just A* with h(n) = 0. """
    name = "dijkstra"

    def __init__(self, grid: Grid, event_writer=None):
        super().__init__(grid, heuristic="zero", event_writer=event_writer)


SOLVERS = {
    "dijkstra": Dijkstra,
    "astar": AStar,
}


def run_dijkstra(grid: Grid, event_writer=None) -> SearchState:
    return Dijkstra(grid, event_writer=event_writer).run_all()


def run_astar(grid: Grid, heuristic: str = "manhattan", event_writer=None) -> SearchState:
    return AStar(grid, heuristic=heuristic, event_writer=event_writer).run_all()
