from typing import List, Optional

from maze_paths.core.grid import Coord, Grid
from maze_paths.core.search import SearchState


def reconstruct_path(grid: Grid, origin: Optional[Coord] = None,
                     state: Optional[SearchState] = None) -> List[Coord]:
    """
    Walks predecessor links from origin (END by default) back to START and
    returns the coordinates in that order, origin first.

    Never fails: if origin was never reached the result is just [origin].
    Callers tell that apart from a 1x1 maze by comparing against grid.start.
    Uses the grid's most recent search when no state is given.
    """
    if state is None:
        state = grid.search

    curr = grid.end if origin is None else origin
    grid.get_index(*curr)  # out-of-bounds origin is a caller bug
    path = [curr]
    if state is None:
        return path

    assert state.size == grid.size, "search state belongs to a different grid"
    limit = grid.size * grid.size

    prev = state.get_predecessor(*curr)
    while prev is not None:
        path.append(prev)
        assert len(path) <= limit, "predecessor links form a cycle"
        prev = state.get_predecessor(*prev)
    return path
