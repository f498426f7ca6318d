from array import array
from enum import IntEnum
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from maze_paths.core.config import ConfigurationError

Coord = Tuple[int, int]


class CellType(IntEnum):
    WALL = 0
    PATH = 1
    START = 2
    END = 3
    CHECKPOINT = 4


# Text layout used by from_text / to_text
CHARS = {
    CellType.WALL: "#",
    CellType.PATH: ".",
    CellType.START: "S",
    CellType.END: "E",
    CellType.CHECKPOINT: "C",
}
CHAR_TO_TYPE = {c: t for t, c in CHARS.items()}
PATH_CHAR = "*"


class Grid:
    # 8-connected offsets, in enumeration order
    DIRECTIONS = (
        (-1, 0), (1, 0), (0, -1), (0, 1),
        (-1, -1), (-1, 1), (1, -1), (1, 1),
    )

    __slots__ = ('size', 'cells', 'start', 'end', 'search', 'revision',
                 'event_writer', '__weakref__')

    def __init__(self, size: int, event_writer=None):
        if size <= 0:
            raise ConfigurationError(f"Grid size must be positive, got {size}")
        self.size = size
        self.event_writer = event_writer
        # 1 byte per cell, everything open until the generator runs
        self.cells = array('B', [CellType.PATH] * (size * size))
        self.start: Coord = (0, 0)
        self.end: Coord = (size - 1, size - 1)
        # Most recent SearchState run against this grid
        self.search = None
        self.revision = 0

        if self.event_writer:
            self.event_writer.write_header(size)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.size and 0 <= y < self.size:
            return y * self.size + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get_coord(self, idx: int) -> Coord:
        return idx % self.size, idx // self.size

    def get_type(self, x: int, y: int) -> CellType:
        return CellType(self.cells[self.get_index(x, y)])

    def set_type(self, x: int, y: int, cell_type: CellType):
        self.cells[self.get_index(x, y)] = cell_type
        self.revision += 1
        if self.event_writer:
            self.event_writer.log_set_type(x, y, cell_type)

    def is_traversable(self, x: int, y: int) -> bool:
        return self.cells[self.get_index(x, y)] != CellType.WALL

    def place_endpoints(self, start: Optional[Coord] = None, end: Optional[Coord] = None):
        """
        Forces START and END onto the grid, overriding whatever random
        placement left there. END is written last, so on a 1x1 grid the
        single cell ends up typed END.
        """
        if start is not None:
            self.start = start
        if end is not None:
            self.end = end
        self.set_type(*self.start, CellType.START)
        self.set_type(*self.end, CellType.END)

    def get_neighbors(self, x: int, y: int) -> Iterator[Coord]:
        """
        Yields (nx, ny) for every in-bounds neighbor in DIRECTIONS order.
        Does NOT check cell types (that's for pathfinding).
        """
        size = self.size
        for dx, dy in self.DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < size and 0 <= ny < size:
                yield (nx, ny)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Coord]:
        """Yields (nx, ny) for neighbors that are not walls."""
        for nx, ny in self.get_neighbors(x, y):
            if self.cells[ny * self.size + nx] != CellType.WALL:
                yield (nx, ny)

    def count(self, cell_type: CellType) -> int:
        return self.cells.count(cell_type)

    def as_array(self) -> np.ndarray:
        # Zero-copy (size, size) view indexed [y, x]; read-only so a renderer
        # can't change the classification behind our back
        arr = np.frombuffer(self.cells, dtype=np.uint8).reshape(self.size, self.size)
        arr.flags.writeable = False
        return arr

    @classmethod
    def from_text(cls, rows: Sequence[str], event_writer=None) -> "Grid":
        rows = [row.strip() for row in rows if row.strip()]
        size = len(rows)
        if size == 0:
            raise ConfigurationError("Empty maze layout")
        if any(len(row) != size for row in rows):
            raise ConfigurationError("Maze layout must be square")

        grid = cls(size, event_writer=event_writer)
        starts, ends = [], []
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                cell_type = CHAR_TO_TYPE.get(char)
                if cell_type is None:
                    raise ConfigurationError(f"Unknown cell '{char}' at ({x}, {y})")
                if cell_type == CellType.START:
                    starts.append((x, y))
                elif cell_type == CellType.END:
                    ends.append((x, y))
                grid.cells[y * size + x] = cell_type

        if len(starts) != 1 or len(ends) != 1:
            raise ConfigurationError(
                f"Layout needs exactly one S and one E (got {len(starts)} and {len(ends)})"
            )
        grid.start, grid.end = starts[0], ends[0]
        return grid

    def to_text(self, path: Optional[Iterable[Coord]] = None) -> str:
        on_path = set(path or ())
        lines = []
        for y in range(self.size):
            line = []
            for x in range(self.size):
                cell_type = CellType(self.cells[y * self.size + x])
                if (x, y) in on_path and cell_type == CellType.PATH:
                    line.append(PATH_CHAR)
                else:
                    line.append(CHARS[cell_type])
            lines.append("".join(line))
        return "\n".join(lines)
