import json
import logging
import struct
import zlib
from array import array
from typing import Any, Dict, Tuple

from maze_paths.algo.scatter import build_maze
from maze_paths.core.config import MazeConfig
from maze_paths.core.grid import CellType, Grid

logger = logging.getLogger(__name__)


class MazeSerializer:
    MAGIC = b"MZPT"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1
    FLAG_SEED_ONLY = 2

    @staticmethod
    def save(grid: Grid, filepath: str, meta: Dict[str, Any] = None, seed_only=False, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - SIZE (4 bytes)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes, 0 if seed_only)
        - DATA (one cell type byte per cell, compressed or raw)

        seed_only files need meta from MazeConfig.as_meta() so load() can
        regenerate the layout.
        """
        if meta is None:
            meta = {}
        if seed_only and "seed" not in meta:
            raise ValueError("seed_only save needs a 'seed' in meta")

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED
        if seed_only:
            flags |= MazeSerializer.FLAG_SEED_ONLY

        meta_bytes = json.dumps(meta).encode('utf-8')

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("BB", MazeSerializer.VERSION, flags))
            f.write(struct.pack("I", grid.size))
            f.write(struct.pack("H", len(meta_bytes)))
            f.write(meta_bytes)

            if seed_only:
                f.write(struct.pack("I", 0))
            else:
                data = grid.cells.tobytes()
                if compress:
                    data = zlib.compress(data)
                f.write(struct.pack("I", len(data)))
                f.write(data)

        logger.debug(f"Saved {grid.size}x{grid.size} maze to {filepath} (flags={flags})")

    @staticmethod
    def load(filepath: str) -> Tuple[Grid, Dict[str, Any]]:
        with open(filepath, "rb") as f:
            magic = f.read(4)
            if magic != MazeSerializer.MAGIC:
                raise ValueError("Invalid maze file")

            version, flags = struct.unpack("BB", f.read(2))
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported maze file version {version}")
            size, = struct.unpack("I", f.read(4))
            meta_len, = struct.unpack("H", f.read(2))
            meta = json.loads(f.read(meta_len).decode('utf-8'))
            data_len, = struct.unpack("I", f.read(4))

            if flags & MazeSerializer.FLAG_SEED_ONLY:
                # Same seed + parameters -> same layout
                config = MazeConfig.from_meta({"size": size, **meta})
                grid = build_maze(config.size, seed=config.seed,
                                  wall_density=config.wall_density,
                                  checkpoint_count=config.checkpoint_count)
                return grid, meta

            data = f.read(data_len)
            if len(data) != data_len:
                raise ValueError("Truncated maze file")
            if flags & MazeSerializer.FLAG_COMPRESSED:
                data = zlib.decompress(data)
            if len(data) != size * size:
                raise ValueError("Maze data does not match header size")
            unknown = set(data) - {int(t) for t in CellType}
            if unknown:
                raise ValueError(f"Unknown cell type byte(s) in maze file: {sorted(unknown)}")

            grid = Grid(size)
            grid.cells = array('B', data)
            MazeSerializer._restore_endpoints(grid)
            return grid, meta

    @staticmethod
    def _restore_endpoints(grid: Grid):
        starts = [i for i, v in enumerate(grid.cells) if v == CellType.START]
        ends = [i for i, v in enumerate(grid.cells) if v == CellType.END]
        if len(ends) != 1 or len(starts) != (1 if grid.size > 1 else 0):
            raise ValueError("Maze file has no unique START/END")
        grid.end = grid.get_coord(ends[0])
        # A 1x1 maze stores its only cell as END
        grid.start = grid.get_coord(starts[0]) if starts else grid.end
