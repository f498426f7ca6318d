import unittest
import sys
import os
from fractions import Fraction

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_paths.algo.scatter import ObstacleScatter, build_maze
from maze_paths.core.config import ConfigurationError, MazeConfig
from maze_paths.core.grid import CellType, Grid


class TestGenerators(unittest.TestCase):
    def test_endpoints_forced(self):
        n = 6
        for seed in range(25):
            grid = build_maze(n, seed=seed)
            self.assertEqual(grid.get_type(0, 0), CellType.START)
            self.assertEqual(grid.get_type(n - 1, n - 1), CellType.END)
            self.assertEqual(grid.count(CellType.START), 1)
            self.assertEqual(grid.count(CellType.END), 1)

    def test_wall_budget(self):
        n = 30
        grid = build_maze(n, seed=42, checkpoint_count=0)
        walls = grid.count(CellType.WALL)
        # Duplicate samples overwrite, so never more than floor(N^2 / 3)
        self.assertLessEqual(walls, n * n // 3)
        self.assertGreater(walls, 0)

    def test_checkpoints(self):
        grid = build_maze(20, seed=5, wall_density=0)
        self.assertEqual(grid.count(CellType.WALL), 0)
        self.assertGreater(grid.count(CellType.CHECKPOINT), 0)
        self.assertLessEqual(grid.count(CellType.CHECKPOINT), 10)

        plain = build_maze(20, seed=5, wall_density=0, checkpoint_count=0)
        self.assertEqual(plain.count(CellType.CHECKPOINT), 0)
        self.assertEqual(plain.count(CellType.PATH), 20 * 20 - 2)

    def test_sample_counts(self):
        self.assertEqual(MazeConfig(10).wall_samples, 33)
        self.assertEqual(MazeConfig(3).wall_samples, 3)
        self.assertEqual(MazeConfig(10).checkpoint_samples, 5)
        self.assertEqual(MazeConfig(10, wall_density=0.25).wall_samples, 25)
        self.assertEqual(MazeConfig(10, checkpoint_count=0).checkpoint_samples, 0)

    def test_determinism(self):
        grid1 = build_maze(15, seed=12345)

        grid2 = Grid(15)
        gen = ObstacleScatter(grid2, seed=12345)
        for _ in gen.run(): pass

        self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

        other = build_maze(15, seed=54321)
        self.assertNotEqual(grid1.cells.tobytes(), other.cells.tobytes())

    def test_progress_stream(self):
        grid = Grid(30)
        statuses = list(ObstacleScatter(grid, seed=1).run())
        self.assertEqual(statuses[-1], "Done")
        # 300 walls + 15 checkpoints -> three progress reports
        self.assertEqual(len(statuses), 4)

    def test_single_cell(self):
        grid = build_maze(1, seed=3)
        self.assertEqual(grid.get_type(0, 0), CellType.END)
        self.assertEqual(grid.start, (0, 0))
        self.assertEqual(grid.end, (0, 0))

    def test_configuration_errors(self):
        with self.assertRaises(ConfigurationError):
            build_maze(0)
        with self.assertRaises(ConfigurationError):
            build_maze(-3)
        with self.assertRaises(ConfigurationError):
            build_maze(10, wall_density=1)
        with self.assertRaises(ConfigurationError):
            build_maze(10, wall_density=-0.1)
        with self.assertRaises(ConfigurationError):
            build_maze(10, checkpoint_count=-1)
        with self.assertRaises(ConfigurationError):
            MazeConfig(10, wall_density="lots")
        # Still a ValueError for callers that don't know about us
        with self.assertRaises(ValueError):
            build_maze(0)

    def test_meta_round_trip(self):
        config = MazeConfig(12, wall_density=Fraction(2, 7), checkpoint_count=4, seed=9)
        again = MazeConfig.from_meta(config.as_meta())
        self.assertEqual(again, config)


if __name__ == '__main__':
    unittest.main()
