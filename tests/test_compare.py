import unittest
import sys
import os
import math

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_paths.algo.compare import compare_strategies
from maze_paths.algo.scatter import build_maze
from maze_paths.core.grid import CellType, Grid
from maze_paths.viz.snapshot import SnapshotCache


class TestCompare(unittest.TestCase):
    def test_open_grid(self):
        grid = build_maze(6, seed=0, wall_density=0, checkpoint_count=0)
        result = compare_strategies(grid)
        self.assertTrue(result.reachable)
        self.assertFalse(result.divergent)
        self.assertEqual(result.dijkstra.distance, 5)
        self.assertEqual(result.astar.distance, 5)
        self.assertEqual(result.dijkstra.path_length, 6)
        self.assertEqual([row.name for row in result.rows()], ["dijkstra", "astar"])
        self.assertLess(result.astar.expanded, result.dijkstra.expanded)

    def test_unreachable(self):
        grid = Grid.from_text([
            "S#..",
            "##..",
            "....",
            "...E",
        ])
        result = compare_strategies(grid)
        self.assertFalse(result.reachable)
        self.assertFalse(result.divergent)
        self.assertTrue(math.isinf(result.dijkstra.distance))
        self.assertTrue(math.isinf(result.astar.distance))
        self.assertEqual(result.astar.path_length, 0)

    def test_divergence_flag(self):
        for seed in range(60):
            grid = build_maze(20, seed=seed)
            result = compare_strategies(grid)
            if not result.reachable:
                continue
            self.assertGreaterEqual(result.astar.distance, result.dijkstra.distance)
            self.assertGreaterEqual(result.astar.path_length, result.dijkstra.path_length)
            # Flagged exactly when A* settled for a longer route
            self.assertEqual(result.divergent,
                             result.astar.path_length > result.dijkstra.path_length)

            admissible = compare_strategies(grid, heuristic="chebyshev")
            self.assertFalse(admissible.divergent)

    def test_states_are_independent(self):
        grid = build_maze(12, seed=9)
        result = compare_strategies(grid)
        self.assertIsNot(result.dijkstra.state, result.astar.state)
        self.assertIs(grid.search, result.astar.state)


class TestSnapshot(unittest.TestCase):
    def test_reused_until_grid_changes(self):
        grid = build_maze(10, seed=1, wall_density=0, checkpoint_count=0)
        cache = SnapshotCache()

        first = cache.get(grid)
        for _ in range(10):  # ten frames
            self.assertIs(cache.get(grid), first)
        self.assertEqual(cache.recomputed, 1)

        grid.set_type(5, 5, CellType.WALL)
        second = cache.get(grid)
        self.assertIsNot(second, first)
        self.assertEqual(cache.recomputed, 2)

        # Older frame keeps the types it was computed from
        self.assertEqual(first.cell_types[5, 5], CellType.PATH)
        self.assertEqual(second.cell_types[5, 5], CellType.WALL)

    def test_contents(self):
        grid = Grid.from_text([
            "S#.",
            "...",
            "..E",
        ])
        snap = SnapshotCache().get(grid)
        self.assertEqual(snap.cell_types.shape, (3, 3))
        self.assertEqual(snap.dijkstra_path[0], (0, 0))
        self.assertEqual(snap.dijkstra_path[-1], (2, 2))
        self.assertEqual(snap.astar_path[-1], (2, 2))
        self.assertEqual(snap.dijkstra_distances[2, 2], 2)
        self.assertTrue(math.isinf(snap.astar_distances[0, 1]))
        with self.assertRaises(ValueError):
            snap.cell_types[0, 0] = 0

    def test_invalidate(self):
        grid = build_maze(8, seed=2)
        cache = SnapshotCache()
        cache.get(grid)
        cache.invalidate(grid)
        cache.get(grid)
        self.assertEqual(cache.recomputed, 2)


if __name__ == '__main__':
    unittest.main()
