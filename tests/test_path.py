import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_paths.algo.path import reconstruct_path
from maze_paths.algo.scatter import build_maze
from maze_paths.algo.solvers import Dijkstra, run_astar, run_dijkstra
from maze_paths.core.grid import Grid


class TestReconstruct(unittest.TestCase):
    def test_before_any_search(self):
        grid = Grid(4)
        self.assertEqual(reconstruct_path(grid), [(3, 3)])

    def test_end_first_order(self):
        grid = build_maze(3, seed=0, wall_density=0, checkpoint_count=0)
        run_dijkstra(grid)
        self.assertEqual(reconstruct_path(grid), [(2, 2), (1, 1), (0, 0)])

    def test_solver_path_is_reversed(self):
        grid = Grid.from_text([
            "S....",
            "####.",
            ".....",
            ".####",
            "....E",
        ])
        solver = Dijkstra(grid)
        solver.run_all()
        self.assertEqual(len(solver.path), 13)
        self.assertEqual(solver.path, list(reversed(reconstruct_path(grid))))

    def test_custom_origin(self):
        grid = build_maze(3, seed=0, wall_density=0, checkpoint_count=0)
        run_dijkstra(grid)
        self.assertEqual(reconstruct_path(grid, origin=(1, 1)), [(1, 1), (0, 0)])
        self.assertEqual(reconstruct_path(grid, origin=(0, 0)), [(0, 0)])

    def test_explicit_state(self):
        grid = Grid.from_text([
            "S#...",
            ".#...",
            ".#...",
            ".#...",
            "...#E",
        ])
        d_state = run_dijkstra(grid)
        d_path = reconstruct_path(grid)
        run_astar(grid)
        # grid.search now points at the A* run; the old state is untouched
        self.assertEqual(reconstruct_path(grid, state=d_state), d_path)
        self.assertEqual(len(d_path), 8)

    def test_unreachable(self):
        grid = Grid.from_text([
            "S#...",
            "##...",
            ".....",
            ".....",
            "....E",
        ])
        run_dijkstra(grid)
        path = reconstruct_path(grid)
        self.assertEqual(path, [(4, 4)])
        self.assertNotEqual(path[0], grid.start)

    def test_single_cell(self):
        grid = build_maze(1, seed=0)
        run_dijkstra(grid)
        path = reconstruct_path(grid)
        # Same length as the unreachable case, but it IS the start
        self.assertEqual(path, [grid.start])

    def test_out_of_bounds_origin(self):
        grid = Grid(3)
        with self.assertRaises(IndexError):
            reconstruct_path(grid, origin=(3, 0))


if __name__ == '__main__':
    unittest.main()
