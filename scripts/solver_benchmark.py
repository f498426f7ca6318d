import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_paths.algo.scatter import build_maze
from maze_paths.algo.compare import compare_strategies


def run_benchmark():
    parser = argparse.ArgumentParser(description="Dijkstra vs A* over many seeded mazes")
    parser.add_argument("--size", type=int, default=40, help="Grid side length")
    parser.add_argument("--seeds", type=int, default=200, help="How many seeds to try")
    parser.add_argument("--first-seed", type=int, default=0, help="First seed")
    parser.add_argument("--heuristic", type=str, default="manhattan", choices=["manhattan", "chebyshev"])
    args = parser.parse_args()

    print(f"=== DIJKSTRA vs A* ({args.heuristic}) ===")
    print(f"Size: {args.size}x{args.size} | Seeds: {args.first_seed}..{args.first_seed + args.seeds - 1}")
    print("-" * 50)

    reachable = 0
    divergent = []
    expanded = {"dijkstra": 0, "astar": 0}
    elapsed = {"dijkstra": 0.0, "astar": 0.0}

    t0 = time.time()
    for seed in range(args.first_seed, args.first_seed + args.seeds):
        grid = build_maze(args.size, seed=seed)
        result = compare_strategies(grid, heuristic=args.heuristic)
        if not result.reachable:
            continue

        reachable += 1
        for row in result.rows():
            expanded[row.name] += row.expanded
            elapsed[row.name] += row.elapsed
        if result.divergent:
            divergent.append((seed, result.dijkstra.path_length, result.astar.path_length))

    print(f"Reachable mazes: {reachable}/{args.seeds} ({time.time() - t0:.2f}s)")
    if reachable:
        print(f"\n{'ALGORITHM':<12} | {'AVG EXPANDED':<13} | {'AVG TIME (ms)':<13}")
        print("-" * 44)
        for name in ("dijkstra", "astar"):
            print(f"{name:<12} | {expanded[name] / reachable:<13.1f} | "
                  f"{elapsed[name] * 1000 / reachable:<13.3f}")

    # Reproduce any of these with: maze-paths compare --size N --seed S
    print(f"\nDivergent seeds: {len(divergent)}")
    for seed, d_len, a_len in divergent:
        print(f"  seed={seed}: dijkstra={d_len} cells, astar={a_len} cells")


if __name__ == "__main__":
    run_benchmark()
