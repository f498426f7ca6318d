import argparse
import logging
import sys
from fractions import Fraction


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_options(parser: argparse.ArgumentParser, default_size=10):
    parser.add_argument("--size", type=int, default=default_size, help="Grid side length")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--density", type=Fraction, default=Fraction(1, 3),
                        help="Wall density in [0, 1), e.g. 1/3 or 0.25")
    parser.add_argument("--checkpoints", type=int, default=None,
                        help="Checkpoint count (default: size // 2)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Paths: Dijkstra vs A* on random grid mazes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    add_maze_options(gen_parser)
    gen_parser.add_argument("--out", type=str, help="Output file path (optional)")
    gen_parser.add_argument("--seed-only", action="store_true", help="Store only seed + parameters")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the cell data")
    gen_parser.add_argument("--show", action="store_true", help="Print the maze as text")
    gen_parser.add_argument("--record-events", type=str, help="Save generation events to binary file")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Solve an existing maze")
    solve_parser.add_argument("input_file", help="Path to maze file")
    solve_parser.add_argument("--algo", type=str, default="dijkstra", choices=["dijkstra", "astar"], help="Solver algorithm")
    solve_parser.add_argument("--heuristic", type=str, default="manhattan", choices=["manhattan", "chebyshev"], help="A* heuristic")
    solve_parser.add_argument("--show", action="store_true", help="Print the maze with the path overlaid")
    solve_parser.add_argument("--record-events", type=str, help="Save solver events to binary file")

    # Compare Command
    cmp_parser = subparsers.add_parser("compare", help="Run Dijkstra and A* on the same maze")
    cmp_parser.add_argument("input_file", nargs="?", help="Maze file (otherwise generate one)")
    add_maze_options(cmp_parser)
    cmp_parser.add_argument("--heuristic", type=str, default="manhattan", choices=["manhattan", "chebyshev"], help="A* heuristic")

    return parser


def load_or_build(args, logger):
    if getattr(args, "input_file", None):
        from maze_paths.io.serializer import MazeSerializer
        logger.info(f"Loading {args.input_file}...")
        grid, meta = MazeSerializer.load(args.input_file)
        logger.info(f"Loaded {grid.size}x{grid.size} maze. Meta: {meta}")
        return grid

    from maze_paths.algo.scatter import build_maze
    logger.info(f"Generating {args.size}x{args.size} maze (seed={args.seed})...")
    return build_maze(args.size, seed=args.seed, wall_density=args.density,
                      checkpoint_count=args.checkpoints)


def describe_path(path) -> str:
    if path:
        return f"{len(path)} cells, {len(path) - 1} steps"
    return "unreachable"


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_paths")

    if args.command is None:
        parser.print_help()
        return 0

    from maze_paths.core.config import ConfigurationError
    from maze_paths.core.events import EventWriter

    logger.info(f"Running command: {args.command}")

    evt_writer = None
    try:
        if args.command == "generate":
            from maze_paths.algo.scatter import build_maze
            from maze_paths.core.config import MazeConfig
            from maze_paths.core.grid import CellType

            config = MazeConfig(args.size, args.density, args.checkpoints, args.seed).validate()

            if args.record_events:
                evt_writer = EventWriter(args.record_events)
                logger.info(f"Recording events to {args.record_events}...")

            logger.info(f"Generating {config.size}x{config.size} maze "
                        f"(walls={config.wall_samples}, checkpoints={config.checkpoint_samples})...")
            grid = build_maze(config.size, seed=config.seed, wall_density=config.wall_density,
                              checkpoint_count=config.checkpoint_count, event_writer=evt_writer)
            logger.info(f"Walls: {grid.count(CellType.WALL)}, checkpoints: {grid.count(CellType.CHECKPOINT)}")

            if args.show:
                print(grid.to_text())

            if args.out:
                from maze_paths.io.serializer import MazeSerializer
                if args.seed_only and config.seed is None:
                    raise ConfigurationError("--seed-only needs an explicit --seed")
                logger.info(f"Saving maze to {args.out}...")
                MazeSerializer.save(grid, args.out, meta=config.as_meta(),
                                    seed_only=args.seed_only, compress=args.compress)
                logger.info("Save complete.")

        elif args.command == "solve":
            from maze_paths.algo.solvers import AStar, Dijkstra
            from maze_paths.io.serializer import MazeSerializer

            grid, meta = MazeSerializer.load(args.input_file)
            logger.info(f"Loaded {grid.size}x{grid.size} maze. Meta: {meta}")

            if args.record_events:
                evt_writer = EventWriter(args.record_events)
                evt_writer.write_header(grid.size)  # grid is already loaded
                logger.info(f"Recording events to {args.record_events}...")

            if args.algo == "astar":
                solver = AStar(grid, heuristic=args.heuristic, event_writer=evt_writer)
            else:
                solver = Dijkstra(grid, event_writer=evt_writer)

            logger.info(f"Solving with {args.algo.upper()} from {grid.start} to {grid.end}...")
            for status in solver.run():
                logger.debug(status)

            print(f"Done. Path: {describe_path(solver.path)}, expanded: {solver.expanded_count}")
            if args.show:
                print(grid.to_text(solver.path))

        elif args.command == "compare":
            from maze_paths.algo.compare import compare_strategies

            grid = load_or_build(args, logger)
            result = compare_strategies(grid, heuristic=args.heuristic)

            print(f"\n{'ALGORITHM':<12} | {'DISTANCE':<9} | {'PATH LEN':<9} | {'EXPANDED':<9} | {'TIME (s)':<9}")
            print("-" * 60)
            for row in result.rows():
                print(f"{row.name:<12} | {row.distance:<9} | {row.path_length:<9} | "
                      f"{row.expanded:<9} | {row.elapsed:<9.4f}")

            if not result.reachable:
                print("END is unreachable from START.")
            elif result.divergent:
                print(f"Divergence: A* ({result.heuristic}) path is longer than Dijkstra's.")
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    finally:
        if evt_writer:
            evt_writer.close()
            logger.info(f"Saved events to {evt_writer.filename}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
