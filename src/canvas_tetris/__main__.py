"""Command line entry point.

Run with: `python -m canvas_tetris`

Without options this prints a single ASCII frame composed of the board plus
the active piece, then plays a few hard drops and prints the result; useful
as a smoke test that the engine runs without a display.  Pass ``--pygame``
to open the desktop game instead.
"""

from __future__ import annotations

import argparse
import logging

from . import GameEngine, render_grid


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join(str(cell) if cell else "." for cell in row))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Falling-block puzzle game.")
    parser.add_argument("--pygame", action="store_true", help="Open the pygame desktop window.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--drops",
        type=int,
        default=5,
        help="Number of hard drops to play in the ASCII demo.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s"
    )

    engine = GameEngine(seed=args.seed)
    if args.pygame:
        from .run_pygame import GameRunner

        GameRunner(engine).run()
        return

    _print_grid(render_grid(engine.board, engine.active))
    for _ in range(args.drops):
        if not engine.hard_drop():
            break
    print()
    _print_grid(render_grid(engine.board, engine.active))
    print(f"Score: {engine.score}  Level: {engine.level}  Status: {engine.status.value}")


if __name__ == "__main__":
    main()
