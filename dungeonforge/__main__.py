"""Entry point: ``python -m dungeonforge``.

Supports two modes:
  - ``python -m dungeonforge``          → Launch the FastAPI preview server
  - ``python -m dungeonforge render``   → Print one level to stdout
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic procedural dungeon generator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI preview server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Render one level ---
    ren = sub.add_parser("render", help="Generate a level and print its glyph map")
    ren.add_argument("--width", type=int, default=79)
    ren.add_argument("--height", type=int, default=29)
    ren.add_argument("--seed", type=str, default="1")
    ren.add_argument("--depth", type=int, default=1)
    ren.add_argument("--no-monsters", action="store_true", help="Hide creatures in the printed map")
    ren.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from dungeonforge.api.app import create_app
    from dungeonforge.config import GenerationConfig

    config = GenerationConfig(log_level=args.log_level, host=args.host, port=args.port)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=args.log_level.lower())


def _run_render(args: argparse.Namespace) -> int:
    from dungeonforge.config import GenerationConfig
    from dungeonforge.engine.builder import generate_dungeon
    from dungeonforge.errors import DungeonError
    from dungeonforge.systems.rng import parse_seed
    from dungeonforge.utils.logging import setup_logging

    config = GenerationConfig(depth=args.depth, log_level=args.log_level)
    setup_logging(config.log_level, stream=sys.stderr)

    try:
        result = generate_dungeon(args.width, args.height, parse_seed(args.seed), config)
    except DungeonError as exc:
        logger.error("Generation failed: %s", exc)
        return 2

    print(result.render(with_creatures=not args.no_monsters))

    counts = Counter(kind.name.lower() for kind in result.kinds.values())
    summary = ", ".join(f"{name}={n}" for name, n in counts.most_common())
    print(f"seed={args.seed} size={result.width}x{result.height} creatures={len(result.creatures)}")
    print(summary)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        return _run_render(args)

    if args.command is None:
        # Default to server mode
        args = parser.parse_args(["serve"])
    _run_server(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
