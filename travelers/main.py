#!/usr/bin/env python3
"""
Travelers - an infinite, chunked tile world.

Run this to walk the world in the viewer, or headless with --run.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import ConfigError, WorldConfig, WorldContext
from .core.schematic import SchematicError
from .core.types import Rect, WorldPosition
from .engine import ChunkLifecycleManager, InMemoryChunkStore
from .logging_config import log_schematic, setup_logging
from .observe import ObserverAPI, render_rows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="travelers",
        description="Travelers - an infinite, chunked tile world",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path("data"),
        help="Path to data directory for logs (default: ./data)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="World seed (default: $TRAVELERS_SEED or 42)",
    )
    parser.add_argument(
        "--render-distance",
        type=int,
        help="Chunks visible in each direction around the focus",
    )
    parser.add_argument(
        "--schematic",
        type=Path,
        help="Path to a schematic JSON file (default: bundled schematic)",
    )
    parser.add_argument(
        "--run",
        type=int,
        metavar="N",
        help="Walk east for N ticks without the TUI",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the map around the focus and world stats, then exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def dump_world(console: Console, api: ObserverAPI) -> None:
    """Print the loaded area around the focus and the debug stats."""
    stats = api.get_stats()
    schematic = api.get_schematic()
    names = {tile_id: tile.name for tile_id, tile in schematic.tiles.items()}

    rect = Rect.around(stats.focus_tile, 19, 12)
    for line in render_rows(api.render_region(rect), names, rect, focus=stats.focus_tile):
        console.print(line)

    console.print()
    console.print(f"Tick: {stats.tick}")
    console.print(f"Focus: ({stats.focus.x:.1f}, {stats.focus.y:.1f}) tile {tuple(stats.focus_tile)}")
    console.print(f"Chunks: {stats.chunk_count} live, {stats.visible_count} visible, {stats.dirty_count} dirty")
    console.print(f"Tiles: {stats.tile_count}")
    console.print(f"Contradictions: {stats.contradictions} (unresolved interior: {stats.unresolved_interior})")
    console.print(f"Seam violations: {len(api.seam_violations())}")


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)

    # Configure logging - always log DEBUG to file, console level depends on --debug
    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(args.data, console_level=console_level)
    console = Console()
    console.print(f"Logging to: {log_path}")

    try:
        config = WorldConfig.from_env(
            seed=args.seed,
            render_distance=args.render_distance,
            schematic_path=args.schematic,
        )
        world = WorldContext.create(config)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1
    except SchematicError as e:
        log_schematic(logger, "LOAD", args.schematic, success=False, details=str(e))
        console.print(f"[red]Schematic error:[/red] {escape(str(e))}")
        return 1

    # Start in the middle of the first interior tile
    origin_tile = world.mapper.world_tile(world.mapper.chunk_coordinate_of(WorldPosition(0.0, 0.0)), 0, 0)
    store = InMemoryChunkStore(focus=world.mapper.tile_center(origin_tile))
    manager = ChunkLifecycleManager(world, store)
    api = ObserverAPI(world, store, manager)

    # Run mode (automated)
    if args.run:
        console.print(f"\nWalking east for {args.run} ticks...")
        console.print("-" * 40)
        for _ in range(args.run):
            ctx = manager.tick()
            console.print(
                f"[{ctx.tick}] created {len(ctx.created)}, stitched {len(ctx.stitched)}, "
                f"despawned {len(ctx.despawned)}, failed {len(ctx.failed)} | "
                f"{len(store)} live"
            )
            store.move_focus(config.tile_size, 0)
        console.print("-" * 40)
        console.print("Done.")
        if args.dump:
            dump_world(console, api)
        return 0

    if args.dump:
        manager.tick()
        dump_world(console, api)
        return 0

    # Interactive mode - TUI
    from .observe.tui import run_tui

    run_tui(manager, store)
    return 0


def cli() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
