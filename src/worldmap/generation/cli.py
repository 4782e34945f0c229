"""Command-line interface for world map generation."""

import argparse
import time
from pathlib import Path

import structlog

from ..types import WorldType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a seeded hexagonal world map"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a generation TOML config (e.g. 'islands')",
    )
    parser.add_argument(
        "--world-type",
        type=str,
        choices=[t.value for t in WorldType],
        default=None,
        help="Apply the recommended preset for this world type",
    )
    parser.add_argument("--width", type=int, default=None, help="Map width (cells)")
    parser.add_argument("--height", type=int, default=None, help="Map height (cells)")
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed (overrides config)"
    )
    parser.add_argument(
        "--random-seed", action="store_true", help="Generate with a fresh random seed"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the map to this .npz path (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for world map generation."""
    args = build_parser().parse_args(argv)

    # Configure structlog
    level = 10 if args.verbose else 20
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from .config import GenerationConfig, find_config, load_config
    from .generator import generate, resolve_seed
    from .persistence import save_map
    from .validation import validate_world_map

    if args.config:
        try:
            config_path = find_config(args.config)
        except FileNotFoundError:
            logger.error("config_not_found", name=args.config)
            raise SystemExit(1)
        config = load_config(config_path)
        logger.info("config_loaded", path=str(config_path))
    else:
        config = GenerationConfig()

    if args.world_type:
        config = config.with_world_type_preset(WorldType(args.world_type))

    overrides: dict[str, object] = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.random_seed:
        overrides["use_random_seed"] = True
    if overrides:
        config = GenerationConfig.model_validate({**config.model_dump(), **overrides})

    seed = resolve_seed(config)
    print(
        f"Generating {config.width}x{config.height} {config.world_type.value} "
        f"map with seed {seed}"
    )

    start_time = time.time()
    world_map = generate(seed, config)
    gen_time = time.time() - start_time

    validation = validate_world_map(world_map, config)

    print(f"Generation complete in {gen_time * 1000:.0f}ms")
    total = len(world_map.tiles)
    for biome, count in world_map.biome_counts().items():
        print(f"  {biome.value}: {count} ({count / total * 100:.1f}%)")
    village = world_map.village_tile
    print(f"Village at {village.grid} (axial {village.axial})")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_map(output_path, world_map)
        print(f"Saved to {output_path}")

    if not validation.passed:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
