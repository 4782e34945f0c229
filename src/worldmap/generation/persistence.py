"""Map export: save and load generated world maps."""

import json
import zipfile
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog

from ..biomes import biome_from_value
from ..exceptions import MapFileError
from ..hexgrid import offset_to_axial_odd_r
from ..types import AxialCoord, GridCoord, Tile, WorldMap, WorldType

logger = structlog.get_logger()

FORMAT_VERSION = 1


def save_map(path: Path, world_map: WorldMap) -> None:
    """Save a generated map to disk.

    Uses numpy's compressed .npz format for efficient storage.

    Args:
        path: Output path (should end with .npz).
        world_map: Map to export.
    """
    village = world_map.village_tile.grid

    metadata = {
        "version": FORMAT_VERSION,
        "seed": world_map.effective_seed,
        "world_type": world_map.world_type.value,
        "width": world_map.width,
        "height": world_map.height,
        "village": [village.x, village.y],
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        biomes=world_map.biome_array(),
        elevation=world_map.elevation_array(),
        moisture=world_map.moisture_array(),
        metadata=json.dumps(metadata).encode("utf-8"),
    )

    file_size = path.stat().st_size / 1024
    logger.info("map_saved", path=str(path), size_kb=round(file_size, 1))


def load_map(path: Path) -> WorldMap:
    """Load a map exported with ``save_map``.

    Args:
        path: Path to .npz file.

    Returns:
        Reconstructed WorldMap.

    Raises:
        FileNotFoundError: If file doesn't exist.
        MapFileError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    try:
        with np.load(path) as data:
            for key in ("biomes", "elevation", "moisture", "metadata"):
                if key not in data:
                    raise MapFileError(f"Invalid map file: missing '{key}' array")
            biome_codes = data["biomes"]
            elevation = data["elevation"]
            moisture = data["moisture"]
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
    except MapFileError:
        raise
    except (OSError, TypeError, ValueError, zipfile.BadZipFile) as e:
        raise MapFileError(f"Invalid map file {path}: {e}") from e

    if not isinstance(metadata, dict):
        raise MapFileError("Invalid map file: metadata is not an object")
    if metadata.get("version") != FORMAT_VERSION:
        raise MapFileError(f"Unsupported map file version: {metadata.get('version')}")
    if biome_codes.ndim != 2 or not (
        biome_codes.shape == elevation.shape == moisture.shape
    ):
        raise MapFileError("Invalid map file: array shapes differ")

    try:
        seed = int(metadata["seed"])
        world_type = WorldType(metadata["world_type"])
        village_x, village_y = metadata["village"]
    except (KeyError, TypeError, ValueError) as e:
        raise MapFileError(f"Invalid map file metadata: {e!r}") from e

    height, width = biome_codes.shape

    tiles = []
    for y in range(height):
        for x in range(width):
            q, r = offset_to_axial_odd_r(x, y)
            try:
                biome = biome_from_value(biome_codes[y, x])
            except ValueError as e:
                raise MapFileError(f"Invalid map file: {e}") from e
            tiles.append(
                Tile(
                    grid=GridCoord(x=x, y=y),
                    axial=AxialCoord(q=q, r=r),
                    biome=biome,
                    elevation=float(elevation[y, x]),
                    moisture=float(moisture[y, x]),
                    is_village=(x == village_x and y == village_y),
                )
            )

    logger.info("map_loaded", path=str(path), width=width, height=height)
    return WorldMap(
        width=width,
        height=height,
        effective_seed=seed,
        world_type=world_type,
        tiles=tuple(tiles),
    )
