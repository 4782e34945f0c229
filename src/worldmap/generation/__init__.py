"""Procedural hex world map generation package.

Stages run in order: noise fields, world-type shaping, biome
classification, coastal distance, climate rules, smoothing, village
placement and tile assembly.
"""

from .config import (
    ClassificationConfig,
    ClimateConfig,
    GenerationConfig,
    NoiseScaleConfig,
    ShapingConfig,
    SmoothingConfig,
    find_config,
    list_configs,
    load_config,
)
from .generator import (
    GenerationResult,
    assemble_world_map,
    generate,
    generate_from_config,
    resolve_seed,
    run_pipeline,
)
from .persistence import load_map, save_map
from .validation import ValidationResult, validate_world_map

__all__ = [
    "ClassificationConfig",
    "ClimateConfig",
    "GenerationConfig",
    "GenerationResult",
    "NoiseScaleConfig",
    "ShapingConfig",
    "SmoothingConfig",
    "ValidationResult",
    "assemble_world_map",
    "find_config",
    "generate",
    "generate_from_config",
    "list_configs",
    "load_config",
    "load_map",
    "resolve_seed",
    "run_pipeline",
    "save_map",
    "validate_world_map",
]
