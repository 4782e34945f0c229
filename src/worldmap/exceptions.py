"""Custom exceptions for world map generation."""


class WorldMapError(Exception):
    """Base exception for world map errors."""

    pass


class ConfigurationError(WorldMapError):
    """Raised when generation is attempted without a usable config."""

    pass


class TileNotFoundError(WorldMapError, KeyError):
    """Raised when a grid coordinate lies outside the generated map."""

    pass


class MapFileError(WorldMapError, ValueError):
    """Raised when an exported map file is missing data or malformed."""

    pass
