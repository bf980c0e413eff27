"""Error kinds raised by terrain generation."""


class TerrainError(ValueError):
    """Base exception for terrain generation errors."""

    pass


class InvalidParameterError(TerrainError):
    """Raised when a parameter is out of range or inconsistent."""

    pass


class GeometryConfigurationError(TerrainError):
    """Raised when a grid size and level of detail cannot be triangulated."""

    pass
