"""Error types raised by the hex map generator."""


class HexMapError(Exception):
    """Base class for generator errors."""


class InvalidDimensionsError(HexMapError, ValueError):
    """Map width or height is not a positive integer (or exceeds the limit)."""

    def __init__(self, width, height, reason: str = "width and height must be > 0"):
        self.width = width
        self.height = height
        super().__init__(f"Invalid map dimensions {width}x{height}: {reason}")


class EmptyThresholdSetError(HexMapError, ValueError):
    """Terrain classification was requested with no thresholds."""

    def __init__(self):
        super().__init__("Terrain classification requires at least one threshold")


class InvalidThresholdsError(HexMapError, ValueError):
    """Terrain thresholds are not strictly increasing."""


class GenerationOrderError(HexMapError, RuntimeError):
    """A pipeline stage ran before the stage it depends on."""
