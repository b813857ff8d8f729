"""Color and threshold parsing errors."""


class ColorError(Exception):
    """Base class for contrast wheel input errors."""
    pass


class InvalidHexColorError(ColorError):
    """Text is not a ``#RRGGBB`` color."""
    pass


class InvalidThresholdError(ColorError):
    """Contrast threshold is not a finite number greater than 1."""
    pass
