"""
Error types raised by the favicon generator.

Validation errors are raised before anything is written to the output
directory. Filesystem errors during writing are not wrapped and reach the
caller as plain OSError.
"""


class FaviconError(Exception):
    """Base class for all favicon generation errors."""


class SourceNotFoundError(FaviconError, FileNotFoundError):
    """The source image does not exist or cannot be stat'ed."""


class InvalidDimensionsError(FaviconError, ValueError):
    """The source image is not square."""

    def __init__(self, width, height):
        super().__init__(f"source favicon must be square (got {width}x{height})")
        self.width = width
        self.height = height


class InvalidPaddingError(FaviconError, ValueError):
    """The apple icon padding does not fit inside the apple icon."""

    def __init__(self, padding, icon_size):
        super().__init__(
            f"apple icon padding must be >= 0 and less than {icon_size / 2:g} (got {padding})"
        )
        self.padding = padding
        self.icon_size = icon_size


class TransformError(FaviconError):
    """An image could not be decoded, resized, encoded or packed."""
