"""Exception hierarchy for grid value lookups."""

from typing import Any, Optional

__all__ = [
    "GridLookupError",
    "FileFormatError",
    "InsufficientSamplesError",
]


class GridLookupError(Exception):
    """Base class for errors raised by the lookup engine."""

    default_message: str = "Grid lookup error"

    def __init__(self, message: Optional[str] = None, *, detail: Any | None = None) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail


class FileFormatError(GridLookupError, ValueError):
    """Raised when a sample file cannot be read or is not a well-formed grid."""

    default_message = "Sample file is not a well-formed grid"


class InsufficientSamplesError(GridLookupError):
    """Raised when no eligible sample is left to interpolate from."""

    default_message = "No eligible samples available for interpolation"
