from abc import ABC, abstractmethod
import numpy as np

class SpatialValueProvider(ABC):
    """Abstract interface for computing geographically varying values (e.g. elevation, depth)."""

    @abstractmethod
    def value_at_point(self, lat: float, lon: float) -> float:
        """Compute the value at a single (lat, lon) point, in degrees."""
        ...

    @abstractmethod
    def values_at_points(self, LAT: np.ndarray, LON: np.ndarray) -> np.ndarray:
        """Vectorized version for multiple points."""
        ...
