from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from gridLookup.infrastructure.sampleTable import SampleTable


class Interpolator(ABC):

    @abstractmethod
    def compute(self, lat: float, lon: float, table: "SampleTable") -> float:
        """
        Interpolate the table at a single (lat, lon) point.
        Must be implemented by subclasses.
        """
        ...

    def compute_many(self, LAT: np.ndarray, LON: np.ndarray, table: "SampleTable") -> np.ndarray:
        """
        Apply `compute` over same-shaped arrays of query coordinates.

        Args:
            LAT: latitudes of the queries, in degrees.
            LON: longitudes of the queries, in degrees.
            table: the samples to interpolate from.

        Returns:
            An array with the shape of LAT holding the interpolated values.
        """
        LAT = np.asarray(LAT, dtype=float)
        LON = np.asarray(LON, dtype=float)
        if LAT.shape != LON.shape:
            raise ValueError("LAT and LON must have the same shape")

        flat = np.empty(LAT.size, dtype=float)
        for i, (lat, lon) in enumerate(zip(LAT.ravel(), LON.ravel())):
            flat[i] = self.compute(float(lat), float(lon), table)

        return flat.reshape(LAT.shape)
