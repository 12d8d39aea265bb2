import math
import numpy as np

from gridLookup.domain import Interpolator
from gridLookup.errors import InsufficientSamplesError
from gridLookup.infrastructure.sampleTable import SampleTable


class IDWInterpolator(Interpolator):
    """
    Shepard (IDW) interpolation over the k nearest eligible samples.

    Distances are flat Euclidean distances in degree space. Samples at equal
    distance are ranked by ingestion index, so the neighbour set does not
    depend on the KD-tree traversal order.
    """

    def __init__(self, k: int = 4, power: float = 1.0, invalid_value: float = -9999.0):
        if k < 1:
            raise ValueError("k must be at least 1")
        if power <= 0:
            raise ValueError("power must be positive")
        self.k = k                          # number of neighbors for interpolation
        self.power = power                  # inverse-distance power
        self.invalid_value = invalid_value  # cells holding this value are skipped

    def nearest(self, lat: float, lon: float, table: SampleTable) -> tuple[np.ndarray, np.ndarray]:
        """
        Return (ingestion indexes, distances) of the k nearest eligible samples,
        ordered by ascending distance then ascending ingestion index.
        """
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Query coordinates must be finite, got ({lat}, {lon})")

        index = table.eligible_index(self.invalid_value)
        if index.size == 0:
            raise InsufficientSamplesError(
                f"No eligible samples in {table.source_path or 'table'}",
                detail=table.source_path,
            )
        k_eff = min(self.k, index.size)

        # radius of the k-th neighbour, widened so every sample tied with it is gathered too
        dists, _ = index.tree.query([lat, lon], k=k_eff)
        radius = float(np.max(np.atleast_1d(dists)))
        radius = radius * (1.0 + 1e-9) + 1e-12
        candidates = np.sort(np.asarray(index.tree.query_ball_point([lat, lon], r=radius), dtype=np.intp))
        if candidates.size < k_eff:
            candidates = np.arange(index.size, dtype=np.intp)

        positions = index.positions[candidates]
        d = np.sqrt((lat - table.latitudes[positions]) ** 2 + (lon - table.longitudes[positions]) ** 2)

        # positions are ascending, so a stable sort keeps ingestion order among ties
        order = np.argsort(d, kind="stable")[:k_eff]
        return positions[order], d[order]

    def compute(self, lat: float, lon: float, table: SampleTable) -> float:
        positions, dists = self.nearest(lat, lon, table)
        z_vals = table.values[positions]

        # if the nearest neighbor is exactly at the query point, return its value
        if dists[0] == 0.0:
            return float(z_vals[0])

        weights = 1.0 / (dists ** self.power)
        return float(np.sum(weights * z_vals) / np.sum(weights))
