import logging
import threading
from typing import NamedTuple, Optional

import numpy as np

from gridLookup.config import LookupConfig
from gridLookup.domain import Interpolator, SpatialValueProvider
from gridLookup.errors import GridLookupError
from gridLookup.infrastructure import IDWInterpolator, LookupCache, SampleTable

logger = logging.getLogger(__name__)


class _Loaded(NamedTuple):
    path: str
    table: SampleTable
    cache: LookupCache


class LookupSession(SpatialValueProvider):
    """
    Owns one sample table and the cache computed against it.

    The table and its cache are created together when a new file path is set
    and replaced together on the next successful path change. A failed load
    leaves whatever was loaded before untouched.
    """

    def __init__(self, config: Optional[LookupConfig] = None, interpolator: Optional[Interpolator] = None):
        self.config = config or LookupConfig()
        self.interpolator = interpolator or IDWInterpolator(
            k=self.config.neighbours,
            power=self.config.power,
            invalid_value=self.config.invalid_value,
        )
        self._loaded: Optional[_Loaded] = None
        self._load_lock = threading.Lock()
        self._query_count = 0

        if self.config.external_file_path:
            self.set_external_file_path(self.config.external_file_path)

    # --------------------------------------------------------------------- #
    # state
    # --------------------------------------------------------------------- #
    @property
    def external_file_path(self) -> Optional[str]:
        loaded = self._loaded
        return loaded.path if loaded else None

    @property
    def table(self) -> Optional[SampleTable]:
        loaded = self._loaded
        return loaded.table if loaded else None

    @property
    def cache(self) -> Optional[LookupCache]:
        loaded = self._loaded
        return loaded.cache if loaded else None

    @property
    def is_loaded(self) -> bool:
        return self._loaded is not None

    def set_external_file_path(self, path: Optional[str]) -> bool:
        """
        Load `path` unless it is empty or equal to the loaded path.

        Returns:
            True when a new table was loaded, False for a no-op.

        Raises:
            FileFormatError: the file could not be loaded; the previous
                table and cache stay in use.
        """
        if not path:
            return False

        with self._load_lock:
            current = self._loaded
            if current is not None and current.path == path:
                return False

            table = SampleTable.load(path)
            cache = LookupCache(
                table,
                self.interpolator,
                precision=self.config.key_precision,
                max_entries=self.config.max_cache_entries,
            )
            # table and cache are swapped as one reference
            self._loaded = _Loaded(path, table, cache)

        eligible = int(np.count_nonzero(table.eligible_mask(self.config.invalid_value)))
        logger.info("Using %s: %d samples, %d eligible", path, len(table), eligible)
        if eligible == 0:
            logger.warning("%s holds no eligible samples, every query will fail", path)
        return True

    def close(self) -> None:
        """Discard the loaded table and cache."""
        with self._load_lock:
            self._loaded = None

    # --------------------------------------------------------------------- #
    # queries
    # --------------------------------------------------------------------- #
    def get(self, lat: float, lon: float) -> float:
        loaded = self._loaded
        if loaded is None:
            raise GridLookupError("No sample file loaded")

        misses = loaded.cache.misses
        value = loaded.cache.get(lat, lon)

        self._query_count += 1
        if self.config.debug_mode and self._query_count % self.config.message_interval == 0:
            logger.debug(
                "query #%d (%.6f, %.6f) -> %r [%s, %d cached]",
                self._query_count, lat, lon, value,
                "miss" if loaded.cache.misses != misses else "hit", len(loaded.cache),
            )
        return value

    def value_at_point(self, lat: float, lon: float) -> float:
        return self.get(lat, lon)

    def values_at_points(self, LAT: np.ndarray, LON: np.ndarray) -> np.ndarray:
        """Cached lookup over same-shaped arrays of latitudes and longitudes."""
        LAT = np.asarray(LAT, dtype=float)
        LON = np.asarray(LON, dtype=float)
        if LAT.shape != LON.shape:
            raise ValueError("LAT and LON must have the same shape")

        out = np.empty(LAT.size, dtype=float)
        for i, (lat, lon) in enumerate(zip(LAT.ravel(), LON.ravel())):
            out[i] = self.get(float(lat), float(lon))
        return out.reshape(LAT.shape)
