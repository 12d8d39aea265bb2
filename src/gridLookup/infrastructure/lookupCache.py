import threading
from collections import OrderedDict
from typing import Optional

from gridLookup.domain import Interpolator
from gridLookup.infrastructure.sampleTable import SampleTable


def cache_key(lat: float, lon: float, precision: int = 3) -> str:
    """Round a query to `precision` decimals, e.g. (12.3454, -98.7651) -> "12.345,-98.765"."""
    # adding 0.0 folds -0.0 into 0.0
    lat_r = round(lat, precision) + 0.0
    lon_r = round(lon, precision) + 0.0
    return f"{lat_r:.{precision}f},{lon_r:.{precision}f}"


class LookupCache:
    """
    Memoizes an interpolator against one sample table.

    A hit returns the stored value without any freshness check, so a cache
    must never outlive the table it was built for. With `max_entries` set
    the least recently used entry is evicted once the bound is exceeded.
    """

    def __init__(
        self,
        table: SampleTable,
        interpolator: Interpolator,
        precision: int = 3,
        max_entries: Optional[int] = None,
    ):
        self.table = table
        self.interpolator = interpolator
        self.precision = precision
        self.max_entries = max_entries
        self._values: OrderedDict[str, float] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def key(self, lat: float, lon: float) -> str:
        return cache_key(lat, lon, self.precision)

    def get(self, lat: float, lon: float) -> float:
        key = self.key(lat, lon)
        with self._lock:
            if key in self._values:
                self.hits += 1
                if self.max_entries is not None:
                    self._values.move_to_end(key)
                return self._values[key]

        # compute outside the lock; racing misses store the same value
        value = self.interpolator.compute(lat, lon, self.table)

        with self._lock:
            self.misses += 1
            self._values[key] = value
            if self.max_entries is not None and len(self._values) > self.max_entries:
                self._values.popitem(last=False)
        return value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self.hits = 0
            self.misses = 0
