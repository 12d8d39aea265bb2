import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import numpy as np
from scipy.spatial import KDTree

from gridLookup.domain import Sample
from gridLookup.errors import FileFormatError

logger = logging.getLogger(__name__)

"""
Gridded sample file layout:

,lon_1,lon_2,...,lon_N
lat_1,v_1_1,v_1_2,...,v_1_N
lat_2,v_2_1,...
...

The first cell of the header row is ignored. Samples are stored row by row,
so the ingestion index of cell (i, j) is i * N + j.

"""


@dataclass
class EligibleIndex:
    """Neighbour search structure over the samples that may take part in an interpolation."""
    positions: np.ndarray          # ingestion indexes of eligible samples, ascending
    tree: Optional[KDTree] = None  # None when nothing is eligible

    @property
    def size(self) -> int:
        return int(self.positions.size)


@dataclass(eq=False)
class SampleTable:
    latitudes: np.ndarray
    longitudes: np.ndarray
    values: np.ndarray
    source_path: Optional[str] = None
    _indexes: Dict[float, EligibleIndex] = field(init=False, repr=False, compare=False, default_factory=dict)

    def __post_init__(self):
        self.latitudes = np.array(self.latitudes, dtype=np.float64).ravel()
        self.longitudes = np.array(self.longitudes, dtype=np.float64).ravel()
        self.values = np.array(self.values, dtype=np.float64).ravel()

        if not (self.latitudes.size == self.longitudes.size == self.values.size):
            raise ValueError("latitudes, longitudes and values must have the same length")

        # the table never changes once built
        for arr in (self.latitudes, self.longitudes, self.values):
            arr.setflags(write=False)

    # --------------------------------------------------------------------- #
    # construction
    # --------------------------------------------------------------------- #
    @classmethod
    def load(cls, path: Union[str, Path]) -> "SampleTable":
        """
        Parse a gridded CSV file into a table, one sample per data cell.

        Raises:
            FileFormatError: the file cannot be read, a field is not a finite
                number, or a row does not match the header width.
        """
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileFormatError(f"Cannot read sample file {p}: {e}", detail=str(p)) from e

        lines = [(n, line) for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
        if not lines:
            raise FileFormatError(f"Sample file {p} is empty", detail=str(p))

        header_no, header = lines[0]
        lon_fields = header.split(",")[1:]
        if not lon_fields:
            raise FileFormatError(f"{p}:{header_no}: header row holds no longitudes", detail=str(p))
        lon_row = [_parse_field(p, header_no, f) for f in lon_fields]

        if len(lines) < 2:
            raise FileFormatError(f"Sample file {p} holds no data rows", detail=str(p))

        lats: List[float] = []
        lons: List[float] = []
        vals: List[float] = []
        for line_no, line in lines[1:]:
            fields = line.split(",")
            if len(fields) != len(lon_row) + 1:
                raise FileFormatError(
                    f"{p}:{line_no}: expected {len(lon_row) + 1} fields, found {len(fields)}",
                    detail=str(p),
                )
            lat = _parse_field(p, line_no, fields[0])
            for lon, raw in zip(lon_row, fields[1:]):
                lats.append(lat)
                lons.append(lon)
                vals.append(_parse_field(p, line_no, raw))

        table = cls(lats, lons, vals, source_path=str(path))
        logger.info(
            "Loaded %d samples (%d rows x %d columns) from %s",
            len(table), len(lines) - 1, len(lon_row), p,
        )
        return table

    # --------------------------------------------------------------------- #
    # access
    # --------------------------------------------------------------------- #
    def __len__(self) -> int:
        return int(self.values.size)

    def __getitem__(self, i: int) -> Sample:
        return Sample(float(self.latitudes[i]), float(self.longitudes[i]), float(self.values[i]))

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self)):
            yield self[i]

    def eligible_mask(self, invalid_value: float = -9999.0) -> np.ndarray:
        return self.values != invalid_value

    def eligible_index(self, invalid_value: float = -9999.0) -> EligibleIndex:
        """Return the KD-tree over eligible samples, building it on first use."""
        index = self._indexes.get(invalid_value)
        if index is None:
            positions = np.flatnonzero(self.eligible_mask(invalid_value))
            tree = None
            if positions.size:
                tree = KDTree(np.column_stack((self.latitudes[positions], self.longitudes[positions])))
            index = EligibleIndex(positions=positions, tree=tree)
            # racing builders produce the same index, last one wins
            self._indexes[invalid_value] = index
        return index

    def domain_range(self) -> tuple[float, float, float, float]:
        """Return (lat_min, lat_max, lon_min, lon_max) over all samples."""
        if len(self) == 0:
            raise ValueError("Empty table has no domain range")
        return (
            float(self.latitudes.min()), float(self.latitudes.max()),
            float(self.longitudes.min()), float(self.longitudes.max()),
        )


def _parse_field(path: Path, line_no: int, raw: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError:
        raise FileFormatError(f"{path}:{line_no}: cannot parse {raw.strip()!r} as a number", detail=str(path)) from None
    if not math.isfinite(value):
        raise FileFormatError(f"{path}:{line_no}: non-finite value {raw.strip()!r}", detail=str(path))
    return value
