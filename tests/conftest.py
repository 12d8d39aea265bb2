from pathlib import Path

import pytest

from gridLookup import IDWInterpolator, SampleTable


EXAMPLE_GRID = """\
,0.0,1.0
0.0,10,20
1.0,30,40
"""


class CountingInterpolator(IDWInterpolator):
    """IDW interpolator that records how often it had to do real work."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = 0

    def compute(self, lat, lon, table):
        self.calls += 1
        return super().compute(lat, lon, table)


@pytest.fixture
def write_grid(tmp_path: Path):
    """Write CSV text to a fresh file under tmp_path and return its path as a string."""
    counter = {"n": 0}

    def _write(text: str, name: str | None = None) -> str:
        counter["n"] += 1
        path = tmp_path / (name or f"grid_{counter['n']}.csv")
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def example_path(write_grid) -> str:
    return write_grid(EXAMPLE_GRID, "example.csv")


@pytest.fixture
def example_table(example_path) -> SampleTable:
    return SampleTable.load(example_path)


@pytest.fixture
def counting_interpolator() -> CountingInterpolator:
    return CountingInterpolator()
