import logging

import numpy as np
import pytest

from gridLookup import (
    FileFormatError,
    GridLookupError,
    InsufficientSamplesError,
    LookupConfig,
    LookupSession,
)


def test_query_before_load_raises():
    session = LookupSession()
    assert not session.is_loaded
    with pytest.raises(GridLookupError):
        session.get(0.0, 0.0)


def test_example_scenario(example_path):
    session = LookupSession()
    assert session.set_external_file_path(example_path) is True

    assert session.get(0.5, 0.5) == pytest.approx(25.0)
    assert session.get(0.0, 0.0) == 10.0
    assert session.external_file_path == example_path
    assert len(session.table) == 4


def test_config_path_is_loaded_on_construction(example_path):
    session = LookupSession(LookupConfig(external_file_path=example_path))
    assert session.is_loaded
    assert session.get(1.0, 1.0) == 40.0


def test_same_path_is_a_noop(example_path):
    session = LookupSession()
    session.set_external_file_path(example_path)
    table, cache = session.table, session.cache
    session.get(0.5, 0.5)

    assert session.set_external_file_path(example_path) is False
    assert session.table is table
    assert session.cache is cache
    assert len(cache) == 1


@pytest.mark.parametrize("path", ["", None])
def test_empty_path_is_a_noop(example_path, path):
    session = LookupSession()
    session.set_external_file_path(example_path)
    table = session.table

    assert session.set_external_file_path(path) is False
    assert session.table is table


def test_reload_resets_cache(write_grid, counting_interpolator):
    path_a = write_grid(",0,1\n0,10,20\n1,30,40\n")
    path_b = write_grid(",0,1\n0,110,120\n1,130,140\n")
    interpolator = counting_interpolator
    session = LookupSession(interpolator=interpolator)

    session.set_external_file_path(path_a)
    assert session.get(0.5, 0.5) == pytest.approx(25.0)

    session.set_external_file_path(path_b)
    assert len(session.cache) == 0
    assert session.get(0.5, 0.5) == pytest.approx(125.0)
    assert interpolator.calls == 2


def test_failed_reload_keeps_previous_state(example_path, write_grid):
    session = LookupSession()
    session.set_external_file_path(example_path)
    session.get(0.5, 0.5)
    table, cache = session.table, session.cache

    with pytest.raises(FileFormatError):
        session.set_external_file_path(write_grid(",0,1\n0,1,oops\n"))

    assert session.external_file_path == example_path
    assert session.table is table
    assert session.cache is cache
    assert session.get(0.5, 0.5) == pytest.approx(25.0)


def test_failed_first_load_leaves_nothing_loaded(tmp_path):
    session = LookupSession()
    with pytest.raises(FileFormatError):
        session.set_external_file_path(str(tmp_path / "missing.csv"))
    assert not session.is_loaded
    assert session.external_file_path is None


def test_all_sentinel_file_loads_but_queries_fail(write_grid):
    session = LookupSession()
    session.set_external_file_path(write_grid(",0\n0,-9999\n"))
    with pytest.raises(InsufficientSamplesError):
        session.get(0.0, 0.0)


def test_config_drives_interpolation(write_grid):
    path = write_grid(",0,3\n0,10,40\n")
    session = LookupSession(LookupConfig(external_file_path=path, power=2.0, neighbours=1))
    assert session.get(0.0, 1.0) == 10.0


def test_close_discards_state(example_path):
    session = LookupSession()
    session.set_external_file_path(example_path)
    session.close()
    assert not session.is_loaded
    # the same path loads again after closing
    assert session.set_external_file_path(example_path) is True


def test_values_at_points_goes_through_cache(example_path):
    session = LookupSession()
    session.set_external_file_path(example_path)

    Z = session.values_at_points(np.array([0.0, 0.5, 0.5]), np.array([0.0, 0.5, 0.5]))

    assert Z[0] == 10.0
    assert Z[1] == Z[2] == pytest.approx(25.0)
    assert session.cache.hits == 1


def test_debug_trace_is_throttled(example_path, caplog):
    caplog.set_level(logging.DEBUG, logger="gridLookup.session")
    session = LookupSession(LookupConfig(debug_mode=True, message_interval=2))
    session.set_external_file_path(example_path)

    for _ in range(5):
        session.get(0.5, 0.5)

    traces = [r for r in caplog.records if r.levelno == logging.DEBUG and "query #" in r.getMessage()]
    assert [r.getMessage().split()[1] for r in traces] == ["#2", "#4"]


def test_no_debug_trace_when_disabled(example_path, caplog):
    caplog.set_level(logging.DEBUG, logger="gridLookup.session")
    session = LookupSession(LookupConfig(message_interval=1))
    session.set_external_file_path(example_path)
    session.get(0.5, 0.5)

    assert not [r for r in caplog.records if r.levelno == logging.DEBUG]
