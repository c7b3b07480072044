import warnings

import numpy as np
import pytest

from seedconn.connectivity.correlation import correlate
from seedconn.connectivity.signals import SignalMatrix
from seedconn.utils.exceptions import ConfigurationError, DataError
from seedconn.tests.tools import make_signals


def test_correlate_shape_and_range():
    a = make_signals(50, 3, random_state=0)
    b = make_signals(50, 200, random_state=1)
    rr = correlate(a, b)
    assert rr.shape == (3, 200)
    assert np.all(np.abs(rr) <= 1.0)


def test_collinear_columns_stay_within_unit_range():
    for seed in range(200):
        a = make_signals(37, 5, random_state=seed)
        b = np.column_stack([make_signals(37, 3, random_state=seed + 1000), a, -a])
        b[:, 0] = 4.0
        rr = correlate(a, b)
        assert np.all(np.isnan(rr[:, 0]))
        assert np.nanmax(np.abs(rr)) <= 1.0
        np.testing.assert_allclose(np.diag(rr[:, 3:8]), 1.0)
        np.testing.assert_allclose(np.diag(rr[:, 8:]), -1.0)


def test_correlate_matches_corrcoef():
    a = make_signals(30, 2, random_state=2)
    b = make_signals(30, 5, random_state=3)
    expected = np.corrcoef(a.T, b.T)[:2, 2:]
    np.testing.assert_allclose(correlate(a, b), expected, rtol=1e-10, atol=1e-12)


def test_batched_equals_single_column():
    a = make_signals(40, 4, random_state=4)
    b = make_signals(40, 25, random_state=5)
    rr = correlate(a, b)
    for j in range(b.shape[1]):
        single = correlate(a, b[:, j:j + 1])
        np.testing.assert_allclose(rr[:, j], single[:, 0], rtol=1e-12, atol=1e-14)


def test_self_correlation_is_one():
    a = make_signals(60, 3, random_state=6)
    b = np.column_stack([make_signals(60, 4, random_state=7), a[:, 1]])
    rr = correlate(a, b)
    assert np.isclose(rr[1, 4], 1.0)


def test_zero_variance_gives_nan_without_raising():
    a = make_signals(20, 3, random_state=8)
    b = make_signals(20, 4, random_state=9)
    a[:, 0] = 5.0
    b[:, 2] = 0.1
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        rr = correlate(a, b)
    assert np.all(np.isnan(rr[0, :]))
    assert np.all(np.isnan(rr[:, 2]))
    assert np.all(np.isfinite(rr[1:, [0, 1, 3]]))


def test_single_timepoint_raises():
    with pytest.raises(DataError):
        correlate(np.ones((1, 2)), np.ones((1, 10)))


def test_time_dimension_mismatch_raises():
    with pytest.raises(DataError):
        correlate(make_signals(20, 2), make_signals(21, 5))


def test_empty_signals_raise():
    with pytest.raises(DataError):
        correlate(np.empty((20, 0)), make_signals(20, 5))


def test_non_finite_values_raise():
    a = make_signals(20, 2)
    a[3, 1] = np.nan
    with pytest.raises(DataError):
        correlate(a, make_signals(20, 5))


def test_chunked_and_threaded_match_batched():
    a = make_signals(35, 3, random_state=10)
    b = make_signals(35, 103, random_state=11)
    rr = correlate(a, b)
    np.testing.assert_allclose(correlate(a, b, chunk_size=10), rr, rtol=1e-12, atol=1e-14)
    np.testing.assert_allclose(correlate(a, b, n_jobs=2), rr, rtol=1e-12, atol=1e-14)
    np.testing.assert_allclose(correlate(a, b, n_jobs=2, chunk_size=7), rr, rtol=1e-12, atol=1e-14)


def test_invalid_chunk_size_raises():
    with pytest.raises(ConfigurationError):
        correlate(make_signals(20, 2), make_signals(20, 5), chunk_size=0)


def test_inputs_are_not_mutated():
    a = make_signals(25, 2, random_state=12)
    b = make_signals(25, 8, random_state=13)
    a_copy, b_copy = a.copy(), b.copy()
    correlate(a, b, chunk_size=3)
    np.testing.assert_array_equal(a, a_copy)
    np.testing.assert_array_equal(b, b_copy)
    assert a.flags.writeable and b.flags.writeable


def test_signal_matrix_input_and_vector_reference():
    a = make_signals(25, 1, random_state=14)
    b = SignalMatrix(make_signals(25, 6, random_state=15))
    rr = correlate(a[:, 0], b)
    assert rr.shape == (1, 6)
    np.testing.assert_allclose(rr, correlate(a, b.data))
