"""Pearson cross-correlation between reference and target time series.

Correlations are computed for every (reference, target) column pair in a
single matrix product:

    R = ((A - mean(A))' (B - mean(B)) / (n - 1)) / (std(A)' std(B))

with sample (n - 1) standard deviations, so that R lies in [-1, 1].
Constant columns give NaN entries instead of raising. Large target sets
can be split into voxel chunks evaluated on worker threads; every chunk
uses the same per-column arithmetic, so chunked and single-call results
agree.
"""

import logging
import math
from typing import Optional, Tuple, Union

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs

from seedconn.connectivity.signals import SignalMatrix
from seedconn.utils.exceptions import ConfigurationError, DataError


ArrayOrSignals = Union[np.ndarray, SignalMatrix]


def _check_inputs(reference: SignalMatrix, target: SignalMatrix) -> None:
    if reference.n_timepoints != target.n_timepoints:
        raise DataError(
            f"Time dimension mismatch: reference has {reference.n_timepoints} "
            f"timepoints, target has {target.n_timepoints}"
        )

    if reference.n_timepoints < 2:
        raise DataError(
            f"At least 2 timepoints are needed for a correlation, "
            f"got {reference.n_timepoints}"
        )

    if reference.n_signals == 0 or target.n_signals == 0:
        raise DataError(
            f"Nothing to correlate: reference has {reference.n_signals} signal(s), "
            f"target has {target.n_signals}"
        )


def _center_and_scale(x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return mean-centered columns and their sample standard deviations."""
    centered = x - x.mean(axis=0)
    std = x.std(axis=0, ddof=1)

    # Rounding in the mean can leave constant columns with a tiny spread
    constant = np.all(x == x[0], axis=0)
    std[constant] = np.nan

    return centered, std


def _correlate_block(
    centered_reference: np.ndarray,
    std_reference: np.ndarray,
    target: np.ndarray
) -> np.ndarray:
    n = target.shape[0]
    centered_target, std_target = _center_and_scale(target)

    with np.errstate(divide='ignore', invalid='ignore'):
        covariance = (centered_reference.T @ centered_target) / (n - 1)
        rr = covariance / np.outer(std_reference, std_target)
        # Rounding can push |r| of collinear columns just past 1
        return np.clip(rr, -1.0, 1.0)


def correlate(
    reference: ArrayOrSignals,
    target: ArrayOrSignals,
    n_jobs: int = 1,
    chunk_size: Optional[int] = None,
    logger: Optional[logging.Logger] = None
) -> np.ndarray:
    """Correlate every reference signal with every target signal.

    Args:
        reference: Reference time series, shape (n_timepoints, p)
        target: Target time series, shape (n_timepoints, v)
        n_jobs: Number of worker threads for chunked evaluation.
            -1 uses all available cores.
        chunk_size: Number of target columns per chunk. Defaults to one
            chunk per worker.
        logger: Optional logger instance

    Returns:
        Correlation matrix of shape (p, v). Entries involving a constant
        column are NaN.

    Raises:
        DataError: If fewer than 2 timepoints are given, the time
            dimensions differ, or either side has no signals
        ConfigurationError: If chunk_size is not a positive integer

    Example:
        >>> a = np.random.randn(100, 2)
        >>> b = np.random.randn(100, 5000)
        >>> correlate(a, b).shape
        (2, 5000)
    """
    reference = SignalMatrix.from_array(reference)
    target = SignalMatrix.from_array(target)
    _check_inputs(reference, target)

    n_targets = target.n_signals

    if chunk_size is None and n_jobs != 1:
        chunk_size = math.ceil(n_targets / effective_n_jobs(n_jobs))

    if chunk_size is not None and (
        isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0
    ):
        raise ConfigurationError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    if logger:
        logger.debug(
            f"  Correlating {reference.n_signals} reference signal(s) with "
            f"{n_targets} target signal(s) over {reference.n_timepoints} timepoints"
        )

    centered_reference, std_reference = _center_and_scale(reference.data)

    if chunk_size is None or chunk_size >= n_targets:
        return _correlate_block(centered_reference, std_reference, target.data)

    starts = range(0, n_targets, chunk_size)

    if logger:
        logger.debug(f"  Using {len(starts)} chunk(s) of up to {chunk_size} target signal(s)")

    blocks = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_correlate_block)(
            centered_reference,
            std_reference,
            target.data[:, start:start + chunk_size]
        )
        for start in starts
    )

    return np.hstack(blocks)
