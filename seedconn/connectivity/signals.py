"""Time series containers."""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from seedconn.utils.exceptions import DataError


@dataclass(frozen=True, eq=False)
class SignalMatrix:
    """Time points x signals array used for seed and voxel time series.

    The wrapped array is a read-only float64 view: building a
    SignalMatrix never copies or mutates the caller's buffer when it is
    already float64.

    Attributes:
        data: Array of shape (n_timepoints, n_signals)
    """

    data: np.ndarray

    def __post_init__(self):
        data = np.asarray(self.data, dtype=np.float64)

        if data.ndim == 1:
            data = data.reshape(-1, 1)

        if data.ndim != 2:
            raise DataError(
                f"Signal matrix must be 2D (timepoints x signals), "
                f"got shape {data.shape}"
            )

        if not np.all(np.isfinite(data)):
            raise DataError("Signal matrix contains missing or non-finite values")

        view = data.view()
        view.flags.writeable = False
        object.__setattr__(self, 'data', view)

    @classmethod
    def from_array(cls, array: Union[np.ndarray, Sequence]) -> 'SignalMatrix':
        """Wrap an array-like, passing SignalMatrix instances through."""
        if isinstance(array, cls):
            return array
        return cls(array)

    @property
    def n_timepoints(self) -> int:
        return self.data.shape[0]

    @property
    def n_signals(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self):
        return self.data.shape

    def select(self, indices: Sequence[int]) -> 'SignalMatrix':
        """Return a SignalMatrix restricted to the given columns, in order."""
        return SignalMatrix(self.data[:, np.asarray(indices, dtype=int)])

    def __len__(self) -> int:
        return self.n_signals
