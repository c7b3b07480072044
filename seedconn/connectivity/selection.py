"""Seed selection by label substring and index."""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging
import warnings

import numpy as np

from seedconn.utils.exceptions import (
    ConfigurationError,
    SelectionError,
    UnrecognizedOptionWarning,
)


REGION_KEYWORDS = ('region', 'regions')
NODE_KEYWORDS = ('node', 'nodes')
MODES = ('regions', 'nodes')


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True)
class SeedSelection:
    """Which seeds to correlate, and against which label set.

    An empty selection (no labels and no indices) selects every seed.

    Attributes:
        mode: "regions" (region averages) or "nodes" (node responses)
        labels: Label substrings; a seed matches if any of them occurs
            in its label (case-sensitive)
        indices: 0-based seed indices, unioned with label matches
        flatten: Reserved for combining matched seeds into one; no effect
        exact: Require whole-label equality instead of substring matching
    """

    mode: str = "regions"
    labels: Tuple[str, ...] = ()
    indices: Tuple[int, ...] = ()
    flatten: bool = False
    exact: bool = False

    def __post_init__(self):
        if self.mode in REGION_KEYWORDS:
            mode = 'regions'
        elif self.mode in NODE_KEYWORDS:
            mode = 'nodes'
        else:
            raise ConfigurationError(
                f"mode must be one of {list(MODES)}, got '{self.mode}'"
            )
        object.__setattr__(self, 'mode', mode)

        labels = (self.labels,) if isinstance(self.labels, str) else tuple(self.labels)
        for label in labels:
            if not isinstance(label, str):
                raise ConfigurationError(
                    f"Seed labels must be strings, got {type(label).__name__}"
                )
        object.__setattr__(self, 'labels', labels)

        if isinstance(self.indices, np.ndarray):
            indices = np.ravel(self.indices).tolist()
        elif _is_integer(self.indices):
            indices = [self.indices]
        else:
            indices = list(self.indices)
        for index in indices:
            if not _is_integer(index):
                raise ConfigurationError(
                    f"Seed indices must be integers, got {index!r}"
                )
        object.__setattr__(self, 'indices', tuple(int(i) for i in indices))

    @property
    def selects_all(self) -> bool:
        return not self.labels and not self.indices


def parse_selection_args(*args, logger: Optional[logging.Logger] = None) -> SeedSelection:
    """Build a SeedSelection from loosely-typed positional options.

    Accepted arguments:
        - a list/tuple of strings: label substrings
        - a list/tuple/array of integers, or a single integer: seed indices
        - "region"/"regions" or "node"/"nodes": choose the mode
        - "flatten", "exact": set the corresponding flag
        - any other string: warned about, then used as a label substring

    Args:
        *args: Selection options in any order
        logger: Optional logger receiving the unknown-option warning

    Returns:
        Validated SeedSelection

    Raises:
        ConfigurationError: If an argument has an unsupported type

    Example:
        >>> parse_selection_args(["DMN"], "nodes")
        SeedSelection(mode='nodes', labels=('DMN',), indices=(), flatten=False, exact=False)
    """
    mode = 'regions'
    labels = []
    indices = []
    flatten = False
    exact = False

    for arg in args:
        if arg is None:
            continue

        if isinstance(arg, str):
            if arg in REGION_KEYWORDS:
                mode = 'regions'
            elif arg in NODE_KEYWORDS:
                mode = 'nodes'
            elif arg == 'flatten':
                flatten = True
            elif arg == 'exact':
                exact = True
            else:
                _warn_unrecognized(arg, logger)
                labels.append(arg)

        elif _is_integer(arg):
            indices.append(int(arg))

        elif isinstance(arg, (list, tuple, np.ndarray)):
            items = np.ravel(arg).tolist() if isinstance(arg, np.ndarray) else list(arg)
            if all(isinstance(item, str) for item in items):
                labels.extend(items)
            elif all(_is_integer(item) for item in items):
                indices.extend(int(item) for item in items)
            else:
                raise ConfigurationError(
                    f"Selection lists must hold only labels or only indices, got {arg!r}"
                )

        else:
            raise ConfigurationError(
                f"Unsupported selection argument of type {type(arg).__name__}: {arg!r}"
            )

    return SeedSelection(
        mode=mode,
        labels=tuple(labels),
        indices=tuple(indices),
        flatten=flatten,
        exact=exact,
    )


def _warn_unrecognized(option: str, logger: Optional[logging.Logger]) -> None:
    message = (
        f"Unknown input string option: {option}. "
        f"Assuming it might be a seed label. Place seed labels in a list."
    )
    if logger:
        logger.warning(message)
    else:
        warnings.warn(message, UnrecognizedOptionWarning, stacklevel=3)


def match_labels(
    labels: Sequence[str],
    substrings: Sequence[str],
    exact: bool = False
) -> np.ndarray:
    """Boolean mask of labels containing any of the substrings.

    Args:
        labels: Label list to search
        substrings: Candidate substrings, unioned
        exact: Match whole labels only

    Returns:
        Boolean array of length len(labels)
    """
    mask = np.zeros(len(labels), dtype=bool)

    for substring in substrings:
        if exact:
            wh = [label == substring for label in labels]
        else:
            wh = [substring in label for label in labels]
        mask |= np.array(wh, dtype=bool)

    return mask


def selection_mask(labels: Sequence[str], selection: SeedSelection) -> np.ndarray:
    """Boolean mask of the seeds a selection picks out of a label list.

    Raises:
        SelectionError: If an index falls outside the label list
    """
    k = len(labels)

    if selection.selects_all:
        return np.ones(k, dtype=bool)

    mask = match_labels(labels, selection.labels, exact=selection.exact)

    indices = np.asarray(selection.indices, dtype=int)
    out_of_range = indices[(indices < 0) | (indices >= k)]
    if out_of_range.size:
        raise SelectionError(
            f"Seed indices {out_of_range.tolist()} out of range for {k} seeds"
        )
    mask[indices] = True

    return mask


def find_seed_indices(
    labels: Sequence[str],
    selection: SeedSelection,
    logger: Optional[logging.Logger] = None
) -> np.ndarray:
    """Resolve a selection into sorted seed indices.

    Args:
        labels: Ordered seed labels
        selection: Seed selection
        logger: Optional logger instance

    Returns:
        Sorted array of 0-based seed indices

    Raises:
        SelectionError: If nothing matched or an index is out of range
    """
    if selection.flatten and logger:
        logger.info("'flatten' is reserved and has no effect: seeds are correlated separately")

    mask = selection_mask(labels, selection)

    if not mask.any():
        raise SelectionError("No seeds identified to extract.")

    indices = np.flatnonzero(mask)

    if logger:
        logger.debug(f"  Selected {len(indices)} of {len(labels)} seed(s)")

    return indices
