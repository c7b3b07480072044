"""Voxel-wise connectivity with one or more seeds of a brain pathway."""

from functools import partial
from typing import Callable, Optional
import logging

import numpy as np

from seedconn.connectivity.correlation import correlate
from seedconn.connectivity.maps import (
    NODE_SOURCE_NOTES,
    REGION_SOURCE_NOTES,
    ConnectivityMapCollection,
    build_connectivity_maps,
)
from seedconn.connectivity.selection import SeedSelection, find_seed_indices
from seedconn.connectivity.signals import SignalMatrix
from seedconn.utils.exceptions import SelectionError
from seedconn.utils.logging import timer


SubsetResolver = Callable[[SeedSelection], np.ndarray]


def _is_empty(signals) -> bool:
    if signals is None:
        return True
    if isinstance(signals, SignalMatrix):
        return signals.n_signals == 0
    return np.size(signals) == 0


def _as_indices(resolved, n_seeds: int) -> np.ndarray:
    """Normalize a resolver result (mask or indices) to an index array."""
    resolved = np.asarray(resolved)
    if resolved.dtype == bool:
        resolved = np.flatnonzero(resolved)
    resolved = resolved.astype(int).ravel()

    if resolved.size == 0:
        raise SelectionError("No seeds identified to extract.")

    out_of_range = resolved[(resolved < 0) | (resolved >= n_seeds)]
    if out_of_range.size:
        raise SelectionError(
            f"Seed indices out of range for {n_seeds} seed(s): {out_of_range.tolist()}"
        )

    return resolved


def seed_connectivity(
    pathway,
    selection: Optional[SeedSelection] = None,
    logger: Optional[logging.Logger] = None,
    resolver: Optional[SubsetResolver] = None,
    n_jobs: int = 1,
    chunk_size: Optional[int] = None
) -> Optional[ConnectivityMapCollection]:
    """Correlate selected seeds with every voxel of a brain pathway.

    In "regions" mode the seeds are region-average time series and their
    labels come from the region atlas; regions are resolved through
    ``resolver`` (the atlas' ``select_atlas_subset`` by default). In
    "nodes" mode the seeds are node time series matched against the node
    labels. Correlations use Pearson's r.

    Args:
        pathway: Object exposing ``voxel_dat``, ``region_dat``,
            ``node_dat``, ``node_labels`` and ``region_atlas`` (with
            ``labels``, ``volume_info`` and ``select_atlas_subset``),
            e.g. ``seedconn.core.pathway.BrainPathway``
        selection: Seeds to use. Defaults to every region.
        logger: Optional logger instance
        resolver: Region subset resolver, called with the selection and
            returning region indices
        n_jobs: Number of worker threads for the correlation
        chunk_size: Number of voxels per correlation chunk

    Returns:
        One map per selected seed, or None in "nodes" mode when the
        pathway has no node data

    Raises:
        SelectionError: If no seed matched the selection
        DataError: If the time series cannot be correlated

    Example:
        >>> maps = seed_connectivity(pathway, SeedSelection(labels=("Default",)))
        >>> maps.labels
        ['Default_A', 'Default_B']
    """
    if selection is None:
        selection = SeedSelection()

    # Voxel data are the target in both modes
    voxel_dat = pathway.voxel_dat
    volume_info = pathway.region_atlas.volume_info

    if selection.mode == 'nodes':
        node_dat = pathway.node_dat
        if _is_empty(node_dat):
            if logger:
                logger.info("No node data found. Skipping seed correlations with nodes.")
            return None

        if logger:
            logger.info("Calculating correlations with nodes.")

        labels = list(pathway.node_labels)
        to_extract = find_seed_indices(labels, selection, logger)
        reference = node_dat
        source_notes = NODE_SOURCE_NOTES

    else:
        if logger:
            logger.info("Calculating correlations with regions.")

        if resolver is None:
            resolver = partial(pathway.region_atlas.select_atlas_subset, logger=logger)

        labels = list(pathway.region_atlas.labels)
        to_extract = _as_indices(resolver(selection), len(labels))
        reference = pathway.region_dat
        source_notes = REGION_SOURCE_NOTES

    reference = SignalMatrix.from_array(reference).select(to_extract)
    target = SignalMatrix.from_array(voxel_dat)

    with timer(logger, f"Correlating {len(to_extract)} seed(s) with {target.n_signals} voxel(s)"):
        rr = correlate(reference, target, n_jobs=n_jobs, chunk_size=chunk_size, logger=logger).T

    return build_connectivity_maps(
        rr,
        [labels[i] for i in to_extract],
        volume_info,
        source_notes,
        mode=selection.mode,
    )
