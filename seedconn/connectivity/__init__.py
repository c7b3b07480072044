"""Seed selection, correlation and connectivity map assembly."""

from seedconn.connectivity.signals import SignalMatrix
from seedconn.connectivity.selection import (
    SeedSelection,
    parse_selection_args,
    find_seed_indices,
    selection_mask,
)
from seedconn.connectivity.correlation import correlate
from seedconn.connectivity.maps import (
    ConnectivityMap,
    ConnectivityMapCollection,
    build_connectivity_maps,
)
from seedconn.connectivity.seed_connectivity import seed_connectivity

__all__ = [
    "SignalMatrix",
    "SeedSelection",
    "parse_selection_args",
    "find_seed_indices",
    "selection_mask",
    "correlate",
    "ConnectivityMap",
    "ConnectivityMapCollection",
    "build_connectivity_maps",
    "seed_connectivity",
]
