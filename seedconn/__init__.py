"""seedconn: voxel-wise seed connectivity maps."""

from seedconn.core.version import __version__
from seedconn.connectivity import (
    SignalMatrix,
    SeedSelection,
    parse_selection_args,
    correlate,
    ConnectivityMapCollection,
    seed_connectivity,
)
from seedconn.core import VolumeInfo, RegionAtlas, BrainPathway

__all__ = [
    "__version__",
    "SignalMatrix",
    "SeedSelection",
    "parse_selection_args",
    "correlate",
    "ConnectivityMapCollection",
    "seed_connectivity",
    "VolumeInfo",
    "RegionAtlas",
    "BrainPathway",
]
