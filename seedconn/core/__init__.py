"""Pathway model for seedconn."""

from seedconn.core.version import __version__
from seedconn.core.atlas import VolumeInfo, RegionAtlas
from seedconn.core.pathway import BrainPathway

__all__ = [
    "__version__",
    "VolumeInfo",
    "RegionAtlas",
    "BrainPathway",
]
