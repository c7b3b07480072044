"""Brain pathway model: atlas plus region, node and voxel time series."""

from typing import List, Optional, Sequence, Union

import numpy as np

from seedconn.connectivity.signals import SignalMatrix
from seedconn.core.atlas import RegionAtlas
from seedconn.utils.exceptions import DataError


class BrainPathway:
    """Time series attached to a region atlas.

    All signal matrices are time points x signals and share the same
    number of time points.

    Attributes:
        region_atlas: Atlas providing region labels and volume geometry
        voxel_dat: Voxel time series, one column per in-mask voxel
        region_dat: Region time series, one column per atlas label.
            Computed as region averages of voxel_dat when not given.
        node_dat: Optional node time series
        node_labels: Labels of the node_dat columns

    Example:
        >>> pathway = BrainPathway(atlas, voxel_dat=func_data)
        >>> maps = seed_connectivity(pathway, SeedSelection(labels=("Default",)))
    """

    def __init__(
        self,
        region_atlas: RegionAtlas,
        voxel_dat: Union[np.ndarray, SignalMatrix],
        region_dat: Optional[Union[np.ndarray, SignalMatrix]] = None,
        node_dat: Optional[Union[np.ndarray, SignalMatrix]] = None,
        node_labels: Optional[Sequence[str]] = None
    ):
        self.region_atlas = region_atlas
        self.voxel_dat = SignalMatrix.from_array(voxel_dat)

        if region_dat is None:
            self.region_dat = region_atlas.region_averages(self.voxel_dat)
        else:
            self.region_dat = SignalMatrix.from_array(region_dat)

        if isinstance(node_dat, SignalMatrix):
            node_dat = node_dat.data
        if node_dat is None or np.size(node_dat) == 0:
            self.node_dat = None
        else:
            self.node_dat = SignalMatrix(node_dat)

        if node_labels is None and self.node_dat is not None:
            node_labels = [f"node_{i + 1:03d}" for i in range(self.node_dat.n_signals)]
        self.node_labels: List[str] = [str(label) for label in (node_labels or [])]

        self._validate()

    def _validate(self) -> None:
        n_voxels = self.region_atlas.volume_info.n_voxels
        if self.voxel_dat.n_signals != n_voxels:
            raise DataError(
                f"voxel_dat has {self.voxel_dat.n_signals} voxels, "
                f"atlas volume has {n_voxels}"
            )

        if self.region_dat.n_signals != self.region_atlas.n_regions:
            raise DataError(
                f"region_dat has {self.region_dat.n_signals} columns, "
                f"atlas has {self.region_atlas.n_regions} labels"
            )

        n_timepoints = self.voxel_dat.n_timepoints
        if self.region_dat.n_timepoints != n_timepoints:
            raise DataError(
                f"region_dat has {self.region_dat.n_timepoints} timepoints, "
                f"voxel_dat has {n_timepoints}"
            )

        if self.node_dat is not None:
            if self.node_dat.n_signals != len(self.node_labels):
                raise DataError(
                    f"node_dat has {self.node_dat.n_signals} columns, "
                    f"got {len(self.node_labels)} node labels"
                )
            if self.node_dat.n_timepoints != n_timepoints:
                raise DataError(
                    f"node_dat has {self.node_dat.n_timepoints} timepoints, "
                    f"voxel_dat has {n_timepoints}"
                )

    def __repr__(self):
        n_nodes = self.node_dat.n_signals if self.node_dat is not None else 0
        return (
            f"BrainPathway(n_timepoints={self.voxel_dat.n_timepoints}, "
            f"n_regions={self.region_atlas.n_regions}, n_nodes={n_nodes}, "
            f"n_voxels={self.voxel_dat.n_signals})"
        )

    @property
    def has_node_data(self) -> bool:
        return self.node_dat is not None
