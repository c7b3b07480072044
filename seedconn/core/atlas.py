"""Region atlas and volume geometry."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from seedconn.connectivity.selection import SeedSelection, find_seed_indices
from seedconn.connectivity.signals import SignalMatrix
from seedconn.utils.exceptions import DataError


@dataclass(frozen=True, eq=False)
class VolumeInfo:
    """Voxel grid geometry shared by an atlas and its output maps.

    Voxel vectors are ordered as the in-mask voxels of ``mask`` in
    C order, matching ``nilearn.masking.apply_mask``.

    Attributes:
        mask: Boolean 3D array of in-volume voxels
        affine: 4x4 voxel-to-world transform
    """

    mask: np.ndarray
    affine: np.ndarray

    def __post_init__(self):
        mask = np.asarray(self.mask).astype(bool)
        if mask.ndim != 3:
            raise DataError(f"Volume mask must be 3D, got shape {mask.shape}")

        affine = np.array(self.affine, dtype=np.float64)
        if affine.shape != (4, 4):
            raise DataError(f"Affine must be 4x4, got shape {affine.shape}")

        mask.flags.writeable = False
        affine.flags.writeable = False
        object.__setattr__(self, 'mask', mask)
        object.__setattr__(self, 'affine', affine)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.mask.shape

    @property
    def n_voxels(self) -> int:
        return int(self.mask.sum())

    def unmask(self, vector: np.ndarray) -> np.ndarray:
        """Place voxel values back into the 3D grid.

        Args:
            vector: Array of shape (n_voxels,) or (n_voxels, n_maps)

        Returns:
            Array of shape mask.shape (+ (n_maps,)), zero outside the mask
        """
        vector = np.asarray(vector)
        if vector.shape[0] != self.n_voxels:
            raise DataError(
                f"Expected {self.n_voxels} voxel values, got {vector.shape[0]}"
            )

        volume = np.zeros(self.shape + vector.shape[1:], dtype=vector.dtype)
        volume[self.mask] = vector

        return volume


class RegionAtlas:
    """Labeled partition of the in-mask voxels into regions.

    Attributes:
        labels: Region labels, one per region
        volume_info: Geometry of the voxel grid
        parcels: Region number (1-based; 0 for unassigned) of each
            in-mask voxel
    """

    def __init__(
        self,
        labels: Sequence[str],
        volume_info: VolumeInfo,
        parcels: Optional[np.ndarray] = None
    ):
        self.labels: List[str] = [str(label) for label in labels]
        self.volume_info = volume_info

        if parcels is not None:
            parcels = np.asarray(parcels, dtype=int)
            if parcels.shape != (volume_info.n_voxels,):
                raise DataError(
                    f"Parcel assignment must have one entry per voxel "
                    f"({volume_info.n_voxels}), got shape {parcels.shape}"
                )
            if parcels.size and (parcels.min() < 0 or parcels.max() > len(self.labels)):
                raise DataError(
                    f"Parcel numbers must lie in [0, {len(self.labels)}]"
                )
        self.parcels = parcels

    def __repr__(self):
        return f"RegionAtlas(n_regions={self.n_regions}, n_voxels={self.volume_info.n_voxels})"

    @property
    def n_regions(self) -> int:
        return len(self.labels)

    def select_atlas_subset(
        self,
        selection: SeedSelection,
        logger: Optional[logging.Logger] = None
    ) -> np.ndarray:
        """Resolve a selection into region indices.

        Labels match by substring (or exactly when ``selection.exact``),
        indices are 0-based and unioned with label matches; an empty
        selection picks every region.

        Raises:
            SelectionError: If no region matched
        """
        return find_seed_indices(self.labels, selection, logger)

    def region_averages(self, voxel_dat: SignalMatrix) -> SignalMatrix:
        """Average voxel time series within each region.

        Args:
            voxel_dat: Voxel time series, shape (n_timepoints, n_voxels)

        Returns:
            Region time series, shape (n_timepoints, n_regions)

        Raises:
            DataError: If there is no parcel assignment or a region is empty
        """
        if self.parcels is None:
            raise DataError("Atlas has no voxel parcel assignment to average over")

        voxel_dat = SignalMatrix.from_array(voxel_dat)
        if voxel_dat.n_signals != self.parcels.size:
            raise DataError(
                f"Voxel data has {voxel_dat.n_signals} voxels, atlas has {self.parcels.size}"
            )

        region_dat = np.empty((voxel_dat.n_timepoints, self.n_regions))
        for i, label in enumerate(self.labels):
            members = self.parcels == i + 1
            if not members.any():
                raise DataError(f"Region '{label}' has no voxels")
            region_dat[:, i] = voxel_dat.data[:, members].mean(axis=1)

        return SignalMatrix(region_dat)
