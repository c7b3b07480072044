"""Labeled collections of voxel-wise connectivity maps."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple, Union

import nibabel as nib
import numpy as np

from seedconn.utils.exceptions import DataError


REGION_SOURCE_NOTES = (
    "Correlation maps for seed region averages created with seedconn.seed_connectivity"
)
NODE_SOURCE_NOTES = (
    "Correlation maps for node responses created with seedconn.seed_connectivity"
)


@dataclass(frozen=True, eq=False)
class ConnectivityMap:
    """Correlation of every voxel with one seed.

    Attributes:
        label: Seed label
        data: Read-only vector of correlations, one per voxel
    """

    label: str
    data: np.ndarray

    @property
    def n_voxels(self) -> int:
        return self.data.shape[0]


@dataclass(frozen=True, eq=False)
class ConnectivityMapCollection:
    """Ordered, immutable set of connectivity maps sharing one geometry.

    Attributes:
        maps: One ConnectivityMap per selected seed
        volume_info: Spatial reference of the voxel vectors, passed
            through untouched
        source_notes: Provenance string
        mode: "regions" or "nodes"
    """

    maps: Tuple[ConnectivityMap, ...]
    volume_info: Any
    source_notes: str
    mode: str = "regions"

    def __len__(self) -> int:
        return len(self.maps)

    def __iter__(self) -> Iterator[ConnectivityMap]:
        return iter(self.maps)

    def __getitem__(self, key: Union[int, str]) -> ConnectivityMap:
        """Look up a map by position or by seed label."""
        if isinstance(key, str):
            for connectivity_map in self.maps:
                if connectivity_map.label == key:
                    return connectivity_map
            raise KeyError(key)
        return self.maps[key]

    def __repr__(self):
        return (
            f"ConnectivityMapCollection(mode='{self.mode}', n_maps={len(self)}, "
            f"labels={self.labels})"
        )

    @property
    def labels(self) -> List[str]:
        return [connectivity_map.label for connectivity_map in self.maps]

    @property
    def data(self) -> np.ndarray:
        """Maps stacked as columns, shape (n_voxels, n_maps)."""
        return np.column_stack([connectivity_map.data for connectivity_map in self.maps])

    def to_nifti(self) -> nib.Nifti1Image:
        """Render the collection as a 4D image, one volume per seed.

        Requires ``volume_info`` to provide ``unmask`` and ``affine``
        (see ``seedconn.core.atlas.VolumeInfo``).
        """
        volumes = self.volume_info.unmask(self.data.astype(np.float32))
        return nib.Nifti1Image(volumes, self.volume_info.affine)


def build_connectivity_maps(
    correlations: np.ndarray,
    labels: Sequence[str],
    volume_info: Any,
    source_notes: str,
    mode: str = "regions"
) -> ConnectivityMapCollection:
    """Package a voxels x seeds correlation array as labeled maps.

    Args:
        correlations: Array of shape (n_voxels, n_seeds)
        labels: Seed labels, one per column of ``correlations``
        volume_info: Spatial reference shared by all maps
        source_notes: Provenance string attached to the collection
        mode: Seed mode the correlations were computed in

    Returns:
        ConnectivityMapCollection with one map per seed, in column order

    Raises:
        DataError: If labels and columns disagree
    """
    correlations = np.array(correlations, dtype=np.float64)

    if correlations.ndim == 1:
        correlations = correlations.reshape(-1, 1)

    if correlations.ndim != 2:
        raise DataError(
            f"Correlations must be 2D (voxels x seeds), got shape {correlations.shape}"
        )

    if correlations.shape[1] != len(labels):
        raise DataError(
            f"Got {len(labels)} label(s) for {correlations.shape[1]} correlation map(s)"
        )

    maps = []
    for label, column in zip(labels, correlations.T):
        data = column.copy()
        data.flags.writeable = False
        maps.append(ConnectivityMap(label=str(label), data=data))

    return ConnectivityMapCollection(
        maps=tuple(maps),
        volume_info=volume_info,
        source_notes=source_notes,
        mode=mode,
    )
