"""File readers for atlases, labels and time series."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging

import nibabel as nib
import numpy as np
import pandas as pd
from nilearn.image import get_data, load_img, resample_to_img
from nilearn.masking import apply_mask

from seedconn.core.atlas import RegionAtlas, VolumeInfo
from seedconn.core.pathway import BrainPathway
from seedconn.utils.exceptions import DataError


ImgLike = Union[str, Path, nib.Nifti1Image]

LABEL_COLUMNS = ('name', 'label', 'labels', 'region')


def load_labels_file(labels_path: Path) -> List[str]:
    """Load region labels from a text or TSV file.

    A ``.txt`` file holds one label per line. A ``.tsv``/``.csv`` file is
    read with pandas; labels come from the first of the columns
    ``name``, ``label``, ``labels`` or ``region`` present, otherwise
    from the first column.

    Args:
        labels_path: Path to labels file

    Returns:
        Labels in atlas order (label k-1 belongs to atlas value k)

    Raises:
        FileNotFoundError: If the file doesn't exist
        DataError: If no labels could be read
    """
    labels_path = Path(labels_path)
    if not labels_path.exists():
        raise FileNotFoundError(f"Labels file not found: {labels_path}")

    if labels_path.suffix in ('.tsv', '.csv'):
        sep = '\t' if labels_path.suffix == '.tsv' else ','
        df = pd.read_csv(labels_path, sep=sep)
        columns = [c for c in df.columns if str(c).lower() in LABEL_COLUMNS]
        column = columns[0] if columns else df.columns[0]
        labels = [str(label) for label in df[column].tolist()]
    else:
        with labels_path.open() as f:
            labels = [line.strip() for line in f if line.strip()]

    if not labels:
        raise DataError(f"No labels found in {labels_path}")

    return labels


def load_node_data(node_data_path: Path) -> Tuple[np.ndarray, Optional[List[str]]]:
    """Load node time series.

    Args:
        node_data_path: ``.tsv``/``.csv`` file with node labels as header
            and one row per time point, or ``.npy`` array of shape
            (n_timepoints, n_nodes)

    Returns:
        Tuple of (node_dat, node_labels); node_labels is None for .npy

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    node_data_path = Path(node_data_path)
    if not node_data_path.exists():
        raise FileNotFoundError(f"Node data file not found: {node_data_path}")

    if node_data_path.suffix == '.npy':
        return np.load(node_data_path), None

    sep = ',' if node_data_path.suffix == '.csv' else '\t'
    df = pd.read_csv(node_data_path, sep=sep)

    return df.to_numpy(dtype=np.float64), [str(c) for c in df.columns]


def load_pathway(
    func_img: ImgLike,
    atlas_img: ImgLike,
    labels: Optional[Sequence[str]] = None,
    node_dat: Optional[np.ndarray] = None,
    node_labels: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None
) -> BrainPathway:
    """Build a BrainPathway from a functional image and a labeled atlas.

    Voxels with a non-zero atlas value form the volume; atlas value k
    assigns a voxel to region k (label k-1). Region time series are the
    averages of their voxels. The atlas is resampled (nearest neighbour)
    to the functional grid when the two differ.

    Args:
        func_img: 4D functional image
        atlas_img: 3D integer-labeled atlas image
        labels: Region labels; defaults to region_001, region_002, ...
        node_dat: Optional node time series (n_timepoints x n_nodes)
        node_labels: Labels of the node_dat columns
        logger: Optional logger instance

    Returns:
        BrainPathway holding voxel, region and node data

    Raises:
        DataError: If the images are incompatible with the labels
    """
    func_img = load_img(str(func_img) if isinstance(func_img, Path) else func_img)
    atlas_img = load_img(str(atlas_img) if isinstance(atlas_img, Path) else atlas_img)

    if len(func_img.shape) != 4:
        raise DataError(f"Functional image must be 4D, got shape {func_img.shape}")

    if atlas_img.shape[:3] != func_img.shape[:3] or not np.allclose(atlas_img.affine, func_img.affine):
        if logger:
            logger.info("Resampling atlas to functional image grid")
        atlas_img = resample_to_img(atlas_img, func_img, interpolation='nearest')

    atlas_data = np.rint(get_data(atlas_img)).astype(int)
    if atlas_data.ndim == 4 and atlas_data.shape[3] == 1:
        atlas_data = atlas_data[..., 0]
    if atlas_data.ndim != 3:
        raise DataError(f"Atlas image must be 3D, got shape {atlas_data.shape}")

    mask = atlas_data > 0
    if not mask.any():
        raise DataError("Atlas image has no labeled voxels")

    if labels is None:
        labels = [f"region_{k:03d}" for k in range(1, atlas_data.max() + 1)]

    volume_info = VolumeInfo(mask=mask, affine=func_img.affine)
    region_atlas = RegionAtlas(labels, volume_info, parcels=atlas_data[mask])

    mask_img = nib.Nifti1Image(mask.astype(np.int8), func_img.affine)
    voxel_dat = apply_mask(func_img, mask_img)

    if logger:
        logger.debug(
            f"  Loaded {voxel_dat.shape[1]} voxel(s) x {voxel_dat.shape[0]} timepoint(s), "
            f"{region_atlas.n_regions} region(s)"
        )

    return BrainPathway(
        region_atlas,
        voxel_dat=voxel_dat,
        node_dat=node_dat,
        node_labels=node_labels,
    )
