"""File writers for outputs."""

import nibabel as nib
import numpy as np
from pathlib import Path
from typing import Dict, Any, Optional
import json
from datetime import datetime

from seedconn.connectivity.maps import ConnectivityMapCollection


def save_nifti_with_sidecar(
    img: nib.Nifti1Image,
    output_path: Path,
    metadata: Dict[str, Any]
) -> Path:
    """Save NIfTI image with JSON sidecar.

    Args:
        img: NIfTI image to save
        output_path: Path for output NIfTI file (.nii or .nii.gz)
        metadata: Dictionary of metadata to save in JSON sidecar

    Returns:
        Path to the JSON sidecar
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    nib.save(img, output_path)

    metadata_with_timestamp = metadata.copy()
    metadata_with_timestamp['CreationTime'] = datetime.now().isoformat()

    sidecar_path = _sidecar_path(output_path)
    with sidecar_path.open('w') as f:
        json.dump(_make_serializable(metadata_with_timestamp), f, indent=2)

    return sidecar_path


def save_connectivity_maps(
    collection: ConnectivityMapCollection,
    output_path: Path,
    metadata: Optional[Dict[str, Any]] = None
) -> Path:
    """Save a connectivity map collection as a 4D NIfTI image.

    Volume i of the image holds the map of seed i; the sidecar lists the
    seed labels in the same order.

    Args:
        collection: Connectivity maps to save
        output_path: Path for output NIfTI file
        metadata: Optional extra sidecar entries

    Returns:
        Path to the saved image
    """
    output_path = Path(output_path)

    sidecar = {
        'SeedLabels': collection.labels,
        'SourceNotes': collection.source_notes,
        'Mode': collection.mode,
        'AnalysisMethod': 'seedToVoxel',
        'ConnectivityKind': 'correlation',
        'Description': f'Pearson correlation maps for {len(collection)} seed(s)',
    }
    if metadata:
        sidecar.update(metadata)

    save_nifti_with_sidecar(collection.to_nifti(), output_path, sidecar)

    return output_path


def _sidecar_path(output_path: Path) -> Path:
    name = output_path.name
    for suffix in ('.nii.gz', '.nii'):
        if name.endswith(suffix):
            return output_path.with_name(name[:-len(suffix)] + '.json')
    return output_path.with_suffix('.json')


def _make_serializable(obj: Any) -> Any:
    """Convert object to JSON-serializable format.

    Args:
        obj: Object to convert

    Returns:
        JSON-serializable version of object
    """
    if isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: _make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_make_serializable(item) for item in obj]
    else:
        return obj
