"""File I/O for seedconn."""

from seedconn.io.readers import load_labels_file, load_node_data, load_pathway
from seedconn.io.writers import save_nifti_with_sidecar, save_connectivity_maps

__all__ = [
    "load_labels_file",
    "load_node_data",
    "load_pathway",
    "save_nifti_with_sidecar",
    "save_connectivity_maps",
]
