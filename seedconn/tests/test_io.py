import json
import os
import tempfile
from pathlib import Path

import nibabel as nib
import numpy as np
import pytest

from seedconn.connectivity.seed_connectivity import seed_connectivity
from seedconn.connectivity.selection import SeedSelection
from seedconn.io.readers import load_labels_file, load_node_data, load_pathway
from seedconn.io.writers import save_connectivity_maps
from seedconn.utils.exceptions import DataError
from seedconn.tests.tools import (VOLUME_SHAPE,
                                  create_synthetic_images,
                                  create_synthetic_node_file)


def test_load_labels_file():
    with tempfile.TemporaryDirectory() as tmp:
        _, _, labels_path = create_synthetic_images(tmp)
        assert load_labels_file(labels_path) == ["DMN_L", "DMN_R", "Visual"]

        txt_path = os.path.join(tmp, "labels.txt")
        with open(txt_path, "w") as f:
            f.write("Amygdala_L\nAmygdala_R\n\n")
        assert load_labels_file(txt_path) == ["Amygdala_L", "Amygdala_R"]

        empty_path = os.path.join(tmp, "empty.txt")
        open(empty_path, "w").close()
        with pytest.raises(DataError):
            load_labels_file(empty_path)

        with pytest.raises(FileNotFoundError):
            load_labels_file(os.path.join(tmp, "missing.txt"))


def test_load_node_data():
    with tempfile.TemporaryDirectory() as tmp:
        tsv_path = create_synthetic_node_file(os.path.join(tmp, "nodes.tsv"), ["hub_A", "hub_B"])
        node_dat, node_labels = load_node_data(tsv_path)
        assert node_dat.shape == (30, 2)
        assert node_labels == ["hub_A", "hub_B"]

        npy_path = os.path.join(tmp, "nodes.npy")
        np.save(npy_path, node_dat)
        loaded, labels = load_node_data(npy_path)
        np.testing.assert_array_equal(loaded, node_dat)
        assert labels is None


def test_load_pathway():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, labels_path = create_synthetic_images(tmp)
        pathway = load_pathway(Path(func_path), atlas_path, labels=load_labels_file(labels_path))

        assert pathway.region_atlas.labels == ["DMN_L", "DMN_R", "Visual"]
        assert pathway.voxel_dat.shape == (30, 24)
        assert pathway.region_dat.shape == (30, 3)
        assert not pathway.has_node_data

        func_data = nib.load(func_path).get_fdata()
        atlas_data = np.asarray(nib.load(atlas_path).dataobj)
        expected = func_data[atlas_data == 2].mean(axis=0)
        np.testing.assert_allclose(pathway.region_dat.data[:, 1], expected, rtol=1e-5, atol=1e-6)


def test_load_pathway_default_labels_and_label_mismatch():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, _ = create_synthetic_images(tmp)
        pathway = load_pathway(func_path, atlas_path)
        assert pathway.region_atlas.labels == ["region_001", "region_002", "region_003"]

        with pytest.raises(DataError):
            load_pathway(func_path, atlas_path, labels=["DMN_L", "DMN_R"])


def test_load_pathway_rejects_3d_functional():
    with tempfile.TemporaryDirectory() as tmp:
        _, atlas_path, _ = create_synthetic_images(tmp)
        with pytest.raises(DataError):
            load_pathway(atlas_path, atlas_path)


def test_save_connectivity_maps():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, labels_path = create_synthetic_images(tmp)
        pathway = load_pathway(func_path, atlas_path, labels=load_labels_file(labels_path))
        maps = seed_connectivity(pathway, SeedSelection(labels=("DMN",)))

        output_path = Path(tmp) / "derivatives" / "seedconn.nii.gz"
        assert save_connectivity_maps(maps, output_path, {"Subject": "01"}) == output_path

        img = nib.load(output_path)
        assert img.shape == VOLUME_SHAPE + (2,)
        data = img.get_fdata()
        np.testing.assert_allclose(data[pathway.region_atlas.volume_info.mask], maps.data,
                                   rtol=1e-5, atol=1e-6)

        with open(Path(tmp) / "derivatives" / "seedconn.json") as f:
            sidecar = json.load(f)
        assert sidecar["SeedLabels"] == ["DMN_L", "DMN_R"]
        assert sidecar["SourceNotes"] == maps.source_notes
        assert sidecar["Mode"] == "regions"
        assert sidecar["Subject"] == "01"
        assert "CreationTime" in sidecar
