import json
import os
import tempfile

import nibabel as nib
import pytest
import yaml

from seedconn.__main__ import main
from seedconn.cli import create_parser
from seedconn.tests.tools import create_synthetic_images, create_synthetic_node_file


def test_parser_defaults():
    args = create_parser().parse_args(["func.nii.gz", "atlas.nii.gz", "out.nii.gz"])
    assert args.mode is None
    assert args.seeds is None
    assert args.indices is None
    assert not args.exact
    assert not args.flatten


def test_main_region_seeds():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, labels_path = create_synthetic_images(tmp)
        output = os.path.join(tmp, "maps.nii.gz")

        main([func_path, atlas_path, output,
              "--labels-file", labels_path,
              "--seeds", "DMN",
              "--chunk-size", "5"])

        assert nib.load(output).shape[-1] == 2
        with open(os.path.join(tmp, "maps.json")) as f:
            sidecar = json.load(f)
        assert sidecar["SeedLabels"] == ["DMN_L", "DMN_R"]
        assert sidecar["RunSettings"]["seeds"] == ["DMN"]
        assert sidecar["RunSettings"]["chunk_size"] == 5
        assert sidecar["RunSettings"]["labels_file"] == labels_path


def test_main_with_config_file():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, labels_path = create_synthetic_images(tmp)
        node_path = create_synthetic_node_file(os.path.join(tmp, "nodes.tsv"), ["hub_A", "leaf"])
        config_path = os.path.join(tmp, "config.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"mode": "nodes", "seeds": ["hub"], "node_data": node_path}, f)
        output = os.path.join(tmp, "nodes.nii.gz")

        main([func_path, atlas_path, output, "-c", config_path])

        with open(os.path.join(tmp, "nodes.json")) as f:
            sidecar = json.load(f)
        assert sidecar["SeedLabels"] == ["hub_A"]
        assert sidecar["Mode"] == "nodes"


def test_main_nodes_without_node_data_writes_nothing():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, _ = create_synthetic_images(tmp)
        output = os.path.join(tmp, "maps.nii.gz")

        main([func_path, atlas_path, output, "--mode", "nodes"])

        assert not os.path.exists(output)


def test_main_no_matching_seed_exits():
    with tempfile.TemporaryDirectory() as tmp:
        func_path, atlas_path, labels_path = create_synthetic_images(tmp)
        output = os.path.join(tmp, "maps.nii.gz")

        with pytest.raises(SystemExit) as excinfo:
            main([func_path, atlas_path, output,
                  "--labels-file", labels_path,
                  "--seeds", "Thalamus"])

        assert excinfo.value.code == 1
        assert not os.path.exists(output)
