import logging

import numpy as np
import pytest

from seedconn.connectivity.selection import (SeedSelection,
                                             find_seed_indices,
                                             match_labels,
                                             parse_selection_args,
                                             selection_mask)
from seedconn.utils.exceptions import (ConfigurationError,
                                       SelectionError,
                                       UnrecognizedOptionWarning)

LABELS = ["DMN_L", "DMN_R", "Visual"]
SUBCORTICAL = ["Amygdala_L", "Amygdala_R", "Caudate_L", "Caudate_R", "Insula_L", "Insula_R"]


def test_select_by_substring():
    indices = find_seed_indices(LABELS, SeedSelection(labels=("DMN",)))
    assert indices.tolist() == [0, 1]


def test_select_by_index():
    indices = find_seed_indices(LABELS, SeedSelection(indices=(2,)))
    assert indices.tolist() == [2]


def test_index_and_label_selection_agree():
    by_index = selection_mask(SUBCORTICAL, SeedSelection(indices=(2, 5)))
    by_label = selection_mask(SUBCORTICAL, SeedSelection(labels=(SUBCORTICAL[2], SUBCORTICAL[5])))
    np.testing.assert_array_equal(by_index, by_label)
    assert np.flatnonzero(by_index).tolist() == [2, 5]


def test_labels_and_indices_are_unioned():
    indices = find_seed_indices(LABELS, SeedSelection(labels=("Visual",), indices=(0, 0)))
    assert indices.tolist() == [0, 2]


def test_multiple_substrings_are_unioned():
    mask = match_labels(SUBCORTICAL, ["Caudate", "_R"])
    assert np.flatnonzero(mask).tolist() == [1, 2, 3, 5]


def test_no_match_raises():
    with pytest.raises(SelectionError, match="No seeds identified"):
        find_seed_indices(LABELS, SeedSelection(labels=("Thalamus",)))


def test_matching_is_case_sensitive():
    with pytest.raises(SelectionError):
        find_seed_indices(LABELS, SeedSelection(labels=("dmn",)))


def test_exact_matching():
    with pytest.raises(SelectionError):
        find_seed_indices(LABELS, SeedSelection(labels=("DMN",), exact=True))
    indices = find_seed_indices(LABELS, SeedSelection(labels=("DMN_L",), exact=True))
    assert indices.tolist() == [0]


def test_out_of_range_index_raises():
    with pytest.raises(SelectionError):
        find_seed_indices(LABELS, SeedSelection(indices=(3,)))
    with pytest.raises(SelectionError):
        find_seed_indices(LABELS, SeedSelection(indices=(-1,)))


def test_empty_selection_selects_all():
    assert find_seed_indices(LABELS, SeedSelection()).tolist() == [0, 1, 2]


def test_empty_label_list_raises():
    with pytest.raises(SelectionError):
        find_seed_indices([], SeedSelection())


def test_flatten_has_no_effect():
    plain = find_seed_indices(LABELS, SeedSelection(labels=("DMN",)))
    flat = find_seed_indices(LABELS, SeedSelection(labels=("DMN",), flatten=True),
                             logger=logging.getLogger("seedconn_test"))
    np.testing.assert_array_equal(plain, flat)


def test_selection_normalization():
    assert SeedSelection(mode="node").mode == "nodes"
    assert SeedSelection(mode="region").mode == "regions"
    assert SeedSelection(labels="DMN").labels == ("DMN",)
    assert SeedSelection(indices=np.array([1, 2])).indices == (1, 2)
    assert SeedSelection(indices=3).indices == (3,)


def test_invalid_selection_raises():
    with pytest.raises(ConfigurationError):
        SeedSelection(mode="voxels")
    with pytest.raises(ConfigurationError):
        SeedSelection(indices=(True,))
    with pytest.raises(ConfigurationError):
        SeedSelection(indices=(1.5,))
    with pytest.raises(ConfigurationError):
        SeedSelection(labels=(1,))


def test_parse_keywords_and_lists():
    selection = parse_selection_args(["DMN"], [2, 5], "nodes", "flatten")
    assert selection.mode == "nodes"
    assert selection.labels == ("DMN",)
    assert selection.indices == (2, 5)
    assert selection.flatten
    assert not selection.exact

    selection = parse_selection_args(np.array([1, 3]), "regions", "exact")
    assert selection.mode == "regions"
    assert selection.indices == (1, 3)
    assert selection.exact


def test_parse_unknown_string_warns_and_becomes_label():
    with pytest.warns(UnrecognizedOptionWarning):
        selection = parse_selection_args("Visual")
    assert selection.labels == ("Visual",)
    assert find_seed_indices(LABELS, selection).tolist() == [2]


def test_parse_unknown_string_logs_warning(caplog):
    logger = logging.getLogger("seedconn_test")
    with caplog.at_level(logging.WARNING):
        selection = parse_selection_args("Visual", logger=logger)
    assert selection.labels == ("Visual",)
    assert any("Unknown input string option: Visual" in r.getMessage() for r in caplog.records)


def test_parse_rejects_unsupported_arguments():
    with pytest.raises(ConfigurationError):
        parse_selection_args(3.5)
    with pytest.raises(ConfigurationError):
        parse_selection_args([1, "DMN"])
