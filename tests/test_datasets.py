"""
Dataset generator tests: shapes, determinism per seed and dataset spec validation.
"""

from __future__ import annotations

import numpy as np
import pytest

from orderstat.datasets import SUPPORTED_DISTS, make_dataset

SPECS = {
    "random": {"dist": "random", "params": {"range": [-5, 5]}},
    "random_float": {"dist": "random_float", "params": {"range": [0.0, 2.0]}},
    "sorted": {"dist": "sorted"},
    "reversed": {"dist": "reversed"},
    "few_uniques": {"dist": "few_uniques", "params": {"k": 3}},
    "organ_pipe": {"dist": "organ_pipe"},
    "all_equal": {"dist": "all_equal", "params": {"value": 9}},
}


def test_every_dist_has_a_spec() -> None:
    assert set(SPECS) == SUPPORTED_DISTS


@pytest.mark.parametrize("name", sorted(SPECS))
@pytest.mark.parametrize("n", [0, 1, 7, 100])
def test_length_and_type(name: str, n: int) -> None:
    out = make_dataset(n, SPECS[name], np.random.default_rng(1))
    assert isinstance(out, list)
    assert len(out) == n


@pytest.mark.parametrize("name", sorted(SPECS))
def test_deterministic_per_seed(name: str) -> None:
    a = make_dataset(200, SPECS[name], np.random.default_rng(42))
    b = make_dataset(200, SPECS[name], np.random.default_rng(42))
    assert a == b


def test_value_ranges() -> None:
    rng = np.random.default_rng(0)
    assert all(-5 <= v <= 5 for v in make_dataset(500, SPECS["random"], rng))
    assert all(0.0 <= v < 2.0 for v in make_dataset(500, SPECS["random_float"], rng))
    assert len(set(make_dataset(500, SPECS["few_uniques"], rng))) <= 3
    assert make_dataset(4, SPECS["all_equal"], rng) == [9, 9, 9, 9]


def test_structured_shapes() -> None:
    rng = np.random.default_rng(0)
    assert make_dataset(5, {"dist": "sorted"}, rng) == [0, 1, 2, 3, 4]
    assert make_dataset(5, {"dist": "reversed"}, rng) == [4, 3, 2, 1, 0]
    assert make_dataset(5, {"dist": "organ_pipe"}, rng) == [0, 1, 2, 1, 0]
    assert make_dataset(6, {"dist": "organ_pipe"}, rng) == [0, 1, 2, 2, 1, 0]


@pytest.mark.parametrize(
    "n,spec",
    [
        (-1, {"dist": "sorted"}),
        (3, "sorted"),
        (3, {"dist": "bogus"}),
        (3, {"dist": "random"}),
        (3, {"dist": "random", "params": {"range": [5, 1]}}),
        (3, {"dist": "random", "params": {"range": [0.5, 1]}}),
        (3, {"dist": "few_uniques", "params": {"k": 0}}),
        (3, {"dist": "random_float", "params": {"range": [2.0, 1.0]}}),
    ],
)
def test_invalid_specs(n, spec) -> None:
    with pytest.raises(ValueError):
        make_dataset(n, spec, np.random.default_rng(0))
