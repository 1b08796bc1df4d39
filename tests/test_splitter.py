"""Tests for train/validation splitting."""

import numpy as np
import pytest

from thai_tts.training.splitter import split_dataset


@pytest.mark.parametrize("size", [1, 2, 5, 10, 37])
@pytest.mark.parametrize("fraction", [0.0, 0.1, 0.2, 0.5, 0.99, 1.0])
def test_split_is_a_partition(size, fraction):
    samples = list(range(size))

    split = split_dataset(samples, fraction, seed=size)

    assert len(split.training) + len(split.validation) == size
    assert set(split.training).isdisjoint(split.validation)
    assert sorted(split.training + split.validation) == samples


def test_split_sizes_use_floor():
    split = split_dataset(list(range(5)), 0.2, seed=0)
    assert (len(split.training), len(split.validation)) == (4, 1)

    split = split_dataset(list(range(7)), 0.5, seed=0)
    assert (len(split.training), len(split.validation)) == (3, 4)


def test_split_extremes():
    assert len(split_dataset(list(range(4)), 0.0).validation) == 0
    assert len(split_dataset(list(range(4)), 1.0).training) == 0


def test_split_empty():
    split = split_dataset([], 0.2)
    assert split.training == [] and split.validation == []
    assert split.total == 0


def test_same_seed_same_split():
    samples = list(range(50))
    assert split_dataset(samples, 0.2, seed=7) == split_dataset(samples, 0.2, seed=7)


def test_rng_takes_precedence_over_seed():
    samples = list(range(50))
    a = split_dataset(samples, 0.2, seed=1, rng=np.random.default_rng(99))
    b = split_dataset(samples, 0.2, seed=2, rng=np.random.default_rng(99))
    assert a == b


@pytest.mark.parametrize("fraction", [-0.1, 1.5])
def test_invalid_fraction(fraction):
    with pytest.raises(ValueError):
        split_dataset([1, 2, 3], fraction)
