"""
Train/validation splitting.
"""

import logging
import math
from typing import Generic, List, Optional, Sequence, TypeVar
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_VALIDATION_SPLIT = 0.2


@dataclass
class DatasetSplit(Generic[T]):
    """Disjoint training and validation partitions."""

    training: List[T] = field(default_factory=list)
    validation: List[T] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.training) + len(self.validation)


def split_dataset(
    samples: Sequence[T],
    validation_fraction: float = DEFAULT_VALIDATION_SPLIT,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> DatasetSplit[T]:
    """
    Shuffle samples and split them into training and validation sets.

    The first ``floor(N * (1 - validation_fraction))`` shuffled samples go to
    training, the rest to validation.

    Args:
        samples: Samples to split.
        validation_fraction: Fraction held out for validation (0.0-1.0).
        seed: Optional seed for a reproducible shuffle.
        rng: Optional numpy Generator; takes precedence over ``seed``.

    Returns:
        DatasetSplit whose partitions together hold every sample exactly once.
    """
    if not 0.0 <= validation_fraction <= 1.0:
        raise ValueError(f"validation_fraction must be within [0, 1], got {validation_fraction}")

    samples = list(samples)
    if not samples:
        return DatasetSplit()

    if rng is None:
        rng = np.random.default_rng(seed)

    order = rng.permutation(len(samples))
    shuffled = [samples[i] for i in order]

    split_index = math.floor(len(shuffled) * (1 - validation_fraction))
    split = DatasetSplit(training=shuffled[:split_index], validation=shuffled[split_index:])

    logger.info("Split dataset: %d training, %d validation", len(split.training), len(split.validation))
    return split
