from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from .config import GenConfig

logger = logging.getLogger(__name__)


def make_factors(rng: np.random.Generator, n: int, dim: int, stdev: float) -> np.ndarray:
    """
    Draw n latent factors of length dim from Normal(0, stdev).

    Values are filled row by row, so factor 0 consumes the first dim draws.
    The returned array is read-only.
    """
    factors = rng.normal(0.0, stdev, size=(n, dim))
    factors.setflags(write=False)
    return factors


def make_factor_tables(rng: np.random.Generator, config: GenConfig) -> Tuple[np.ndarray, np.ndarray]:
    # users strictly before items: reordering changes every value
    logger.info("Constructing latent user factors (%d x %d)", config.nusers, config.D)
    user_factors = make_factors(rng, config.nusers, config.D, config.stdev)
    logger.info("Constructing latent item factors (%d x %d)", config.nitems, config.D)
    item_factors = make_factors(rng, config.nitems, config.D, config.stdev)
    return user_factors, item_factors
