from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .config import ConfigurationError

logger = logging.getLogger(__name__)


def power_law_pmf(population_size: int, alpha: float) -> np.ndarray:
    """Normalized weights (i+1)^-alpha for ranks i = 0..population_size-1."""
    if population_size <= 0:
        raise ConfigurationError(f"population size must be positive, got {population_size}")
    # log space keeps large |alpha| finite; the largest weight becomes 1
    logw = -alpha * np.log(np.arange(1, population_size + 1, dtype=np.float64))
    w = np.exp(logw - logw.max())
    return w / w.sum()


def pdf_to_cdf(pmf: np.ndarray) -> np.ndarray:
    cdf = np.cumsum(pmf, dtype=np.float64)
    cdf /= cdf[-1]
    cdf[-1] = 1.0
    return cdf


@dataclass(frozen=True)
class DegreeDistribution:
    """
    Power-law out-degree distribution over a ranked population.

    Rank i is sampled with probability proportional to (i+1)^-alpha and the
    sampled degree is i + 1, so a few items get many ratings and most get few.
    """
    cdf: np.ndarray
    alpha: float

    @classmethod
    def build(cls, population_size: int, alpha: float) -> "DegreeDistribution":
        cdf = pdf_to_cdf(power_law_pmf(population_size, alpha))
        cdf.setflags(write=False)
        logger.info("Built power-law degree distribution: population=%d alpha=%.3f", population_size, alpha)
        return cls(cdf=cdf, alpha=alpha)

    @property
    def population_size(self) -> int:
        return len(self.cdf)

    @property
    def pmf(self) -> np.ndarray:
        return np.diff(self.cdf, prepend=0.0)

    def index_of(self, u: float) -> int:
        """First index whose cumulative value is >= u, clamped to the last index."""
        idx = int(np.searchsorted(self.cdf, u, side="left"))
        return min(idx, len(self.cdf) - 1)

    def sample_degree(self, rng: np.random.Generator) -> int:
        return self.index_of(rng.random()) + 1
