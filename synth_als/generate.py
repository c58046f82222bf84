from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from .config import GenConfig
from .degree import DegreeDistribution
from .emitter import EdgeEmitter
from .factors import make_factor_tables
from .shards import OutputError, ShardWriter, open_shards

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    config: GenConfig
    user_factors: np.ndarray
    item_factors: np.ndarray
    degrees: np.ndarray  # sampled training degree per item
    n_train: int = 0
    n_validation: int = 0
    train_per_shard: List[int] = field(default_factory=list)
    validation_per_shard: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "n_train": self.n_train,
            "n_validation": self.n_validation,
            "train_per_shard": list(self.train_per_shard),
            "validation_per_shard": list(self.validation_per_shard),
            "degree": {
                "min": int(self.degrees.min()),
                "max": int(self.degrees.max()),
                "mean": float(self.degrees.mean()),
            },
        }


def generate(
    config: GenConfig,
    sinks: ShardWriter,
    rng: Optional[np.random.Generator] = None,
    progress: bool = False,
) -> GenerationResult:
    """
    Generate the full synthetic ratings dataset into sinks.

    Random draws happen in a fixed order: all user factors, all item
    factors, then one degree per item. Passing rng lets the caller own the
    generator; otherwise one is seeded from config.seed.
    """
    config.validate()
    if sinks.nfiles != config.nfiles:
        raise ValueError(f"sinks have {sinks.nfiles} shards, config expects {config.nfiles}")
    if rng is None:
        rng = np.random.default_rng(config.seed)
    if config.noise:
        logger.debug("noise=%s is accepted but not applied to ratings", config.noise)

    user_factors, item_factors = make_factor_tables(rng, config)
    dist = DegreeDistribution.build(config.population_size, config.alpha)
    emitter = EdgeEmitter(user_factors, item_factors, config.nvalidation)

    degrees = np.zeros(config.nitems, dtype=np.int64)
    n_train = 0
    n_validation = 0
    for item in tqdm(range(config.nitems), desc="items", disable=not progress):
        degree = dist.sample_degree(rng)
        degrees[item] = degree
        for record, validation in emitter.emit_item(item, degree):
            sinks.write(record, validation=validation)
            if validation:
                n_validation += 1
            else:
                n_train += 1

    logger.info("Wrote %d training and %d validation ratings for %d items", n_train, n_validation, config.nitems)
    return GenerationResult(
        config=config,
        user_factors=user_factors,
        item_factors=item_factors,
        degrees=degrees,
        n_train=n_train,
        n_validation=n_validation,
        train_per_shard=list(sinks.train_counts),
        validation_per_shard=list(sinks.validation_counts),
    )


def generate_to_dir(
    config: GenConfig,
    rng: Optional[np.random.Generator] = None,
    progress: bool = False,
    write_meta: bool = True,
) -> GenerationResult:
    """Validate, open the shard files under config.out_dir and generate into them."""
    config.validate()
    with open_shards(config.out_dir, config.nfiles, config.float_precision) as sinks:
        result = generate(config, sinks, rng=rng, progress=progress)
    if write_meta:
        meta_path = Path(config.out_dir) / "meta.json"
        try:
            meta_path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Error writing file: {meta_path}: {exc}") from exc
    logger.info("Saved dataset to: %s", config.out_dir)
    return result
