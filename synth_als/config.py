from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Optional


DEFAULT_SEED = 31413


class ConfigurationError(ValueError):
    """Invalid combination of generation parameters."""


@dataclass
class GenConfig:
    out_dir: str = "synthetic_data"
    nfiles: int = 5
    D: int = 20  # latent dimensions
    nusers: int = 1000
    nitems: int = 10000
    nvalidation: int = 2  # validation ratings per item
    noise: float = 0.1  # parsed, not applied to ratings
    stdev: float = 2.0
    alpha: float = 1.8  # power-law exponent
    seed: int = DEFAULT_SEED
    float_precision: Optional[int] = None  # None -> shortest round-trip repr

    @property
    def population_size(self) -> int:
        """Number of ranks in the out-degree distribution."""
        return self.nusers - self.nvalidation

    def validate(self) -> "GenConfig":
        for name in ("nfiles", "D", "nusers", "nitems"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.nvalidation < 0:
            raise ConfigurationError(f"nvalidation must be >= 0, got {self.nvalidation}")
        if self.nusers <= self.nvalidation:
            raise ConfigurationError(
                f"nusers ({self.nusers}) must be greater than nvalidation ({self.nvalidation})"
            )
        if self.stdev < 0:
            raise ConfigurationError(f"stdev must be >= 0, got {self.stdev}")
        if self.noise < 0:
            raise ConfigurationError(f"noise must be >= 0, got {self.noise}")
        if not math.isfinite(self.alpha):
            raise ConfigurationError(f"alpha must be finite, got {self.alpha}")
        if self.float_precision is not None and self.float_precision < 1:
            raise ConfigurationError(f"float_precision must be >= 1, got {self.float_precision}")
        return self

    @classmethod
    def from_args(cls, args) -> "GenConfig":
        return cls(
            out_dir=args.dir,
            nfiles=args.nfiles,
            D=args.D,
            nusers=args.nusers,
            nitems=args.nitems,
            nvalidation=args.nvalidation,
            noise=args.noise,
            stdev=args.stdev,
            alpha=args.alpha,
            seed=args.seed,
            float_precision=args.float_precision,
        )

    def to_dict(self) -> dict:
        return asdict(self)
