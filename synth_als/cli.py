from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import DEFAULT_SEED, ConfigurationError, GenConfig
from .data import summarize_dataset
from .generate import generate_to_dir
from .shards import OutputError

logger = logging.getLogger(__name__)


def cmd_generate(args):
    config = GenConfig.from_args(args)
    result = generate_to_dir(config, progress=not args.no_progress)
    print(json.dumps(result.to_dict(), indent=2))


def cmd_stats(args):
    out = Path(args.dir)
    if not out.is_dir():
        raise FileNotFoundError(f"Data directory not found: {out}")
    print(json.dumps(summarize_dataset(out), indent=2))


def build_parser():
    p = argparse.ArgumentParser(description="Creates a folder with synthetic training data")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="write train/validation shards")
    g.add_argument("--dir", type=str, default="synthetic_data", help="Location to create the data files")
    g.add_argument("--nfiles", type=int, default=5, help="The number of files to generate.")
    g.add_argument("--D", type=int, default=20, help="Number of latent dimensions.")
    g.add_argument("--nusers", type=int, default=1000, help="The number of users.")
    g.add_argument("--nitems", "--nmovies", dest="nitems", type=int, default=10000, help="The number of items.")
    g.add_argument("--alpha", type=float, default=1.8, help="The power-law constant.")
    g.add_argument("--nvalidation", type=int, default=2, help="The validation ratings per item")
    g.add_argument("--noise", type=float, default=0.1, help="The standard deviation noise parameter (not applied)")
    g.add_argument("--stdev", type=float, default=2.0, help="The standard deviation in latent factor values")
    g.add_argument("--seed", type=int, default=DEFAULT_SEED)
    g.add_argument("--float_precision", type=int, default=None,
                   help="significant digits for ratings (default: shortest exact repr)")
    g.add_argument("--no-progress", action="store_true")
    g.set_defaults(func=cmd_generate)

    s = sub.add_parser("stats", help="summarize a generated data directory")
    s.add_argument("--dir", type=str, default="synthetic_data")
    s.set_defaults(func=cmd_stats)

    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        args.func(args)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    except OutputError as e:
        logger.error("%s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
