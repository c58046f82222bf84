from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List, Optional, Union

import numpy as np
import pandas as pd


RATING_COLS = ["user_id", "item_id", "rating"]
RATING_DTYPES = {"user_id": np.int64, "item_id": np.int64, "rating": np.float64}

_TRAIN_RE = re.compile(r"^graph_(\d+)\.tsv$")
_VALIDATION_RE = re.compile(r"^graph_(\d+)\.tsv\.validate$")


def list_shards(out_dir: Union[str, Path], validation: bool = False) -> List[Path]:
    """Shard files in out_dir, ordered by shard index."""
    pattern = _VALIDATION_RE if validation else _TRAIN_RE
    found = []
    for p in Path(out_dir).iterdir():
        m = pattern.match(p.name)
        if m:
            found.append((int(m.group(1)), p))
    return [p for _, p in sorted(found)]


def iter_shard_chunks(
    path: Union[str, Path],
    chunksize: int = 1_000_000,
    max_rows: Optional[int] = None,
) -> Iterator[pd.DataFrame]:
    """
    Stream one shard file as chunks.

    Shards have no header: user_id, item_id, rating separated by tabs.
    """
    if Path(path).stat().st_size == 0:
        return
    read_rows = 0
    for chunk in pd.read_csv(
        path,
        sep="\t",
        header=None,
        names=RATING_COLS,
        dtype=RATING_DTYPES,
        chunksize=chunksize,
    ):
        if max_rows is not None:
            remaining = max_rows - read_rows
            if remaining <= 0:
                break
            if len(chunk) > remaining:
                chunk = chunk.iloc[:remaining].copy()
        read_rows += len(chunk)
        yield chunk


def load_shards(out_dir: Union[str, Path], validation: bool = False) -> pd.DataFrame:
    """Concatenate every train (or validation) shard, tagging rows with their shard index."""
    frames = []
    for i, path in enumerate(list_shards(out_dir, validation=validation)):
        for chunk in iter_shard_chunks(path):
            chunk = chunk.copy()
            chunk["shard"] = i
            frames.append(chunk)
    if not frames:
        return pd.DataFrame({c: pd.Series(dtype=t) for c, t in {**RATING_DTYPES, "shard": np.int64}.items()})
    return pd.concat(frames, axis=0, ignore_index=True)


def summarize_dataset(out_dir: Union[str, Path]) -> dict:
    """Counts and degree skew of a generated dataset directory."""
    train = load_shards(out_dir)
    val = load_shards(out_dir, validation=True)
    both = pd.concat([train[RATING_COLS], val[RATING_COLS]], axis=0)

    per_item = train.groupby("item_id").size()
    return {
        "users": int(both["user_id"].nunique()),
        "items": int(both["item_id"].nunique()),
        "train": int(len(train)),
        "validation": int(len(val)),
        "train_per_shard": _per_shard(train, len(list_shards(out_dir))),
        "validation_per_shard": _per_shard(val, len(list_shards(out_dir, validation=True))),
        "max_ratings_per_item": int(per_item.max()) if len(per_item) else 0,
        "mean_ratings_per_item": float(per_item.mean()) if len(per_item) else 0.0,
        "rating_mean": float(both["rating"].mean()) if len(both) else 0.0,
        "rating_std": float(both["rating"].std()) if len(both) > 1 else 0.0,
    }


def _per_shard(df: pd.DataFrame, nshards: int) -> List[int]:
    counts = df["shard"].value_counts().reindex(range(nshards), fill_value=0)
    return [int(c) for c in counts]
