from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import IO, Iterator, List, Optional, Sequence, Union

from .emitter import Rating, format_rating

logger = logging.getLogger(__name__)


class OutputError(OSError):
    """Output directory or shard file could not be created."""


def train_shard_path(out_dir: Union[str, Path], i: int) -> Path:
    return Path(out_dir) / f"graph_{i}.tsv"


def validation_shard_path(out_dir: Union[str, Path], i: int) -> Path:
    return Path(out_dir) / f"graph_{i}.tsv.validate"


class ShardWriter:
    """Routes rating records to train/validation sinks by user_id % nfiles."""
    def __init__(
        self,
        train_sinks: Sequence[IO[str]],
        validation_sinks: Sequence[IO[str]],
        float_precision: Optional[int] = None,
    ):
        if len(train_sinks) != len(validation_sinks):
            raise ValueError(
                f"need one validation sink per train sink, got {len(train_sinks)} and {len(validation_sinks)}"
            )
        if not train_sinks:
            raise ValueError("at least one shard is required")
        self.train_sinks = list(train_sinks)
        self.validation_sinks = list(validation_sinks)
        self.float_precision = float_precision
        self.train_counts = [0] * len(train_sinks)
        self.validation_counts = [0] * len(validation_sinks)

    @property
    def nfiles(self) -> int:
        return len(self.train_sinks)

    def shard_of(self, user_id: int) -> int:
        return user_id % self.nfiles

    def write(self, record: Rating, validation: bool = False) -> int:
        i = self.shard_of(record.user_id)
        line = format_rating(record, self.float_precision)
        sink = self.validation_sinks[i] if validation else self.train_sinks[i]
        try:
            sink.write(line)
        except OSError as exc:
            raise OutputError(f"Error writing file: {_sink_name(sink, i, validation)}: {exc}") from exc
        if validation:
            self.validation_counts[i] += 1
        else:
            self.train_counts[i] += 1
        return i


def _sink_name(sink: IO[str], i: int, validation: bool) -> str:
    return str(getattr(sink, "name", f"{'validation' if validation else 'train'} shard {i}"))


def _ensure_dir(p: Path):
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Error creating directory: {p}: {exc}") from exc


def _open(stack: ExitStack, path: Path) -> IO[str]:
    try:
        f = open(path, "w", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise OutputError(f"Error creating file: {path}: {exc}") from exc
    stack.callback(_close, f, path)
    return f


def _close(f: IO[str], path: Path):
    try:
        f.close()
    except OSError as exc:
        raise OutputError(f"Error closing file: {path}: {exc}") from exc


@contextmanager
def open_shards(
    out_dir: Union[str, Path],
    nfiles: int,
    float_precision: Optional[int] = None,
) -> Iterator[ShardWriter]:
    """
    Create out_dir and open (truncate) nfiles train and validation shards.

    Every opened file is closed when the block exits, including when opening
    a later shard fails.
    """
    out = Path(out_dir)
    logger.info("Creating data directory: %s", out)
    _ensure_dir(out)

    with ExitStack() as stack:
        logger.info("Opening %d train and %d validation files", nfiles, nfiles)
        train: List[IO[str]] = []
        validation: List[IO[str]] = []
        for i in range(nfiles):
            train.append(_open(stack, train_shard_path(out, i)))
            validation.append(_open(stack, validation_shard_path(out, i)))
        yield ShardWriter(train, validation, float_precision=float_precision)
