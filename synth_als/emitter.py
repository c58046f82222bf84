from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Tuple

import numpy as np


# Knuth's multiplicative hashing constant, used here as an additive stride.
USER_STRIDE = 2654435761


class Rating(NamedTuple):
    user_id: int
    item_id: int
    rating: float


def format_rating(record: Rating, float_precision: Optional[int] = None) -> str:
    if float_precision is None:
        value = repr(float(record.rating))
    else:
        value = f"{record.rating:.{float_precision}g}"
    return f"{record.user_id}\t{record.item_id}\t{value}\n"


class EdgeEmitter:
    """
    Turns (item, degree) pairs into rating records.

    A single user cursor walks the whole run: every edge, training or
    validation, advances it by USER_STRIDE modulo nusers. Nothing here
    draws random numbers, so the output is fixed by the factor tables and
    the sequence of degrees.
    """
    def __init__(self, user_factors: np.ndarray, item_factors: np.ndarray, nvalidation: int):
        self.user_factors = user_factors
        self.item_factors = item_factors
        self.nusers = len(user_factors)
        self.nvalidation = nvalidation
        self.cursor = 0
        self._step = USER_STRIDE % self.nusers

    def next_users(self, count: int) -> np.ndarray:
        """Advance the cursor count times and return every visited user id."""
        if count <= 0:
            return np.empty(0, dtype=np.int64)
        offsets = np.arange(1, count + 1, dtype=np.int64) * self._step
        users = (self.cursor + offsets) % self.nusers
        self.cursor = int(users[-1])
        return users

    def _ratings(self, item: int, count: int) -> Iterator[Rating]:
        users = self.next_users(count)
        values = self.user_factors[users] @ self.item_factors[item]
        item_id = item + self.nusers
        for u, r in zip(users.tolist(), values.tolist()):
            yield Rating(u, item_id, r)

    def emit_item(self, item: int, degree: int) -> Iterator[Tuple[Rating, bool]]:
        """
        Yield (record, is_validation) for one item.

        degree training records come first, then nvalidation validation
        records; the generator must be consumed fully to keep the cursor in step.
        """
        for record in self._ratings(item, degree):
            yield record, False
        for record in self._ratings(item, self.nvalidation):
            yield record, True
