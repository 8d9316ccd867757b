# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Deterministic pseudo-random numbers (Mulberry32).

All state updates use 32-bit integer arithmetic so a given seed yields the
same sequence, shuffles included, on every platform.
"""

from datetime import date, datetime, timezone
from typing import List, MutableSequence, Sequence, TypeVar, Union

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_GOLDEN = 0x6D2B79F5
_DAILY_SALT = 0xB01DFACE


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32-bit multiply."""
    return (a * b) & _MASK32


class SeededRandom:
    """
    Mulberry32 generator seeded by a single integer.

    Usage:
        rng = SeededRandom(42)
        rng.next()             # float in [0, 1)
        rng.shuffle(items)     # in-place Fisher-Yates
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & _MASK32

    def next_uint32(self) -> int:
        """Advance the generator and return an integer in [0, 2**32)."""
        self._state = (self._state + _GOLDEN) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return (t ^ (t >> 14)) & _MASK32

    def next(self) -> float:
        """Returns a float in [0, 1)."""
        return self.next_uint32() / 4294967296

    def next_int(self, max_value: int) -> int:
        """Returns an integer in [0, max_value)."""
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        return (self.next_uint32() * max_value) >> 32

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle (in place, returns the same sequence)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy, leaving the input untouched."""
        return self.shuffle(list(items))

    def pick(self, items: Sequence[T]) -> T:
        """Pick one element."""
        if not items:
            raise IndexError("cannot pick from an empty sequence")
        return items[self.next_int(len(items))]


def _hash_int(x: int) -> int:
    # Signed 32-bit integer hash; each product is rounded to the nearest
    # double before truncation to 32 bits.
    x = _to_int32(x)
    x = _to_int32(_as_double(((x >> 16) ^ x) * 0x45D9F3B))
    x = _to_int32(_as_double(((x >> 16) ^ x) * 0x45D9F3B))
    return _to_int32((x >> 16) ^ x)


def _as_double(x: int) -> int:
    return int(float(x))


def _to_int32(x: int) -> int:
    x &= _MASK32
    return x - 0x100000000 if x & 0x80000000 else x


def daily_seed(day: Union[date, datetime]) -> int:
    """
    Seed shared by every caller on the same calendar day.

    Args:
        day: The date, or a datetime (aware values are taken in UTC)

    Returns:
        Signed 32-bit seed
    """
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(timezone.utc)
        day = day.date()
    days_since_epoch = (day - date(1970, 1, 1)).days
    return _hash_int(days_since_epoch ^ _DAILY_SALT)
