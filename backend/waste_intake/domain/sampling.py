from __future__ import annotations

import math
from typing import Callable, Sequence, TypeVar, Union

from waste_intake.core.errors import DomainError

Seed = Union[str, int, float]
Rng = Callable[[], float]

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


def _seed_text(seed: Seed) -> str:
    # bool is an int subclass; render it the way JSON does.
    if isinstance(seed, bool):
        return "true" if seed else "false"
    if not isinstance(seed, (str, int, float)):
        raise DomainError(
            f"Seed must be a string or a number, got {type(seed).__name__}."
        )
    if isinstance(seed, str):
        return seed
    if isinstance(seed, int):
        return str(seed)
    if math.isfinite(seed) and seed.is_integer():
        return str(int(seed))
    return repr(seed)


def _hash32(text: str) -> int:
    """xmur3 string mixer folded to a single 32-bit state."""
    h = (1779033703 ^ len(text)) & _MASK32
    for ch in text:
        h = ((h ^ ord(ch)) * 3432918353) & _MASK32
        h = ((h << 13) | (h >> 19)) & _MASK32

    h = ((h ^ (h >> 16)) * 2246822507) & _MASK32
    h = ((h ^ (h >> 13)) * 3266489909) & _MASK32
    return (h ^ (h >> 16)) & _MASK32


class Mulberry32:
    """Small 32-bit generator; each call returns the next float in [0, 1)."""

    def __init__(self, state: int) -> None:
        self._state = state & _MASK32

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32


def create_rng(seed: Seed) -> Rng:
    return Mulberry32(_hash32(_seed_text(seed)))


def pick_one(options: Sequence[T], rng: Rng) -> T:
    if not options:
        raise ValueError("pick_one requires at least one option.")
    idx = math.floor(rng() * len(options))
    return options[min(max(idx, 0), len(options) - 1)]


def random_int(low: int, high: int, rng: Rng) -> int:
    if low > high:
        raise ValueError(f"random_int requires low <= high, got {low} > {high}.")
    value = low + math.floor(rng() * (high - low + 1))
    return min(max(value, low), high)
