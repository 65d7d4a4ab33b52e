# procareer/rng.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

# We need a stable, cross-process hash. Python's built-in hash() is salted per run,
# so we implement 64-bit FNV-1a for strings/bytes and a simple canonicalization for ints.

_FNV_OFFSET64 = 0xCBF29CE484222325
_FNV_PRIME64 = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _to_bytes(x: Union[int, str, bytes]) -> bytes:
    if isinstance(x, bytes):
        return x
    if isinstance(x, int):
        # 8 bytes little-endian unsigned representation (wraps for big ints)
        return int(x & _MASK64).to_bytes(8, "little", signed=False)
    return str(x).encode("utf-8")


def _fnv1a64(data: bytes) -> int:
    h = _FNV_OFFSET64
    for b in data:
        h ^= b
        h = (h * _FNV_PRIME64) & _MASK64
    return h


def mix(base_seed: int, *parts: Union[int, str, bytes]) -> int:
    """
    Deterministically mix a base seed with any number of parts into a 31-bit positive int.
    Produces the same result across processes and platforms.
    """
    h = _fnv1a64(_to_bytes(base_seed))
    for p in parts:
        h ^= _fnv1a64(_to_bytes(p))
        h = (h * _FNV_PRIME64) & _MASK64
    # Reduce to a positive 31-bit int and avoid 0
    out = (h ^ (h >> 33)) & 0x7FFFFFFF
    return out or 1


def child_seed(base_seed: int, label: Union[int, str, bytes]) -> int:
    """Seed for one labelled sub-stream (e.g. 'season:2026')."""
    return mix(base_seed, label)


def child_rng(base_seed: int, *parts: Union[int, str, bytes]) -> "SimRNG":
    """A SimRNG deterministically derived from base_seed and parts."""
    return SimRNG(mix(base_seed, *parts))


class SimRNG:
    """
    The single randomness source threaded through every simulation call.

    rand_int() and uniform() are the two primitives; everything else is built on them,
    so a test double only has to override those two.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._r = random.Random(seed)

    # ---------- primitives ----------

    def rand_int(self, lo: int, hi: int) -> int:
        """Inclusive integer in [lo, hi]."""
        return self._r.randint(int(lo), int(hi))

    def uniform(self) -> float:
        """Float in [0, 1)."""
        return self._r.random()

    # ---------- helpers ----------

    def between(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.uniform()

    def chance(self, p: float) -> bool:
        return self.uniform() < p

    def pick(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("pick() needs a non-empty sequence")
        return seq[self.rand_int(0, len(seq) - 1)]

    def shuffled(self, seq: Sequence[T]) -> List[T]:
        out = list(seq)
        # Fisher-Yates on top of rand_int so stubs stay in control
        for i in range(len(out) - 1, 0, -1):
            j = self.rand_int(0, i)
            out[i], out[j] = out[j], out[i]
        return out

    def spawn(self, *parts: Union[int, str, bytes]) -> "SimRNG":
        """Child stream; deterministic when this RNG was seeded."""
        if self.seed is None:
            return SimRNG(self.rand_int(1, 0x7FFFFFFF))
        return child_rng(self.seed, *parts)
