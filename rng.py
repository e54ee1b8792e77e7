"""
AMBER Checkpoint v1.0 — Seeded Random
Deterministic PRNG for subject generation. Same seed + same call order
always yields the same draws. Nothing here reads the clock or system entropy.

Optional audit trail on every draw (audit=True): no hidden rolls.
"""

import math

MASK_32 = 0xFFFFFFFF


def hash_string(text: str) -> int:
    """
    djb2 variant (hash * 33 ^ unit), unsigned 32-bit, over UTF-16 code
    units. Characters outside the BMP hash as their surrogate pair.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = 5381
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (((h << 5) + h) & MASK_32) ^ unit
    return h & MASK_32


class SeededRandom:
    """
    xorshift32 generator. Accepts an int or a string seed.
    One instance per subject build; never share an instance between subjects.
    """

    def __init__(self, seed, audit: bool = False):
        state = hash_string(seed) if isinstance(seed, str) else int(seed) & MASK_32
        if state == 0:
            state = 1
        self._state = state
        self.audit = audit
        self.draws = 0
        self.history: list[dict] = []

    def _record(self, op: str, result):
        if self.audit:
            self.history.append({"draw": self.draws, "op": op, "result": result})
        return result

    def next(self) -> float:
        """Float in [0, 1]. The top state maps to exactly 1.0."""
        s = self._state
        s ^= (s << 13) & MASK_32
        s ^= s >> 17
        s ^= (s << 5) & MASK_32
        self._state = s & MASK_32
        self.draws += 1
        return self._state / MASK_32

    def range(self, lo: float, hi: float) -> float:
        return self._record("range", lo + self.next() * (hi - lo))

    def int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi] inclusive."""
        value = math.floor(lo + self.next() * (hi - lo + 1))
        return self._record("int", min(value, hi))

    def bool(self, probability: float = 0.5) -> bool:
        return self._record("bool", self.next() < probability)

    def pick(self, items):
        """Uniform choice over a non-empty sequence."""
        if not items:
            raise ValueError("pick() from an empty table")
        idx = min(math.floor(self.next() * len(items)), len(items) - 1)
        return self._record("pick", items[idx])

    def pick_many(self, items, count) -> list:
        """
        Sample without replacement. Each draw is uniform over what is
        left in the pool; the picked item leaves the pool.
        """
        if not items:
            raise ValueError("pick_many() from an empty table")
        pool = list(items)
        picks = []
        for _ in range(min(count, len(pool))):
            idx = self.int(0, len(pool) - 1)
            picks.append(pool.pop(idx))
        return picks

    def gaussian(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
        """Box-Muller."""
        u1 = self.next() or 1.0 / MASK_32
        u2 = self.next()
        z0 = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)
        return self._record("gaussian", z0 * std_dev + mean)
