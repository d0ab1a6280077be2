"""
Deterministic random source for fellowship runs.

Every random decision in a run (segment layout, event flavor, draft offers,
upgrade targets, instance ids) is drawn from a SeededRNG that the caller
threads through the engine. Nothing in the package touches the global
`random` module, so a run is fully reproducible from its seed.
"""

import math
from typing import Sequence, TypeVar

from ..errors import EmptyInputError

T = TypeVar("T")

# Linear congruential generator parameters (glibc)
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF
LCG_MODULUS = 0x80000000


def hash_seed(seed: str) -> int:
    """
    Rolling 31x hash of a string seed, wrapped to signed 32 bits.

    Iterates UTF-16 code units so non-BMP characters hash the same way
    they would in a UTF-16 string runtime. Lone surrogates (from
    surrogateescape'd argv bytes) pass through as single code units.
    """
    encoded = seed.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = ((h << 5) - h + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


class SeededRNG:
    """
    Seeded LCG with float/int/shuffle/pick draws.

    Same seed, same call sequence -> same results, across processes.
    """

    def __init__(self, seed: str | int):
        if isinstance(seed, str):
            start = abs(hash_seed(seed))
        else:
            start = abs(int(seed)) & LCG_MASK
        self.seed = seed
        self.state = start or 1

    def _next(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.state

    def next_float(self) -> float:
        """Return 0 <= x < 1."""
        return self._next() / LCG_MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Return low <= x <= high."""
        return math.floor(self.next_float() * (high - low + 1)) + low

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffle into a new list. The input is left alone."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def pick(self, items: Sequence[T]) -> T:
        """Uniform choice. Raises EmptyInputError for an empty sequence."""
        if len(items) == 0:
            raise EmptyInputError()
        return items[self.next_int(0, len(items) - 1)]

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self.seed!r}, state={self.state})"


def create_rng(seed: str | int) -> SeededRNG:
    """Create a new RNG for the given seed."""
    return SeededRNG(seed)
