"""Deterministic helpers shared by the engine."""

from .rng import SeededRNG, create_rng, hash_seed

__all__ = [
    "SeededRNG",
    "create_rng",
    "hash_seed",
]
