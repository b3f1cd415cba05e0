# nice_map_gen/utils/seeds.py
"""
Seed helpers: derive deterministic per-step seeds from a master seed.

Python's built-in hash() is salted per process, so a stable hash is used
instead; a saved config then places the same room starts every run.
"""

from __future__ import annotations

import random
from hashlib import blake2s


def derive_seed(master: int, name: str) -> int:
    """
    Create a stable 32-bit integer seed from a master seed + step name.
    """
    data = f"{int(master)}|{name}".encode("utf-8")
    h = blake2s(data, digest_size=4).digest()
    return int.from_bytes(h, "big", signed=False)


def make_rng(seed: int | None, name: str | None = None) -> random.Random:
    """Own Random instance so generation never disturbs the global module state."""
    if seed is None:
        return random.Random()
    if name:
        seed = derive_seed(seed, name)
    return random.Random(seed)
