"""
Deterministic seeding for chunk generation.

Every random draw in generation goes through `seeded_choice`, which builds
a fresh RNG from the chunk hash for each draw instead of advancing one
stream. Both the interior solver and the edge stitcher use it, so a chunk's
tiles are a pure function of (world seed, chunk coordinate, schematic).
"""

import hashlib
import random
from collections.abc import Iterable

from ...core.types import ChunkCoord, TileTypeId


def chunk_hash(world_seed: int, coord: ChunkCoord) -> int:
    """
    64-bit hash of the world seed and the chunk coordinate sum.

    The coordinate enters as x + y, so chunks on the same anti-diagonal
    share a hash and therefore the same draw sequence.
    """
    key = f"{world_seed}:{coord.x + coord.y}".encode()
    return int.from_bytes(hashlib.blake2b(key, digest_size=8).digest(), "big")


def seeded_choice(seed: int, options: Iterable[TileTypeId]) -> TileTypeId:
    """
    Uniformly pick one id from `options` with an RNG freshly seeded by `seed`.

    Options are sorted first so the pick does not depend on set ordering.

    Raises:
        ValueError: If `options` is empty
    """
    ordered = sorted(options)
    if not ordered:
        raise ValueError("Cannot choose from an empty domain")
    rng = random.Random(seed)
    return ordered[rng.randrange(len(ordered))]
