"""Deterministic playlist shuffling.

The permutation is a pure function of the track list and a 64-bit seed, so a
restarted service rebuilds exactly the order it was playing before.
"""

import random
from typing import List, Sequence

SEED_BITS = 64
MAX_SEED = (1 << SEED_BITS) - 1


def generate_seed() -> int:
    """Draw a fresh unsigned 64-bit seed from OS entropy."""
    return random.SystemRandom().getrandbits(SEED_BITS)


def permute(tracks: Sequence[str], seed: int) -> List[str]:
    """
    Return a shuffled copy of tracks.

    Uses a Fisher-Yates shuffle driven by a Mersenne Twister seeded with
    seed, so the result is uniform over all permutations and identical for
    identical inputs. The input sequence is not modified.

    Args:
        tracks: Track identifiers in list order
        seed: Unsigned 64-bit seed

    Returns:
        New list holding the same tracks in shuffled order
    """
    if not 0 <= seed <= MAX_SEED:
        raise ValueError(f"seed must be an unsigned 64-bit integer, got {seed}")
    shuffled = list(tracks)
    random.Random(seed).shuffle(shuffled)
    return shuffled
