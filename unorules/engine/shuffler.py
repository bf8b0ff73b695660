"""Pluggable shuffling.

A shuffler is any callable returning a permutation of the cards it is given,
leaving the input untouched. Hands and games take one as a parameter so tests
can swap in a deterministic order.
"""

import random
from typing import Callable, List, Optional, Sequence

from unorules.engine.card import Card

Shuffler = Callable[[Sequence[Card]], List[Card]]


def _fisher_yates(cards: Sequence[Card], randint: Callable[[int, int], int]) -> List[Card]:
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def standard_shuffler(cards: Sequence[Card]) -> List[Card]:
    """Uniformly random permutation using the module-level generator."""
    return _fisher_yates(cards, random.randint)


def seeded_shuffler(seed: Optional[int] = None) -> Shuffler:
    """Create a reproducible shuffler with its own generator.

    Successive calls on the returned shuffler continue the same random stream,
    so a whole match replays identically for a given seed.
    """
    rng = random.Random(seed)

    def shuffle(cards: Sequence[Card]) -> List[Card]:
        return _fisher_yates(cards, rng.randint)

    return shuffle


def identity_shuffler(cards: Sequence[Card]) -> List[Card]:
    """Keep the order as given."""
    return list(cards)
