"""Deterministic word shuffling."""

import random
from typing import Sequence


def randomized(words: Sequence[str], seed: int) -> list[str]:
    """Return ``words`` in a pseudo-random order fixed by ``seed``.

    Idempotent: the same words and seed always give the same order. Indices
    are drawn uniformly and repeats are skipped until every word is placed,
    so duplicate input words appear once in the result.
    """
    rng = random.Random(seed)
    unique_count = len(set(words))
    result: list[str] = []
    seen: set[str] = set()

    while len(result) < unique_count:
        word = words[rng.randrange(len(words))]
        if word not in seen:
            seen.add(word)
            result.append(word)

    return result
