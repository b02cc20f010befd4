"""Utility functions for wordfall."""

import random
import unicodedata


def fisher_yates_shuffle(items, rng: random.Random = None) -> list:
    """Return a uniformly shuffled copy of items.

    Walks from the last index down to 1 and swaps each element with one at a
    uniformly chosen index <= i. The input is never modified.
    """
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def scramble(word: str, rng: random.Random = None) -> list[str]:
    """Split a word into a shuffled list of single characters."""
    return fisher_yates_shuffle(list(word), rng)


def normalize_target(text: str) -> str:
    """Canonical answer form: NFC, trimmed, lowercase."""
    return unicodedata.normalize('NFC', text).strip().lower()
