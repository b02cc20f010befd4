"""Progress sinks: where solved/failed outcomes go."""

import logging

from .config import MAX_STARS, BASELINE_STARS
from .interfaces import ProgressSink

logger = logging.getLogger(__name__)


class NullProgressSink(ProgressSink):
    """Discards every outcome."""

    def on_word_solved(self, word_id: str) -> None:
        pass

    def on_word_failed(self, word_id: str) -> None:
        pass


class MasteryTracker(ProgressSink):
    """In-memory star ratings per word.

    A solve earns one star (capped at MAX_STARS); a failure drops the word
    back to BASELINE_STARS. Nothing is written to disk.
    """

    def __init__(self, initial: dict[str, int] = None):
        self.stars = dict(initial or {})
        self.solved = {}
        self.failed = {}

    @classmethod
    def from_words(cls, words: list) -> 'MasteryTracker':
        """Seed ratings from the star_rating carried by each Word."""
        return cls({w.id: w.star_rating for w in words})

    def get_stars(self, word_id: str) -> int:
        return self.stars.get(word_id, 0)

    def on_word_solved(self, word_id: str) -> None:
        self.stars[word_id] = min(self.get_stars(word_id) + 1, MAX_STARS)
        self.solved[word_id] = self.solved.get(word_id, 0) + 1
        logger.debug(f"Word {word_id}: {self.stars[word_id]} stars")

    def on_word_failed(self, word_id: str) -> None:
        self.stars[word_id] = BASELINE_STARS
        self.failed[word_id] = self.failed.get(word_id, 0) + 1
        logger.debug(f"Word {word_id}: reset to {BASELINE_STARS} stars")

    def words_by_stars(self, words: list) -> dict[int, list]:
        """Group words by current rating, highest first. Empty groups are omitted."""
        groups = {}
        for stars in range(MAX_STARS, -1, -1):
            matching = [w for w in words if self.get_stars(w.id) == stars]
            if matching:
                groups[stars] = matching
        return groups

    def get_mastered(self, words: list) -> list:
        return [w for w in words if self.get_stars(w.id) >= MAX_STARS]

    def to_dict(self) -> dict:
        return {'stars': dict(self.stars), 'solved': dict(self.solved), 'failed': dict(self.failed)}
