"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Callable


class WordSource(ABC):
    """Abstract base class for the word list collaborator."""

    @abstractmethod
    def list_words(self) -> list:
        """Return every available Word.
        Raises WordSourceUnavailable when the backing store cannot be read."""
        pass

    def list_categories(self) -> list[str]:
        """Distinct categories (word packages), in first-seen order."""
        seen = []
        for word in self.list_words():
            if word.category and word.category not in seen:
                seen.append(word.category)
        return seen


class ProgressSink(ABC):
    """Abstract base class for receiving per-word outcomes."""

    @abstractmethod
    def on_word_solved(self, word_id: str) -> None:
        """Called once when a word is solved."""
        pass

    @abstractmethod
    def on_word_failed(self, word_id: str) -> None:
        """Called once when a word reaches the bottom."""
        pass


class TimerHandle(ABC):
    """A scheduled callback that can be cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """A single logical clock measured in milliseconds."""

    @property
    @abstractmethod
    def now_ms(self) -> float:
        pass

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once, delay_ms from now."""
        pass

    @abstractmethod
    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback every interval_ms until the handle is cancelled."""
        pass
