"""Word challenge engine: one falling word and its letter puzzle.

A challenge owns the fall timer, the scrambled letter pool and the answer
slots for a single word. Consumed pool slots are blanked rather than removed,
so every letter keeps its position until it is put back.

Player actions and ticks never raise for stale or invalid input. Clicks can
arrive after the word already hit the bottom, so they report Outcome.NO_OP.
"""

import logging
import random
from collections import Counter
from typing import Callable

from .config import WRONG_GUESS_RESET_MS
from .interfaces import Scheduler, TimerHandle
from .models import ChallengeStatus, Outcome
from .utils import scramble

logger = logging.getLogger(__name__)

EMPTY = ''


class WordChallenge:
    """Lifecycle of a single falling word."""

    def __init__(self, target: str, lane_height: int, fall_duration_ms: int,
                 scheduler: Scheduler = None, rng: random.Random = None,
                 wrong_guess_reset_ms: int = WRONG_GUESS_RESET_MS,
                 on_terminal: Callable[['WordChallenge'], None] = None,
                 on_wrong_guess: Callable[['WordChallenge', str], None] = None):
        if not target:
            raise ValueError("target must be a non-empty string")
        if lane_height < 1:
            raise ValueError(f"lane_height must be >= 1, got {lane_height}")
        self.target = target
        self.lane_height = lane_height
        self.fall_duration_ms = fall_duration_ms
        self.wrong_guess_reset_ms = wrong_guess_reset_ms
        self.scheduler = scheduler
        self.on_terminal = on_terminal
        self.on_wrong_guess = on_wrong_guess
        self._rng = rng or random.Random()

        self.answer_slots = [EMPTY] * len(target)
        self.scrambled_pool = scramble(target, self._rng)
        self.fall_progress = 0
        self.status = ChallengeStatus.ACTIVE

        self._tick_timer: TimerHandle | None = None
        self._reset_timer: TimerHandle | None = None

    @classmethod
    def create(cls, target: str, lane_height: int, fall_duration_ms: int, **kwargs) -> 'WordChallenge':
        return cls(target, lane_height, fall_duration_ms, **kwargs)

    @property
    def tick_period_ms(self) -> float:
        return self.fall_duration_ms / self.lane_height

    @property
    def is_active(self) -> bool:
        return self.status == ChallengeStatus.ACTIVE

    @property
    def is_running(self) -> bool:
        return self._tick_timer is not None and not self._tick_timer.cancelled

    @property
    def reset_pending(self) -> bool:
        return self._reset_timer is not None and not self._reset_timer.cancelled

    @property
    def assembled(self) -> str:
        return ''.join(self.answer_slots)

    @property
    def is_answer_full(self) -> bool:
        return all(slot != EMPTY for slot in self.answer_slots)

    def letters_in_play(self) -> Counter:
        """Multiset of letters across answer slots and pool."""
        letters = Counter(c for c in self.answer_slots if c != EMPTY)
        letters.update(c for c in self.scrambled_pool if c != EMPTY)
        return letters

    def start(self) -> None:
        """Begin falling on the scheduler."""
        if self.scheduler is None:
            raise RuntimeError("WordChallenge.start() needs a scheduler")
        if not self.is_active or self.is_running:
            return
        self._tick_timer = self.scheduler.call_every(self.tick_period_ms, self.advance_tick)
        logger.debug(f"Challenge '{self.target}' falling: {self.lane_height} rows, "
                     f"{self.tick_period_ms:.1f}ms per row")

    def stop(self) -> None:
        """Cancel every pending timer. Safe to call repeatedly."""
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

    def advance_tick(self) -> Outcome:
        """Drop the word one row. Reaching the last row fails it."""
        if not self.is_active:
            return Outcome.NO_OP
        self.fall_progress += 1
        if self.fall_progress >= self.lane_height:
            self.fall_progress = self.lane_height
            self._finish(ChallengeStatus.FAILED)
            return Outcome.TERMINAL_REACHED
        return Outcome.APPLIED

    def select_letter(self, pool_index: int) -> Outcome:
        """Move a pool letter into the leftmost empty answer slot."""
        if not self.is_active or self.reset_pending:
            return self._ignored('select', pool_index)
        if not 0 <= pool_index < len(self.scrambled_pool):
            return self._ignored('select', pool_index)
        letter = self.scrambled_pool[pool_index]
        if letter == EMPTY:
            return self._ignored('select', pool_index)
        slot_index = self._first_empty(self.answer_slots)
        if slot_index is None:
            return self._ignored('select', pool_index)

        self.answer_slots[slot_index] = letter
        self.scrambled_pool[pool_index] = EMPTY

        if self.is_answer_full:
            return self._validate()
        return Outcome.APPLIED

    def deselect_letter(self, slot_index: int) -> Outcome:
        """Return an answer letter to the leftmost empty pool slot."""
        if not self.is_active or self.reset_pending:
            return self._ignored('deselect', slot_index)
        if not 0 <= slot_index < len(self.answer_slots):
            return self._ignored('deselect', slot_index)
        letter = self.answer_slots[slot_index]
        if letter == EMPTY:
            return self._ignored('deselect', slot_index)
        pool_index = self._first_empty(self.scrambled_pool)
        if pool_index is None:
            # Every selected letter vacated a pool slot, so this cannot happen
            # while the letter invariant holds.
            logger.error(f"Challenge '{self.target}' has no empty pool slot for '{letter}': "
                         f"pool={self.scrambled_pool} answer={self.answer_slots}")
            return Outcome.NO_OP

        self.scrambled_pool[pool_index] = letter
        self.answer_slots[slot_index] = EMPTY
        return Outcome.APPLIED

    def reset_answer(self) -> None:
        """Clear the answer and deal a fresh scramble of the target."""
        self._reset_timer = None
        if not self.is_active:
            return
        self.answer_slots = [EMPTY] * len(self.target)
        self.scrambled_pool = scramble(self.target, self._rng)
        logger.debug(f"Challenge '{self.target}' reset after wrong guess")

    def to_dict(self) -> dict:
        return {
            'target': self.target,
            'scrambled_pool': list(self.scrambled_pool),
            'answer_slots': list(self.answer_slots),
            'fall_progress': self.fall_progress,
            'lane_height': self.lane_height,
            'fall_duration_ms': self.fall_duration_ms,
            'status': self.status.value,
            'reset_pending': self.reset_pending
        }

    def _validate(self) -> Outcome:
        guess = self.assembled
        if guess == self.target:
            self._finish(ChallengeStatus.SOLVED)
            return Outcome.TERMINAL_REACHED

        logger.debug(f"Wrong guess '{guess}' for '{self.target}'")
        if self.scheduler is None or self.wrong_guess_reset_ms <= 0:
            self.reset_answer()
        else:
            self._reset_timer = self.scheduler.call_later(self.wrong_guess_reset_ms, self.reset_answer)
        if self.on_wrong_guess:
            self.on_wrong_guess(self, guess)
        return Outcome.APPLIED

    def _finish(self, status: ChallengeStatus) -> None:
        self.status = status
        self.stop()
        logger.debug(f"Challenge '{self.target}' {status.value} at row {self.fall_progress}/{self.lane_height}")
        if self.on_terminal:
            self.on_terminal(self)

    def _ignored(self, action: str, index: int) -> Outcome:
        logger.debug(f"Ignoring {action}({index}) on '{self.target}' ({self.status.value})")
        return Outcome.NO_OP

    @staticmethod
    def _first_empty(slots: list[str]) -> int | None:
        for i, value in enumerate(slots):
            if value == EMPTY:
                return i
        return None
