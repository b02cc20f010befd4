"""Round controller: word queue, scoring, combo and the game-over rule."""

import logging
import random
from typing import Callable

from .challenge import WordChallenge
from .config import (
    GameSettings,
    NORMAL_BASE_XP, HARD_BASE_XP,
    NORMAL_COMBO_STEP_PERCENT, NORMAL_COMBO_CAP_PERCENT,
    HARD_COMBO_STEP_PERCENT, HARD_COMBO_CAP_PERCENT
)
from .errors import EmptyWordList
from .interfaces import ProgressSink, Scheduler, TimerHandle, WordSource
from .models import ChallengeStatus, GameEvent, Outcome, RoundState, RoundStatus, ScoreDelta, Word
from .progress import NullProgressSink
from .scheduler import ManualScheduler
from .utils import fisher_yates_shuffle

logger = logging.getLogger(__name__)


def bonus_percent(combo: int, hard_mode: bool = False) -> int:
    """Combo bonus: 5% per chained word up to 50%, or 10% up to 100% in hard mode."""
    if hard_mode:
        step, cap = HARD_COMBO_STEP_PERCENT, HARD_COMBO_CAP_PERCENT
    else:
        step, cap = NORMAL_COMBO_STEP_PERCENT, NORMAL_COMBO_CAP_PERCENT
    return max(0, min((combo - 1) * step, cap))


def calculate_xp(combo: int, hard_mode: bool = False) -> ScoreDelta:
    """XP for solving a word with the given combo."""
    base = HARD_BASE_XP if hard_mode else NORMAL_BASE_XP
    bonus = bonus_percent(combo, hard_mode)
    # Integer form of floor(base * (1 + bonus / 100))
    xp = base * (100 + bonus) // 100
    return ScoreDelta(xp=xp, base_xp=base, bonus_percent=bonus, combo=combo, hard_mode=hard_mode)


class RoundController:
    """Runs a play session: one WordChallenge per queued word.

    The controller reacts to each challenge's terminal outcome by scoring,
    updating the combo and either moving to the next word after a short
    feedback delay or ending the round.
    """

    def __init__(self, settings: GameSettings = None, scheduler: Scheduler = None,
                 progress_sink: ProgressSink = None, rng: random.Random = None):
        self.settings = settings or GameSettings()
        self.scheduler = scheduler or ManualScheduler()
        self.progress_sink = progress_sink or NullProgressSink()
        self._rng = rng or random.Random()
        self.state: RoundState | None = None
        self.challenge: WordChallenge | None = None
        self._hard_mode = self.settings.hard_mode
        self._challenge_hard_mode = self._hard_mode
        self._word_resolved = False
        self._advance_timer: TimerHandle | None = None
        self._listeners = []

    @property
    def status(self) -> RoundStatus:
        return self.state.status if self.state else RoundStatus.NOT_STARTED

    @property
    def is_playing(self) -> bool:
        return self.status == RoundStatus.PLAYING

    @property
    def hard_mode(self) -> bool:
        return self._hard_mode

    @property
    def current_word(self) -> Word | None:
        return self.state.current_word if self.state else None

    @property
    def lane_height(self) -> int:
        """Rows left for the next falling word."""
        stacked = len(self.state.stacked_failures) if self.state else 0
        return self.settings.grid_height - stacked

    @property
    def game_over_threshold(self) -> int:
        return self.settings.grid_height - 1

    def subscribe(self, listener: Callable[[GameEvent], None]) -> Callable[[], None]:
        """Register an event listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def start_round(self, words: list[Word]) -> RoundState:
        """Start a new round over a shuffled copy of words."""
        if not words:
            raise EmptyWordList()
        self.stop()
        state = RoundState(fisher_yates_shuffle(words, self._rng), hard_mode=self._hard_mode)
        state.status = RoundStatus.PLAYING
        self.state = state
        logger.info(f"Round started: {len(state.word_queue)} words, grid {self.settings.grid_height}, "
                    f"hard_mode={state.hard_mode}")
        self._emit('round.started', words=len(state.word_queue), hard_mode=state.hard_mode)
        self._start_challenge()
        return state

    def start_round_from_source(self, source: WordSource, category: str = None) -> RoundState:
        """Load words from a WordSource, optionally limited to one category.

        WordSourceUnavailable from the source is not caught.
        """
        words = source.list_words()
        if category:
            words = [w for w in words if w.category == category]
        return self.start_round(words)

    def on_word_solved(self, combo_at_solve_time: int = None) -> ScoreDelta | None:
        """Score the current word as solved and move on.

        Returns None when there is no unresolved word to score.
        """
        if not self._can_resolve():
            return None
        state = self.state
        word = state.current_word
        self._resolve_current()

        combo = state.combo if combo_at_solve_time is None else combo_at_solve_time
        delta = calculate_xp(combo, self._challenge_hard_mode)
        state.score += delta.xp
        state.combo += 1
        state.max_combo = max(state.max_combo, state.combo)
        state.solved_count += 1
        logger.info(f"Solved '{word.target}': +{delta.xp} XP (x{combo}, +{delta.bonus_percent}%), "
                    f"score {state.score}")

        self._notify_sink('on_word_solved', word)
        self._emit('word.solved', word_id=word.id, target=word.target, xp=delta.xp,
                   combo=state.combo, score=state.score)
        self._advance_or_finish()
        return delta

    def on_word_failed(self) -> Outcome:
        """Stack the current word as failed, reset the combo and move on."""
        if not self._can_resolve():
            return Outcome.NO_OP
        state = self.state
        word = state.current_word
        self._resolve_current()

        state.stacked_failures.append(word)
        state.combo = 1
        state.failed_count += 1
        logger.info(f"Failed '{word.target}': {len(state.stacked_failures)}/{self.game_over_threshold} stacked")

        self._notify_sink('on_word_failed', word)
        self._emit('word.failed', word_id=word.id, target=word.target,
                   stacked=len(state.stacked_failures))

        if len(state.stacked_failures) >= self.game_over_threshold:
            self._finish(RoundStatus.GAME_OVER)
            return Outcome.TERMINAL_REACHED
        return self._advance_or_finish()

    def toggle_hard_mode(self) -> bool:
        """Flip hard mode. The word already falling keeps its mode."""
        self._hard_mode = not self._hard_mode
        if self.state:
            self.state.hard_mode = self._hard_mode
        logger.info(f"Hard mode {'on' if self._hard_mode else 'off'}")
        self._emit('mode.changed', hard_mode=self._hard_mode)
        return self._hard_mode

    def select_letter(self, pool_index: int) -> Outcome:
        if not self._has_live_challenge():
            return Outcome.NO_OP
        return self.challenge.select_letter(pool_index)

    def deselect_letter(self, slot_index: int) -> Outcome:
        if not self._has_live_challenge():
            return Outcome.NO_OP
        return self.challenge.deselect_letter(slot_index)

    def current_display_form(self) -> str:
        """What the falling word shows: the translation in hard mode, else the target."""
        word = self.current_word
        if word is None:
            return ''
        if self._challenge_hard_mode and word.display_form:
            return word.display_form
        return word.target

    def current_bonus_percent(self) -> int:
        combo = self.state.combo if self.state else 1
        return bonus_percent(combo, self._challenge_hard_mode)

    def stop(self) -> None:
        """Cancel every pending timer (fall ticks, resets, word advance)."""
        if self._advance_timer is not None:
            self._advance_timer.cancel()
            self._advance_timer = None
        if self.challenge is not None:
            self.challenge.stop()

    def _start_challenge(self) -> None:
        word = self.state.current_word
        self._challenge_hard_mode = self.state.hard_mode
        self._word_resolved = False
        self.challenge = WordChallenge.create(
            word.target,
            self.lane_height,
            self.settings.fall_duration_ms(len(word.target)),
            scheduler=self.scheduler,
            rng=self._rng,
            wrong_guess_reset_ms=self.settings.wrong_guess_reset_ms,
            on_terminal=self._on_challenge_terminal,
            on_wrong_guess=self._on_wrong_guess
        )
        self.challenge.start()
        logger.debug(f"Word {self.state.current_index + 1}/{len(self.state.word_queue)}: '{word.target}' "
                     f"lane {self.challenge.lane_height}, {self.challenge.fall_duration_ms}ms")
        self._emit('word.started', word_id=word.id, index=self.state.current_index,
                   display=self.current_display_form(), lane_height=self.challenge.lane_height)

    def _on_challenge_terminal(self, challenge: WordChallenge) -> None:
        if challenge is not self.challenge:
            return
        if challenge.status == ChallengeStatus.SOLVED:
            self.on_word_solved()
        elif challenge.status == ChallengeStatus.FAILED:
            self.on_word_failed()

    def _on_wrong_guess(self, challenge: WordChallenge, guess: str) -> None:
        if challenge is not self.challenge or not self.is_playing:
            return
        state = self.state
        word = state.current_word
        # The word keeps falling, but the chain is broken and its stars reset
        state.wrong_guesses += 1
        state.combo = 1
        logger.info(f"Wrong guess '{guess}' for '{word.target}', combo reset")
        self._notify_sink('on_word_failed', word)
        self._emit('word.wrong_guess', word_id=word.id, guess=guess, combo=state.combo)

    def _can_resolve(self) -> bool:
        return self.is_playing and not self._word_resolved and self.current_word is not None

    def _has_live_challenge(self) -> bool:
        return self.is_playing and not self._word_resolved and self.challenge is not None

    def _resolve_current(self) -> None:
        # Called directly (not from the challenge), the word may still be falling
        self._word_resolved = True
        if self.challenge is not None:
            self.challenge.stop()

    def _advance_or_finish(self) -> Outcome:
        if self.state.is_last_word:
            self._finish(RoundStatus.WON)
            return Outcome.TERMINAL_REACHED
        self._advance_timer = self.scheduler.call_later(self.settings.word_advance_delay_ms, self._advance)
        return Outcome.APPLIED

    def _advance(self) -> None:
        self._advance_timer = None
        if not self.is_playing:
            return
        self.state.current_index += 1
        self._start_challenge()

    def _finish(self, status: RoundStatus) -> None:
        state = self.state
        state.status = status
        self.stop()
        logger.info(f"Round over ({status.value}): score {state.score}, "
                    f"{state.solved_count} solved, {state.failed_count} failed")
        self._emit('round.won' if status == RoundStatus.WON else 'round.game_over', score=state.score)
        self._emit('round.over', status=status.value, score=state.score,
                   solved=state.solved_count, failed=state.failed_count, max_combo=state.max_combo)

    def _notify_sink(self, method: str, word: Word) -> None:
        try:
            getattr(self.progress_sink, method)(word.id)
        except Exception as e:
            logger.warning(f"Progress sink {method} failed for word {word.id}: {e}")

    def _emit(self, name: str, **data) -> None:
        event = GameEvent(name, data)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener failed on {name}")
