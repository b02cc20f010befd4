"""Domain models for wordfall."""

from dataclasses import dataclass, field
from enum import Enum

from .utils import normalize_target


class ChallengeStatus(Enum):
    ACTIVE = 'active'
    SOLVED = 'solved'
    FAILED = 'failed'


class RoundStatus(Enum):
    NOT_STARTED = 'not_started'
    PLAYING = 'playing'
    WON = 'won'
    GAME_OVER = 'game_over'

    @property
    def is_terminal(self) -> bool:
        return self in (RoundStatus.WON, RoundStatus.GAME_OVER)


class Outcome(Enum):
    """Result tag for engine operations.

    NO_OP: nothing changed (stale input, bad index, terminal state).
    APPLIED: state changed and play continues.
    TERMINAL_REACHED: the operation ended the challenge or the round.
    """
    NO_OP = 'no_op'
    APPLIED = 'applied'
    TERMINAL_REACHED = 'terminal_reached'


@dataclass(frozen=True)
class Word:
    """A word to assemble. target is the canonical answer."""
    id: str
    target: str
    display_form: str = ''
    category: str | None = None
    star_rating: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'target', normalize_target(self.target))

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'target': self.target,
            'display_form': self.display_form,
            'category': self.category,
            'star_rating': self.star_rating
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Word':
        return cls(
            id=str(data['id']),
            target=data['target'],
            display_form=data.get('display_form') or '',
            category=data.get('category'),
            star_rating=int(data.get('star_rating') or 0)
        )


@dataclass(frozen=True)
class ScoreDelta:
    """XP awarded for one solved word."""
    xp: int
    base_xp: int
    bonus_percent: int
    combo: int
    hard_mode: bool


@dataclass(frozen=True)
class GameEvent:
    """Notification emitted by the round controller, e.g. 'word.solved'."""
    name: str
    data: dict = field(default_factory=dict)


class RoundState:
    """Session-level progress for one round."""

    def __init__(self, word_queue: list[Word], hard_mode: bool = False):
        self.word_queue = list(word_queue)
        self.current_index = 0
        self.score = 0
        self.combo = 1
        self.max_combo = 1
        self.stacked_failures = []
        self.hard_mode = hard_mode
        self.status = RoundStatus.NOT_STARTED
        self.solved_count = 0
        self.failed_count = 0
        self.wrong_guesses = 0

    @property
    def current_word(self) -> Word | None:
        if 0 <= self.current_index < len(self.word_queue):
            return self.word_queue[self.current_index]
        return None

    @property
    def is_last_word(self) -> bool:
        return self.current_index >= len(self.word_queue) - 1

    @property
    def words_remaining(self) -> int:
        """Words not yet resolved, including the current one while playing."""
        if self.status.is_terminal:
            return max(0, len(self.word_queue) - self.solved_count - self.failed_count)
        return max(0, len(self.word_queue) - self.current_index)

    def to_dict(self) -> dict:
        return {
            'word_queue': [w.to_dict() for w in self.word_queue],
            'current_index': self.current_index,
            'score': self.score,
            'combo': self.combo,
            'max_combo': self.max_combo,
            'stacked_failures': [w.to_dict() for w in self.stacked_failures],
            'hard_mode': self.hard_mode,
            'status': self.status.value,
            'solved_count': self.solved_count,
            'failed_count': self.failed_count,
            'wrong_guesses': self.wrong_guesses
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RoundState':
        state = cls([Word.from_dict(w) for w in data.get('word_queue', [])],
                    hard_mode=data.get('hard_mode', False))
        state.current_index = data.get('current_index', 0)
        state.score = data.get('score', 0)
        state.combo = data.get('combo', 1)
        state.max_combo = data.get('max_combo', state.combo)
        state.stacked_failures = [Word.from_dict(w) for w in data.get('stacked_failures', [])]
        state.status = RoundStatus(data.get('status', RoundStatus.NOT_STARTED.value))
        state.solved_count = data.get('solved_count', 0)
        state.failed_count = data.get('failed_count', 0)
        state.wrong_guesses = data.get('wrong_guesses', 0)
        return state
