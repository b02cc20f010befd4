from .models import Word, RoundState, ScoreDelta, GameEvent, ChallengeStatus, RoundStatus, Outcome
from .interfaces import WordSource, ProgressSink, Scheduler, TimerHandle
from .errors import WordfallError, EmptyWordList, WordSourceUnavailable
from .scheduler import ManualScheduler, ClockDriver
from .challenge import WordChallenge
from .round import RoundController, calculate_xp, bonus_percent
from .progress import NullProgressSink, MasteryTracker
from .word_sources import StaticWordSource, JsonWordSource
from .utils import fisher_yates_shuffle
from .config import (
    GameSettings,
    GRID_HEIGHT, BASE_FALL_DURATION_MS, PER_LETTER_DURATION_MS,
    WORD_ADVANCE_DELAY_MS, WRONG_GUESS_RESET_MS
)

__all__ = [
    'Word', 'RoundState', 'ScoreDelta', 'GameEvent', 'ChallengeStatus', 'RoundStatus', 'Outcome',
    'WordSource', 'ProgressSink', 'Scheduler', 'TimerHandle',
    'WordfallError', 'EmptyWordList', 'WordSourceUnavailable',
    'ManualScheduler', 'ClockDriver',
    'WordChallenge',
    'RoundController', 'calculate_xp', 'bonus_percent',
    'NullProgressSink', 'MasteryTracker',
    'StaticWordSource', 'JsonWordSource',
    'fisher_yates_shuffle',
    'GameSettings',
    'GRID_HEIGHT', 'BASE_FALL_DURATION_MS', 'PER_LETTER_DURATION_MS',
    'WORD_ADVANCE_DELAY_MS', 'WRONG_GUESS_RESET_MS'
]
