"""Configuration constants and settings for wordfall."""

import os

from pydantic import BaseModel, Field

# Lane
GRID_HEIGHT = 10              # Rows before a falling word fails

# Fall timing
BASE_FALL_DURATION_MS = 8000  # Time for a word to cross the full lane
PER_LETTER_DURATION_MS = 800  # Extra time per letter, longer words fall slower

# Scheduled delays
WORD_ADVANCE_DELAY_MS = 300   # Feedback pause after a solve/fail before the next word
WRONG_GUESS_RESET_MS = 500    # Wrong answer stays visible this long before the reset

# Scoring
NORMAL_BASE_XP = 100
HARD_BASE_XP = 200
NORMAL_COMBO_STEP_PERCENT = 5
NORMAL_COMBO_CAP_PERCENT = 50
HARD_COMBO_STEP_PERCENT = 10
HARD_COMBO_CAP_PERCENT = 100

# Mastery stars
MAX_STARS = 5
BASELINE_STARS = 1            # Stars a word drops back to after a failure

ENV_PREFIX = 'WORDFALL_'


class GameSettings(BaseModel):
    """Tunable parameters consumed by the round controller."""

    grid_height: int = Field(default=GRID_HEIGHT, ge=2)
    base_fall_duration_ms: int = Field(default=BASE_FALL_DURATION_MS, gt=0)
    per_letter_duration_ms: int = Field(default=PER_LETTER_DURATION_MS, ge=0)
    hard_mode: bool = False
    word_advance_delay_ms: int = Field(default=WORD_ADVANCE_DELAY_MS, ge=0)
    wrong_guess_reset_ms: int = Field(default=WRONG_GUESS_RESET_MS, ge=0)

    @classmethod
    def from_env(cls, environ: dict = None, **overrides) -> 'GameSettings':
        """Build settings from WORDFALL_* environment variables.

        Unset variables keep their defaults; explicit overrides win over the
        environment. Invalid values raise pydantic.ValidationError.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != '':
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def fall_duration_ms(self, word_length: int) -> int:
        """Total time for a word of the given length to reach the bottom."""
        return self.base_fall_duration_ms + self.per_letter_duration_ms * word_length
