"""Exceptions raised by wordfall.

Only setup problems are raised. Stale or invalid player input is absorbed by
the engine and reported as Outcome.NO_OP instead.
"""


class WordfallError(Exception):
    """Base class for wordfall errors."""


class EmptyWordList(WordfallError, ValueError):
    """A round was started without any words."""

    def __init__(self, message: str = "Cannot start a round with an empty word list"):
        super().__init__(message)


class WordSourceUnavailable(WordfallError):
    """The backing word list could not be read."""
