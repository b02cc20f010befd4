"""Unit tests for the console driver's real-time handling."""

import contextlib
import io
import random
import unittest
from unittest import mock

from cli.__main__ import main
from cli.console import ConsoleUI
from wordfall.config import GameSettings
from wordfall.models import ChallengeStatus, RoundStatus, Word
from wordfall.round import RoundController
from wordfall.scheduler import ClockDriver, ManualScheduler
from wordfall.word_sources import StaticWordSource


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestConsoleTiming(unittest.TestCase):
    """Input is applied against the clock at the moment it arrives."""

    def setUp(self):
        self.scheduler = ManualScheduler()
        settings = GameSettings(base_fall_duration_ms=1000, per_letter_duration_ms=0)
        self.controller = RoundController(settings=settings, scheduler=self.scheduler,
                                          rng=random.Random(3))
        self.state = self.controller.start_round([Word(id='1', target='cat'), Word(id='2', target='dog')])
        self.ui = ConsoleUI(self.controller, StaticWordSource())
        self.clock = FakeClock()
        self.ui.driver = ClockDriver(self.scheduler, clock=self.clock)

    def answer_at(self, seconds: float):
        """An input() stand-in: types the shown word's answer, arriving at the given time."""
        replies = []

        def fake_input(prompt):
            if replies:
                return 'exit'
            challenge = self.controller.challenge
            indices = [str(challenge.scrambled_pool.index(letter)) for letter in challenge.target]
            self.clock.now = seconds
            replies.append(indices)
            return ' '.join(indices)
        return fake_input

    def play(self, fake_input) -> bool:
        with mock.patch('builtins.input', side_effect=fake_input):
            with contextlib.redirect_stdout(io.StringIO()):
                return self.ui.play_round()

    def test_answer_in_time_is_scored(self):
        self.assertFalse(self.play(self.answer_at(0.5)))
        self.assertEqual(self.state.solved_count, 1)
        self.assertEqual(self.state.score, 100)
        self.assertEqual(self.state.stacked_failures, [])

    def test_answer_after_landing_is_dropped(self):
        first_word = self.controller.current_word
        self.assertFalse(self.play(self.answer_at(1.2)))
        self.assertEqual(self.state.solved_count, 0)
        self.assertEqual(self.state.score, 0)
        self.assertEqual(self.state.stacked_failures, [first_word])
        self.assertEqual(self.controller.challenge.status, ChallengeStatus.FAILED)

    def test_answer_is_not_applied_to_unseen_word(self):
        self.assertFalse(self.play(self.answer_at(2.0)))
        # The second word started at 1.3 s but was never rendered
        self.assertEqual(self.state.current_index, 1)
        self.assertEqual(self.state.solved_count, 0)
        self.assertEqual(self.controller.challenge.status, ChallengeStatus.ACTIVE)
        self.assertEqual(self.controller.challenge.assembled, '')

    def test_control_commands_still_work_after_landing(self):
        self.clock.now = 1.2
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertTrue(self.ui.apply_input('hard'))
            self.assertFalse(self.ui.apply_input('exit'))
        self.assertTrue(self.controller.hard_mode)
        self.assertEqual(self.state.status, RoundStatus.PLAYING)


class TestCommandLine(unittest.TestCase):
    """Tests for the argument parser."""

    def test_unknown_log_level_is_rejected(self):
        with mock.patch('sys.argv', ['wordfall', '--log-level', 'verbose']):
            with contextlib.redirect_stderr(io.StringIO()) as err:
                with self.assertRaises(SystemExit) as ctx:
                    main()
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn('invalid choice', err.getvalue())


if __name__ == '__main__':
    unittest.main()
