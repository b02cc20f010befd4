"""Entry point for the wordfall console game."""

import argparse
import logging
import random
import sys

from pydantic import ValidationError

from cli.console import ConsoleUI
from wordfall.config import GameSettings
from wordfall.errors import WordSourceUnavailable
from wordfall.progress import MasteryTracker
from wordfall.round import RoundController
from wordfall.scheduler import ManualScheduler
from wordfall.word_sources import JsonWordSource, StaticWordSource


def main():
    parser = argparse.ArgumentParser(description='Wordfall - build falling words before they land')
    parser.add_argument(
        '--words',
        default=None,
        help='JSON word list (default: built-in packages)'
    )
    parser.add_argument(
        '--package',
        default=None,
        help='Only play words from this package'
    )
    parser.add_argument(
        '--grid-height',
        type=int,
        default=None,
        help='Rows before a word fails (default: WORDFALL_GRID_HEIGHT or 10)'
    )
    parser.add_argument(
        '--hard',
        action='store_true',
        help='Start in hard mode'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible shuffles'
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (default: WARNING)'
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level)

    try:
        settings = GameSettings.from_env(grid_height=args.grid_height, hard_mode=args.hard or None)
    except ValidationError as e:
        print(f'Invalid settings: {e}')
        sys.exit(2)

    source = JsonWordSource(args.words) if args.words else StaticWordSource()
    try:
        tracker = MasteryTracker.from_words(source.list_words())
    except WordSourceUnavailable as e:
        print(f'Error: {e}')
        sys.exit(1)

    controller = RoundController(
        settings=settings,
        scheduler=ManualScheduler(),
        progress_sink=tracker,
        rng=random.Random(args.seed)
    )
    ui = ConsoleUI(controller, source, tracker=tracker, package=args.package)

    try:
        ui.run()
    except KeyboardInterrupt:
        controller.stop()
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
