"""Console UI for wordfall."""

from wordfall.config import MAX_STARS
from wordfall.errors import EmptyWordList, WordSourceUnavailable
from wordfall.interfaces import WordSource
from wordfall.models import ChallengeStatus, GameEvent, Outcome
from wordfall.progress import MasteryTracker
from wordfall.round import RoundController
from wordfall.scheduler import ClockDriver
from wordfall.vocabulary import get_package_name


class ConsoleUI:
    """Text front end. Real time is synced into the game before every render
    and again when input arrives, so the word keeps falling while the player
    types."""

    def __init__(self, controller: RoundController, source: WordSource,
                 tracker: MasteryTracker = None, package: str = None):
        self.controller = controller
        self.source = source
        self.tracker = tracker
        self.package = package
        self.driver = ClockDriver(controller.scheduler)
        self.shown_challenge = None
        self.messages = []
        controller.subscribe(self.on_event)

    def on_event(self, event: GameEvent):
        """Queue feedback lines for the next render."""
        data = event.data
        if event.name == 'word.solved':
            self.messages.append(f"Correct! +{data['xp']} XP (x{data['combo'] - 1})")
        elif event.name == 'word.failed':
            self.messages.append(f"Too slow: '{data['target']}' stacked ({data['stacked']})")
        elif event.name == 'word.wrong_guess':
            self.messages.append(f"'{data['guess']}' is not it. Try again!")
        elif event.name == 'round.over':
            self.messages.append(f"Round over ({data['status']}): {data['score']} XP, "
                                 f"{data['solved']} solved, {data['failed']} failed, best combo x{data['max_combo']}")

    def flush_messages(self):
        for message in self.messages:
            print(f'  * {message}')
        self.messages = []

    def print_lane(self):
        """Print the falling word's position above the stacked failures."""
        controller = self.controller
        challenge = controller.challenge
        state = controller.state
        if challenge is None or state is None:
            return
        print('+' + '-' * 30 + '+')
        for row in range(challenge.lane_height):
            if row == challenge.fall_progress and challenge.status == ChallengeStatus.ACTIVE:
                print(f'|{controller.current_display_form().upper():^30}|')
            else:
                print('|' + ' ' * 30 + '|')
        for word in reversed(state.stacked_failures):
            print(f'|{word.target:^30}|')
        print('+' + '-' * 30 + '+')

    def print_board(self):
        controller = self.controller
        challenge = controller.challenge
        self.shown_challenge = challenge
        state = controller.state
        mode = 'HARD' if controller.hard_mode else 'normal'
        print(f"\nXP {state.score} | x{state.combo} (+{controller.current_bonus_percent()}%) | "
              f"word {state.current_index + 1}/{len(state.word_queue)} | mode {mode}")
        self.print_lane()
        if challenge is None:
            return
        answer = ' '.join(f'{i}:{c or "_"}' for i, c in enumerate(challenge.answer_slots))
        pool = ' '.join(f'{i}:{c}' for i, c in enumerate(challenge.scrambled_pool) if c)
        print(f'Answer  {answer}')
        print(f'Letters {pool}')

    def print_words_by_stars(self, words: list):
        """Print the word list grouped by star rating."""
        if not self.tracker:
            return
        print('\n' + '=' * 40)
        print('WORDS BY STARS')
        print('=' * 40)
        for stars, group in self.tracker.words_by_stars(words).items():
            print(f"{'*' * stars}{'.' * (MAX_STARS - stars)} ({len(group)})")
            for word in group:
                print(f'  {word.target} - {word.display_form}')
        print('=' * 40)

    def print_status(self):
        state = self.controller.state
        print('\n' + '=' * 40)
        print('STATUS')
        print('=' * 40)
        print(f'Score: {state.score} XP')
        print(f'Solved: {state.solved_count} | Failed: {state.failed_count} | Wrong guesses: {state.wrong_guesses}')
        print(f'Best combo: x{state.max_combo}')
        print(f'Stacked: {len(state.stacked_failures)}/{self.controller.game_over_threshold}')
        print('=' * 40)

    def choose_package(self) -> str | None:
        try:
            packages = self.source.list_categories()
        except WordSourceUnavailable as e:
            print(f'Error: {e}')
            return None
        if not packages:
            return None
        print('\nPackages:')
        print('  0: all words')
        for i, package in enumerate(packages, start=1):
            print(f'  {i}: {get_package_name(package)}')
        choice = input('Package ==> ').strip()
        if choice.isdigit() and 1 <= int(choice) <= len(packages):
            return packages[int(choice) - 1]
        return None

    def handle_command(self, user_input: str) -> bool:
        """Apply one command. Returns False when the player quits."""
        command = user_input.strip().lower()
        if command == 'exit':
            return False
        if command == 'hard':
            on = self.controller.toggle_hard_mode()
            print(f"Hard mode {'on' if on else 'off'} (from the next word)")
        elif command == 'status':
            self.print_status()
        elif command.startswith('-') and command[1:].isdigit():
            if self.controller.deselect_letter(int(command[1:])) == Outcome.NO_OP:
                print('Nothing to remove there.')
        elif command.isdigit():
            if self.controller.select_letter(int(command)) == Outcome.NO_OP:
                print('Cannot pick that letter.')
        elif command:
            # Type a whole run of pool indices at once, e.g. "2 0 1"
            for part in command.split():
                if part.isdigit():
                    self.controller.select_letter(int(part))
        return True

    def word_on_screen(self) -> bool:
        """True while the word last rendered is still falling."""
        challenge = self.controller.challenge
        return (challenge is not None and challenge is self.shown_challenge
                and challenge.status == ChallengeStatus.ACTIVE)

    def apply_input(self, user_input: str) -> bool:
        """Catch the game up to the moment the input arrived, then apply it.

        Letter commands are dropped when the word they were typed for has
        already landed or been replaced while the player was typing.
        """
        self.driver.sync()
        command = user_input.strip().lower()
        if not command or command in ('exit', 'hard', 'status'):
            return self.handle_command(command)
        if not self.controller.is_playing or not self.word_on_screen():
            print('Too late, that word already landed.')
            return True
        return self.handle_command(command)

    def play_round(self) -> bool:
        """Play until the round ends. Returns False if the player quit."""
        while True:
            self.driver.sync()
            self.flush_messages()
            if self.controller.state.status.is_terminal:
                return True
            self.print_board()
            if not self.apply_input(input('==> ')):
                return False

    def run(self):
        """Run the main application loop."""
        try:
            words = self.source.list_words()
        except WordSourceUnavailable as e:
            print(f'Error: {e}')
            return

        print('\nWORDFALL')
        print('Build each falling word before it hits the bottom!')
        print(f'{len(words)} words loaded')
        print('Commands: <n> pick letter n, -<n> remove answer letter n, '
              '"hard" toggle hard mode, "status", "exit" to quit\n')

        package = self.package or self.choose_package()
        while True:
            try:
                self.controller.start_round_from_source(self.source, package)
            except EmptyWordList:
                print('No words in that package.')
                return
            except WordSourceUnavailable as e:
                print(f'Error: {e}')
                return
            self.driver = ClockDriver(self.controller.scheduler)

            if not self.play_round():
                print('Goodbye!')
                self.controller.stop()
                return

            self.print_words_by_stars(self.controller.state.word_queue)
            if input('Play again? [y/N] ').strip().lower() != 'y':
                print('Goodbye!')
                return
