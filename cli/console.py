"""Console UI for the word game."""

import random

import requests

from core.config import LANGUAGE, LEVELS
from cli.api_client import WordGameAPIClient

BANNER_MESSAGES = {
    'levelAdvanced': [
        "🎉 Fantastic work! You've reached level {X}!",
        "🏅 Congratulations! Level {X} achieved!",
        "🚀 Level up! Welcome to level {X}!",
        "👏 Great job! You've advanced to level {X}!",
        "🏆 Victory! Level {X} reached!",
    ],
    'levelRegressed': [
        "🔄 Don't worry! You're back at level {X}. Keep going!",
        "💪 Stay strong! Level {X} is a chance to improve.",
        "🌱 Growth time! Revisit level {X} and conquer it.",
        "🧠 Sharpen your skills at level {X}.",
        "💡 Reflect and rise! Level {X} is your step forward.",
    ],
    'locked': ["🔒 Level lock enabled. You won't advance or fall back."],
    'unlocked': ["🚀 Level lock disabled. Progression is active."],
}


class ConsoleUI:
    """Console user interface for the word game."""

    def __init__(self, client: WordGameAPIClient):
        self.client = client
        # Set when a command started the session over
        self.session_changed = False

    def banner(self, key: str, level: str = None) -> str:
        message = random.choice(BANNER_MESSAGES[key])
        return message.replace('{X}', level or '')

    def print_events(self, events: list[dict], locked: bool = None):
        """Print banners for level and lock events."""
        for event in events:
            name = event['event']
            if name in ('levelAdvanced', 'levelRegressed'):
                print(f"\n*** {self.banner(name, event.get('level'))} ***\n")
            elif name == 'levelLockToggled':
                print(f"\n{self.banner('locked' if locked else 'unlocked')}\n")
            elif name == 'reviewReintroduced':
                print('(review)')

    def print_stats(self, stats: dict):
        accuracy = stats['accuracy_percent']
        accuracy_display = f'{accuracy}%' if accuracy is not None else '-'
        lock = ' [locked]' if stats['locked'] else ''
        print('=' * 40)
        print(f"Level {stats['level']}{lock} | Accuracy: {accuracy_display} | "
              f"Streak: {stats['streak']} | Reviews due: {stats['review_count']}")
        print('=' * 40)

    def print_status(self, status: dict):
        """Print detailed status."""
        stats = status['stats']
        thresholds = stats['thresholds']
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        print(f'\nLanguage: {status["language"]}')
        print(f'Current level: {stats["level"]} ({", ".join(status["levels"])})')
        print(f'Level lock: {"on" if stats["locked"] else "off"}')
        if thresholds.get('up') is not None:
            print(f'  Advance at: {thresholds["up"]:.0%} accuracy')
        if thresholds.get('down') is not None:
            print(f'  Fall back below: {thresholds["down"]:.0%} accuracy')
        accuracy = stats['accuracy_percent']
        print(f'\nAccuracy: {f"{accuracy}%" if accuracy is not None else "-"}')
        print(f'Correct streak: {stats["streak"]}')
        print(f'Reviews due: {stats["review_count"]}')
        print('\n' + '=' * 50 + '\n')

    def print_question(self, question: dict):
        labels = [label for label in (question.get('category_label'), question.get('level_tier')) if label]
        if labels:
            print(f"[{' | '.join(labels)}]")
        print(f"\n>>> {question['prompt']}")
        if question.get('pronunciation'):
            print(f"    /{question['pronunciation']}/")
        if question.get('hint'):
            print(f"    ({question['hint']})")
        for i, option in enumerate(question['options'], 1):
            print(f'  {i}. {option}')

    def handle_command(self, command: str) -> bool:
        """Run a non-answer command. Returns False if the input wasn't one."""
        self.session_changed = False
        if command == 'status':
            self.print_status(self.client.get_status())
        elif command == 'lock':
            status = self.client.toggle_lock()
            self.print_events(status['events'], status['stats']['locked'])
        elif command.startswith('level '):
            level = command.split(None, 1)[1].upper()
            try:
                status = self.client.set_level(level)
                print(f"Level set to {status['stats']['level']}. Session reset.")
                self.session_changed = True
            except requests.HTTPError:
                print(f'Unknown level {level}. Choose one of: {", ".join(LEVELS)}')
        elif command == 'reset':
            status = self.client.reset()
            print(f"Session reset. Back to level {status['stats']['level']}.")
            self.session_changed = True
        else:
            return False
        return True

    def ask(self, question: dict) -> str | None:
        """Prompt until an option is chosen.

        Returns None on exit and an empty string when a level change or
        reset discarded the question.
        """
        options = question['options']
        while True:
            user_input = input('==> ').strip()
            lowered = user_input.lower()

            if lowered == 'exit':
                return None
            if user_input.isdigit() and 1 <= int(user_input) <= len(options):
                return options[int(user_input) - 1]
            if self.handle_command(lowered):
                if self.session_changed:
                    return ''
                self.print_question(question)
                continue
            print(f'Enter a number from 1 to {len(options)}')

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to word game server ({health['entries']} entries)")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        print(f'\nStarting {LANGUAGE} vocabulary practice!')
        print('Commands: "status" for progress, "lock" to toggle the level lock, '
              '"level <L>" to change level, "reset" to start over, "exit" to quit\n')

        while True:
            try:
                data = self.client.get_next_question()
            except requests.RequestException as e:
                print(f"Error getting next question: {e}")
                return

            if data['exhausted']:
                print(f"No words left at level {data['stats']['level']}. "
                      'Use "level <L>" to pick another level.')
                command = input('==> ').strip().lower()
                if command == 'exit' or not self.handle_command(command):
                    print('Goodbye!')
                    return
                continue

            question = data['question']
            self.print_events(data['events'])
            self.print_question(question)

            selected = self.ask(question)
            if selected is None:
                print('Goodbye!')
                return
            if not selected:
                continue

            try:
                result = self.client.submit_answer(question['card_id'], selected)
            except requests.RequestException as e:
                print(f"Error submitting answer: {e}")
                continue

            if result['correct']:
                print('Correct!')
            else:
                print(f"Wrong. Correct answer: {result['correct_answer']}")
            self.print_events(result['events'])
            self.print_stats(result['stats'])
