"""Console UI for the Seefunk trainer."""

import requests

from core.config import (
    ALL_CHAPTERS, DIRECTION_DE_EN, DIRECTION_EN_DE, DEFAULT_COMPLETION_TARGET,
    MSG_NO_ERRORS
)
from core.interfaces import AudioPlayer
from cli.api_client import SeefunkAPIClient


class ConsoleUI:
    """Console user interface for the Seefunk trainer."""

    def __init__(self, client: SeefunkAPIClient, player: AudioPlayer):
        self.client = client
        self.player = player
        self.drill_settings = {
            'chapter': ALL_CHAPTERS,
            'direction': DIRECTION_DE_EN,
            'shuffle': False,
            'review_first': False,
            'target': DEFAULT_COMPLETION_TARGET
        }

    def print_reference(self, text: dict, languages: tuple = ('en', 'de')):
        """Print the reference text."""
        print('-' * 40)
        for lang in languages:
            print(f'Referenz {lang.upper()}:')
            print(text[lang])
            print()
        print('-' * 40)

    def print_grade_result(self, result: dict):
        print('-' * 40)
        print(result['text'])
        print('-' * 40)

    def print_drill_status(self, status: dict):
        print(f"Fortschritt: {status['progress_display']} | Score: {status['score_display']}")
        if status['done_display']:
            print(status['done_display'])

    def print_errors(self, data: dict):
        """Print the mistake list."""
        if not data['errors']:
            print(f'Fehlerliste: {MSG_NO_ERRORS}')
            return
        print('\nFehlerliste (nur falsche):')
        for i, e in enumerate(data['errors'], 1):
            print(f"{i:>3}. DE: {e['de']}")
            print(f"     EN: {e['en']}")
            print(f"     Falsch: {e['wrong_count']}×")
        print()

    def choose_text(self) -> int | None:
        """Let the user pick a reference text. Returns its index or None."""
        texts = self.client.list_texts()
        if not texts:
            print('Keine Texte gefunden.')
            return None
        for t in texts:
            audio = ' [Audio]' if t['has_audio'] else ''
            print(f"  {t['index'] + 1:>3}. {t['title']}{audio}")
        while True:
            choice = input('Text Nr. (Enter = zurück) ==> ').strip()
            if not choice:
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(texts):
                return int(choice) - 1
            print('Ungültige Auswahl.')

    def play_audio(self, index: int, text: dict):
        if not text.get('audio'):
            print('Keine Audiodatei für diesen Text gefunden.')
            return
        path = self.client.download_audio(index)
        if not path:
            print('Keine Audiodatei für diesen Text gefunden.')
            return
        if not self.player.play(path):
            print("Audio konnte nicht gestartet werden. Bitte erneut 'play' eingeben.")

    def run_dictation(self):
        """Listen to a message and type it in German."""
        index = self.choose_text()
        if index is None:
            return
        text = self.client.get_text(index)
        print(f"\n=== Diktat: {text['title']} ===")
        print('Commands: "play", "stop", "ref" for the reference, "back" to return\n')

        try:
            while True:
                user_input = input('DE ==> ').strip()
                command = user_input.lower()
                if command == 'back':
                    return
                elif command == 'play':
                    self.play_audio(index, text)
                elif command == 'stop':
                    self.player.stop()
                elif command == 'ref':
                    self.print_reference(text)
                elif user_input:
                    result = self.client.grade(index, user_input, 'de')
                    self.print_grade_result(result)
        finally:
            self.player.stop()

    def run_translation(self):
        """Translate a German message into English."""
        index = self.choose_text()
        if index is None:
            return
        text = self.client.get_text(index)
        print(f"\n=== DE -> EN: {text['title']} ===")
        print(f"Deutsch:\n{text['de']}\n")
        print('Commands: "de" to show the German text again, "ref" for the English reference, "back" to return\n')

        while True:
            user_input = input('EN ==> ').strip()
            command = user_input.lower()
            if command == 'back':
                return
            elif command == 'de':
                print(f"Deutsch:\n{text['de']}\n")
            elif command == 'ref':
                self.print_reference(text, ('en',))
            elif user_input:
                result = self.client.grade(index, user_input, 'en')
                self.print_grade_result(result)

    def ask_drill_settings(self):
        """Ask for chapter, direction, shuffle, review-first and target."""
        chapters = self.client.get_chapters()
        for i, ch in enumerate(chapters, 1):
            print(f'  {i:>2}. {ch}')
        choice = input(f"Kapitel Nr. [{self.drill_settings['chapter']}] ==> ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(chapters):
            self.drill_settings['chapter'] = chapters[int(choice) - 1]

        choice = input(f"Richtung de2en/en2de [{self.drill_settings['direction']}] ==> ").strip().lower()
        if choice in (DIRECTION_DE_EN, DIRECTION_EN_DE):
            self.drill_settings['direction'] = choice

        for key, label in (('shuffle', 'Mischen'), ('review_first', 'Wiederholungen zuerst')):
            current = 'j' if self.drill_settings[key] else 'n'
            choice = input(f'{label} j/n [{current}] ==> ').strip().lower()
            if choice in ('j', 'y', 'n'):
                self.drill_settings[key] = choice != 'n'

        choice = input(f"Ziel (Zahl oder 'all') [{self.drill_settings['target']}] ==> ").strip().lower()
        if choice == 'all':
            self.drill_settings['target'] = 'all'
        elif choice.isdigit() and int(choice) > 0:
            self.drill_settings['target'] = int(choice)

    def show_card(self, data: dict) -> bool:
        """Print a card prompt. Returns False if there is nothing to answer."""
        if data['status']['deck_size'] == 0:
            print(data['prompt'])
            print(data['message'])
            return False
        if data['prompt'] is None:
            if data['message']:
                print(data['message'])
            return False
        print(f"\n>>> {data['prompt']}")
        return True

    def open_drill(self) -> bool:
        """Start a drill, or resume the running one if the settings are unchanged."""
        data = self.client.start_drill(self.drill_settings)
        if data['status']['state'] == 'answered':
            data = self.client.next_card()
        return self.show_card(data)

    def run_vocab(self):
        """Vocabulary drill with review of missed cards."""
        self.ask_drill_settings()
        print('\nCommands: "next" to skip ahead, "errors", "status", "settings", "back" to return')
        has_card = self.open_drill()

        while True:
            user_input = input('==> ').strip()
            command = user_input.lower()
            if command == 'back':
                return
            elif command == 'errors':
                self.print_errors(self.client.get_errors())
            elif command == 'status':
                self.print_drill_status(self.client.get_drill_status())
            elif command == 'settings':
                # Changed settings start over with a fresh session
                self.ask_drill_settings()
                has_card = self.open_drill()
            elif command == 'next' or (not user_input and not has_card):
                has_card = self.show_card(self.client.next_card())
            elif has_card:
                result = self.client.answer(user_input)
                if not result['accepted']:
                    print('Bitte zuerst "next" für die nächste Karte.')
                    continue
                print(result['message'])
                self.print_drill_status(result['status'])
                if result['status']['session_done']:
                    has_card = False
                else:
                    has_card = self.show_card(self.client.next_card())

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to Seefunk server ({health['service']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        modes = {
            '1': ('Diktat (DE)', self.run_dictation),
            '2': ('Übersetzung DE -> EN', self.run_translation),
            '3': ('Vokabeltraining', self.run_vocab),
        }

        try:
            while True:
                print('\n' + '=' * 40)
                for key, (label, _) in modes.items():
                    print(f'  {key}. {label}')
                print('  exit')
                print('=' * 40)
                choice = input('==> ').strip().lower()
                if choice == 'exit':
                    print('Auf Wiedersehen!')
                    return
                if choice not in modes:
                    continue
                try:
                    modes[choice][1]()
                except requests.RequestException as e:
                    print(f"Error talking to server: {e}")
        finally:
            self.player.stop()
            self.client.close()
