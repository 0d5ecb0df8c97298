"""Unit tests for the console client."""

import io
import unittest
from unittest.mock import MagicMock, patch

import requests

from cli.api_client import WordGameAPIClient
from cli.console import ConsoleUI


QUESTION = {
    'card_id': 'card-1',
    'prompt': 'kuća',
    'options': ['house', 'book', 'water'],
    'mode': 'flashcard',
    'is_review': False
}


class TestConsoleCommands(unittest.TestCase):
    """Tests for commands typed while a question is open."""

    def setUp(self):
        self.client = MagicMock()
        self.ui = ConsoleUI(self.client)
        stdout = patch('sys.stdout', new_callable=io.StringIO)
        stdout.start()
        self.addCleanup(stdout.stop)

    def ask(self, *inputs):
        with patch('builtins.input', side_effect=list(inputs)):
            return self.ui.ask(QUESTION)

    def test_option_number_selects_answer(self):
        self.assertEqual(self.ask('2'), 'book')

    def test_exit(self):
        self.assertIsNone(self.ask('exit'))

    def test_unknown_level_keeps_question(self):
        self.client.set_level.side_effect = requests.HTTPError('400 Client Error')
        self.assertEqual(self.ask('level z9', '1'), 'house')
        self.client.set_level.assert_called_once_with('Z9')

    def test_level_change_discards_question(self):
        self.client.set_level.return_value = {'stats': {'level': 'B1'}}
        self.assertEqual(self.ask('level b1'), '')

    def test_reset_discards_question(self):
        self.client.reset.return_value = {'stats': {'level': 'A1'}}
        self.assertEqual(self.ask('reset'), '')
        self.client.reset.assert_called_once_with()

    def test_lock_keeps_question(self):
        self.client.toggle_lock.return_value = {'events': [], 'stats': {'locked': True}}
        self.assertEqual(self.ask('lock', '3'), 'water')


class TestAPIClient(unittest.TestCase):
    """Tests for request construction in the API client."""

    def test_reset_posts_user_id(self):
        client = WordGameAPIClient(base_url='http://example.test/', user_id='alice')
        client.session = MagicMock()
        client.session.post.return_value.json.return_value = {'state': 'idle'}

        self.assertEqual(client.reset(), {'state': 'idle'})
        client.session.post.assert_called_once_with(
            'http://example.test/api/reset', json={'user_id': 'alice'})


if __name__ == '__main__':
    unittest.main()
