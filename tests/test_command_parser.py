"""Unit tests for the command interpreter and the action catalog.

Run with: pytest tests/test_command_parser.py -v
"""

import pytest

from command_parser import Command, CommandWord, interpret, help_text


class TestCommandWord:
    """Tests for the CommandWord catalog."""

    def test_list_all_in_catalog_order(self):
        assert CommandWord.list_all() == ['help', 'book', 'list', 'basket', 'quit']

    def test_list_all_hides_unknown(self):
        assert '?' not in CommandWord.list_all()

    @pytest.mark.parametrize('token', ['BOOK', 'Book', 'book', 'bOoK'])
    def test_from_token_ignores_case(self, token):
        assert CommandWord.from_token(token) is CommandWord.BOOK

    @pytest.mark.parametrize('token', [None, '', '?', 'books', 'unknown'])
    def test_from_token_unrecognised(self, token):
        assert CommandWord.from_token(token) is CommandWord.UNKNOWN

    def test_help_text_mentions_every_action(self):
        text = help_text()
        for name in CommandWord.list_all():
            assert name in text


class TestInterpret:
    """Tests for interpret()."""

    @pytest.mark.parametrize('raw', [None, '', '   ', '\t\n'])
    def test_empty_input_is_unknown(self, raw):
        assert interpret(raw) == Command(CommandWord.UNKNOWN, None)

    @pytest.mark.parametrize('raw, action', [
        ('help', CommandWord.HELP),
        ('  book  ', CommandWord.BOOK),
        ('LIST', CommandWord.LIST),
        ('Basket', CommandWord.BASKET),
        ('quit', CommandWord.QUIT),
    ])
    def test_recognised_action_without_argument(self, raw, action):
        command = interpret(raw)
        assert command.action is action
        assert command.argument is None
        assert not command.has_argument

    def test_argument_keeps_case_and_is_trimmed(self):
        command = interpret("LIST   Star Wars  ")
        assert command.action is CommandWord.LIST
        assert command.argument == "Star Wars"
        assert command.has_argument

    def test_argument_split_on_first_whitespace_run(self):
        command = interpret("book\t  The Grand  Budapest Hotel")
        assert command.argument == "The Grand  Budapest Hotel"

    def test_unrecognised_action_keeps_argument(self):
        command = interpret("dance all night")
        assert command.action is CommandWord.UNKNOWN
        assert command.argument == "all night"

    def test_command_is_immutable(self):
        command = interpret("help")
        with pytest.raises(AttributeError):
            command.argument = "x"
