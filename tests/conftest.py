"""Pytest configuration and shared fixtures."""

import pytest

from cinema import Screen, TicketOffice, PersistenceError
from cinema_store import open_stores
from cinema_view import View


class RecordingView(View):
    """View fed from a script of input lines; everything shown is kept for inspection."""

    MAX_READS = 1000

    def __init__(self, inputs=(), closed=False):
        self.inputs = list(inputs)
        self.closed = closed
        self.reads = 0
        self.shown = []
        self.errors = []

    def show(self, text):
        self.shown.append(text)

    def show_formatted(self, text):
        self.shown.append(text)

    def show_error(self, message, title=None):
        self.errors.append(message)

    def read_line(self):
        self.reads += 1
        if self.reads > self.MAX_READS:
            raise AssertionError(f"still reading input after {self.MAX_READS} lines")
        if self.inputs:
            return self.inputs.pop(0)
        # Running out of script ends the session, by typing 'quit' or by closing input
        return None if self.closed else 'quit'

    def output(self):
        return "\n".join(self.shown)


class BrokenStore:
    """Ticket store whose every operation fails."""

    name = 'Tickets'

    def reset(self):
        raise PersistenceError("Could not reset Tickets.")

    def append(self, record):
        raise PersistenceError("Could not write to Tickets.")

    def read_all(self):
        raise PersistenceError("Could not read Tickets.")

    def count(self):
        raise PersistenceError("Could not count Tickets.")


@pytest.fixture
def make_view():
    return RecordingView


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def stores():
    """Fresh in-memory database: (screen_store, ticket_store)."""
    return open_stores('sqlite://')


@pytest.fixture
def screen_store(stores):
    return stores[0]


@pytest.fixture
def ticket_store(stores):
    return stores[1]


@pytest.fixture
def dune():
    return Screen(1, "Dune", 5, 5)


@pytest.fixture
def office(dune):
    office = TicketOffice()
    office.add_screen(dune)
    return office
