# This script runs the cinema booking terminal.
# The customer types short commands (help, book, list, basket, quit) to browse
# screenings and reserve seats; booked tickets are kept in a SQLite database.

import re
import sys

from loguru import logger

from cinema import TicketOffice, BookingError, PersistenceError
from cinema_logging import setup_logging
from cinema_settings import get_settings
from cinema_store import open_stores, seed_screens, InputRecorder
from cinema_view import TextView, split_tokens
from command_parser import Command, CommandWord, interpret, help_text

NUMBER = re.compile(r'\d+')


class CustomerBooking:
    """Runs one customer session: read a command, act on it, repeat until 'quit'."""

    def __init__(self, office, view, ticket_store, recorder=None, seat_prompt_limit=0):
        self.office = office
        self.view = view
        self.ticket_store = ticket_store
        self.recorder = recorder
        self.seat_prompt_limit = seat_prompt_limit

    def start(self):
        """Process commands until the customer quits."""
        self.view.show("Welcome to Glacier Cinema!")

        while True:
            line = self._read()
            # Closed input ends the session as if the customer had typed 'quit'
            command = Command(CommandWord.QUIT) if line is None else interpret(line)
            self.evaluate(command)
            if command.action is CommandWord.QUIT:
                break

        self.view.show_formatted("Thanks for visiting, and have a great time!")
        logger.info("Session ended")

    def evaluate(self, command):
        """Dispatch one command to the matching action."""
        handlers = {
            CommandWord.HELP: self.help,
            CommandWord.BOOK: self.book,
            CommandWord.LIST: lambda: self.list_movies(command),
            CommandWord.BASKET: self.show_basket,
            CommandWord.QUIT: lambda: None,
        }
        handlers.get(command.action, self.unknown)()

    def _read(self):
        """Read a line from the view, keeping a transcript when a recorder is attached."""
        line = self.view.read_line()
        if line is not None and self.recorder is not None:
            try:
                self.recorder.record(line)
            except PersistenceError as e:
                self.view.show_error(e.message)
        return line

    def help(self):
        self.view.show_formatted(
            "With our booking platform you can book tickets to movies.\n"
            "These are the available commands:\n" + help_text()
        )

    def book(self):
        """Ask for a movie, then a seat, and add the ticket to the basket."""
        self.view.show("Which movie would you like to book a ticket for?")
        title = self._read()
        if title is None:
            return

        try:
            screen = self.office.resolve_movie(title)
        except BookingError as e:
            self.view.show_error(e.message)
            return

        self.view.show("Current screening of the movie:\n" + screen.describe())
        self.view.show("Which seat would you like to book?")
        position = self._ask_seat_position()
        if position is None:
            self.view.show_error("No valid seat position was given, booking cancelled.")
            return
        column, row = position

        result = self.office.book_ticket(screen.movie_title, column, row)
        if not result.ok:
            self.view.show_error(result.error.message)
            return

        try:
            self.ticket_store.append(result.ticket)
        except PersistenceError:
            # The reservation only stands if the ticket was saved
            self.office.cancel(result.ticket)
            self.view.show_error("There was an error saving your ticket.")
            return

        message = "Ticket successfully added to basket."
        try:
            message += f"\nYou have {self.ticket_store.count()} tickets in your basket."
        except PersistenceError as e:
            # The ticket is stored, only the count is missing
            logger.warning("Basket count unavailable: {}", e)
        self.view.show_formatted(message)

    def _ask_seat_position(self):
        """Prompt until two whole numbers are typed. Returns (column, row), or None if input closes first."""
        attempts = 0
        while not self.seat_prompt_limit or attempts < self.seat_prompt_limit:
            attempts += 1
            self.view.show("Please provide the seat as '<column>, <row>'. Example: 3, 4")
            line = self._read()
            if line is None:
                return None
            tokens = split_tokens(line)
            if len(tokens) >= 2 and NUMBER.fullmatch(tokens[0]) and NUMBER.fullmatch(tokens[1]):
                return int(tokens[0]), int(tokens[1])
        return None

    def list_movies(self, command):
        """List every screening. 'list' takes no arguments."""
        if command.has_argument:
            self.view.show_formatted("Please do not enter any arguments after 'list'.")
            return
        details = self.office.list_all_movie_details()
        if not details:
            self.view.show_formatted("No movies currently showing.")
        else:
            self.view.show_formatted(details)

    def show_basket(self):
        """Show every ticket booked so far."""
        try:
            tickets = self.ticket_store.read_all()
        except PersistenceError:
            self.view.show_error("Error getting tickets from basket.")
            return
        if not tickets:
            self.view.show_formatted("No tickets in your basket.")
        else:
            self.view.show_formatted("".join(ticket.details() for ticket in tickets))

    def unknown(self):
        self.view.show_formatted("Sorry, we didn't understand what you meant.\nPlease enter 'help' for more advice.")


def populate_screens(office, screen_store, view):
    """Load every stored screen into the ticket office."""
    try:
        screens = screen_store.read_all()
    except PersistenceError as e:
        view.show_error(f"Error handling {screen_store.name}: {e.message}")
        return
    for screen in screens:
        try:
            office.add_screen(screen)
        except BookingError as e:
            view.show_error(e.message)
    logger.info("{} screens showing", len(office.screens()))


def prepare_basket(office, ticket_store, view, reset):
    """Empty the basket for a new session, or re-occupy the seats of tickets kept from earlier."""
    try:
        if reset:
            ticket_store.reset()
            return
        tickets = ticket_store.read_all()
    except PersistenceError as e:
        view.show_error("There was an error preparing your basket. " + e.message)
        return

    for ticket in tickets:
        result = office.book_ticket(ticket.movie_title, ticket.column, ticket.row)
        if not result.ok:
            logger.warning("Stored ticket could not be restored: {} ({})", ticket, result.error.code.value)


def main():
    """Set up storage and logging, then run the booking session."""
    settings = get_settings()
    setup_logging(settings)
    view = TextView()

    try:
        screen_store, ticket_store = open_stores(settings.database_url)
    except PersistenceError as e:
        view.show_error(e.message, title="Database")
        return 1

    # Fill the screen store from the seed file the first time round
    try:
        _, duplicates = seed_screens(screen_store, settings.seed_csv)
        for duplicate in duplicates:
            view.show_error(duplicate.message)
    except PersistenceError as e:
        view.show_error(e.message)

    office = TicketOffice()
    populate_screens(office, screen_store, view)
    prepare_basket(office, ticket_store, view, settings.reset_basket_on_start)

    session = CustomerBooking(
        office,
        view,
        ticket_store,
        recorder=InputRecorder(settings.input_log),
        seat_prompt_limit=settings.seat_prompt_limit,
    )
    session.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())  # Execute only if run as a script
