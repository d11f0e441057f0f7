# Booking engine: screens, seats and tickets.
# The TicketOffice owns every Screen added to it and is the only thing that
# changes seat occupancy. Seats are 1-indexed (row, column) pairs, matching
# the numbering the customer types in.

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger


class ErrorCode(Enum):
    """Booking error codes."""

    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    INVALID_SEAT = "INVALID_SEAT"
    SEAT_UNAVAILABLE = "SEAT_UNAVAILABLE"
    DUPLICATE_SCREEN_ID = "DUPLICATE_SCREEN_ID"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class BookingError(Exception):
    """Base booking error with a code and a message safe to show the customer."""

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self):
        return self.message


class MovieNotFoundError(BookingError):
    def __init__(self, title):
        super().__init__(ErrorCode.MOVIE_NOT_FOUND, f"Sorry, '{title}' is not showing at this cinema.")
        self.title = title


class InvalidSeatError(BookingError):
    def __init__(self, row, column, rows, columns):
        super().__init__(
            ErrorCode.INVALID_SEAT,
            f"Seat (column {column}, row {row}) does not exist. "
            f"This screen has columns 1-{columns} and rows 1-{rows}.",
        )
        self.row = row
        self.column = column


class SeatUnavailableError(BookingError):
    def __init__(self, row, column):
        super().__init__(ErrorCode.SEAT_UNAVAILABLE, f"Seat (column {column}, row {row}) is already booked.")
        self.row = row
        self.column = column


class DuplicateScreenIdError(BookingError):
    def __init__(self, screen_id):
        super().__init__(ErrorCode.DUPLICATE_SCREEN_ID, f"A screen with id {screen_id} already exists.")
        self.screen_id = screen_id


class PersistenceError(BookingError):
    """Raised by the record stores when reading or writing fails."""

    def __init__(self, message):
        super().__init__(ErrorCode.PERSISTENCE_FAILURE, message)


@dataclass(frozen=True)
class Ticket:
    """A confirmed reservation. Carries no reference to the live Screen."""

    movie_title: str
    row: int
    column: int
    screen_id: int

    def details(self):
        return f"Ticket: {self.movie_title} (screen {self.screen_id}), column {self.column}, row {self.row}\n"


class Screen:
    """One screening of one movie, with a fixed rows x columns seat grid."""

    def __init__(self, screen_id, movie_title, rows, columns):
        if rows < 1 or columns < 1:
            raise ValueError("A screen needs at least one row and one column")
        self.screen_id = screen_id
        self.movie_title = movie_title
        self.rows = rows
        self.columns = columns
        # occupancy[row - 1][column - 1]
        self._occupancy = [[False] * columns for _ in range(rows)]

    def is_within_bounds(self, row, column):
        return 1 <= row <= self.rows and 1 <= column <= self.columns

    def is_occupied(self, row, column):
        self._check_bounds(row, column)
        return self._occupancy[row - 1][column - 1]

    def reserve(self, row, column):
        """Mark a seat as taken; a seat can only be reserved once."""
        if self.is_occupied(row, column):
            raise SeatUnavailableError(row, column)
        self._occupancy[row - 1][column - 1] = True

    def release(self, row, column):
        """Free a seat again. Used to undo a reservation that could not be saved."""
        self._check_bounds(row, column)
        self._occupancy[row - 1][column - 1] = False

    def seats_taken(self):
        return sum(row.count(True) for row in self._occupancy)

    def describe(self):
        """Seat map: 'O' is free, 'X' is taken, columns across and rows down."""
        width = len(str(self.columns))
        label = len(str(self.rows))
        lines = [f"Screen {self.screen_id}: {self.movie_title} "
                 f"({self.seats_taken()}/{self.rows * self.columns} seats booked)"]
        header = " ".join(str(col).rjust(width) for col in range(1, self.columns + 1))
        lines.append(" " * (label + 2) + header)
        for number, seats in enumerate(self._occupancy, start=1):
            cells = " ".join(("X" if taken else "O").rjust(width) for taken in seats)
            lines.append(f"{str(number).rjust(label)}  {cells}")
        return "\n".join(lines) + "\n"

    def _check_bounds(self, row, column):
        if not self.is_within_bounds(row, column):
            raise InvalidSeatError(row, column, self.rows, self.columns)

    def __repr__(self):
        return f"Screen({self.screen_id}, {self.movie_title!r}, {self.rows}x{self.columns})"


@dataclass(frozen=True)
class BookingResult:
    """Outcome of one booking attempt: either a ticket or the error that stopped it."""

    ticket: Optional[Ticket] = None
    error: Optional[BookingError] = None

    @property
    def ok(self):
        return self.ticket is not None


def _title_key(title):
    return (title or "").strip().casefold()


class TicketOffice:
    """Holds the screens currently showing and issues tickets against them."""

    def __init__(self):
        self._screens = {}  # screen_id -> Screen, in the order they were added
        self._by_title = {}  # normalised title -> first Screen showing it

    def add_screen(self, screen):
        if screen.screen_id in self._screens:
            raise DuplicateScreenIdError(screen.screen_id)
        self._screens[screen.screen_id] = screen
        self._by_title.setdefault(_title_key(screen.movie_title), screen)

    def screens(self):
        return list(self._screens.values())

    def resolve_movie(self, title):
        """Find the screen showing a movie. Matching ignores case and surrounding spaces."""
        screen = self._by_title.get(_title_key(title))
        if screen is None:
            raise MovieNotFoundError(title)
        return screen

    def book_ticket(self, title, column, row):
        """Reserve one seat and issue a ticket, or report why not.

        Nothing changes unless a ticket is returned.
        """
        try:
            screen = self.resolve_movie(title)
            screen.reserve(row, column)
        except BookingError as e:
            logger.info("Booking rejected for {!r} column={} row={}: {}", title, column, row, e.code.value)
            return BookingResult(error=e)

        ticket = Ticket(movie_title=screen.movie_title, row=row, column=column, screen_id=screen.screen_id)
        logger.info("Ticket issued: {}", ticket)
        return BookingResult(ticket=ticket)

    def cancel(self, ticket):
        """Give a ticket's seat back, e.g. when the ticket could not be stored."""
        screen = self._screens.get(ticket.screen_id)
        if screen is None:
            return
        screen.release(ticket.row, ticket.column)
        logger.warning("Reservation rolled back: {}", ticket)

    def list_all_movie_details(self):
        return "".join(screen.describe() for screen in self._screens.values())
