# Display collaborators. The booking session only talks to the View interface.

import re
from abc import ABC, abstractmethod

# Seat positions may be typed as "3, 4", "3 4" or "3,4"
TOKEN_SEPARATOR = re.compile(r'[\s,]+')


def split_tokens(line):
    return [token for token in TOKEN_SEPARATOR.split(line.strip()) if token]


class View(ABC):
    """Where the booking session sends text and reads the customer's input."""

    @abstractmethod
    def show(self, text):
        ...

    @abstractmethod
    def show_formatted(self, text):
        """Show text set apart from the surrounding dialogue."""
        ...

    @abstractmethod
    def show_error(self, message, title=None):
        ...

    @abstractmethod
    def read_line(self):
        """Next line typed by the customer, or None once input is closed."""
        ...

    def read_line_as_tokens(self):
        """Read a line and split it on commas and whitespace."""
        line = self.read_line()
        return [] if line is None else split_tokens(line)


class TextView(View):
    """Console view using print and input."""

    PROMPT = '> '
    RULE = '-' * 40

    def show(self, text):
        print(text)

    def show_formatted(self, text):
        print(self.RULE)
        print(text.rstrip('\n'))
        print(self.RULE)

    def show_error(self, message, title=None):
        if title:
            print(f"Error - {title}: {message}")
        else:
            print(f"Error: {message}")

    def read_line(self):
        try:
            return input(self.PROMPT)
        except EOFError:
            # Closed input: nothing more will ever be typed
            return None
