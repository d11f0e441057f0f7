# Command interpretation for the cinema booking terminal.
# Turns a raw input line into a Command; unrecognised input is a normal outcome.

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandWord(Enum):
    """Actions the booking terminal understands."""
    HELP = 'help'
    BOOK = 'book'
    LIST = 'list'
    BASKET = 'basket'
    QUIT = 'quit'
    UNKNOWN = '?'

    @classmethod
    def list_all(cls):
        """Return the user-facing names of every recognised action, in catalog order."""
        return [word.value for word in cls if word is not cls.UNKNOWN]

    @classmethod
    def from_token(cls, token):
        """Case-insensitive lookup of a single token; anything else is UNKNOWN."""
        if not token:
            return cls.UNKNOWN
        token = token.lower()
        for word in cls:
            if word is not cls.UNKNOWN and word.value == token:
                return word
        return cls.UNKNOWN


def help_text():
    """Listing used by the 'help' action."""
    return "\n".join("  " + name for name in CommandWord.list_all())


@dataclass(frozen=True)
class Command:
    """One interpreted input line: an action plus whatever followed it."""
    action: CommandWord
    argument: Optional[str] = None

    @property
    def has_argument(self):
        return self.argument is not None


def interpret(raw):
    """Convert a raw input line into a Command. Never raises."""
    if raw is None:
        return Command(CommandWord.UNKNOWN)

    text = raw.strip()
    if not text:
        return Command(CommandWord.UNKNOWN)

    # First word is the action, the rest (if any) is the argument
    parts = text.split(None, 1)
    action = CommandWord.from_token(parts[0])
    argument = parts[1].strip() if len(parts) == 2 else None
    return Command(action, argument or None)
