"""Command parser for interpreting chat messages."""

from abc import ABC
from dataclasses import dataclass


class Command(ABC):
    """Base class for all commands."""

    pass


@dataclass(frozen=True)
class PingCommand(Command):
    """Command to check the bot is alive."""

    pass


@dataclass(frozen=True)
class EchoCommand(Command):
    """Command to repeat the given text."""

    text: str = ""


@dataclass(frozen=True)
class ScanCommand(Command):
    """Command to identify one food per image and save it."""

    pass


@dataclass(frozen=True)
class AskCommand(Command):
    """Command to identify one food per image without saving."""

    pass


@dataclass(frozen=True)
class ScanAllCommand(Command):
    """Command to identify and save every food in a photo."""

    pass


@dataclass(frozen=True)
class AskAllCommand(Command):
    """Command to identify every food in a photo without saving."""

    pass


@dataclass(frozen=True)
class ReceiptCommand(Command):
    """Command to identify and save every food on a receipt."""

    pass


@dataclass(frozen=True)
class GetCommand(Command):
    """Command to browse the user's saved foods."""

    pass


@dataclass(frozen=True)
class RecipesCommand(Command):
    """Command to suggest recipes from the user's saved foods."""

    preferences: str = ""


@dataclass(frozen=True)
class ClearAllCommand(Command):
    """Command to delete all of the user's saved foods."""

    pass


@dataclass(frozen=True)
class HelpCommand(Command):
    """Command to display help information."""

    pass


@dataclass(frozen=True)
class InvalidCommand(Command):
    """Represents an invalid or unrecognized command."""

    original_input: str
    reason: str = "Unknown command"


# Name -> (command class, help text). Order is the order shown in help.
COMMANDS: dict[str, tuple[type[Command], str]] = {
    "ping": (PingCommand, "Responds with Pong!"),
    "echo": (EchoCommand, "Repeats the message you send."),
    "scan": (ScanCommand, "Scans food into database"),
    "ask": (AskCommand, "Describes the food in an image without saving it"),
    "scanall": (ScanAllCommand, "Scans all food in the image into database"),
    "askall": (AskAllCommand, "Looks for all food in the image"),
    "receipt": (ReceiptCommand, "Scans all food on a receipt into database"),
    "get": (GetCommand, "Browse your saved foods"),
    "recipes": (RecipesCommand, "Suggests recipes from your saved foods, e.g. !recipes vegetarian"),
    "clearall": (ClearAllCommand, "Deletes all your saved foods"),
    "help": (HelpCommand, "Shows this help"),
}


class CommandParser:
    """Parses chat message text into Command objects."""

    def __init__(self, prefix: str = "!"):
        if not prefix:
            raise ValueError("Command prefix cannot be empty")
        self.prefix = prefix

    def parse(self, input_str: str) -> Command | None:
        """
        Parse a chat message into a Command object.

        Args:
            input_str: The raw message text.

        Returns:
            A Command object, or None if the message is not addressed
            to the bot (does not start with the prefix).
        """
        cleaned = input_str.strip()

        if not cleaned.startswith(self.prefix):
            return None

        body = cleaned[len(self.prefix):]
        name, _, rest = body.partition(" ")
        name = name.lower()
        rest = rest.strip()

        if not name:
            return InvalidCommand(original_input=input_str, reason="Empty command")

        entry = COMMANDS.get(name)
        if entry is None:
            return InvalidCommand(original_input=input_str, reason="Unknown command")

        command_class = entry[0]
        if command_class is EchoCommand:
            return EchoCommand(text=rest)
        if command_class is RecipesCommand:
            return RecipesCommand(preferences=rest)
        return command_class()

    def help_text(self) -> str:
        """Get the help listing for all commands."""
        lines = ["Food Scanner commands:"]
        for name, (_, description) in COMMANDS.items():
            lines.append(f"{self.prefix}{name} - {description}")
        return "\n".join(lines)
