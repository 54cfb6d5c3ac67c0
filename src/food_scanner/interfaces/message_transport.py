"""Abstract interface for message transport."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from .page import Affordances, Page


class TransportError(Exception):
    """Raised when a remote send or edit fails."""


@dataclass(frozen=True)
class Attachment:
    """A file attached to an incoming message."""

    url: str
    filename: str
    content_type: str | None = None
    size: int = 0

    @property
    def is_image(self) -> bool:
        return bool(self.content_type) and self.content_type.startswith("image/")


@dataclass(frozen=True)
class IncomingMessage:
    """A chat message received from the platform."""

    message_id: str
    channel_id: str
    author_id: str
    content: str
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


class MessageTransport(ABC):
    """Abstract interface for sending/receiving chat messages."""

    @abstractmethod
    def create_message(
        self, channel_id: str, page: Page, affordances: Affordances | None = None
    ) -> str:
        """Send a page as a new message.

        Args:
            channel_id: The destination channel.
            page: The page to display.
            affordances: Navigation button state, or None for no buttons.

        Returns:
            The identifier of the created message.

        Raises:
            TransportError: If the message could not be created.
        """
        pass

    @abstractmethod
    def edit_message(
        self, channel_id: str, message_id: str, page: Page, affordances: Affordances
    ) -> None:
        """Replace the page and buttons of an existing message.

        Raises:
            TransportError: If the edit failed.
        """
        pass

    @abstractmethod
    def send_text(self, channel_id: str, text: str) -> None:
        """Send a plain text message."""
        pass

    @abstractmethod
    def send_typing(self, channel_id: str) -> None:
        """Show a typing indicator in the channel."""
        pass

    @abstractmethod
    def on_message(self, callback: Callable[[IncomingMessage], None]) -> None:
        """Register a callback for incoming chat messages."""
        pass

    @abstractmethod
    def on_navigation(self, callback: Callable[[str, str], None]) -> None:
        """Register a callback for navigation button clicks.

        The callback receives (message_id, direction).
        """
        pass

    @abstractmethod
    def connect(self) -> None:
        """Connect to the chat platform."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the chat platform."""
        pass
