"""Registry of live navigators keyed by the message they control."""

import threading
from typing import TYPE_CHECKING, MutableMapping

if TYPE_CHECKING:
    from .navigator import Navigator


class NavigatorRegistry:
    """Process-wide mapping from message ID to its Navigator.

    Every operation holds the registry lock, so register/lookup/remove are
    atomic with respect to each other across timer callbacks, click
    handlers and command handlers.
    """

    def __init__(self, store: MutableMapping[str, "Navigator"] | None = None):
        """
        Initialize the registry.

        Args:
            store: Backing mapping. Defaults to a new dict.
        """
        self._navigators = store if store is not None else {}
        self._lock = threading.Lock()

    def register(self, message_id: str, navigator: "Navigator") -> None:
        """
        Store a navigator under its message ID, replacing any existing entry.

        Args:
            message_id: ID of the message the navigator controls.
            navigator: The navigator to store.
        """
        with self._lock:
            self._navigators[message_id] = navigator

    def lookup(self, message_id: str) -> "Navigator | None":
        """Get the navigator for a message, or None if there is none."""
        with self._lock:
            return self._navigators.get(message_id)

    def remove(self, message_id: str) -> bool:
        """
        Remove the navigator for a message.

        Removing an unknown ID is not an error.

        Returns:
            True if an entry was removed.
        """
        with self._lock:
            return self._navigators.pop(message_id, None) is not None

    def keys(self) -> list[str]:
        """Get the message IDs of all registered navigators."""
        with self._lock:
            return list(self._navigators.keys())

    def __contains__(self, message_id: object) -> bool:
        with self._lock:
            return message_id in self._navigators

    def __len__(self) -> int:
        with self._lock:
            return len(self._navigators)
