"""Routes navigation button clicks to their navigator."""

import logging

from ..interfaces import Affordances, MessageTransport, Page, TransportError
from .navigator_registry import NavigatorRegistry

logger = logging.getLogger(__name__)

PREVIOUS = "previous"
NEXT = "next"


class InteractionDispatcher:
    """Applies previous/next clicks to registered navigators."""

    def __init__(self, registry: NavigatorRegistry, transport: MessageTransport):
        self.registry = registry
        self.transport = transport

    def dispatch(self, message_id: str, direction: str) -> bool:
        """
        Handle a click on a navigation button.

        Clicks on messages without a live navigator (expired or never
        registered) are dropped without error.

        Args:
            message_id: ID of the message whose button was clicked.
            direction: PREVIOUS or NEXT.

        Returns:
            True if the click was applied to a navigator.
        """
        navigator = self.registry.lookup(message_id)
        if navigator is None:
            logger.debug(f"[{message_id}] No navigator for click, dropping")
            return False

        if direction == PREVIOUS:
            navigator.retreat()
        elif direction == NEXT:
            navigator.advance()
        else:
            logger.debug(f"[{message_id}] Unknown direction {direction!r}, dropping")
            return False

        rendered = navigator.render_current()
        affordances = rendered.affordances
        if not navigator.active:
            # Expired while this click was in flight
            affordances = Affordances.disabled()

        self._edit(navigator.channel_id, message_id, rendered.page, affordances)

        # An expiry edit may have landed before ours; grey the buttons out again
        if affordances != Affordances.disabled() and not navigator.active:
            self._edit(navigator.channel_id, message_id, rendered.page, Affordances.disabled())

        return True

    def _edit(self, channel_id: str, message_id: str, page: Page, affordances: Affordances) -> None:
        try:
            self.transport.edit_message(channel_id, message_id, page, affordances)
        except TransportError as e:
            logger.warning(f"[{message_id}] Failed to update navigator: {e}")
