"""Navigator - a paginated message with previous/next buttons."""

import logging
import threading
from typing import Sequence

from ..interfaces import Affordances, MessageTransport, Page, RenderedPage, TransportError
from .navigator_registry import NavigatorRegistry

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_SECONDS = 300.0


class EmptyPageSet(ValueError):
    """Raised when a navigator is constructed without pages."""


class Navigator:
    """Controls which page of a multi-page response is displayed.

    The navigator owns an immutable sequence of pages and a cursor into it.
    Once sent, it registers itself under the ID of the message it created
    and, if an expiry is set, disables itself after that many seconds.
    Disabling happens exactly once; afterwards every move is a no-op.
    """

    def __init__(
        self,
        pages: Sequence[Page],
        channel_id: str,
        registry: NavigatorRegistry,
        expiry_seconds: float = DEFAULT_EXPIRY_SECONDS,
    ):
        """
        Initialize the navigator.

        Args:
            pages: Pages to navigate, in display order.
            channel_id: Channel the message is sent to.
            registry: Registry to join once the first page is sent.
            expiry_seconds: Seconds until the buttons are disabled.
                            0 means never.

        Raises:
            EmptyPageSet: If pages is empty.
            ValueError: If expiry_seconds is negative.
        """
        if not pages:
            raise EmptyPageSet("pages cannot be empty")
        if expiry_seconds < 0:
            raise ValueError(f"expiry_seconds must be >= 0, got {expiry_seconds}")

        self._pages: tuple[Page, ...] = tuple(pages)
        self.channel_id = channel_id
        self.expiry_seconds = expiry_seconds
        self._registry = registry

        self._lock = threading.Lock()
        self._position = 0
        self._active = True
        self._message_id: str | None = None
        self._timer: threading.Timer | None = None

    @property
    def pages(self) -> tuple[Page, ...]:
        return self._pages

    @property
    def position(self) -> int:
        with self._lock:
            return self._position

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    @property
    def message_id(self) -> str | None:
        with self._lock:
            return self._message_id

    def send(self, transport: MessageTransport) -> str:
        """
        Send the current page as a new message and start tracking it.

        Args:
            transport: Transport used to create the message and, later,
                       to disable it on expiry.

        Returns:
            ID of the created message.

        Raises:
            TransportError: If the message could not be created. The
                            navigator is then neither registered nor timed.
            RuntimeError: If the navigator was already sent.
        """
        with self._lock:
            if self._message_id is not None:
                raise RuntimeError(f"Navigator already sent as message {self._message_id}")
            rendered = self._render_locked()
            was_active = self._active

        affordances = rendered.affordances if was_active else Affordances.disabled()
        message_id = transport.create_message(self.channel_id, rendered.page, affordances)

        # Register under the lock so a racing disable() sees message_id
        with self._lock:
            self._message_id = message_id
            active = self._active
            if active:
                self._registry.register(message_id, self)

        if not active:
            logger.info(f"[{message_id}] Navigator disabled before it was sent, not tracking")
            if was_active:
                try:
                    transport.edit_message(
                        self.channel_id, message_id, rendered.page, Affordances.disabled()
                    )
                except TransportError as e:
                    logger.warning(f"[{message_id}] Failed to disable navigator buttons: {e}")
            return message_id

        logger.info(f"[{message_id}] Navigator sent with {len(self._pages)} page(s)")

        if self.expiry_seconds > 0:
            self._timer = threading.Timer(self.expiry_seconds, self.disable, args=(transport,))
            self._timer.daemon = True
            self._timer.start()

        return message_id

    def advance(self) -> bool:
        """Move to the next page. Returns True if the cursor moved."""
        with self._lock:
            if not self._active or self._position >= len(self._pages) - 1:
                return False
            self._position += 1
            return True

    def retreat(self) -> bool:
        """Move to the previous page. Returns True if the cursor moved."""
        with self._lock:
            if not self._active or self._position <= 0:
                return False
            self._position -= 1
            return True

    def render_current(self) -> RenderedPage:
        """Get the current page and its previous/next button state."""
        with self._lock:
            return self._render_locked()

    def disable(self, transport: MessageTransport) -> bool:
        """
        Disable the navigator and stop tracking it.

        Only the first call has any effect. The remote buttons are greyed
        out; if that edit fails the error is logged and the navigator is
        still deregistered.

        Returns:
            True if this call disabled the navigator.
        """
        with self._lock:
            if not self._active:
                return False
            self._active = False
            message_id = self._message_id
            page = self._pages[self._position]

        if message_id is None:
            logger.debug("Navigator disabled before it was sent")
            return True

        try:
            transport.edit_message(self.channel_id, message_id, page, Affordances.disabled())
        except TransportError as e:
            logger.warning(f"[{message_id}] Failed to disable navigator buttons: {e}")
        finally:
            self._registry.remove(message_id)

        logger.info(f"[{message_id}] Navigator disabled")
        return True

    def _render_locked(self) -> RenderedPage:
        last = len(self._pages) - 1
        return RenderedPage(
            page=self._pages[self._position],
            affordances=Affordances(
                previous_enabled=self._position > 0,
                next_enabled=self._position < last,
            ),
        )
