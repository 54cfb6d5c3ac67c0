"""Discord-based message transport."""

import asyncio
import logging
import threading
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Coroutine

import discord

from ..interfaces import (
    Affordances,
    Attachment,
    IncomingMessage,
    MessageTransport,
    Page,
    TransportError,
)

logger = logging.getLogger(__name__)

PREVIOUS_ID = "previous"
NEXT_ID = "next"


def build_embed(page: Page) -> discord.Embed:
    """Convert a page into a Discord embed."""
    embed = discord.Embed(
        title=page.title,
        description=page.description or None,
        color=page.color,
    )
    for field in page.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    if page.thumbnail_url:
        embed.set_thumbnail(url=page.thumbnail_url)
    return embed


def build_view(affordances: Affordances) -> discord.ui.View:
    """
    Build the previous/next button row.

    Must be called from a running event loop. The view is stopped before
    it is returned so discord.py does not track it; clicks are routed
    through on_interaction instead.
    """
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Previous",
            style=discord.ButtonStyle.primary,
            custom_id=PREVIOUS_ID,
            disabled=not affordances.previous_enabled,
        )
    )
    view.add_item(
        discord.ui.Button(
            label="Next",
            style=discord.ButtonStyle.primary,
            custom_id=NEXT_ID,
            disabled=not affordances.next_enabled,
        )
    )
    view.stop()
    return view


def to_incoming(message: discord.Message) -> IncomingMessage:
    """Convert a discord.py message into an IncomingMessage."""
    return IncomingMessage(
        message_id=str(message.id),
        channel_id=str(message.channel.id),
        author_id=str(message.author.id),
        content=message.content or "",
        attachments=tuple(
            Attachment(
                url=a.url,
                filename=a.filename,
                content_type=a.content_type,
                size=a.size,
            )
            for a in message.attachments
        ),
    )


class DiscordTransport(MessageTransport):
    """Message transport using a Discord bot account.

    The discord.py client runs on its own event loop in a background
    thread. The blocking methods of this class schedule work on that loop
    and wait at most request_timeout seconds for it.
    """

    def __init__(
        self,
        token: str,
        request_timeout: float = 10.0,
        connect_timeout: float = 30.0,
    ):
        """
        Initialize the transport.

        Args:
            token: Discord bot token.
            request_timeout: Maximum seconds to wait for a send or edit.
            connect_timeout: Maximum seconds to wait for the gateway to be ready.
        """
        self.token = token
        self.request_timeout = request_timeout
        self.connect_timeout = connect_timeout

        self._message_callbacks: list[Callable[[IncomingMessage], None]] = []
        self._navigation_callbacks: list[Callable[[str, str], None]] = []

        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()
        self._client: discord.Client | None = None

    def create_message(
        self, channel_id: str, page: Page, affordances: Affordances | None = None
    ) -> str:
        async def send() -> str:
            channel = await self._get_channel(channel_id)
            kwargs: dict[str, Any] = {"embed": build_embed(page)}
            if affordances is not None:
                kwargs["view"] = build_view(affordances)
            message = await channel.send(**kwargs)
            return str(message.id)

        return self._run(send(), f"create message in {channel_id}")

    def edit_message(
        self, channel_id: str, message_id: str, page: Page, affordances: Affordances
    ) -> None:
        async def edit() -> None:
            channel = await self._get_channel(channel_id)
            message = channel.get_partial_message(int(message_id))
            await message.edit(embed=build_embed(page), view=build_view(affordances))

        self._run(edit(), f"edit message {message_id}")

    def send_text(self, channel_id: str, text: str) -> None:
        async def send() -> None:
            channel = await self._get_channel(channel_id)
            await channel.send(text)

        self._run(send(), f"send text to {channel_id}")

    def send_typing(self, channel_id: str) -> None:
        async def typing() -> None:
            channel = await self._get_channel(channel_id)
            await channel.typing()

        self._run(typing(), f"send typing to {channel_id}")

    def on_message(self, callback: Callable[[IncomingMessage], None]) -> None:
        """
        Register a callback for incoming messages.

        Callbacks run in the event loop's executor and may call the
        blocking methods of this transport.
        """
        self._message_callbacks.append(callback)

    def on_navigation(self, callback: Callable[[str, str], None]) -> None:
        """Register a callback for navigation button clicks."""
        self._navigation_callbacks.append(callback)

    def connect(self) -> None:
        """
        Log in and wait until the gateway is ready.

        Raises:
            TransportError: If the bot is not ready within connect_timeout.
        """
        if self._thread is not None:
            return

        intents = discord.Intents.default()
        intents.message_content = True

        self._loop = asyncio.new_event_loop()
        self._client = discord.Client(intents=intents)
        self._register_events(self._client)
        self._ready.clear()

        self._thread = threading.Thread(target=self._run_loop, name="discord-loop", daemon=True)
        self._thread.start()

        if not self._ready.wait(timeout=self.connect_timeout):
            self.disconnect()
            raise TransportError(f"Discord not ready after {self.connect_timeout}s")

    def disconnect(self) -> None:
        """Log out and stop the event loop thread."""
        if self._thread is None:
            return

        if self._client is not None and self._loop is not None and self._loop.is_running():
            future = asyncio.run_coroutine_threadsafe(self._client.close(), self._loop)
            try:
                future.result(timeout=self.request_timeout)
            except Exception as e:
                logger.warning(f"Error closing Discord client: {e}")

        self._thread.join(timeout=self.request_timeout)
        self._thread = None
        self._client = None
        self._loop = None

    def is_connected(self) -> bool:
        """Check if the gateway connection is ready."""
        return self._ready.is_set() and self._thread is not None

    def _run_loop(self) -> None:
        loop, client = self._loop, self._client
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(client.start(self.token))
        except discord.DiscordException as e:
            logger.error(f"Discord client stopped: {e}")
        finally:
            self._ready.clear()
            loop.close()

    def _register_events(self, client: discord.Client) -> None:
        @client.event
        async def on_ready():
            logger.info(f"Logged in as {client.user}")
            self._ready.set()

        @client.event
        async def on_message(message: discord.Message):
            if client.user is not None and message.author.id == client.user.id:
                return
            await self._handle_message(message)

        @client.event
        async def on_interaction(interaction: discord.Interaction):
            await self._handle_interaction(interaction)

    async def _handle_message(self, message: discord.Message) -> None:
        incoming = to_incoming(message)
        loop = asyncio.get_running_loop()
        for callback in self._message_callbacks:
            try:
                await loop.run_in_executor(None, callback, incoming)
            except Exception as e:
                # Don't let one callback failure break others
                logger.error(f"Message callback failed: {e}")

    async def _handle_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type != discord.InteractionType.component or interaction.message is None:
            return

        custom_id = (interaction.data or {}).get("custom_id")
        if custom_id not in (PREVIOUS_ID, NEXT_ID):
            return

        try:
            await interaction.response.defer()
        except discord.DiscordException as e:
            logger.warning(f"Failed to acknowledge interaction: {e}")

        message_id = str(interaction.message.id)
        loop = asyncio.get_running_loop()
        for callback in self._navigation_callbacks:
            try:
                await loop.run_in_executor(None, callback, message_id, custom_id)
            except Exception as e:
                logger.error(f"Navigation callback failed: {e}")

    async def _get_channel(self, channel_id: str) -> discord.abc.Messageable:
        channel = self._client.get_channel(int(channel_id))
        if channel is None:
            channel = await self._client.fetch_channel(int(channel_id))
        if not isinstance(channel, discord.abc.Messageable):
            raise TransportError(f"Channel {channel_id} cannot receive messages")
        return channel

    def _run(self, coro: Coroutine[Any, Any, Any], action: str) -> Any:
        """Run a coroutine on the client loop and wait for its result."""
        if self._loop is None or self._client is None or not self._loop.is_running():
            coro.close()
            raise TransportError(f"Not connected, cannot {action}. Call connect() first.")

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout=self.request_timeout)
        except TransportError:
            raise
        except FutureTimeoutError as e:
            future.cancel()
            raise TransportError(f"Timed out after {self.request_timeout}s trying to {action}") from e
        except (discord.DiscordException, ValueError) as e:
            raise TransportError(f"Failed to {action}: {e}") from e
