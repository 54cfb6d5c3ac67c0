"""FoodBot - Main orchestrator for the Discord Food Scanner."""

import logging

from .interfaces import AnalysisError, FoodAnalyzer, IncomingMessage, MessageTransport, Page, TransportError
from .core import (
    CommandParser,
    Command,
    PingCommand,
    EchoCommand,
    ScanCommand,
    AskCommand,
    ScanAllCommand,
    AskAllCommand,
    ReceiptCommand,
    GetCommand,
    RecipesCommand,
    ClearAllCommand,
    HelpCommand,
    InvalidCommand,
    EmptyPageSet,
    InteractionDispatcher,
    Navigator,
    NavigatorRegistry,
    PageRenderer,
    TextChunker,
)
from .config import Config
from .models import FoodInfo
from .store import FoodStore, StoreError

logger = logging.getLogger(__name__)

PROCESS_FAILED = "Failed to process image 😢"
CREATE_FAILED = "Failed to create entry 😢"
GET_FAILED = "Failed to get foods 😢"
SEND_FAILED = "Failed to send results 😢"


class FoodBot:
    """Main bot orchestrating all components.

    Handles incoming chat messages and navigation clicks. Uses dependency
    injection for the transport, analyzer and store.
    """

    def __init__(
        self,
        transport: MessageTransport,
        analyzer: FoodAnalyzer,
        store: FoodStore,
        config: Config | None = None,
        registry: NavigatorRegistry | None = None,
    ):
        """
        Initialize the bot.

        Args:
            transport: Transport for sending/receiving messages.
            analyzer: Vision model client.
            store: Storage for saved foods.
            config: Bot configuration (uses defaults if None).
            registry: Navigator registry (a new one if None).
        """
        self.transport = transport
        self.analyzer = analyzer
        self.store = store
        self.config = config or Config()

        # Initialize components
        self.parser = CommandParser(prefix=self.config.command_prefix)
        self.chunker = TextChunker()
        self.renderer = PageRenderer()
        self.registry = registry or NavigatorRegistry()
        self.dispatcher = InteractionDispatcher(self.registry, self.transport)

        # Register handlers
        self.transport.on_message(self._handle_message)
        self.transport.on_navigation(self.dispatcher.dispatch)

    def start(self) -> None:
        """Start the bot by connecting to the transport."""
        logger.info("Starting Food Scanner bot...")
        self.transport.connect()
        logger.info("Bot started and listening for messages")

    def stop(self) -> None:
        """Stop the bot by disconnecting the transport."""
        logger.info("Stopping Food Scanner bot...")
        self.transport.disconnect()
        self.store.close()
        logger.info("Bot stopped")

    def _handle_message(self, message: IncomingMessage) -> None:
        """
        Handle an incoming chat message.

        Args:
            message: The received message.
        """
        command = self.parser.parse(message.content)
        if command is None:
            return

        logger.info(f"[{message.author_id}] Command: {command.__class__.__name__}")

        try:
            self._process_command(command, message)
        except Exception as e:
            logger.error(f"[{message.author_id}] Error: {e}")
            self._send_error(message.channel_id, str(e))

    def _process_command(self, command: Command, message: IncomingMessage) -> None:
        """Run a parsed command."""
        channel_id = message.channel_id

        if isinstance(command, PingCommand):
            self._send_text(channel_id, "Pong!")

        elif isinstance(command, EchoCommand):
            if command.text:
                self._send_text(channel_id, f"Echo: {command.text}")
            else:
                self._send_text(channel_id, f"Usage: {self.config.command_prefix}echo <message>")

        elif isinstance(command, HelpCommand):
            self._send_text(channel_id, self.parser.help_text())

        elif isinstance(command, InvalidCommand):
            logger.debug(f"Invalid command: {command.original_input}")
            self._send_text(
                channel_id,
                f"{command.reason}: {command.original_input.strip()}\n"
                f"Send {self.config.command_prefix}help for help",
            )

        elif isinstance(command, ScanCommand):
            self._handle_single(message, save=True)

        elif isinstance(command, AskCommand):
            self._handle_single(message, save=False)

        elif isinstance(command, ScanAllCommand):
            self._handle_multiple(message, save=True, receipt=False)

        elif isinstance(command, AskAllCommand):
            self._handle_multiple(message, save=False, receipt=False)

        elif isinstance(command, ReceiptCommand):
            self._handle_multiple(message, save=True, receipt=True)

        elif isinstance(command, GetCommand):
            self._handle_get(message)

        elif isinstance(command, RecipesCommand):
            self._handle_recipes(message, command.preferences)

        elif isinstance(command, ClearAllCommand):
            self._handle_clear_all(message)

    def _handle_single(self, message: IncomingMessage, save: bool) -> None:
        """Identify one food per attached image, optionally saving it."""
        if not self._has_attachments(message):
            return

        for attachment in message.attachments:
            self._send_typing(message.channel_id)
            try:
                food = self.analyzer.analyze_food(attachment)
            except AnalysisError as e:
                logger.error(f"[{message.author_id}] Failed to process {attachment.url}: {e}")
                self._send_text(message.channel_id, PROCESS_FAILED)
                continue

            if save:
                food.user_id = message.author_id
                try:
                    food = self.store.create_food(food)
                except StoreError as e:
                    logger.error(f"Error creating food entry in db: {e}")
                    self._send_text(message.channel_id, CREATE_FAILED)
                    return

            self._send_page(message.channel_id, self.renderer.render_food(food))

    def _handle_multiple(self, message: IncomingMessage, save: bool, receipt: bool) -> None:
        """Identify every food per attached image and show them in a navigator."""
        if not self._has_attachments(message):
            return

        for attachment in message.attachments:
            self._send_typing(message.channel_id)
            try:
                foods = self.analyzer.analyze_foods(attachment, receipt=receipt)
            except AnalysisError as e:
                logger.error(f"[{message.author_id}] Failed to process {attachment.url}: {e}")
                self._send_text(message.channel_id, PROCESS_FAILED)
                continue

            if save:
                foods = self._save_all(foods, message.author_id)

            self._show_pages(
                message.channel_id,
                self.renderer.render_foods(foods),
                empty_text="No food found in the image.",
            )

    def _save_all(self, foods: list[FoodInfo], user_id: str) -> list[FoodInfo]:
        saved = []
        for food in foods:
            food.user_id = user_id
            try:
                saved.append(self.store.create_food(food))
            except StoreError as e:
                logger.error(f"Error creating food entry in db: {e}")
                saved.append(food)
        return saved

    def _handle_get(self, message: IncomingMessage) -> None:
        """Show the user's saved foods in a navigator."""
        try:
            foods = self.store.get_all_foods(message.author_id)
        except StoreError as e:
            logger.error(f"[{message.author_id}] {e}")
            self._send_text(message.channel_id, GET_FAILED)
            return

        self._show_pages(
            message.channel_id,
            self.renderer.render_foods(foods),
            empty_text="You have no saved foods yet.",
        )

    def _handle_recipes(self, message: IncomingMessage, preferences: str) -> None:
        """Suggest recipes from the user's saved foods."""
        try:
            foods = self.store.get_all_foods(message.author_id)
        except StoreError as e:
            logger.error(f"[{message.author_id}] {e}")
            self._send_text(message.channel_id, GET_FAILED)
            return

        if not foods:
            self._send_text(
                message.channel_id,
                f"You have no saved foods yet. Use {self.config.command_prefix}scan first.",
            )
            return

        self._send_typing(message.channel_id)
        try:
            recipes = self.analyzer.suggest_recipes(foods, preferences)
        except AnalysisError as e:
            logger.error(f"[{message.author_id}] Failed to get recipes: {e}")
            self._send_text(message.channel_id, "Failed to get recipes 😢")
            return

        self._show_pages(
            message.channel_id,
            self.renderer.render_recipes(recipes),
            empty_text="No recipes found.",
        )

    def _handle_clear_all(self, message: IncomingMessage) -> None:
        """Delete every saved food of the user and list what was deleted."""
        try:
            foods = self.store.get_all_foods(message.author_id)
        except StoreError as e:
            logger.error(f"[{message.author_id}] {e}")
            self._send_text(message.channel_id, GET_FAILED)
            return

        lines = ["Deleting foods:"]
        for food in foods:
            try:
                if self.store.delete_food(food.id):
                    lines.append(f"\t- {food.food_item}")
            except StoreError as e:
                logger.error(f"Error deleting food {food.id}: {e}")

        logger.info(f"[{message.author_id}] Deleted {len(lines) - 1} food(s)")
        self._send_text(message.channel_id, "\n".join(lines))

    def _has_attachments(self, message: IncomingMessage) -> bool:
        if message.attachments:
            return True
        logger.debug(f"[{message.author_id}] No attachments in the message")
        self._send_text(message.channel_id, "Please attach an image of food or a receipt.")
        return False

    def _show_pages(self, channel_id: str, pages: list[Page], empty_text: str) -> Navigator | None:
        """
        Send pages through a new navigator.

        Returns:
            The sent navigator, or None if there was nothing to send or
            the send failed.
        """
        try:
            navigator = Navigator(
                pages,
                channel_id,
                self.registry,
                expiry_seconds=self.config.slider_timeout_seconds,
            )
        except EmptyPageSet:
            self._send_text(channel_id, empty_text)
            return None

        try:
            navigator.send(self.transport)
        except TransportError as e:
            logger.error(f"[{channel_id}] Failed to send navigator: {e}")
            self._send_text(channel_id, SEND_FAILED)
            return None

        return navigator

    def _send_page(self, channel_id: str, page: Page) -> None:
        try:
            self.transport.create_message(channel_id, page)
        except TransportError as e:
            logger.error(f"[{channel_id}] Failed to send page: {e}")

    def _send_text(self, channel_id: str, text: str) -> None:
        """Send text, split into as many messages as needed."""
        for part in self.chunker.chunk(text):
            try:
                self.transport.send_text(channel_id, part)
            except TransportError as e:
                logger.error(f"[{channel_id}] Failed to send message: {e}")
                return

    def _send_typing(self, channel_id: str) -> None:
        try:
            self.transport.send_typing(channel_id)
        except TransportError as e:
            logger.error(f"Error sending typing indicator: {e}")

    def _send_error(self, channel_id: str, error: str) -> None:
        """Send error message to a channel."""
        self._send_text(channel_id, f"Error: {error}")
