"""Core components for the Discord Food Scanner."""

from .command_parser import (
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
)
from .interaction_dispatcher import InteractionDispatcher, NEXT, PREVIOUS
from .navigator import EmptyPageSet, Navigator
from .navigator_registry import NavigatorRegistry
from .page_renderer import PageRenderer, storage_emoji
from .text_chunker import TextChunker, truncate

__all__ = [
    "CommandParser",
    "Command",
    "PingCommand",
    "EchoCommand",
    "ScanCommand",
    "AskCommand",
    "ScanAllCommand",
    "AskAllCommand",
    "ReceiptCommand",
    "GetCommand",
    "RecipesCommand",
    "ClearAllCommand",
    "HelpCommand",
    "InvalidCommand",
    "InteractionDispatcher",
    "NEXT",
    "PREVIOUS",
    "EmptyPageSet",
    "Navigator",
    "NavigatorRegistry",
    "PageRenderer",
    "storage_emoji",
    "TextChunker",
    "truncate",
]
