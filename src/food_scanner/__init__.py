"""Discord bot that identifies food and receipts from photos."""

__version__ = "0.1.0"
