"""Message transport implementations."""

from .discord_transport import DiscordTransport

__all__ = ["DiscordTransport"]
