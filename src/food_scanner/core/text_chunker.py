"""Text chunker for splitting replies into Discord-sized messages."""

from dataclasses import dataclass

DISCORD_MESSAGE_LIMIT = 2000


def truncate(text: str, limit: int) -> str:
    """Shorten text to at most limit characters, ending with an ellipsis."""
    if len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3].rstrip() + "..."


@dataclass
class TextChunker:
    """Splits long text into message-sized chunks."""

    max_size: int = DISCORD_MESSAGE_LIMIT

    def __post_init__(self):
        if self.max_size <= 0:
            raise ValueError(f"max_size must be > 0, got {self.max_size}")

    def chunk(self, content: str) -> list[str]:
        """
        Split content into chunks that fit within max_size.

        Args:
            content: The text to split.

        Returns:
            List of chunks, each <= max_size characters. Empty if the
            content is blank.
        """
        content = content.strip()
        if not content:
            return []

        chunks = []
        remaining = content

        while remaining:
            if len(remaining) <= self.max_size:
                chunks.append(remaining)
                break

            split_point = self._find_split_point(remaining)
            chunk = remaining[:split_point].rstrip()
            if chunk:
                chunks.append(chunk)
            remaining = remaining[split_point:].lstrip()

        return chunks

    def _find_split_point(self, text: str) -> int:
        """
        Find the best point to split text at or before max_size.

        Prefers line breaks so list items stay whole, then spaces,
        then falls back to a hard split.
        """
        search_text = text[: self.max_size]

        last_newline = search_text.rfind("\n")
        if last_newline > self.max_size // 2:
            return last_newline + 1

        last_space = search_text.rfind(" ")
        if last_space > self.max_size // 2:
            return last_space + 1

        return self.max_size
