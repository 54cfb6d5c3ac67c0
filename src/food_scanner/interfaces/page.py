"""Display pages and their navigation button state."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PageField:
    """A named block of text within a page."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Page:
    """One unit of displayable content (rendered as an embed)."""

    title: str
    description: str = ""
    fields: tuple[PageField, ...] = field(default_factory=tuple)
    color: int = 0x00FF00
    thumbnail_url: str | None = None

    def __init__(
        self,
        title: str,
        description: str = "",
        fields: list[PageField] | tuple[PageField, ...] | None = None,
        color: int = 0x00FF00,
        thumbnail_url: str | None = None,
    ):
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "fields", tuple(fields) if fields else ())
        object.__setattr__(self, "color", color)
        object.__setattr__(self, "thumbnail_url", thumbnail_url)


@dataclass(frozen=True)
class Affordances:
    """Whether the previous/next controls are usable."""

    previous_enabled: bool
    next_enabled: bool

    @classmethod
    def disabled(cls) -> "Affordances":
        return cls(previous_enabled=False, next_enabled=False)


@dataclass(frozen=True)
class RenderedPage:
    """A page together with the affordance state to show it with."""

    page: Page
    affordances: Affordances
