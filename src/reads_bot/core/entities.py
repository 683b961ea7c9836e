"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class Tag(str, Enum):
    """Content type of a read item."""

    READS = "reads"
    TWEETS = "tweets"
    MEDIA = "media"
    NEWS = "news"
    PODCAST = "podcast"
    OTHER = "other"


class Sector(str, Enum):
    """Sector taxonomy of a read item."""

    GENERAL = "general"
    FINANCE = "finance"
    INFRASTRUCTURE = "infrastructure"
    MACRO_MARKETS = "macro-markets"
    METAVERSE = "metaverse"


class SessionState(str, Enum):
    """Where a conversation currently is."""

    IDLE = "idle"
    AWAITING_URL = "awaiting_url"
    AWAITING_TITLE = "awaiting_title"
    AWAITING_DESCRIPTION = "awaiting_description"
    BUILDING = "building"
    NONE = "none"


class MissingField(str, Enum):
    """Next draft field the user has to provide."""

    TITLE = "title"
    SECTOR = "sector"
    TAG = "tag"
    NONE = "none"


@dataclass(frozen=True)
class Option:
    """Selectable option: machine slug plus human label."""

    slug: str
    title: str


# Menu order, not enum order
TAG_OPTIONS: tuple[Option, ...] = (
    Option(Tag.READS.value, "Reads"),
    Option(Tag.MEDIA.value, "Media"),
    Option(Tag.TWEETS.value, "Tweets"),
    Option(Tag.NEWS.value, "News"),
    Option(Tag.PODCAST.value, "Podcast"),
    Option(Tag.OTHER.value, "Other"),
)

SECTOR_OPTIONS: tuple[Option, ...] = (
    Option(Sector.GENERAL.value, "General"),
    Option(Sector.FINANCE.value, "DeFi"),
    Option(Sector.INFRASTRUCTURE.value, "Infrastructure"),
    Option(Sector.MACRO_MARKETS.value, "Macro & Markets"),
    Option(Sector.METAVERSE.value, "NFTs & Gaming"),
)

DEFAULT_TAGS_FOR_DOMAIN: Mapping[str, tuple[Tag, ...]] = MappingProxyType({
    "bloomberg.com": (Tag.NEWS,),
    "medium.com": (Tag.READS,),
    "spotify.com": (Tag.PODCAST,),
    "x.com": (Tag.TWEETS,),
    "youtube.com": (Tag.MEDIA,),
})


def option_label(options: tuple[Option, ...], slug: Optional[str]) -> str:
    """Return the human label for a slug, or an empty string."""
    for option in options:
        if option.slug == slug:
            return option.title
    return ""


@dataclass
class DraftItem:
    """Read item being assembled in a conversation."""

    title: str = ""
    link: str = ""
    description: str = ""
    image_url: str = ""
    sectors: list[Sector] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    @property
    def sector(self) -> Optional[Sector]:
        return self.sectors[0] if self.sectors else None

    @property
    def tag(self) -> Optional[Tag]:
        return self.tags[0] if self.tags else None

    def to_payload(self) -> dict:
        """Serialize into the list API's create-read body."""
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "image_url": self.image_url,
            "taxonomy": [sector.value for sector in self.sectors],
            "tags": [tag.value for tag in self.tags],
        }


@dataclass
class ConversationSession:
    """Per-chat conversation state."""

    state: SessionState = SessionState.NONE
    draft: DraftItem = field(default_factory=DraftItem)

    def reset(self) -> None:
        """Drop the draft and go back to rest."""
        self.state = SessionState.NONE
        self.draft = DraftItem()

    def to_dict(self) -> dict:
        return {"state": self.state.value, "draft": self.draft.to_payload()}


@dataclass
class UrlMetadata:
    """Preview data resolved for a link."""

    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    tags: list[Tag] = field(default_factory=list)


# =============================================================================
# Inbound events
# =============================================================================

@dataclass(frozen=True)
class Command:
    """Slash command such as /new or /publish."""

    name: str


@dataclass(frozen=True)
class Action:
    """Button press; payload carries the chosen slug for option menus."""

    name: str
    payload: Optional[str] = None


@dataclass(frozen=True)
class Text:
    """Free text message."""

    text: str


Event = Union[Command, Action, Text]


# =============================================================================
# Outbound replies
# =============================================================================

@dataclass(frozen=True)
class ReplyButton:
    """Button rendered under a reply."""

    label: str
    action: str
    payload: Optional[str] = None

    @property
    def callback_data(self) -> str:
        if self.payload is None:
            return self.action
        return f"{self.action}_{self.payload}"


@dataclass
class Reply:
    """Message to render back to the user."""

    text: str
    buttons: list[list[ReplyButton]] = field(default_factory=list)
    markdown: bool = False
