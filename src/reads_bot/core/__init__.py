"""Core domain layer."""

from reads_bot.core.drafts import (
    MAX_DESCRIPTION_LENGTH,
    apply_metadata,
    clean_description,
    is_complete,
    next_missing_field,
    truncate_description,
)
from reads_bot.core.entities import (
    DEFAULT_TAGS_FOR_DOMAIN,
    SECTOR_OPTIONS,
    TAG_OPTIONS,
    Action,
    Command,
    ConversationSession,
    DraftItem,
    Event,
    MissingField,
    Option,
    Reply,
    ReplyButton,
    Sector,
    SessionState,
    Tag,
    Text,
    UrlMetadata,
    option_label,
)
from reads_bot.core.errors import (
    ConfigurationError,
    DuplicateLinkError,
    MetadataUnavailableError,
    PublishError,
    ReadsBotError,
    StorageError,
    SummaryError,
    TransportError,
    UnauthorizedError,
    UnresolvedUrlError,
)
from reads_bot.core.interfaces import ChatTransport, ListStorage, MetadataService, SummaryService
from reads_bot.core.links import default_tags_for_url, looks_like_url, normalize_url

__all__ = [
    "Action",
    "ChatTransport",
    "Command",
    "ConfigurationError",
    "ConversationSession",
    "DEFAULT_TAGS_FOR_DOMAIN",
    "DraftItem",
    "DuplicateLinkError",
    "Event",
    "ListStorage",
    "MAX_DESCRIPTION_LENGTH",
    "MetadataService",
    "MetadataUnavailableError",
    "MissingField",
    "Option",
    "PublishError",
    "ReadsBotError",
    "Reply",
    "ReplyButton",
    "SECTOR_OPTIONS",
    "Sector",
    "SessionState",
    "StorageError",
    "SummaryError",
    "SummaryService",
    "TAG_OPTIONS",
    "Tag",
    "Text",
    "TransportError",
    "UnauthorizedError",
    "UnresolvedUrlError",
    "UrlMetadata",
    "apply_metadata",
    "clean_description",
    "default_tags_for_url",
    "is_complete",
    "looks_like_url",
    "next_missing_field",
    "normalize_url",
    "option_label",
    "truncate_description",
]
