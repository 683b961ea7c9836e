"""Draft completeness rules and field helpers."""

from reads_bot.core.entities import DraftItem, MissingField, UrlMetadata

MAX_DESCRIPTION_LENGTH = 500
ELLIPSIS = "..."
NO_DESCRIPTION = "none"


def next_missing_field(draft: DraftItem) -> MissingField:
    """Return the next field to ask for, checked as title, sector, tag."""
    if not draft.title:
        return MissingField.TITLE
    if not draft.sectors:
        return MissingField.SECTOR
    if not draft.tags:
        return MissingField.TAG
    return MissingField.NONE


def is_complete(draft: DraftItem) -> bool:
    return next_missing_field(draft) is MissingField.NONE


def truncate_description(text: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Cut text longer than ``limit`` so that it ends in an ellipsis and fits exactly."""
    if len(text) <= limit:
        return text
    return text[:limit - len(ELLIPSIS)] + ELLIPSIS


def clean_description(text: str) -> str:
    """Map user input to a stored description ("none" clears it)."""
    if text == NO_DESCRIPTION:
        return ""
    return truncate_description(text)


def apply_metadata(draft: DraftItem, metadata: UrlMetadata) -> None:
    """Fill a fresh draft from resolved link metadata."""
    draft.title = metadata.title or ""
    draft.description = truncate_description(metadata.description or "")
    draft.image_url = metadata.image_url or ""
    draft.tags = list(metadata.tags)
