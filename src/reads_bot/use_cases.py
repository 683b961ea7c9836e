"""Business logic use cases."""

import logging
from typing import Optional

from reads_bot.core import (
    DraftItem,
    DuplicateLinkError,
    ListStorage,
    MetadataService,
    MetadataUnavailableError,
    PublishError,
    StorageError,
    SummaryError,
    SummaryService,
    UnauthorizedError,
    UnresolvedUrlError,
    UrlMetadata,
    default_tags_for_url,
    truncate_description,
)

logger = logging.getLogger(__name__)


class DuplicateGuard:
    """Check links against the most recent page of the reading list.

    Only ``page_size`` items are inspected, so older duplicates slip through;
    the list API rejects those at publish time with a conflict.
    """

    def __init__(self, storage: ListStorage, page_size: int = 50) -> None:
        self.storage = storage
        self.page_size = page_size

    async def is_duplicate(self, link: str) -> bool:
        links = await self.storage.recent_links(self.page_size)
        duplicate = link in links
        if duplicate:
            logger.info(f"Duplicate link among last {self.page_size} items: {link}")
        return duplicate


class MetadataResolver:
    """Resolve a normalized link into draft fields.

    Chain: link preview service, then an LLM summary. The summary step only
    runs when the preview step fails with a recoverable error.
    """

    def __init__(
        self,
        metadata_service: MetadataService,
        summary_service: SummaryService,
        duplicate_guard: DuplicateGuard,
    ) -> None:
        self.metadata_service = metadata_service
        self.summary_service = summary_service
        self.duplicate_guard = duplicate_guard

    async def resolve(self, link: str) -> UrlMetadata:
        """Resolve metadata for a link.

        Raises:
            DuplicateLinkError: the link was recently added to the list.
            UnresolvedUrlError: preview and summary both failed.
        """
        try:
            metadata = await self._fetch_preview(link)
        except (MetadataUnavailableError, StorageError) as e:
            logger.warning(f"Preview unavailable for {link}, falling back to summary: {e}")
            metadata = await self._fetch_summary(link)

        metadata.description = truncate_description(metadata.description or "")
        metadata.tags = default_tags_for_url(link)
        return metadata

    async def _fetch_preview(self, link: str) -> UrlMetadata:
        metadata = await self.metadata_service.fetch_metadata(link)

        if await self.duplicate_guard.is_duplicate(link):
            raise DuplicateLinkError(link)

        return metadata

    async def _fetch_summary(self, link: str) -> UrlMetadata:
        try:
            summary = await self.summary_service.generate_summary(link)
        except SummaryError as e:
            logger.error(f"Summary fallback failed for {link}: {e}")
            raise UnresolvedUrlError(link) from e

        return UrlMetadata(description=summary)


class Publisher:
    """Submit finished drafts to the reading list."""

    def __init__(self, storage: ListStorage) -> None:
        self.storage = storage

    async def publish(self, draft: DraftItem, username: Optional[str]) -> None:
        """Publish a draft on behalf of a chat user.

        Raises:
            UnauthorizedError: the API rejected the submitter (403/401).
            DuplicateLinkError: the API already has this link (409).
            PublishError: anything else, including transport failures.
        """
        try:
            status = await self.storage.create_item(draft, username)
        except StorageError as e:
            raise PublishError(str(e)) from e

        if status in (401, 403):
            raise UnauthorizedError(f"List API refused submitter {username!r} ({status})")
        if status == 409:
            raise DuplicateLinkError(draft.link)
        if status < 200 or status > 201:
            raise PublishError(f"List API answered {status}")

        logger.info(f"Published {draft.link} for {username}")
