"""Shared test fixtures."""

from typing import Optional
from unittest.mock import AsyncMock

import pytest

from reads_bot.conversation import ConversationStateMachine
from reads_bot.core import (
    DraftItem,
    ListStorage,
    MetadataService,
    MetadataUnavailableError,
    SummaryService,
    UrlMetadata,
)
from reads_bot.use_cases import DuplicateGuard, MetadataResolver, Publisher


class InMemoryListStorage(ListStorage):
    """Reading list backed by a Python list, newest first."""

    def __init__(self, links: Optional[list[str]] = None, create_status: int = 201) -> None:
        self.links = list(links or [])
        self.create_status = create_status
        self.created: list[tuple[dict, Optional[str]]] = []
        self.page_sizes: list[int] = []

    async def recent_links(self, page_size: int) -> list[str]:
        self.page_sizes.append(page_size)
        return self.links[:page_size]

    async def create_item(self, draft: DraftItem, username: Optional[str]) -> int:
        self.created.append((draft.to_payload(), username))
        if self.create_status in (200, 201):
            self.links.insert(0, draft.link)
        return self.create_status


@pytest.fixture
def storage() -> InMemoryListStorage:
    return InMemoryListStorage()


@pytest.fixture
def metadata_service() -> AsyncMock:
    """Preview service that finds a description but no title."""
    service = AsyncMock(spec=MetadataService)
    service.fetch_metadata.return_value = UrlMetadata(
        description="Markets rallied on Tuesday.",
        image_url="https://cdn.example.com/a.png",
    )
    return service


@pytest.fixture
def summary_service() -> AsyncMock:
    service = AsyncMock(spec=SummaryService)
    service.generate_summary.return_value = "An AI written summary."
    return service


@pytest.fixture
def resolver(
    metadata_service: AsyncMock, summary_service: AsyncMock, storage: InMemoryListStorage
) -> MetadataResolver:
    return MetadataResolver(
        metadata_service=metadata_service,
        summary_service=summary_service,
        duplicate_guard=DuplicateGuard(storage, page_size=50),
    )


@pytest.fixture
def machine(resolver: MetadataResolver, storage: InMemoryListStorage) -> ConversationStateMachine:
    return ConversationStateMachine(
        resolver=resolver,
        publisher=Publisher(storage),
        help_text="ask engineering",
    )


@pytest.fixture
def unavailable_metadata(metadata_service: AsyncMock) -> AsyncMock:
    """Preview service that never finds anything."""
    metadata_service.fetch_metadata.side_effect = MetadataUnavailableError("404")
    return metadata_service
