"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from reads_bot.core.entities import DraftItem, Reply, UrlMetadata


class MetadataService(ABC):
    """Interface for link preview lookups."""

    @abstractmethod
    async def fetch_metadata(self, link: str) -> UrlMetadata:
        """Fetch title/description/image for a link.

        Raises:
            MetadataUnavailableError: on not-found, non-2xx or network errors.
        """
        pass


class SummaryService(ABC):
    """Interface for LLM-generated link summaries."""

    @abstractmethod
    async def generate_summary(self, link: str) -> str:
        """Summarize the page behind a link.

        Raises:
            SummaryError: when the completion service fails.
        """
        pass


class ListStorage(ABC):
    """Interface for the reading list backend."""

    @abstractmethod
    async def recent_links(self, page_size: int) -> list[str]:
        """Links of the most recent list items, newest first."""
        pass

    @abstractmethod
    async def create_item(self, draft: DraftItem, username: Optional[str]) -> int:
        """Submit a draft and return the backend's HTTP status code.

        Raises:
            StorageError: when the backend cannot be reached.
        """
        pass


class ChatTransport(ABC):
    """Interface for rendering replies back to a chat."""

    @abstractmethod
    async def send_replies(self, chat_id: int, replies: list[Reply]) -> None:
        """Send replies to the chat, preserving order."""
        pass
