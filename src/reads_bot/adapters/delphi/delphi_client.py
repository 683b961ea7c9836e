"""Delphi reading list API client."""

import logging
from typing import Optional

import httpx

from reads_bot.config import DelphiConfig
from reads_bot.core import (
    DraftItem,
    ListStorage,
    MetadataService,
    MetadataUnavailableError,
    StorageError,
    UrlMetadata,
)

logger = logging.getLogger(__name__)


class DelphiClient(MetadataService, ListStorage):
    """Link previews, recent list items and item creation over HTTP."""

    def __init__(self, config: DelphiConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.api_key = config.api_key
        self.reading_list_id = config.reading_list_id
        self.timeout = config.timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def fetch_metadata(self, link: str) -> UrlMetadata:
        """Fetch link preview data from the reads API."""
        url = self._url("/api/v1/reads/link-metadata")
        logger.info(f"Fetching metadata for {link}")

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url, params={"url": link})
            except httpx.HTTPError as e:
                raise MetadataUnavailableError(f"Metadata request failed for {link}: {e}") from e

        if response.status_code != 200:
            logger.info(f"Received {response.status_code} fetching url metadata for {link}")
            raise MetadataUnavailableError(f"Metadata service answered {response.status_code} for {link}")

        try:
            data = response.json()
        except ValueError as e:
            raise MetadataUnavailableError(f"Metadata response for {link} is not JSON") from e

        if not isinstance(data, dict):
            raise MetadataUnavailableError(f"Unexpected metadata payload for {link}")

        return UrlMetadata(
            title=data.get("title") or None,
            description=data.get("description") or None,
            image_url=data.get("image") or None,
        )

    async def recent_links(self, page_size: int) -> list[str]:
        """Links from the first page of the reading list."""
        url = self._url(f"/api/v1/lists/{self.reading_list_id}/items")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    params={"page": 1, "limit": page_size},
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as e:
                raise StorageError(f"Failed to list reading list items: {e}") from e
            except ValueError as e:
                raise StorageError("Reading list response is not JSON") from e

        try:
            return [item["link"] for item in data["data"] if item.get("link")]
        except (KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Unexpected reading list payload: {e}") from e

    async def create_item(self, draft: DraftItem, username: Optional[str]) -> int:
        """POST a read on behalf of a Telegram user; returns the status code."""
        url = self._url("/api/v1/bots/tg/create-read")
        payload = {**draft.to_payload(), "tg_username": username}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "x-api-key": self.api_key,
                    },
                )
            except httpx.HTTPError as e:
                raise StorageError(f"Failed to create read: {e}") from e

        logger.info(f"create-read for {draft.link} answered {response.status_code}")
        return response.status_code
