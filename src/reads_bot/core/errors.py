"""Exception hierarchy for the reads bot.

Domain outcomes (duplicate link, unauthorized, unresolved url, unknown publish
failure) are raised by the use cases and translated into chat replies by the
conversation state machine. Collaborator errors are raised by the adapters.
"""


class ReadsBotError(Exception):
    """Base exception for all reads bot errors."""
    pass


class ConfigurationError(ReadsBotError):
    """Raised when required settings are missing or invalid."""
    pass


# =============================================================================
# Domain outcomes
# =============================================================================

class DuplicateLinkError(ReadsBotError):
    """Raised when a link is already present in the reading list."""

    def __init__(self, link: str) -> None:
        super().__init__(f"Link already in reading list: {link}")
        self.link = link


class UnresolvedUrlError(ReadsBotError):
    """Raised when neither metadata nor a summary could be fetched for a link."""

    def __init__(self, link: str) -> None:
        super().__init__(f"Could not resolve url: {link}")
        self.link = link


class UnauthorizedError(ReadsBotError):
    """Raised when the list API rejects the submitter."""
    pass


class PublishError(ReadsBotError):
    """Raised when publishing fails for any other reason."""
    pass


# =============================================================================
# Collaborator errors
# =============================================================================

class MetadataUnavailableError(ReadsBotError):
    """Raised when the link preview service has nothing for a link."""
    pass


class SummaryError(ReadsBotError):
    """Raised when the completion service cannot summarize a link."""
    pass


class StorageError(ReadsBotError):
    """Raised when the list API cannot be reached or answers garbage."""
    pass


class TransportError(ReadsBotError):
    """Raised when the chat platform API call fails."""
    pass
