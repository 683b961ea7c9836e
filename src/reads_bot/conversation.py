"""Per-chat conversation state machine.

Each chat walks through: link -> (metadata lookup) -> title -> sector -> type
-> preview -> publish. Sessions live in memory for the lifetime of the
process; events for one session must not be handled concurrently.
"""

import logging
from typing import Awaitable, Callable, Optional

from reads_bot import messages
from reads_bot.core import (
    Action,
    Command,
    ConversationSession,
    DuplicateLinkError,
    Event,
    MAX_DESCRIPTION_LENGTH,
    MissingField,
    PublishError,
    ReadsBotError,
    Reply,
    Sector,
    SessionState,
    Tag,
    Text,
    UnauthorizedError,
    UnresolvedUrlError,
    apply_metadata,
    clean_description,
    looks_like_url,
    next_missing_field,
    normalize_url,
)
from reads_bot.use_cases import MetadataResolver, Publisher

logger = logging.getLogger(__name__)

Handler = Callable[[ConversationSession, list[Reply], Optional[str]], Awaitable[None]]

STATE_COMMAND = "state"


class ConversationStateMachine:
    """Map (session state, event) to replies and the next state."""

    def __init__(
        self,
        resolver: MetadataResolver,
        publisher: Publisher,
        help_text: str = "",
        reject_long_descriptions: bool = False,
    ) -> None:
        self.resolver = resolver
        self.publisher = publisher
        self.help_text = help_text
        self.reject_long_descriptions = reject_long_descriptions
        self.sessions: dict[str, ConversationSession] = {}

        self._handlers: dict[str, Handler] = {
            "new": self._handle_new,
            "publish": self._handle_publish,
            "help": self._handle_help,
            "preview": self._handle_preview,
            "settitle": self._handle_set_title,
            "setdescription": self._handle_set_description,
            "settype": self._handle_set_tag,
            "setsector": self._handle_set_sector,
        }

    def get_session(self, session_id: str) -> ConversationSession:
        """Return the session for a chat, creating it on first contact."""
        if session_id not in self.sessions:
            self.sessions[session_id] = ConversationSession()
        return self.sessions[session_id]

    async def handle_event(
        self, session_id: str, event: Event, username: Optional[str] = None
    ) -> list[Reply]:
        """Process one inbound event to completion.

        Returns:
            Replies to render, in order.
        """
        session = self.get_session(session_id)
        replies: list[Reply] = []
        previous = session.state

        if isinstance(event, Text):
            await self._on_text(session, event.text, replies)
        elif isinstance(event, Action) and event.payload is not None and event.name in ("setsector", "settype"):
            await self._on_option(session, event, replies)
        elif isinstance(event, (Command, Action)):
            handler = self._handlers.get(event.name)
            if handler is None:
                replies.append(Reply(messages.PASTE_URL))
            else:
                await handler(session, replies, username)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

        logger.debug(f"[{session_id}] {event!r}: {previous.value} -> {session.state.value}")
        return replies

    # -------------------------------------------------------------------------
    # Inbound dispatch
    # -------------------------------------------------------------------------

    async def _on_text(self, session: ConversationSession, text: str, replies: list[Reply]) -> None:
        if text.strip() == STATE_COMMAND:
            replies.append(Reply(messages.state_text(session), markdown=True))
            return

        # A pasted link always starts over, whatever we were waiting for
        if looks_like_url(text) or session.state is SessionState.AWAITING_URL:
            await self._update_url(session, text, replies)
        elif session.state is SessionState.AWAITING_DESCRIPTION:
            self._update_description(session, text, replies)
        elif session.state is SessionState.AWAITING_TITLE:
            session.draft.title = text
            self._enter_building(session, replies)
        else:
            replies.append(Reply(messages.PASTE_URL))

    async def _on_option(self, session: ConversationSession, event: Action, replies: list[Reply]) -> None:
        if not self._ensure_link(session, replies):
            return

        try:
            if event.name == "setsector":
                session.draft.sectors = [Sector(event.payload)]
            else:
                session.draft.tags = [Tag(event.payload)]
        except ValueError:
            logger.warning(f"Unknown {event.name} option: {event.payload!r}")
            replies.append(Reply(messages.UNKNOWN_OPTION))
            replies.append(messages.sector_menu() if event.name == "setsector" else messages.tag_menu())
            return

        self._enter_building(session, replies)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _start_new(self, session: ConversationSession, replies: list[Reply]) -> None:
        session.reset()
        session.state = SessionState.AWAITING_URL
        replies.append(Reply(messages.ASK_URL))

    def _enter_building(self, session: ConversationSession, replies: list[Reply]) -> None:
        """Ask for whatever is still missing, or show the preview."""
        session.state = SessionState.BUILDING
        missing = next_missing_field(session.draft)

        if missing is MissingField.TITLE:
            session.state = SessionState.AWAITING_TITLE
            replies.append(Reply(messages.ASK_TITLE))
        elif missing is MissingField.SECTOR:
            replies.append(messages.sector_menu())
        elif missing is MissingField.TAG:
            replies.append(messages.tag_menu())
        else:
            replies.extend(messages.preview_replies(session))

    def _ensure_link(self, session: ConversationSession, replies: list[Reply]) -> bool:
        if not session.draft.link:
            replies.append(Reply(messages.LINK_REQUIRED))
            return False
        return True

    async def _update_url(self, session: ConversationSession, text: str, replies: list[Reply]) -> None:
        session.reset()
        replies.append(Reply(messages.FETCHING))

        link = normalize_url(text)
        session.draft.link = link

        try:
            metadata = await self.resolver.resolve(link)
        except DuplicateLinkError:
            replies.append(Reply(messages.RESOLVE_DUPLICATE))
            session.reset()
            return
        except UnresolvedUrlError:
            replies.append(Reply(messages.RESOLVE_FAILED))
            self._start_new(session, replies)
            return
        except ReadsBotError as e:
            logger.error(f"Unexpected failure resolving {link}: {e}", exc_info=True)
            replies.append(Reply(messages.RESOLVE_ERROR))
            self._start_new(session, replies)
            return

        apply_metadata(session.draft, metadata)
        self._enter_building(session, replies)

    def _update_description(self, session: ConversationSession, text: str, replies: list[Reply]) -> None:
        if self.reject_long_descriptions and len(text) > MAX_DESCRIPTION_LENGTH:
            replies.append(Reply(messages.DESCRIPTION_TOO_LONG))
            replies.append(Reply(messages.ASK_DESCRIPTION))
            return

        session.draft.description = clean_description(text)
        self._enter_building(session, replies)

    # -------------------------------------------------------------------------
    # Command / action handlers
    # -------------------------------------------------------------------------

    async def _handle_new(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        self._start_new(session, replies)

    async def _handle_publish(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if not self._ensure_link(session, replies):
            return

        replies.append(Reply(messages.PUBLISHING))

        try:
            await self.publisher.publish(session.draft, username)
        except UnauthorizedError as e:
            logger.warning(f"Publish unauthorized: {e}")
            replies.append(Reply(messages.PUBLISH_UNAUTHORIZED))
        except DuplicateLinkError:
            replies.append(Reply(messages.PUBLISH_DUPLICATE))
            session.reset()
        except PublishError as e:
            logger.error(f"Publish failed for {session.draft.link}: {e}")
            replies.append(Reply(messages.PUBLISH_FAILED))
        else:
            session.reset()
            replies.append(Reply(messages.PUBLISHED))

    async def _handle_help(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            replies.append(Reply(self.help_text))

    async def _handle_preview(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            replies.extend(messages.preview_replies(session))

    async def _handle_set_title(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            session.state = SessionState.AWAITING_TITLE
            replies.append(Reply(messages.ASK_TITLE))

    async def _handle_set_description(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            session.state = SessionState.AWAITING_DESCRIPTION
            replies.append(Reply(messages.ASK_DESCRIPTION))

    async def _handle_set_tag(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            replies.append(messages.tag_menu())

    async def _handle_set_sector(self, session: ConversationSession, replies: list[Reply], username: Optional[str]) -> None:
        if self._ensure_link(session, replies):
            replies.append(messages.sector_menu())
