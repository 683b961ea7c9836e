"""Classify raw Telegram updates into conversation events."""

from dataclasses import dataclass
from typing import Optional

from reads_bot.core import Action, Command, Event, Text

OPTION_ACTIONS = ("setsector", "settype")


@dataclass
class IncomingUpdate:
    """A classified update ready for the state machine."""

    update_id: int
    chat_id: int
    event: Event
    username: Optional[str] = None
    callback_query_id: Optional[str] = None


def parse_callback_data(data: str) -> Action:
    """Split ``setsector_finance`` style data into action name and payload."""
    for name in OPTION_ACTIONS:
        prefix = f"{name}_"
        if data.startswith(prefix):
            return Action(name, data[len(prefix):])
    return Action(data)


def parse_command(text: str) -> Optional[Command]:
    """``/publish@reads_bot extra`` -> Command("publish")."""
    if not text.startswith("/"):
        return None
    name = text[1:].split(maxsplit=1)[0] if len(text) > 1 else ""
    name = name.split("@", 1)[0].lower()
    return Command(name) if name else None


def parse_update(update: dict) -> Optional[IncomingUpdate]:
    """Turn a Bot API update into an IncomingUpdate, or None if irrelevant."""
    update_id = update.get("update_id", 0)

    callback = update.get("callback_query")
    if callback:
        message = callback.get("message") or {}
        chat = message.get("chat") or {}
        if "id" not in chat:
            return None
        return IncomingUpdate(
            update_id=update_id,
            chat_id=chat["id"],
            event=parse_callback_data(callback.get("data") or ""),
            username=(callback.get("from") or {}).get("username"),
            callback_query_id=callback.get("id"),
        )

    message = update.get("message")
    if not message or "text" not in message:
        return None

    chat = message.get("chat") or {}
    if "id" not in chat:
        return None

    text = message["text"]
    event: Event = parse_command(text) or Text(text)
    return IncomingUpdate(
        update_id=update_id,
        chat_id=chat["id"],
        event=event,
        username=(message.get("from") or {}).get("username"),
    )
