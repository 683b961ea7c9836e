"""User-facing texts and menus."""

import json
import re

from reads_bot.core import (
    SECTOR_OPTIONS,
    TAG_OPTIONS,
    ConversationSession,
    Option,
    Reply,
    ReplyButton,
    option_label,
)

ASK_URL = "what url do you want to post?"
ASK_TITLE = "what title do you want?"
ASK_DESCRIPTION = 'what description do you want? type "none" for no description'
FETCHING = "fetching that url, hang on a sec..."
LINK_REQUIRED = "please send a link first"
PASTE_URL = "paste a url to get started"
DESCRIPTION_TOO_LONG = "sorry, that description is too long"
RESOLVE_DUPLICATE = "Oops, this url was recently added already"
RESOLVE_FAILED = "sorry, I could not fetch that url"
RESOLVE_ERROR = "sorry, something went wrong fetching that url"
UNKNOWN_OPTION = "sorry, I don't know that option"
PUBLISHING = "Attempting to publish..."
PUBLISHED = "Item has been published. Paste another URL to start over."
PUBLISH_UNAUTHORIZED = "Unauthorized: reach out to engineering for assistance."
PUBLISH_DUPLICATE = "Oops, this item was already added recently."
PUBLISH_FAILED = "Oops, something went wrong - try to /publish again or start over with /new"
MENU_PROMPT = "What would you like to do?"

_MARKDOWN_SPECIAL = re.compile(r"([\\_*\[\]()~`>#+\-=|{}.!,])")


def escape_markdown(text: str) -> str:
    """Make free text safe for Telegram MarkdownV2 on a single line."""
    text = _MARKDOWN_SPECIAL.sub(r"\\\1", text)
    text = re.sub(r"\s+", " ", text)
    # Avoid accidental mentions
    return text.replace("@", "＠")


def escape_code(text: str) -> str:
    """Escape text for a MarkdownV2 pre block, where only \\ and ` are special."""
    return text.replace("\\", "\\\\").replace("`", "\\`")


def state_text(session: ConversationSession) -> str:
    dump = json.dumps(session.to_dict(), indent=2)
    return f"```\n{escape_code(dump)}\n```"


def preview_text(session: ConversationSession) -> str:
    draft = session.draft
    sector = option_label(SECTOR_OPTIONS, draft.sector.value if draft.sector else None)
    tag = option_label(TAG_OPTIONS, draft.tag.value if draft.tag else None)

    return (
        "here is what we've got so far:\n"
        f"\n__*Title*__\n{escape_markdown(draft.title)}\n"
        f"\n__*Description*__\n{escape_markdown(draft.description)}\n"
        f"\n__*Sector*__\n{escape_markdown(sector)}\n"
        f"\n__*Type*__\n{escape_markdown(tag)}\n"
    )


def preview_replies(session: ConversationSession) -> list[Reply]:
    return [Reply(preview_text(session), markdown=True), action_menu()]


def action_menu() -> Reply:
    buttons = [
        [ReplyButton("Set Title", "settitle"), ReplyButton("Set Description", "setdescription")],
        [ReplyButton("Set Type", "settype"), ReplyButton("Set Sector", "setsector")],
        [ReplyButton("Start Over", "new"), ReplyButton("Help", "help")],
        [ReplyButton("Publish It!", "publish")],
    ]
    return Reply(MENU_PROMPT, buttons=buttons)


def option_menu(options: tuple[Option, ...], action: str, noun: str) -> Reply:
    """Two options per row, each button carrying its slug as payload."""
    rows = []
    for i in range(0, len(options), 2):
        rows.append([ReplyButton(o.title, action, o.slug) for o in options[i:i + 2]])
    return Reply(f"Select a {noun}: ", buttons=rows)


def sector_menu() -> Reply:
    return option_menu(SECTOR_OPTIONS, "setsector", "sector")


def tag_menu() -> Reply:
    return option_menu(TAG_OPTIONS, "settype", "type")
