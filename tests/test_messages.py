"""Tests for message rendering."""

from reads_bot import messages
from reads_bot.core import ConversationSession, DraftItem, Sector, Tag


def test_escape_markdown() -> None:
    """Test MarkdownV2 special characters are escaped."""
    assert messages.escape_markdown("a_b*c") == r"a\_b\*c"
    assert messages.escape_markdown("v1.2 (beta)!") == r"v1\.2 \(beta\)\!"
    assert messages.escape_markdown("x-y, z") == r"x\-y\, z"


def test_escape_markdown_single_line_and_mentions() -> None:
    """Test newlines collapse and @ cannot ping anyone."""
    assert messages.escape_markdown("line one\n\nline  two") == "line one line two"
    assert "@" not in messages.escape_markdown("by @someone")


def test_option_menu_two_per_row() -> None:
    """Test sector menu layout and callback data."""
    menu = messages.sector_menu()

    assert menu.text == "Select a sector: "
    assert [len(row) for row in menu.buttons] == [2, 2, 1]
    assert menu.buttons[0][1].label == "DeFi"
    assert menu.buttons[0][1].callback_data == "setsector_finance"
    assert menu.buttons[1][1].callback_data == "setsector_macro-markets"


def test_tag_menu_order() -> None:
    """Test the type menu follows display order."""
    labels = [b.label for row in messages.tag_menu().buttons for b in row]
    assert labels == ["Reads", "Media", "Tweets", "News", "Podcast", "Other"]


def test_action_menu() -> None:
    """Test the builder menu offers every draft command."""
    menu = messages.action_menu()
    data = [b.callback_data for row in menu.buttons for b in row]

    assert menu.text == messages.MENU_PROMPT
    assert data == ["settitle", "setdescription", "settype", "setsector", "new", "help", "publish"]


def test_preview_text() -> None:
    """Test the preview shows labels, not slugs, and escapes user text."""
    session = ConversationSession(draft=DraftItem(
        title="Rates.",
        link="https://bloomberg.com/a",
        description="",
        sectors=[Sector.MACRO_MARKETS],
        tags=[Tag.NEWS],
    ))

    text = messages.preview_text(session)

    assert r"Rates\." in text
    assert "Macro & Markets" in text
    assert "News" in text
    assert "macro-markets" not in text


def test_preview_replies() -> None:
    """Test the preview is markdown followed by the action menu."""
    replies = messages.preview_replies(ConversationSession())

    assert replies[0].markdown
    assert replies[1].text == messages.MENU_PROMPT


def test_escape_code() -> None:
    """Test backslash and backtick are escaped inside pre blocks."""
    assert messages.escape_code("a`b") == "a\\`b"
    assert messages.escape_code('"x\\"y"') == '"x\\\\"y"'
    assert messages.escape_code("plain *text*_") == "plain *text*_"


def test_state_text_survives_backticks_and_quotes() -> None:
    """Test the debug dump keeps the code block intact for odd titles."""
    session = ConversationSession(draft=DraftItem(title='a`b"c'))

    text = messages.state_text(session)

    assert text.startswith("```\n")
    assert text.endswith("\n```")
    assert r'"title": "a\`b\\\"c"' in text
    assert text.count("```") == 2
