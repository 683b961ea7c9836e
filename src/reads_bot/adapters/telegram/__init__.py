"""Telegram chat adapter."""

from reads_bot.adapters.telegram.telegram_client import TelegramClient
from reads_bot.adapters.telegram.updates import IncomingUpdate, parse_callback_data, parse_command, parse_update

__all__ = [
    "IncomingUpdate",
    "TelegramClient",
    "parse_callback_data",
    "parse_command",
    "parse_update",
]
