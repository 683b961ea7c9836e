"""Telegram bot for curating reads into the Delphi reading list."""

__version__ = "0.1.0"
