"""Delphi reading list adapter."""

from reads_bot.adapters.delphi.delphi_client import DelphiClient

__all__ = ["DelphiClient"]
