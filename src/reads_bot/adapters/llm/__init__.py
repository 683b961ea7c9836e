"""LLM adapters."""

from reads_bot.adapters.llm.claude_client import ClaudeClient

__all__ = ["ClaudeClient"]
