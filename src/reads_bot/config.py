"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from reads_bot.core.errors import ConfigurationError

DEFAULT_HELP_TEXT = """
For questions or feedback, please post in the Delphi Engineering telegram channel:

[ENGINEERING] Delphi Engineering
"""


@dataclass
class DelphiConfig:
    """Reading list API settings."""
    base_url: str = ""
    api_key: str = ""
    reading_list_id: str = ""
    duplicate_page_size: int = 50
    timeout: float = 30.0


@dataclass
class ClaudeConfig:
    """Claude API settings for link summaries."""
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 1024
    temperature: float = 0.4
    max_retries: int = 3
    initial_retry_delay: float = 2.0
    request_delay: float = 0.5


@dataclass
class BotConfig:
    """Telegram bot settings."""
    token: str = ""
    poll_timeout: int = 30
    help_text: str = DEFAULT_HELP_TEXT
    reject_long_descriptions: bool = False


@dataclass
class PromptsConfig:
    """Prompts for LLM."""
    summary: dict = field(default_factory=lambda: {
        "system": "You are a helpful assistant.",
        "user": "Can you help create a 500 word general summary of the following url? {url}",
    })


@dataclass
class Settings:
    """Application settings."""

    # API Keys (from environment only)
    anthropic_api_key: str = ""

    # Config sections
    delphi: DelphiConfig = field(default_factory=DelphiConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    bot: BotConfig = field(default_factory=BotConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""))

    # Apply YAML config
    for section in ("delphi", "claude", "bot"):
        for key, value in config.get(section, {}).items():
            target = getattr(settings, section)
            if not hasattr(target, key):
                raise ConfigurationError(f"Unknown setting: {section}.{key}")
            setattr(target, key, value)

    if "prompts" in config:
        settings.prompts = PromptsConfig(**config["prompts"])

    # Secrets from environment win over the file
    env_overrides = [
        (settings.delphi, "base_url", "DELPHI_API_BASE_URL"),
        (settings.delphi, "api_key", "DELPHI_READS_API_KEY"),
        (settings.delphi, "reading_list_id", "DELPHI_READS_READING_LIST_ID"),
        (settings.bot, "token", "DELPHI_READS_BOT_TOKEN"),
    ]
    for target, attr, env_var in env_overrides:
        value = os.getenv(env_var)
        if value:
            setattr(target, attr, value)

    settings.delphi.base_url = settings.delphi.base_url.rstrip("/")

    return settings


def validate_settings(settings: Settings) -> None:
    """Check that every required setting is present.

    Raises:
        ConfigurationError: listing all missing or invalid values at once.
    """
    errors = []

    required = [
        ("DELPHI_API_BASE_URL", settings.delphi.base_url),
        ("DELPHI_READS_API_KEY", settings.delphi.api_key),
        ("DELPHI_READS_READING_LIST_ID", settings.delphi.reading_list_id),
        ("DELPHI_READS_BOT_TOKEN", settings.bot.token),
        ("ANTHROPIC_API_KEY", settings.anthropic_api_key),
    ]
    for name, value in required:
        if not value:
            errors.append(f"Missing required setting: {name}")

    if settings.delphi.duplicate_page_size < 1:
        errors.append(f"delphi.duplicate_page_size must be positive, got {settings.delphi.duplicate_page_size}")

    if settings.bot.poll_timeout < 0:
        errors.append(f"bot.poll_timeout must not be negative, got {settings.bot.poll_timeout}")

    if errors:
        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


def mask(secret: Optional[str], visible: int = 4) -> str:
    """Hide all but the last few characters of a secret."""
    if not secret:
        return ""
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]


def config_summary(settings: Settings) -> dict:
    """Settings overview safe for logs."""
    return {
        "delphi_api_base_url": settings.delphi.base_url,
        "reading_list_id": settings.delphi.reading_list_id,
        "duplicate_page_size": settings.delphi.duplicate_page_size,
        "delphi_reads_api_key": mask(settings.delphi.api_key),
        "bot_token": mask(settings.bot.token),
        "anthropic_api_key": mask(settings.anthropic_api_key),
        "claude_model": settings.claude.model,
    }
