"""CLI entry point for the reads bot."""

import asyncio
import logging
from pathlib import Path

import typer

from reads_bot.adapters.delphi import DelphiClient
from reads_bot.adapters.llm import ClaudeClient
from reads_bot.adapters.telegram import TelegramClient
from reads_bot.config import Settings, config_summary, get_settings, validate_settings
from reads_bot.conversation import ConversationStateMachine
from reads_bot.core import ConfigurationError
from reads_bot.logger import setup_logging
from reads_bot.runner import PollingRunner
from reads_bot.use_cases import DuplicateGuard, MetadataResolver, Publisher

logger = logging.getLogger("reads_bot.cli")

cli = typer.Typer(help="Telegram bot for submitting reads to the Delphi reading list.")


def build_runner(settings: Settings) -> PollingRunner:
    """Wire adapters, use cases and the state machine together."""
    delphi = DelphiClient(settings.delphi)
    resolver = MetadataResolver(
        metadata_service=delphi,
        summary_service=ClaudeClient(settings),
        duplicate_guard=DuplicateGuard(delphi, page_size=settings.delphi.duplicate_page_size),
    )
    machine = ConversationStateMachine(
        resolver=resolver,
        publisher=Publisher(delphi),
        help_text=settings.bot.help_text,
        reject_long_descriptions=settings.bot.reject_long_descriptions,
    )
    return PollingRunner(
        client=TelegramClient(settings.bot.token),
        machine=machine,
        poll_timeout=settings.bot.poll_timeout,
    )


def _load(config: Path) -> Settings:
    try:
        settings = get_settings(config)
        validate_settings(settings)
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    return settings


@cli.command()
def run(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    log_level: str = typer.Option("INFO", "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """Start the bot and poll Telegram for updates."""
    setup_logging(getattr(logging, log_level.upper(), logging.INFO))
    settings = _load(config)

    logger.info(f"Configuration: {config_summary(settings)}")

    try:
        asyncio.run(build_runner(settings).run())
    except KeyboardInterrupt:
        logger.info("Stopped")


@cli.command("check-config")
def check_config(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Validate settings and print them with secrets masked."""
    settings = _load(config)
    for key, value in config_summary(settings).items():
        typer.echo(f"{key}: {value}")


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
