"""Command line interface for Content Publisher."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from content_publisher.core.config import DEFAULT_SETTINGS_FILE, load_settings
from content_publisher.core.models import PublisherError
from content_publisher.core.publisher import PublishOrchestrator

app = typer.Typer(name="content-publisher", help="Publish vault notes to a content folder.")

ConfigOption = typer.Option(Path(DEFAULT_SETTINGS_FILE), "--config", "-c", help="Settings file (YAML).")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _orchestrator(config: Path) -> PublishOrchestrator:
    try:
        settings = load_settings(config)
    except PublisherError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    setup_logging(settings.log_level)
    return PublishOrchestrator(settings)


@app.command()
def validate(config: Path = ConfigOption):
    """Validate the destination content folder."""
    _orchestrator(config).validate_path(notice_valid=True)


@app.command()
def publish(note: str = typer.Argument(..., help="Vault-relative or absolute path of the note."), config: Path = ConfigOption):
    """Publish a single note."""
    orchestrator = _orchestrator(config)
    try:
        asyncio.run(orchestrator.publish_note(note))
    finally:
        orchestrator.close()


@app.command("publish-all")
def publish_all(config: Path = ConfigOption):
    """Publish every note under the source folder."""
    orchestrator = _orchestrator(config)
    try:
        asyncio.run(orchestrator.publish_all())
    finally:
        orchestrator.close()


if __name__ == "__main__":
    app()
