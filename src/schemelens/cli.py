"""Command-line interface for SchemeLens."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Any, Dict, Optional

import click
import structlog
from rich.console import Console

from schemelens import __version__
from schemelens.config import Config, load_config
from schemelens.extractor import SchemeExtractor, detect_spa_shell, redact_pii, redact_record
from schemelens.extractor.models import ERROR_SPA_SHELL, ErrorRecord
from schemelens.extractor.spa import SPA_SHELL_MESSAGE
from schemelens.observability import configure_logging

logger = structlog.get_logger(__name__)

SPA_SNIPPET_LENGTH = 400


def _print_json(payload: Dict[str, Any]) -> None:
    # Bound at call time so redirected stdout is honored
    Console().print_json(data=payload)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """SchemeLens - eligibility, documents and apply links from scheme pages."""
    ctx.ensure_object(dict)
    try:
        loaded = load_config(Path(config) if config else None)
    except Exception as e:
        Console(stderr=True).print(f"[red]Configuration error: {e}[/red]")
        sys.exit(2)

    if log_level:
        loaded = loaded.model_copy(
            update={"monitoring": loaded.monitoring.model_copy(update={"log_level": log_level.upper()})}
        )
    configure_logging(loaded.monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--url", "source_url", default=None, help="Page URL, used to resolve relative links")
@click.option(
    "--readability/--no-readability",
    "use_readability",
    default=None,
    help="Run the readability article pass (defaults to the configured value)",
)
@click.option("--check-spa", is_flag=True, help="Report single-page-app shells instead of extracting")
@click.pass_context
def extract(
    ctx: click.Context,
    source: IO[str],
    source_url: Optional[str],
    use_readability: Optional[bool],
    check_spa: bool,
) -> None:
    """Extract a record from saved page HTML (a file path, or - for stdin)."""
    config: Config = ctx.obj["config"]
    html = source.read()

    settings = config.extraction
    if use_readability is not None:
        settings = settings.model_copy(update={"use_readability": use_readability})

    structlog.contextvars.bind_contextvars(source_url=source_url)
    try:
        if check_spa and detect_spa_shell(html):
            logger.warning("SPA shell detected", length=len(html))
            record = ErrorRecord(
                error=ERROR_SPA_SHELL,
                message=SPA_SHELL_MESSAGE,
                details={"source_url": source_url, "html_snippet": redact_pii(html[:SPA_SNIPPET_LENGTH])},
            )
        else:
            extractor = SchemeExtractor(settings=settings, keywords=config.keywords)
            record = redact_record(extractor.extract(html, source_url=source_url))
    finally:
        structlog.contextvars.unbind_contextvars("source_url")

    _print_json(record.to_dict())
    if isinstance(record, ErrorRecord):
        sys.exit(1)


@cli.command()
@click.pass_context
def keywords(ctx: click.Context) -> None:
    """Show the active keyword configuration."""
    config: Config = ctx.obj["config"]
    _print_json(config.keywords.model_dump(mode="json"))


def main() -> None:
    """Main entry point for the CLI."""
    cli()
