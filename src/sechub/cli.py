"""Command-line interface for the SecHub content extractor."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sechub import __version__
from sechub.config.config import Config, load_config
from sechub.extractor.models import ExtractionResult
from sechub.observability import configure_logging
from sechub.service import ContentExtractorService
from sechub.web.main import create_app

console = Console()
logger = structlog.get_logger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """SecHub - full-text extraction for cybersecurity news."""
    ctx.ensure_object(dict)
    try:
        settings = load_config(Path(config) if config else None)
    except RuntimeError as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)

    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)
    ctx.obj["config"] = settings


async def _extract_once(config: Config, url: str, article_id: str) -> ExtractionResult:
    async with ContentExtractorService(config) as service:
        return await service.extract_full_content(url, article_id)


@cli.command()
@click.argument("url")
@click.option("--article-id", default="cli", help="Identifier used for log correlation")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON")
@click.pass_context
def extract(ctx: click.Context, url: str, article_id: str, as_json: bool) -> None:
    """Extract the full article text of URL."""
    config: Config = ctx.obj["config"]
    result = asyncio.run(_extract_once(config, url, article_id))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        console.print(Panel(result.content, title=result.title or url, subtitle=f"{len(result.content)} chars"))
    else:
        console.print(f"[red]❌ {result.error}[/red]")

    if not result.success:
        sys.exit(1)


@cli.command()
@click.pass_context
def domains(ctx: click.Context) -> None:
    """List the domains content may be fetched from."""
    config: Config = ctx.obj["config"]
    table = Table(title="Allowed Domains")
    table.add_column("Domain", style="cyan")
    table.add_column("Subdomains", style="green")
    for domain in config.extraction.allowed_domains:
        table.add_row(domain, f"*.{domain}")
    console.print(table)


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Start the content extraction API."""
    config: Config = ctx.obj["config"]
    host = host or config.web.host
    port = port or config.web.port
    console.print(f"[green]🚀 Starting content extraction API at http://{host}:{port}[/green]")

    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=config.monitoring.log_level.lower(),
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
