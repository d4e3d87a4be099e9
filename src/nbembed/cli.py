"""Command-line interface for nbembed."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from nbembed import ConfigurationError, __version__
from nbembed.cache import NotebookCache, cache_key
from nbembed.config import EmbedConfig, load_config
from nbembed.embedder import NotebookEmbedder

console = Console()


def setup_logging(verbose: bool) -> None:
    """Send library logs through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_config(
    cache_dir: Optional[Path],
    offline: bool,
    timeout_ms: Optional[int],
) -> EmbedConfig:
    """Load configuration, exiting with a message if it is invalid."""
    try:
        return load_config(
            cache_dir=cache_dir,
            allow_remote_fetch=False if offline else None,
            fetch_timeout_ms=timeout_ms,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


cache_dir_option = click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Notebook cache directory (default: from config)",
)
offline_option = click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Only use cached notebooks, never download",
)
timeout_option = click.option(
    "--timeout-ms",
    type=int,
    default=None,
    help="Notebook download timeout in milliseconds (default: 10000)",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logs")
def main(verbose: bool):
    """nbembed - Embed linked Jupyter notebooks into HTML pages."""
    setup_logging(verbose)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (default: overwrite INPUT_FILE)",
)
@cache_dir_option
@offline_option
@timeout_option
def embed(
    input_file: Path,
    output: Optional[Path],
    cache_dir: Optional[Path],
    offline: bool,
    timeout_ms: Optional[int],
):
    """Embed every notebook linked from an HTML file.

    INPUT_FILE: HTML page containing links to .ipynb files
    """
    config = build_config(cache_dir, offline, timeout_ms)

    try:
        page = input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {input_file}: {escape(str(e))}")
        sys.exit(1)

    async def run():
        async with NotebookEmbedder(config) as embedder:
            return await embedder.embed_html(page)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("[cyan]Embedding notebooks...", total=None)
        html, report = asyncio.run(run())

    output_path = output or input_file
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {output_path}: {escape(str(e))}")
        sys.exit(1)

    if report.total == 0:
        console.print("[yellow]No notebook links found.[/yellow]")
        return

    table = Table(title=f"Notebook links in {input_file.name}")
    table.add_column("Status", style="bold")
    table.add_column("Link", overflow="fold")
    for url in report.embedded:
        table.add_row("[green]embedded[/green]", escape(url))
    for url in report.unavailable:
        table.add_row("[red]unavailable[/red]", escape(url))

    console.print(table)
    console.print(
        Panel.fit(
            f"[green]{len(report.embedded)}[/green] embedded, "
            f"[red]{len(report.unavailable)}[/red] unavailable\n"
            f"Output: [yellow]{output_path}[/yellow]",
            border_style="cyan",
        )
    )


@main.command()
@click.argument("url")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the fragment to a file instead of stdout",
)
@cache_dir_option
@offline_option
@timeout_option
def render(
    url: str,
    output: Optional[Path],
    cache_dir: Optional[Path],
    offline: bool,
    timeout_ms: Optional[int],
):
    """Render a single notebook link as an HTML fragment.

    URL: Link to a .ipynb file
    """
    config = build_config(cache_dir, offline, timeout_ms)

    async def run():
        async with NotebookEmbedder(config) as embedder:
            return await embedder.render_url(url)

    fragment = asyncio.run(run())
    if fragment is None:
        console.print(f"[red]Error:[/red] Notebook unavailable: {escape(url)}")
        sys.exit(1)

    if output is None:
        click.echo(fragment)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(fragment, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {output}: {escape(str(e))}")
        sys.exit(1)
    console.print(f"[green]Wrote[/green] {output}")


@main.command("cache-info")
@click.argument("url")
@cache_dir_option
def cache_info(url: str, cache_dir: Optional[Path]):
    """Show where a notebook link is cached.

    URL: Link to a .ipynb file
    """
    config = build_config(cache_dir, False, None)
    cache = NotebookCache(config.cache_dir)
    path = cache.path_for(url)

    console.print(f"[cyan]Link:[/cyan] {escape(url)}")
    console.print(f"[cyan]Key:[/cyan] {cache_key(url)}")
    console.print(f"[cyan]Path:[/cyan] {path}")
    if cache.contains(url):
        console.print(f"[cyan]Cached:[/cyan] [green]yes[/green] ({path.stat().st_size} bytes)")
    else:
        console.print("[cyan]Cached:[/cyan] [yellow]no[/yellow]")


@main.command()
def config_show():
    """Show current configuration."""
    config = build_config(None, False, None)
    console.print(Panel.fit("[bold cyan]nbembed Configuration[/bold cyan]", border_style="cyan"))
    console.print()
    console.print(f"[cyan]Cache Directory:[/cyan] {config.cache_dir}")
    console.print(f"[cyan]Remote Fetch:[/cyan] {'Yes' if config.allow_remote_fetch else 'No'}")
    console.print(f"[cyan]Fetch Timeout:[/cyan] {config.fetch_timeout_ms} ms")
    console.print(f"[cyan]Icon Page Timeout:[/cyan] {config.icon_page_timeout_ms} ms")
    console.print(f"[cyan]Icon Probe Timeout:[/cyan] {config.icon_probe_timeout_ms} ms")
    console.print(f"[cyan]User Agent:[/cyan] {config.user_agent}")


if __name__ == "__main__":
    main()
