"""CLI interface for rendering the Site Counts block from a JSON store."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from sitecounts.aggregator import CountAggregator
from sitecounts.block import SiteCountsBlock
from sitecounts.config import SiteCountsConfig, load_config, merge_cli_overrides
from sitecounts.fetcher import FilteredListFetcher
from sitecounts.i18n import load_translations
from sitecounts.models import BlockInstance, RenderContext
from sitecounts.repository import ContentStore

app = typer.Typer(
    name="sitecounts",
    help="Render the Site Counts block against a JSON content store.",
)

console = Console()

StoreArg = Annotated[
    Path,
    typer.Argument(help="Store file, or a directory containing .sitecounts-store.json."),
]
ConfigOpt = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .sitecounts.toml file."),
]
CurrentIdOpt = Annotated[
    Optional[int],
    typer.Option("--current-id", help="Id of the item being viewed; excluded from the list."),
]
TagOpt = Annotated[Optional[str], typer.Option("--tag", help="Override the list tag.")]
CategoryOpt = Annotated[
    Optional[str], typer.Option("--category", help="Override the list category.")
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from sitecounts import __version__

        console.print(f"sitecounts {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable debug logging.")
    ] = False,
) -> None:
    """Site Counts - published item counts and filtered post lists."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(
    config_path: Path | None, tag: str | None, category: str | None
) -> SiteCountsConfig:
    config = load_config(config_path)
    return merge_cli_overrides(config, query_tag=tag, query_category=category)


def _open_store(store: Path) -> ContentStore:
    if not store.exists():
        console.print(f"[red]Error:[/red] Store not found: {store}")
        raise typer.Exit(1)
    return ContentStore(store)


@app.command()
def render(
    store: StoreArg,
    current_id: CurrentIdOpt = None,
    context: Annotated[
        Optional[str],
        typer.Option("--context", help="Shared style context as a JSON object."),
    ] = None,
    class_name: Annotated[
        str, typer.Option("--class-name", help="Extra CSS class for the wrapper.")
    ] = "",
    config_path: ConfigOpt = None,
    tag: TagOpt = None,
    category: CategoryOpt = None,
) -> None:
    """Print the block's rendered markup."""
    style_context: dict[str, object] = {}
    if context:
        try:
            style_context = json.loads(context)
        except json.JSONDecodeError as exc:
            console.print(f"[red]Error:[/red] Invalid --context JSON: {exc}")
            raise typer.Exit(1) from exc
        if not isinstance(style_context, dict):
            console.print("[red]Error:[/red] --context must be a JSON object")
            raise typer.Exit(1)

    block = SiteCountsBlock(
        _open_store(store), config=_resolve_config(config_path, tag, category)
    )
    markup = block.render(
        {"className": class_name},
        "",
        BlockInstance(context=style_context, current_item_id=current_id),
    )
    typer.echo(markup)


@app.command()
def counts(
    store: StoreArg,
    config_path: ConfigOpt = None,
) -> None:
    """Show published item counts per public content type."""
    config = load_config(config_path)
    aggregator = CountAggregator(_open_store(store), load_translations(config.i18n))

    table = Table(title="Published items")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Count", justify="right")
    for name, result in aggregator.collect():
        table.add_row(result.type_slug, name, str(result.count))
    console.print(table)


@app.command()
def posts(
    store: StoreArg,
    current_id: CurrentIdOpt = None,
    config_path: ConfigOpt = None,
    tag: TagOpt = None,
    category: CategoryOpt = None,
) -> None:
    """Show the posts the block would list."""
    config = _resolve_config(config_path, tag, category)
    fetcher = FilteredListFetcher(
        _open_store(store), config.to_query_spec(), load_translations(config.i18n)
    )
    shown, matched = fetcher.fetch(RenderContext(current_item_id=current_id))
    if not matched:
        console.print("[yellow]No matching posts.[/yellow]")
        return

    spec = fetcher.spec
    table = Table(
        title=f"Posts tagged {spec.tag} in {spec.category} "
        f"({spec.time_window.start_hour}:00-{spec.time_window.end_hour}:59)"
    )
    table.add_column("ID", justify="right")
    table.add_column("Title")
    for item in shown:
        table.add_row(str(item.id), item.title)
    console.print(table)


if __name__ == "__main__":
    app()
