"""CLI interface for Copilot Registry.

Command-line tool for serving and inspecting registry collections.
"""

import logging
from pathlib import Path

import click

from copilot_registry.config import Config
from copilot_registry.core.catalog import Catalog, CatalogLoader
from copilot_registry.core.collections import CollectionKey, format_collection_name


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Copilot Registry - Copilot instructions, prompts and settings as a site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover registry.toml)",
)
root_dir_option = click.option(
    "--root-dir",
    "-r",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Registry root directory (overrides config)",
)


def _load_config(config_path: Path | None, **overrides: object) -> Config:
    try:
        config = Config.load(config_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    return config.with_overrides(**overrides)


def _load_catalog(config: Config) -> Catalog:
    return CatalogLoader(config.registry).load()


@cli.command()
@config_option
@root_dir_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    root_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Start the registry API server."""
    from copilot_registry.server import run_server

    config = _load_config(
        config_path,
        host=host,
        port=port,
        root_dir=root_dir,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Registry directory: {config.registry.root_dir}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


@cli.command(name="list")
@click.argument(
    "collection",
    required=False,
    type=click.Choice([key.value for key in CollectionKey]),
)
@config_option
@root_dir_option
def list_entries(
    collection: str | None,
    config_path: Path | None,
    root_dir: Path | None,
) -> None:
    """List entries, optionally of a single COLLECTION."""
    config = _load_config(config_path, root_dir=root_dir)
    catalog = _load_catalog(config)

    keys = [collection] if collection else [key.value for key in catalog.collections()]
    for key in keys:
        entries = catalog.get_entries(key)
        click.echo(f"{format_collection_name(key)} ({len(entries)})")
        for entry in entries:
            click.echo(f"  {key}/{entry.slug}  {entry.display_path}")

    for collision in catalog.collisions:
        click.echo(
            f"Warning: {collision.dropped} skipped, slug {collision.slug!r} "
            f"already used by {collision.kept}",
            err=True,
        )


@cli.command()
@click.argument("collection", type=click.Choice([key.value for key in CollectionKey]))
@click.argument("slug")
@config_option
@root_dir_option
def show(
    collection: str,
    slug: str,
    config_path: Path | None,
    root_dir: Path | None,
) -> None:
    """Show a single entry identified by COLLECTION and SLUG."""
    config = _load_config(config_path, root_dir=root_dir)
    catalog = _load_catalog(config)

    entry = catalog.get_entry(collection, slug)
    if entry is None:
        raise click.ClickException(f"Entry not found: {collection}/{slug}")

    click.echo(f"Title: {entry.title}")
    click.echo(f"Collection: {format_collection_name(collection)}")
    click.echo(f"Path: {entry.path}")
    click.echo(f"File: {entry.file_name}")
    click.echo(f"Source: {entry.display_path}")
    click.echo(f"Language: {entry.language}")
    if entry.description:
        click.echo(f"Description: {entry.description}")
    click.echo()
    click.echo(entry.item.body or "")


if __name__ == "__main__":
    cli()
