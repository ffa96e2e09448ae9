"""Command-line interface."""

import logging
import sys
from itertools import islice
from pathlib import Path

import click

from ..api.client import FILTERS, MODIFIERS, SORTERS, QueryClient
from ..config.settings import ConfigManager, TruveoConfig
from ..core.cursor import ResultCursor
from ..core.models import QueryKind

RELATED_KINDS = {
    "tags": QueryKind.TAG,
    "channels": QueryKind.CHANNEL,
    "categories": QueryKind.CATEGORY,
    "users": QueryKind.USER,
}


def setup_logging(settings: TruveoConfig, verbose: bool) -> None:
    """Configure logging from settings and CLI flags."""
    if verbose:
        settings.log_level = "DEBUG"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def _fail_on_error(result: ResultCursor) -> None:
    if result.is_error:
        click.echo(f"Error {result.error_code}: {result.error_text}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Custom configuration file",
)
@click.option("--app-id", envvar="TRUVEO_APP_ID", help="Truveo developer app id")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, config: Path | None, app_id: str | None, verbose: bool):
    """Search the Truveo video index from the command line."""
    settings = ConfigManager(config).get_config()
    if app_id:
        settings.api.app_id = app_id

    setup_logging(settings, verbose)
    ctx.obj = settings


@main.command()
@click.argument("query", default="")
@click.option("--results", "-n", type=click.IntRange(1, 50), help="Videos per request")
@click.option("--start", type=click.IntRange(0, 999), default=0, help="Position of the first result")
@click.option("--limit", type=click.IntRange(1, 1000), help="Stop after this many videos")
@click.option("--sort", "sorter", type=click.Choice(SORTERS), help="Sort directive to append to the query")
@click.option(
    "--related",
    is_flag=True,
    help="Also show related tags, channels, categories and users of the first page",
)
@click.option("--adult", is_flag=True, help="Include adult content")
@click.pass_obj
def search(settings: TruveoConfig, query: str, results: int | None, start: int,
           limit: int | None, sorter: str | None, related: bool, adult: bool):
    """Search for videos matching QUERY, paging through the results."""
    if sorter:
        query = f"{query} {sorter}".strip()
    limit = limit or settings.pagination.max_results

    with QueryClient(settings) as client:
        cursor = client.get_videos(
            query,
            results=results,
            start=start,
            show_related=int(related),
            show_adult=int(adult),
        )
        _fail_on_error(cursor)

        if cursor.query_suggestion:
            click.echo(f"Did you mean: {cursor.query_suggestion}")
        if cursor.video_set_title:
            click.echo(cursor.video_set_title)
        click.echo(f"Total results available: {cursor.total_results_available or 0}")

        # First page facets; paging replaces them on the cursor
        facets = {
            "Tags": cursor.tag_set,
            "Channels": cursor.channel_set,
            "Categories": cursor.category_set,
            "Users": cursor.user_set,
        }

        count = 0
        for count, video in enumerate(islice(cursor, limit), 1):
            click.echo(f"{count:4d}. {video.get('title') or '(untitled)'} [{video.get('id', '')}]")

        if cursor.is_error:
            click.echo(f"Stopped after error {cursor.error_code}: {cursor.error_text}", err=True)
        click.echo(f"Listed {count} video(s)")

    if related:
        for label, counts in facets.items():
            if counts:
                click.echo(f"\n{label}:")
                for name, hits in counts.items():
                    click.echo(f"  {name}: {hits}")


@main.command()
@click.argument("kind", type=click.Choice(list(RELATED_KINDS)))
@click.argument("query", default="")
@click.option("--results", "-n", type=click.IntRange(1, 50), default=10, help="Items to return")
@click.option("--start", type=click.IntRange(0), default=0, help="Position of the first item")
@click.pass_obj
def related(settings: TruveoConfig, kind: str, query: str, results: int, start: int):
    """Show tags, channels, categories or users related to QUERY."""
    query_kind = RELATED_KINDS[kind]
    with QueryClient(settings) as client:
        result = client.get_related(query_kind, query, results, start)
    _fail_on_error(result)

    counts = {
        QueryKind.TAG: result.tag_set,
        QueryKind.CHANNEL: result.channel_set,
        QueryKind.CATEGORY: result.category_set,
        QueryKind.USER: result.user_set,
    }[query_kind] or {}

    for name, hits in sorted(counts.items(), key=lambda item: item[1], reverse=True):
        click.echo(f"{hits:8d}  {name}")
    click.echo(f"{len(counts)} {kind}")


@main.command()
def directives():
    """List the sort, filter and modifier directives understood in queries."""
    for title, values in (("Sorters", SORTERS), ("Filters", FILTERS), ("Modifiers", MODIFIERS)):
        click.echo(f"{title}:")
        for value in values:
            click.echo(f"  {value}")


@main.command("init-config")
@click.argument("output", type=click.Path(path_type=Path), required=False)
@click.pass_obj
def init_config(settings: TruveoConfig, output: Path | None):
    """Write a commented sample configuration file."""
    path = ConfigManager(output).create_sample_config(output)
    click.echo(f"Sample configuration created at {path}")


if __name__ == "__main__":
    main()
