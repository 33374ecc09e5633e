#!/usr/bin/env python3
"""
Command line front end for Sift.

Usage:
    sift search "query" -s snapshot.json      - Fuzzy search
    sift filter -s snapshot.json --status next - Apply criteria directly
    sift lists show                            - List smart lists
    sift lists apply today -s snapshot.json    - Run a smart list
    sift facets -s snapshot.json               - Show filter options
    sift history show                          - Recent searches
    sift suggest "rep" -s snapshot.json        - Completion suggestions
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..core.app import Sift
from ..core.config import Config
from ..core.facets import resolve_date_bucket
from ..core.highlight import match_spans
from ..core.models import (
    ActionStatus, DateRange, EntityType, FilterCriteria, FilteredCollections,
    Priority, SearchResult, SmartListData,
)
from ..core.snapshot import SnapshotError, load_snapshot

console = Console()

HIGHLIGHT_STYLE = "bold yellow"

snapshot_option = click.option(
    "--snapshot", "-s",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="SIFT_SNAPSHOT",
    required=True,
    help="JSON or YAML export of the entity store",
)


def criteria_options(func):
    """Shared options that build a FilterCriteria."""
    options = [
        click.option("--context", "-c", "contexts", multiple=True, help="Context id"),
        click.option("--priority", "-p", "priorities", multiple=True,
                     type=click.Choice([p.value for p in Priority])),
        click.option("--status", "statuses", multiple=True,
                     type=click.Choice([s.value for s in ActionStatus])),
        click.option("--tag", "tags", multiple=True),
        click.option("--text", "search_text", help="Substring to require"),
        click.option("--when", type=click.Choice(
            ["today", "tomorrow", "this-week", "next-week", "this-month"]),
            help="Relative date range"),
        click.option("--from", "start", type=click.DateTime(), help="Range start"),
        click.option("--to", "end", type=click.DateTime(), help="Range end"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_criteria(
    contexts: Tuple[str, ...],
    priorities: Tuple[str, ...],
    statuses: Tuple[str, ...],
    tags: Tuple[str, ...],
    search_text: Optional[str],
    when: Optional[str],
    start: Optional[datetime],
    end: Optional[datetime],
) -> FilterCriteria:
    date_range = resolve_date_bucket(when) if when else None
    if start or end:
        date_range = DateRange(start=start, end=end)
    return FilterCriteria(
        contexts=list(contexts) or None,
        priorities=[Priority(p) for p in priorities] or None,
        statuses=[ActionStatus(s) for s in statuses] or None,
        tags=list(tags) or None,
        search_text=search_text,
        date_range=date_range,
    )


def setup_logging(config: Config, verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="DEBUG" if verbose else config.logging.level,
    )
    if config.logging.file:
        logger.add(
            config.logging.file,
            rotation="1 day",
            retention="7 days",
            level="DEBUG",
        )


def get_app(ctx: click.Context) -> Sift:
    return ctx.obj["app"]


def load_into(app: Sift, snapshot: Path) -> None:
    try:
        app.load(load_snapshot(snapshot))
    except SnapshotError as e:
        console.print(f"[red]Cannot load snapshot:[/red] {escape(str(e))}")
        raise SystemExit(1)


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to sift.yaml")
@click.option("--state-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Override where history and smart lists are stored")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[Path], state_dir: Optional[Path], verbose: bool):
    """Sift - fuzzy search and smart lists for your GTD data."""
    try:
        config = Config.load(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise SystemExit(1)
    if state_dir is not None:
        config = config.model_copy(update={"state_path": state_dir})

    setup_logging(config, verbose)
    ctx.ensure_object(dict)
    ctx.obj["app"] = Sift(config)


@cli.command()
@click.argument("query")
@snapshot_option
@click.option("--type", "-t", "types", multiple=True,
              type=click.Choice([t.value for t in EntityType]),
              help="Entity types to search (default: all but inbox)")
@click.option("--limit", "-l", default=None, type=int, help="Max results")
@criteria_options
@click.pass_context
def search(ctx, query: str, snapshot: Path, types: Tuple[str, ...], limit: Optional[int], **criteria):
    """Fuzzy search across the snapshot."""
    app = get_app(ctx)
    load_into(app, snapshot)

    filters = build_criteria(**criteria)
    results = app.search_engine.search(
        query,
        types=[EntityType(t) for t in types] or None,
        limit=limit,
        filters=None if filters.is_empty() else filters,
    )
    display_search_results(query, results)


def result_title(result: SearchResult) -> str:
    if result.type == EntityType.INBOX:
        return result.item.content
    return result.item.title


def highlighted(title: str, query: str) -> Text:
    """Style query word occurrences without parsing the title as markup."""
    text = Text(title)
    for start, end in match_spans(title, query):
        text.stylize(HIGHLIGHT_STYLE, start, end)
    return text


def display_search_results(query: str, results: List[SearchResult]):
    """Display search results in a table."""
    if not results:
        console.print("[yellow]No results found[/yellow]")
        return

    table = Table(title=f"Search Results for {escape(repr(query))}")
    table.add_column("Title", style="cyan", no_wrap=False)
    table.add_column("Type", style="magenta")
    table.add_column("Score", justify="right")
    table.add_column("Matched", no_wrap=False)

    for r in results:
        table.add_row(
            highlighted(result_title(r), query),
            r.type.value,
            f"{r.score:.3f}",
            ", ".join(r.matches),
        )

    console.print(table)


def display_filtered(filtered: FilteredCollections, title: str):
    table = Table(title=f"{escape(title)} ({filtered.total()} items)")
    table.add_column("Type", style="magenta")
    table.add_column("Title", style="cyan", no_wrap=False)
    table.add_column("Detail", no_wrap=False)

    for a in filtered.actions:
        due = a.due_date.strftime("%Y-%m-%d") if a.due_date else ""
        table.add_row("action", escape(a.title), f"{a.status.value} {a.priority.value} {due}".strip())
    for p in filtered.projects:
        table.add_row("project", escape(p.title), p.status.value)
    for w in filtered.waiting_items:
        table.add_row("waiting", escape(w.title), f"for {escape(w.waiting_for)}")
    for c in filtered.calendar_items:
        table.add_row("calendar", escape(c.title), c.start_time.strftime("%Y-%m-%d %H:%M"))

    console.print(table)


@cli.command(name="filter")
@snapshot_option
@criteria_options
@click.pass_context
def filter_cmd(ctx, snapshot: Path, **criteria):
    """Apply filter criteria directly, without ranking."""
    app = get_app(ctx)
    load_into(app, snapshot)
    display_filtered(app.apply_filters(build_criteria(**criteria)), "Filtered")


@cli.group()
def lists():
    """Manage smart lists."""


@lists.command(name="show")
@click.pass_context
def lists_show(ctx):
    """Show all smart lists."""
    registry = get_app(ctx).smart_lists

    table = Table(title="Smart Lists")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Filters", no_wrap=False)

    for s in registry.get_smart_lists():
        table.add_row(
            s.id,
            escape(s.name),
            "system" if s.is_system else "user",
            escape(s.filters.model_dump_json(exclude_none=True)),
        )
    console.print(table)


@lists.command(name="create")
@click.argument("name")
@click.option("--description", "-d")
@click.option("--color")
@click.option("--icon")
@criteria_options
@click.pass_context
def lists_create(ctx, name: str, description: Optional[str], color: Optional[str],
                 icon: Optional[str], **criteria):
    """Save the given criteria as a new smart list."""
    registry = get_app(ctx).smart_lists
    created = registry.create_smart_list(SmartListData(
        name=name,
        description=description,
        color=color,
        icon=icon,
        filters=build_criteria(**criteria),
    ))
    console.print(f"[green]✓[/green] Created smart list: {created.id}")


@lists.command(name="rename")
@click.argument("list_id")
@click.argument("name")
@click.pass_context
def lists_rename(ctx, list_id: str, name: str):
    """Rename a user smart list."""
    if get_app(ctx).smart_lists.update_smart_list(list_id, {"name": name}) is None:
        console.print(f"[red]Cannot rename {escape(list_id)}[/red] (unknown or system list)")
        raise SystemExit(1)
    console.print(f"[green]✓[/green] Renamed {list_id}")


@lists.command(name="delete")
@click.argument("list_id")
@click.pass_context
def lists_delete(ctx, list_id: str):
    """Delete a user smart list."""
    if not get_app(ctx).smart_lists.delete_smart_list(list_id):
        console.print(f"[red]Cannot delete {escape(list_id)}[/red] (unknown or system list)")
        raise SystemExit(1)
    console.print(f"[green]✓[/green] Deleted {list_id}")


@lists.command(name="duplicate")
@click.argument("list_id")
@click.option("--name", "-n", help="Name for the copy")
@click.pass_context
def lists_duplicate(ctx, list_id: str, name: Optional[str]):
    """Copy a smart list (system lists included)."""
    copy = get_app(ctx).smart_lists.duplicate_smart_list(list_id, name)
    if copy is None:
        console.print(f"[red]Unknown smart list:[/red] {escape(list_id)}")
        raise SystemExit(1)
    console.print(f"[green]✓[/green] Created {copy.id}: {escape(copy.name)}")


@lists.command(name="apply")
@click.argument("list_id")
@snapshot_option
@click.pass_context
def lists_apply(ctx, list_id: str, snapshot: Path):
    """Run a smart list against a snapshot."""
    app = get_app(ctx)
    load_into(app, snapshot)
    smart_list = app.smart_lists.get_smart_list_by_id(list_id)
    if smart_list is None:
        console.print(f"[red]Unknown smart list:[/red] {escape(list_id)}")
        raise SystemExit(1)
    display_filtered(app.smart_lists.apply_smart_list(list_id, app.snapshot.collections), smart_list.name)


@cli.command()
@snapshot_option
@click.pass_context
def facets(ctx, snapshot: Path):
    """Show available filter values with usage counts."""
    app = get_app(ctx)
    load_into(app, snapshot)

    for group in app.filter_options():
        console.print(f"\n[bold]{escape(group.label)}[/bold]")
        for option in group.options:
            count = "" if option.count is None else f" ({option.count})"
            console.print(f"  • {escape(option.label)}{count}")


@cli.group()
def history():
    """Inspect search history."""


@history.command(name="show")
@click.pass_context
def history_show(ctx):
    items = get_app(ctx).search_engine.get_search_history()
    if not items:
        console.print("[yellow]No search history[/yellow]")
        return

    table = Table(title="Search History")
    table.add_column("Query", style="cyan")
    table.add_column("When")
    table.add_column("Results", justify="right")
    for item in items:
        table.add_row(escape(item.query), item.timestamp.strftime("%Y-%m-%d %H:%M"), str(item.result_count))
    console.print(table)


@history.command(name="popular")
@click.option("--limit", "-l", default=5)
@click.pass_context
def history_popular(ctx, limit: int):
    for entry in get_app(ctx).search_engine.get_popular_searches(limit):
        console.print(f"  {entry.count:>3}  {escape(entry.query)}")


@history.command(name="remove")
@click.argument("query")
@click.pass_context
def history_remove(ctx, query: str):
    get_app(ctx).search_engine.remove_from_history(query)
    console.print(f"[green]✓[/green] Removed {escape(repr(query))}")


@history.command(name="clear")
@click.confirmation_option(prompt="Clear all search history?")
@click.pass_context
def history_clear(ctx):
    get_app(ctx).search_engine.clear_search_history()
    console.print("[green]✓[/green] History cleared")


@cli.command()
@click.argument("query")
@snapshot_option
@click.pass_context
def suggest(ctx, query: str, snapshot: Path):
    """Suggest completions from history, contexts, projects and tags."""
    app = get_app(ctx)
    load_into(app, snapshot)

    suggestions = app.search_engine.get_suggestions(
        query,
        contexts=app.snapshot.contexts,
        projects=app.snapshot.collections.projects,
        tags=app.snapshot.tags(),
    )
    if not suggestions:
        console.print("[yellow]No suggestions[/yellow]")
        return
    for s in suggestions:
        count = f" ({s.count})" if s.count is not None else ""
        console.print(f"  • {escape(s.text)} [dim]{s.type}{count}[/dim]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
