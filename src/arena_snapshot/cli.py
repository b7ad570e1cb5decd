from __future__ import annotations

import logging
import pathlib
from typing import List, Optional

import typer

from .config import load_settings
from .errors import ArenaSnapshotError, ConfigError
from .fetch.arena import CATEGORIES
from .fetch.browser import BrowserRowSource
from .fetch.html import HtmlDirSource
from .fetch.sources import MarkdownCacheSource
from .run import run_snapshot
from .store.snapshots import MemoryStore, SnapshotPersister, SupabaseStore


app = typer.Typer(add_completion=False, help="Snapshot lmarena leaderboards into a database")


def _select_categories(requested: Optional[List[str]], configured: List[str]) -> List[str]:
    selected = list(requested) if requested else list(configured)
    unknown = [c for c in selected if c not in CATEGORIES and c not in configured]
    if unknown:
        raise ConfigError(f"unknown category: {', '.join(unknown)}")
    return selected


@app.command("categories")
def categories():
    """List the leaderboard categories scraped by default."""
    for c in CATEGORIES:
        typer.echo(c)


@app.command("run")
def run(
    category: Optional[List[str]] = typer.Option(None, "--category", "-c", help="category to scrape (repeatable; default: all)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="extract only, keep rows in memory"),
    headed: bool = typer.Option(False, "--headed", help="show the browser window"),
    html_dir: Optional[pathlib.Path] = typer.Option(None, "--html-dir", help="replay saved <category>.html pages"),
    markdown_dir: Optional[pathlib.Path] = typer.Option(None, "--markdown-dir", help="replay <category>-*.md snapshots"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="debug logging"),
):
    """Scrape every category once under a shared timestamp and upsert the rows."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s", force=True)

    if html_dir is not None and markdown_dir is not None:
        typer.echo("--html-dir and --markdown-dir are mutually exclusive", err=True)
        raise typer.Exit(2)

    try:
        settings = load_settings(require_credentials=not dry_run)
        selected = _select_categories(category, settings.categories)
    except ConfigError as exc:
        typer.echo(f"config error: {exc}", err=True)
        raise typer.Exit(2)

    if html_dir is not None:
        source = HtmlDirSource(html_dir)
    elif markdown_dir is not None:
        source = MarkdownCacheSource(markdown_dir)
    else:
        source = BrowserRowSource(
            headless=settings.headless and not headed,
            timeout_ms=settings.fetch_timeout_ms,
            settle_ms=settings.settle_ms,
        )

    if dry_run:
        store = MemoryStore()
    else:
        store = SupabaseStore.connect(settings.supabase_url, settings.supabase_key, settings.table)

    try:
        run_snapshot(source, SnapshotPersister(store), categories=selected, base_url=settings.base_url)
    except ArenaSnapshotError as exc:
        typer.echo(f"run aborted: {exc}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
