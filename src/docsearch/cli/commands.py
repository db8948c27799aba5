"""CLI command implementations"""

import json
import logging
from typing import Annotated, Optional

import typer

from docsearch.config import Settings, load_config
from docsearch.core.pipeline import CorpusIndexer
from docsearch.crud.database import init_db, make_engine, reset_db
from docsearch.crud.sql_backend import SQLBackend
from docsearch.errors import DocSearchError


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    return settings


def _backend(settings: Settings) -> SQLBackend:
    engine = make_engine(settings.db_url)
    init_db(engine)
    return SQLBackend(engine)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all index tables")] = False,
    ):
    """Initialize the index database schema. Use --reset to clear every index."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing indexes cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def index_cmd(
    versions: Annotated[Optional[list[str]], typer.Argument(help="Versions to index (default: config versions)")] = None,
    docs_dir: Annotated[Optional[str], typer.Option("--docs-dir", help="Directory holding one folder per version")] = None,
    index_name: Annotated[Optional[str], typer.Option("--index-name", help="Production index name")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Document worker threads")] = None,
    bullet_lists: Annotated[Optional[bool], typer.Option("--bullet-lists/--no-bullet-lists", help="Expand unordered lists")] = None,
    ):
    """Rebuild the whole index into staging, then atomically publish it."""
    settings = _settings(overrides={
        "docs_dir": docs_dir, "index_name": index_name,
        "workers": workers, "index_bullet_lists": bullet_lists,
    })
    versions = versions or settings.versions
    if not versions:
        _fail("No versions given. Pass them as arguments or set 'versions' in config.yaml.")

    indexer = CorpusIndexer(_backend(settings), settings)
    try:
        result = indexer.run(versions)
    except DocSearchError as e:
        _fail(f"Indexing aborted; {settings.index_name} left unchanged", e)

    for version, count in result.documents.items():
        typer.echo(f"  {version}: {count} document(s)")
    typer.echo(f"Published {result.records} record(s) to {settings.index_name}")


def list_cmd():
    """List indexes and their record counts."""
    settings = _settings()
    indexes = _backend(settings).list_indexes()
    if not indexes:
        typer.echo("No indexes found.")
        raise typer.Exit(1)
    for name, count in indexes.items():
        typer.echo(f"{name}\t{count}")


def show_cmd(
    index: Annotated[str, typer.Argument(help="Index name")],
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only records tagged with this version")] = None,
    ):
    """Print the records of an index as JSON lines."""
    settings = _settings()
    records = _backend(settings).get_records(index)
    if tag:
        records = [r for r in records if tag in r["_tags"]]
    if not records:
        typer.echo(f"No records found in {index}.")
        raise typer.Exit(1)
    for record in records:
        typer.echo(json.dumps(record, ensure_ascii=False))
