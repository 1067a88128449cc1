"""CLI entry point for fuzzy-history. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

import click

from fuzzy_history.config import get_db_path, load_config
from fuzzy_history.errors import InvalidPayloadError, StorageUnavailableError
from fuzzy_history.history import (
    CommandRecord,
    Database,
    HistoryStore,
    IndexBackend,
    delete_index,
    parse_add_payload,
)
from fuzzy_history.log import LOG_LEVELS, setup_logging
from fuzzy_history.session import SearchSession
from fuzzy_history.terminal import TtyTerminal

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "FUZZY_HISTORY_LOG_LEVEL"


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


class _HistoryGroup(click.Group):
    """Command group that answers an unknown subcommand with the usage text."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            click.echo(ctx.get_help())
            ctx.exit(0)


@click.group(cls=_HistoryGroup, invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="warning",
    envvar=LOG_LEVEL_ENV,
    show_default=True,
    help="Level of the log file in the data directory",
)
@click.pass_context
def main(ctx, log_level):
    """Search your shell history as you type."""
    setup_logging(log_level.lower())
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@main.command()
@click.argument("tty_path")
@click.argument("query", nargs=-1)
def search(tty_path, query):
    """Interactively search history, reading keys from TTY_PATH.

    The selected command is printed on stdout; nothing is printed when the
    search is cancelled.
    """
    config = load_config().with_initial_text(" ".join(query))
    backend = IndexBackend(
        get_db_path(),
        os.getcwd(),
        limit=config.result_limit,
        directory_boost=config.directory_boost,
    )
    terminal = TtyTerminal(tty_path)

    try:
        with backend:
            terminal.start()
            try:
                result = SearchSession(config, terminal, backend).run()
            finally:
                terminal.stop()
    except StorageUnavailableError as e:
        logger.error("Search failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Search interrupted")
        sys.exit(130)

    if result is not None:
        click.echo(result)


# ---------------------------------------------------------------------------
# Indexing
# ---------------------------------------------------------------------------

async def _store_record(record: CommandRecord) -> int:
    db = Database(str(get_db_path()))
    await db.connect()
    try:
        store = HistoryStore(db)
        record_id = await store.add(record)
        logger.debug("History index holds %d commands", await store.count())
        return record_id
    finally:
        await db.close()


@main.command()
@click.argument("payload")
def add(payload):
    """Index a command given as "<exit code>:<command>"."""
    try:
        record = parse_add_payload(payload, os.getcwd())
    except InvalidPayloadError as e:
        logger.warning("Rejected add payload %r", e.payload)
        click.echo(f"Indexing failed, {e}", err=True)
        click.echo(f"Failed input: {e.payload}", err=True)
        sys.exit(1)

    try:
        _run(_store_record(record))
    except StorageUnavailableError as e:
        logger.error("Indexing failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("import")
def import_history():
    """Import existing shell history (not implemented yet)."""
    logger.info("import is not implemented; nothing to do")


@main.command("delete_index")
def delete_index_command():
    """Delete the history index."""
    db_path = get_db_path(create_dir=False)
    if delete_index(db_path):
        logger.info("Deleted history index %s", db_path)
        click.echo(f"Deleted history index at {db_path}")
    else:
        click.echo(f"No history index at {db_path}")
