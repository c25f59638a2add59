"""CLI entry point for snipreview.

Commands:
  review   — send a code snippet to the AI reviewer and store the result
  history  — display past reviews from the configured store
  stats    — summary metrics and issue breakdowns across the history
  init     — interactive setup wizard writing .snipreview.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console

from snipreview_cli.commands.history import history_cmd
from snipreview_cli.commands.init import init_cmd
from snipreview_cli.commands.review import review_cmd
from snipreview_cli.commands.stats import stats_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .snipreview.yml settings.

    Store selection:
      store: sqlite → SQLiteStore (store_path, or .snipreview.db)  [default]
      store: memory → MemoryStore (history lasts for this process only)

    This factory lives in cli.py so neither snipreview_core nor
    snipreview_store know about the CLI config format.
    """
    from snipreview_store.memory import MemoryStore

    store_type = config.get("store", "sqlite")

    if store_type == "sqlite":
        from snipreview_store.sqlite import SQLiteStore

        db_path = config.get("store_path", ".snipreview.db")
        return SQLiteStore(db_path=db_path)

    if store_type != "memory":
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to an in-memory store.[/yellow]")
    return MemoryStore()


@click.group()
@click.version_option(
    version=importlib.metadata.version("snipreview"),
    prog_name="snipreview",
)
@click.option(
    "--config",
    "config_path",
    default=".snipreview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="SNIPREVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered code snippet reviewer with local review history."""
    from snipreview_core.config import load_config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["store_factory"] = lambda: _build_store(config)


main.add_command(review_cmd)
main.add_command(history_cmd)
main.add_command(stats_cmd)
main.add_command(init_cmd)
