"""init command — interactive setup wizard.

Writes .snipreview.yml once so later `snipreview review` runs need no flags
beyond the snippet itself.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

from snipreview_core.config import api_key_env_var

console = Console()

_LANGUAGES = ["javascript", "typescript", "python", "java"]


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Set up snipreview in the current directory.

    Chooses the AI provider, the default snippet language and where review
    history is kept, then writes the configuration file.
    """
    config_path = ctx.obj["config_path"] if ctx.obj else ".snipreview.yml"
    console.print("\n[bold cyan]snipreview init[/bold cyan] — setup wizard\n")

    # --- Choose provider ---
    provider = click.prompt(
        "AI provider",
        type=click.Choice(["anthropic", "openai"]),
        default="anthropic",
    )

    # --- Default language ---
    language = click.prompt(
        "Default snippet language",
        type=click.Choice(_LANGUAGES, case_sensitive=False),
        default="python",
    )

    # --- Choose store backend ---
    console.print("\nReview history store:")
    console.print("  [bold]sqlite[/bold]  — local SQLite file (default)")
    console.print("  [bold]memory[/bold]  — nothing is kept between runs")
    store_type = click.prompt(
        "Store backend",
        type=click.Choice(["sqlite", "memory"]),
        default="sqlite",
    )

    config: dict = {"model": provider, "language": language, "store": store_type}

    if store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".snipreview.db")
        if db_path != ".snipreview.db":
            config["store_path"] = db_path
        console.print(f"[green]SQLite store configured at {db_path}[/green]")

    _write_config(config, Path(config_path))
    console.print(f"[green]Created {config_path}[/green]")

    console.print(
        f"\n[yellow]Remember to export [bold]{api_key_env_var(provider)}[/bold] before running a review.[/yellow]"
    )
    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run a review with: [bold]snipreview review path/to/snippet[/bold]")


def _write_config(config: dict, path: Path) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
