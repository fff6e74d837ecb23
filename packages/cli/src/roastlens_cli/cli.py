"""CLI entry point for roastlens.

Commands:
  roast      — roast pasted code, a file, or stdin
  pr         — roast a GitHub pull request diff
  history    — list stored roasts
  show       — show one stored roast
  delete     — delete one stored roast
  stats      — aggregate scores and issue types across history
  providers  — list providers and models
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from roastlens_cli.commands.history import delete_cmd, history_cmd, show_cmd
from roastlens_cli.commands.pr import pr_cmd
from roastlens_cli.commands.providers import providers_cmd
from roastlens_cli.commands.roast import roast_cmd
from roastlens_cli.commands.stats import stats_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .roastlens.yml settings.

    Store selection:
      store: sqlite → SQLiteStore (uses store_path or .roastlens.db)
      (default)     → NoOpStore  (no persistence)

    This factory lives in cli.py so neither roastlens_core nor roastlens_store
    know about the CLI config format.
    """
    from roastlens_store.noop import NoOpStore

    store_type = config.get("store", "noop")

    if store_type == "sqlite":
        from roastlens_store.sqlite import SQLiteStore

        db_path = config.get("store_path", ".roastlens.db")
        return SQLiteStore(db_path=db_path)

    if store_type not in (None, "noop"):
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to no store.[/yellow]")
    return NoOpStore()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("roastlens"),
    prog_name="roastlens",
)
@click.option(
    "--config",
    "config_path",
    default=".roastlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="ROASTLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Get your code roasted by an AI reviewer."""
    from roastlens_cli.auth import resolve_github_token, resolve_user
    from roastlens_core.config import load_config
    from roastlens_core.providers import build_registry
    from roastlens_core.ratelimit import build_rate_limiter

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    try:
        limiter = build_rate_limiter(config)
    except ValueError as e:
        raise click.UsageError(str(e))

    store = _build_store(config)
    ctx.obj["config"] = config
    ctx.obj["store"] = store
    ctx.obj["registry"] = build_registry(config)
    ctx.obj["limiter"] = limiter
    ctx.obj["user"] = resolve_user()
    ctx.call_on_close(store.close)


main.add_command(roast_cmd)
main.add_command(pr_cmd)
main.add_command(history_cmd)
main.add_command(show_cmd)
main.add_command(delete_cmd)
main.add_command(stats_cmd)
main.add_command(providers_cmd)
