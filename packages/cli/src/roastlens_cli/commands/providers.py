"""providers command — list registered providers and their models."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("providers")
@click.pass_context
def providers_cmd(ctx):
    """List the available providers and models.

    A provider whose API key is not set is still listed; using it fails with
    a "not configured" message.
    """
    config = ctx.obj["config"]
    registry = ctx.obj["registry"]

    table = Table(title="Providers", show_header=True, header_style="bold cyan")
    table.add_column("Provider", style="bold")
    table.add_column("Model")
    table.add_column("Description")
    for provider_id, name, models in registry.describe():
        for model in models:
            is_default = (provider_id, model.id) == (config["provider"], config["model"])
            marker = " [green](default)[/green]" if is_default else ""
            table.add_row(f"{provider_id} ({name})", f"{model.id}{marker}", model.description)
    console.print(table)
