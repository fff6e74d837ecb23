"""history, show and delete commands — browse stored roasts."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from roastlens_cli.common import handle_errors, require_store
from roastlens_cli.render import print_result, score_style
from roastlens_core.models import ReviewResult
from roastlens_core.validators import validate_pagination, validate_review_id

console = Console()


@click.command("history")
@click.option("--page", default=1, show_default=True, help="Page number.")
@click.option("--limit", default=10, show_default=True, help="Reviews per page (max 100).")
@click.pass_context
def history_cmd(ctx, page: int, limit: int):
    """Show your past roasts, newest first.

    Reads from the configured store. Add `store: sqlite` to .roastlens.yml to
    keep history.
    """
    store = require_store(ctx)
    with handle_errors():
        pagination = validate_pagination(page, limit)

    result_page = store.list_reviews(ctx.obj["user"], page=pagination.page, limit=pagination.limit)
    if not result_page.reviews:
        console.print("[yellow]No review records found.[/yellow]")
        return

    table = Table(
        title=f"Review History — page {result_page.page}/{result_page.total_pages} ({result_page.total} total)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("ID", width=34)
    table.add_column("Title", max_width=40)
    table.add_column("Source", width=10)
    table.add_column("Model", width=28)
    table.add_column("Score", justify="right", width=6)
    table.add_column("Created At", width=20)

    for r in result_page.reviews:
        score = r.result.get("score", "")
        style = score_style(score) if isinstance(score, int) else "white"
        table.add_row(
            r.id,
            r.title[:40] if r.title else "",
            r.source_type,
            f"{r.provider}/{r.model}",
            f"[{style}]{score}[/{style}]",
            r.created_at[:19].replace("T", " "),
        )

    console.print(table)


@click.command("show")
@click.argument("review_id")
@click.option("--code", "show_code", is_flag=True, help="Also print the roasted code.")
@click.option("--json", "as_json", is_flag=True, help="Print the stored record as JSON.")
@click.pass_context
def show_cmd(ctx, review_id: str, show_code: bool, as_json: bool):
    """Show one stored roast."""
    store = require_store(ctx)
    with handle_errors():
        review_id = validate_review_id(review_id)

    record = store.get(review_id, ctx.obj["user"])
    if record is None:
        raise click.ClickException("Review not found")

    if as_json:
        click.echo(
            json.dumps(
                {
                    "id": record.id,
                    "title": record.title,
                    "provider": record.provider,
                    "model": record.model,
                    "sourceType": record.source_type,
                    "sourceUrl": record.source_url,
                    "createdAt": record.created_at,
                    "result": record.result,
                },
                indent=2,
            )
        )
        return

    if show_code:
        console.print(Syntax(record.code, record.language or "text", line_numbers=True))
    print_result(ReviewResult.from_dict(record.result), record.title)
    if record.source_url:
        console.print(f"\n[dim]{record.source_url}[/dim]")


@click.command("delete")
@click.argument("review_id")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_cmd(ctx, review_id: str, yes: bool):
    """Delete one of your stored roasts."""
    store = require_store(ctx)
    with handle_errors():
        review_id = validate_review_id(review_id)

    if not yes and not click.confirm(f"Delete review {review_id}?"):
        return
    if not store.delete(review_id, ctx.obj["user"]):
        raise click.ClickException("Review not found")
    console.print(f"[green]Deleted {review_id}.[/green]")
