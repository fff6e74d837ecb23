"""stats command — aggregate patterns across roast history."""

from __future__ import annotations

from collections import Counter

import click
from rich.console import Console
from rich.table import Table

from roastlens_cli.common import require_store

console = Console()

_PAGE_SIZE = 100


def _all_reviews(store, owner: str) -> list:
    reviews = []
    page = 1
    while True:
        result = store.list_reviews(owner, page=page, limit=_PAGE_SIZE)
        reviews.extend(result.reviews)
        if page >= result.total_pages:
            return reviews
        page += 1


@click.command("stats")
@click.option("--top", default=5, show_default=True, help="Number of top entries to show per category.")
@click.pass_context
def stats_cmd(ctx, top: int):
    """Show aggregated statistics over your roast history.

    Reports the average score, how issues split across types, and which
    providers and models did the roasting.
    """
    store = require_store(ctx)

    records = _all_reviews(store, ctx.obj["user"])
    if not records:
        console.print("[yellow]No review records found.[/yellow]")
        return

    scores = [r.result.get("score") for r in records if isinstance(r.result.get("score"), int)]
    kind_counter: Counter[str] = Counter()
    model_counter: Counter[str] = Counter()
    source_counter: Counter[str] = Counter()

    for record in records:
        model_counter[f"{record.provider}/{record.model}"] += 1
        source_counter[record.source_type] += 1
        for issue in record.result.get("issues", []):
            if isinstance(issue, dict):
                kind_counter[issue.get("type", "info")] += 1

    total_issues = sum(kind_counter.values())

    # --- Summary ---
    console.print("\n[bold]Roast stats[/bold]")
    console.print(f"  Total reviews:  {len(records)}")
    for source, count in sorted(source_counter.items()):
        console.print(f"    {source}: {count}")
    console.print(f"  Total issues:   {total_issues}")
    if scores:
        console.print(f"  Average score:  {sum(scores) / len(scores):.1f}")
        console.print(f"  Best / worst:   {max(scores)} / {min(scores)}")

    # --- Issue type breakdown ---
    if kind_counter:
        kind_table = Table(title="Issue Breakdown", show_header=True)
        kind_table.add_column("Type", style="bold")
        kind_table.add_column("Count", justify="right")
        kind_table.add_column("% of total", justify="right")
        _kind_style = {"error": "red", "warning": "yellow", "suggestion": "blue", "info": "dim"}
        for kind in ["error", "warning", "suggestion", "info"]:
            count = kind_counter.get(kind, 0)
            pct = f"{count / total_issues * 100:.1f}%" if total_issues else "0%"
            style = _kind_style.get(kind, "white")
            kind_table.add_row(f"[{style}]{kind}[/{style}]", str(count), pct)
        console.print(kind_table)

    # --- Most used models ---
    model_table = Table(title=f"Top {top} Models", show_header=True)
    model_table.add_column("Provider/Model")
    model_table.add_column("Reviews", justify="right")
    for name, count in model_counter.most_common(top):
        model_table.add_row(name, str(count))
    console.print(model_table)
