"""Terminal rendering of roast results."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from roastlens_core.models import ParsedFileChange, PullRequestMetadata, ReviewResult

console = Console()

_KIND_STYLE = {"error": "red", "warning": "yellow", "suggestion": "blue", "info": "dim"}


def score_style(score: int) -> str:
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def _bullets(title: str, items: list[str], style: str) -> None:
    if not items:
        return
    console.print(f"\n[bold]{title}[/bold]")
    for item in items:
        console.print(f"  [{style}]•[/{style}] {escape(item)}")


def print_result(result: ReviewResult, title: str | None = None) -> None:
    """Print a full roast: score, summary, issues, quotes, improvements, positives, verdict."""
    style = score_style(result.score)
    heading = title or "Roast"
    console.print(
        Panel(
            escape(result.summary),
            title=f"[bold]{escape(heading)}[/bold]",
            subtitle=f"[{style}]{result.score}/100[/{style}] · {result.provider_id}/{result.model_id}",
        )
    )

    if result.issues:
        table = Table(title=f"{len(result.issues)} issue(s)", show_header=True, header_style="bold cyan")
        table.add_column("Type", width=10)
        table.add_column("Lines", width=8)
        table.add_column("Issue")
        for issue in result.issues:
            kind_style = _KIND_STYLE.get(issue.kind, "white")
            if issue.line_start is None:
                lines = ""
            elif issue.line_end is None or issue.line_end == issue.line_start:
                lines = str(issue.line_start)
            else:
                lines = f"{issue.line_start}-{issue.line_end}"
            body = f"[bold]{escape(issue.title)}[/bold]\n{escape(issue.description)}"
            if issue.suggestion:
                body += f"\n[green]Fix:[/green] {escape(issue.suggestion)}"
            table.add_row(f"[{kind_style}]{issue.kind.upper()}[/{kind_style}]", lines, body)
        console.print(table)

    _bullets("Best roasts", result.highlight_quotes, "magenta")
    _bullets("Improvements", result.improvements, "blue")
    _bullets("Positives", result.positives, "green")

    if result.verdict:
        console.print(f"\n[bold]Verdict:[/bold] [italic]{escape(result.verdict)}[/italic]")


def print_files(files: list[ParsedFileChange]) -> None:
    if not files:
        return
    table = Table(title="Changed files", show_header=True, header_style="bold cyan")
    table.add_column("File")
    table.add_column("Status", width=10)
    table.add_column("+/-", justify="right", width=12)
    table.add_column("Hunks", justify="right", width=6)
    for f in files:
        table.add_row(
            f.filename,
            f.status,
            f"+{f.additions_count}/-{f.deletions_count}",
            str(len(f.hunks)) if f.raw_patch else "—",
        )
    console.print(table)


def print_pr_metadata(metadata: PullRequestMetadata) -> None:
    console.print(
        Panel(
            f"[bold]State:[/bold] {escape(metadata.state)}\n"
            f"[bold]Author:[/bold] {escape(metadata.author)}\n"
            f"[bold]Branches:[/bold] {escape(metadata.head_ref)} → {escape(metadata.base_ref)}\n"
            f"[bold]Changes:[/bold] [green]+{metadata.additions}[/green] [red]-{metadata.deletions}[/red] "
            f"in {metadata.changed_file_count} file(s)\n"
            f"[dim]{escape(metadata.url)}[/dim]",
            title=f"[bold]PR #{metadata.number}: {escape(metadata.title)}[/bold]",
        )
    )


def print_diff(diff: str) -> None:
    if not diff.strip():
        console.print("[yellow]No reviewable changes: every file is binary or too large for a patch.[/yellow]")
        return
    console.print(Syntax(diff, "diff", word_wrap=True))
