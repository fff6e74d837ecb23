"""pr command — roast (or preview) the combined diff of a GitHub pull request."""

from __future__ import annotations

import dataclasses
import json
from contextlib import nullcontext

import click
from rich.console import Console

from roastlens_cli.common import handle_errors, resolve_provider_model, save_outcome
from roastlens_cli.render import print_diff, print_files, print_pr_metadata, print_result
from roastlens_core.gh.pull_request import get_pull_requests, get_repo
from roastlens_core.reviewer import preview_pull_request, roast_pull_request
from roastlens_core.validators import parse_repo

console = Console()


@click.command("pr")
@click.option("--repo", "full_name", required=True, help="GitHub repository in owner/name format.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Omit to list open PRs interactively.",
)
@click.option("--provider", "provider_id", default=None, help="Provider id (openai, anthropic, mock). Overrides config.")
@click.option("--model", "model_id", default=None, help="Model id. Overrides config.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON instead of a formatted report.")
@click.option(
    "--preview",
    is_flag=True,
    help="Show the PR metadata, changed files and the diff that would be roasted, without calling a provider.",
)
@click.pass_context
def pr_cmd(
    ctx,
    full_name: str,
    pr_number: int | None,
    provider_id: str | None,
    model_id: str | None,
    as_json: bool,
    preview: bool,
):
    """Roast a GitHub pull request.

    Fetches the PR's metadata and changed files, combines the patches into
    one bounded diff and sends it to the selected provider.
    With --preview the diff is printed instead and no provider is called.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
      OPENAI_API_KEY       Required when using --provider openai
      ANTHROPIC_API_KEY    Required when using --provider anthropic
    """
    config = ctx.obj["config"]
    registry = ctx.obj["registry"]
    if not preview:
        provider_id, model_id = resolve_provider_model(config, registry, provider_id, model_id)

    with handle_errors():
        owner, name = parse_repo(full_name)
        this_repo = get_repo(owner, name, config.get("github_token"))

        if pr_number is None:
            prs = get_pull_requests(this_repo)
            if not prs:
                console.print("[yellow]No open pull requests found.[/yellow]")
                return
            console.print("\nOpen pull requests:")
            for pr in prs:
                console.print(f"  [bold]#{pr.number}[/bold]  {pr.title}")
            pr_number = click.prompt("\nEnter the pull request number", type=int)

        if preview:
            pr_preview = preview_pull_request(
                owner,
                name,
                pr_number,
                max_diff_chars=config.get("max_diff_chars", 50000),
                repo_obj=this_repo,
            )
            _print_preview(pr_preview, as_json)
            return

        status = nullcontext() if as_json else console.status(f"Roasting {full_name}#{pr_number}...")
        with status:
            outcome = roast_pull_request(
                owner=owner,
                repo_name=name,
                number=pr_number,
                provider_id=provider_id,
                model_id=model_id,
                registry=registry,
                limiter=ctx.obj["limiter"],
                user=ctx.obj["user"],
                max_diff_chars=config.get("max_diff_chars", 50000),
                repo_obj=this_repo,
            )

    review_id = save_outcome(ctx, outcome)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "id": review_id,
                    "result": outcome.result.to_dict(),
                    "pr": {"number": outcome.pr_number, "title": outcome.title, "url": outcome.source_url},
                },
                indent=2,
            )
        )
        return
    print_files(outcome.files)
    print_result(outcome.result, outcome.title)
    if outcome.source_url:
        console.print(f"\n[dim]{outcome.source_url}[/dim]")
    if review_id:
        console.print(f"[dim]Saved as {review_id}[/dim]")


def _print_preview(pr_preview, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "pr": dataclasses.asdict(pr_preview.metadata),
                    "files": [
                        {
                            "filename": f.filename,
                            "status": f.status,
                            "additions": f.additions_count,
                            "deletions": f.deletions_count,
                            "hunks": len(f.hunks),
                        }
                        for f in pr_preview.files
                    ],
                    "diff": pr_preview.combined,
                },
                indent=2,
            )
        )
        return
    print_pr_metadata(pr_preview.metadata)
    print_files(pr_preview.files)
    print_diff(pr_preview.combined)
