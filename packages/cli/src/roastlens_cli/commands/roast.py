"""roast command — roast pasted code, a file, or stdin."""

from __future__ import annotations

import json
from contextlib import nullcontext

import click
from rich.console import Console

from roastlens_cli.common import handle_errors, resolve_provider_model, save_outcome
from roastlens_cli.render import print_result
from roastlens_core.models import ReviewRequest
from roastlens_core.reviewer import roast_code

console = Console()


@click.command("roast")
@click.option(
    "--file",
    "-f",
    "source",
    type=click.File("r", encoding="utf-8"),
    default="-",
    show_default=True,
    help="File to roast. '-' reads from stdin.",
)
@click.option("--language", "-l", default=None, help="Language tag for the code fence (e.g. python).")
@click.option("--context", default=None, help="Extra context for the reviewer (max 2000 chars).")
@click.option("--focus", "focus_areas", multiple=True, help="Area to roast especially hard. Repeatable, max 10.")
@click.option("--provider", "provider_id", default=None, help="Provider id (openai, anthropic, mock). Overrides config.")
@click.option("--model", "model_id", default=None, help="Model id. Overrides config.")
@click.option("--title", default=None, help="Title stored with the review (max 200 chars).")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON instead of a formatted report.")
@click.pass_context
def roast_cmd(ctx, source, language, context, focus_areas, provider_id, model_id, title, as_json):
    """Roast a piece of code.

    \b
    Examples:
      roastlens roast -f app.py -l python
      cat app.py | roastlens roast --provider mock
    """
    if source.isatty():
        raise click.UsageError("No code given. Pass --file or pipe code on stdin.")

    config = ctx.obj["config"]
    registry = ctx.obj["registry"]
    provider_id, model_id = resolve_provider_model(config, registry, provider_id, model_id)

    request = ReviewRequest(
        code=source.read(),
        language=language,
        context=context,
        focus_areas=tuple(focus_areas),
        provider_id=provider_id,
        model_id=model_id,
        title=title,
    )

    status = nullcontext() if as_json else console.status(f"Roasting with {provider_id}/{model_id}...")
    with handle_errors(), status:
        outcome = roast_code(request, registry, ctx.obj["limiter"], ctx.obj["user"])

    review_id = save_outcome(ctx, outcome)

    if as_json:
        click.echo(json.dumps({"id": review_id, "result": outcome.result.to_dict()}, indent=2))
        return
    print_result(outcome.result, outcome.title)
    if review_id:
        console.print(f"\n[dim]Saved as {review_id}[/dim]")
