"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager

import click

from roastlens_core.errors import (
    GithubAuthError,
    ProviderNotConfiguredError,
    RateLimitExceededError,
    UpstreamError,
    ValidationError,
)
from roastlens_core.reviewer import RoastOutcome
from roastlens_store.models import ReviewRecord

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to process review. Please try again."


@contextmanager
def handle_errors():
    """Map the pipeline's error taxonomy onto click exceptions.

    Validation, configuration and authentication problems get their own
    actionable message; transport failures get a generic retry message and
    the details go to the log.
    """
    try:
        yield
    except (ValidationError, ProviderNotConfiguredError, GithubAuthError) as e:
        raise click.UsageError(e.message)
    except RateLimitExceededError as e:
        wait = max(0, int(e.result.reset_timestamp - time.time()))
        raise click.ClickException(f"{e.message} Retry in {wait}s.")
    except UpstreamError as e:
        logger.error("Upstream failure: %s", e.message)
        raise click.ClickException(GENERIC_FAILURE)


def require_store(ctx: click.Context):
    from roastlens_store.noop import NoOpStore

    store = ctx.obj.get("store") if ctx.obj else None
    if store is None or isinstance(store, NoOpStore):
        raise click.UsageError("No store configured. Add 'store: sqlite' to .roastlens.yml to keep review history.")
    return store


def resolve_provider_model(config: dict, registry, provider_id: str | None, model_id: str | None) -> tuple[str, str]:
    """Pick the provider/model pair from options, falling back to config.

    When only --provider is given and it differs from the configured
    provider, the provider's first model is used rather than a model id that
    belongs to another vendor.
    """
    provider_id = provider_id or config["provider"]
    if model_id:
        return provider_id, model_id
    if provider_id == config["provider"] and config.get("model"):
        return provider_id, config["model"]
    with handle_errors():
        models = registry.get(provider_id).supported_models
    return provider_id, models[0].id if models else ""


def outcome_to_record(outcome: RoastOutcome, owner: str) -> ReviewRecord:
    """Map a RoastOutcome to a ReviewRecord for the store.

    The CLI owns this mapping — roastlens_core has no store knowledge and
    roastlens_store has no core knowledge. The CLI bridges the two.
    """
    return ReviewRecord(
        owner=owner,
        title=outcome.title,
        code=outcome.code,
        provider=outcome.result.provider_id,
        model=outcome.result.model_id,
        result=outcome.result.to_dict(),
        source_type=outcome.source_type,
        language=outcome.language,
        source_url=outcome.source_url,
        pr_number=outcome.pr_number,
        repo_owner=outcome.repo_owner,
        repo_name=outcome.repo_name,
        created_at=outcome.created_at,
    )


def save_outcome(ctx: click.Context, outcome: RoastOutcome) -> str:
    store = ctx.obj["store"]
    return store.save(outcome_to_record(outcome, ctx.obj["user"]))
