"""Core roast orchestration.

Two entry points, one per source type:
    roast_code           pasted text or a local file
    roast_pull_request   GitHub PR → parse patches → combine → roast

Both check the rate limiter first, validate input, run a single provider
call and return a RoastOutcome. Persistence is left to the caller.
preview_pull_request runs the fetch and combine half of a PR roast with no
provider call and no rate limit check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from roastlens_core.errors import RateLimitExceededError, ValidationError
from roastlens_core.gh.pull_request import fetch_pull_request, get_repo
from roastlens_core.models import ParsedFileChange, PullRequestMetadata, ReviewRequest, ReviewResult
from roastlens_core.utils.combine import DEFAULT_MAX_LENGTH, combine
from roastlens_core.utils.patch import parse_file_change
from roastlens_core.validators import validate_pr_number, validate_provider_model, validate_review_request

logger = logging.getLogger(__name__)


@dataclass
class RoastOutcome:
    """Result of one roast plus what the caller needs to persist it.

    Decoupled from roastlens_store so roastlens_core has no dependency on the
    store layer. The CLI converts this to a ReviewRecord before persisting.
    """

    result: ReviewResult
    code: str  # the text that was roasted; the combined diff for PRs
    title: str
    source_type: str  # "PASTE" | "GITHUB_PR"
    language: str | None = None
    source_url: str | None = None
    pr_number: int | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    files: list[ParsedFileChange] = field(default_factory=list)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass
class PullRequestPreview:
    metadata: PullRequestMetadata
    files: list[ParsedFileChange]
    combined: str  # what roast_pull_request would send to the provider


def _check_rate_limit(limiter, user: str) -> None:
    result = limiter.check_limit(f"review:{user}")
    if not result.allowed:
        raise RateLimitExceededError(result)


def roast_code(request: ReviewRequest, registry, limiter, user: str) -> RoastOutcome:
    _check_rate_limit(limiter, user)
    validate_review_request(request, registry)

    provider = registry.get(request.provider_id)
    result = provider.review(request, request.model_id)
    logger.info(
        "Roasted %d chars with %s/%s: score %d",
        len(request.code),
        result.provider_id,
        result.model_id,
        result.score,
    )

    title = request.title or f"Code Review - {datetime.now(timezone.utc):%Y-%m-%d}"
    return RoastOutcome(
        result=result,
        code=request.code,
        title=title,
        source_type="PASTE",
        language=request.language,
    )


def build_pr_context(metadata) -> str:
    return (
        f'This is a GitHub Pull Request diff. PR Title: "{metadata.title}". '
        f"Changes: {metadata.additions} additions, {metadata.deletions} deletions "
        f"across {metadata.changed_file_count} files."
    )


def preview_pull_request(
    owner: str,
    repo_name: str,
    number: int,
    token: str | None = None,
    max_diff_chars: int = DEFAULT_MAX_LENGTH,
    repo_obj=None,
) -> PullRequestPreview:
    """Fetch a pull request and build the combined diff without roasting it."""
    number = validate_pr_number(number)
    repo = repo_obj if repo_obj is not None else get_repo(owner, repo_name, token)
    metadata, files = fetch_pull_request(repo, number)

    changes = [parse_file_change(f) for f in files]
    for change in changes:
        logger.debug("%s: %s, %d hunk(s)", change.filename, change.status, len(change.hunks))

    return PullRequestPreview(metadata=metadata, files=changes, combined=combine(files, max_length=max_diff_chars))


def roast_pull_request(
    owner: str,
    repo_name: str,
    number: int,
    provider_id: str,
    model_id: str,
    registry,
    limiter,
    user: str,
    token: str | None = None,
    max_diff_chars: int = DEFAULT_MAX_LENGTH,
    repo_obj=None,
) -> RoastOutcome:
    """Fetch a pull request, combine its patches and roast the result."""
    _check_rate_limit(limiter, user)
    number = validate_pr_number(number)
    validate_provider_model(registry, provider_id, model_id)

    preview = preview_pull_request(owner, repo_name, number, token, max_diff_chars, repo_obj)
    metadata, combined = preview.metadata, preview.combined
    if not combined.strip():
        raise ValidationError("No reviewable changes found in this PR", reason="no_reviewable_changes")

    request = validate_review_request(
        ReviewRequest(
            code=combined,
            language="diff",
            context=build_pr_context(metadata),
            provider_id=provider_id,
            model_id=model_id,
        )
    )
    result = registry.get(provider_id).review(request, model_id)
    logger.info("Roasted %s/%s#%d with %s/%s: score %d", owner, repo_name, number, provider_id, model_id, result.score)

    return RoastOutcome(
        result=result,
        code=combined,
        title=f"PR #{number}: {metadata.title}",
        source_type="GITHUB_PR",
        language="diff",
        source_url=metadata.url,
        pr_number=number,
        repo_owner=owner,
        repo_name=repo_name,
        files=preview.files,
    )
