"""Input validation run before the pipeline.

Every failure raises ValidationError with a machine-readable ``reason``
and the offending ``field`` so callers can report it precisely.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from roastlens_core.errors import ValidationError
from roastlens_core.models import ReviewRequest

MAX_CODE_CHARS = 100_000
MAX_CONTEXT_CHARS = 2_000
MAX_FOCUS_AREAS = 10
MAX_TITLE_CHARS = 200
MAX_PAGE_LIMIT = 100

_REVIEW_ID_RE = re.compile(r"^[0-9a-f]{32}$")
_REPO_RE = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)$")


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def validate_review_request(request: ReviewRequest, registry=None) -> ReviewRequest:
    """Check length bounds and, when a registry is given, the provider/model pair."""
    if not request.code:
        raise ValidationError("Code is required", reason="code_required", field="code")
    if len(request.code) > MAX_CODE_CHARS:
        raise ValidationError("Code is too long", reason="code_too_long", field="code")
    if request.context is not None and len(request.context) > MAX_CONTEXT_CHARS:
        raise ValidationError("Context is too long", reason="context_too_long", field="context")
    if len(request.focus_areas) > MAX_FOCUS_AREAS:
        raise ValidationError(
            f"At most {MAX_FOCUS_AREAS} focus areas are allowed",
            reason="too_many_focus_areas",
            field="focus_areas",
        )
    if request.title is not None and len(request.title) > MAX_TITLE_CHARS:
        raise ValidationError("Title is too long", reason="title_too_long", field="title")

    if registry is not None:
        validate_provider_model(registry, request.provider_id, request.model_id)
    return request


def validate_provider_model(registry, provider_id: str, model_id: str) -> None:
    if not registry.is_valid_provider(provider_id):
        raise ValidationError(
            f"Invalid provider: {provider_id}. Available: {', '.join(registry.ids())}",
            reason="invalid_provider",
            field="provider",
        )
    if not model_id:
        raise ValidationError("Model is required", reason="model_required", field="model")
    if not registry.is_valid_model(provider_id, model_id):
        raise ValidationError(f"Invalid model for {provider_id}: {model_id}", reason="invalid_model", field="model")


def validate_pagination(page, limit) -> Pagination:
    """Coerce page/limit (ints or numeric strings) and bound them."""
    try:
        page = int(page)
        limit = int(limit)
    except (TypeError, ValueError):
        raise ValidationError("Invalid pagination parameters", reason="invalid_pagination")
    if page < 1 or not 1 <= limit <= MAX_PAGE_LIMIT:
        raise ValidationError("Invalid pagination parameters", reason="invalid_pagination")
    return Pagination(page=page, limit=limit)


def validate_review_id(review_id: str | None) -> str:
    if not review_id or not _REVIEW_ID_RE.match(review_id):
        raise ValidationError("Review ID is required", reason="invalid_id", field="id")
    return review_id


def parse_repo(full_name: str) -> tuple[str, str]:
    """Split ``owner/name`` into its parts."""
    match = _REPO_RE.match(full_name or "")
    if not match:
        raise ValidationError(
            f"Repository must be in owner/name format, got {full_name!r}", reason="invalid_pr_ref", field="repo"
        )
    return match.group(1), match.group(2)


def validate_pr_number(number) -> int:
    try:
        number = int(number)
    except (TypeError, ValueError):
        raise ValidationError("Pull request number must be a positive integer", reason="invalid_pr_ref", field="pr")
    if number < 1:
        raise ValidationError("Pull request number must be a positive integer", reason="invalid_pr_ref", field="pr")
    return number
