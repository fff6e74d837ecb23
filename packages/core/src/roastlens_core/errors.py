"""Exception taxonomy for the roast pipeline.

Every error carries a user-facing ``message`` and a machine-readable
``reason`` so the CLI (or any other caller) can map it to a specific,
actionable response without string-matching the message.

Malformed model output has no exception class: the response normalizer
absorbs it and always returns a well-shaped result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roastlens_core.ratelimit import RateLimitResult


class RoastError(Exception):
    reason: str = "error"

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.message = message
        if reason is not None:
            self.reason = reason


class ValidationError(RoastError):
    """Input rejected before the pipeline runs."""

    reason = "invalid_request"

    def __init__(self, message: str, reason: str | None = None, field: str | None = None):
        super().__init__(message, reason)
        self.field = field


class ProviderNotConfiguredError(RoastError):
    """A provider was selected but its API credential is absent."""

    reason = "provider_not_configured"

    def __init__(self, provider_id: str, env_var: str):
        super().__init__(
            f"AI provider '{provider_id}' is not configured. Set the {env_var} environment variable.",
        )
        self.provider_id = provider_id
        self.env_var = env_var


class UpstreamError(RoastError):
    """Network failure or non-success response from an LLM provider or GitHub."""

    reason = "upstream_failed"


class GithubAuthError(UpstreamError):
    """The GitHub access token is missing or was rejected; the user must re-authenticate."""

    reason = "github_auth_required"


class RateLimitExceededError(RoastError):
    reason = "rate_limited"

    def __init__(self, result: RateLimitResult):
        super().__init__("Rate limit exceeded. Please try again later.")
        self.result = result
