"""Credential and identity resolution for the CLI.

GitHub token resolution order (stops at first success):
  1. GITHUB_TOKEN environment variable (CI / explicit override)
  2. `gh auth token` (GitHub CLI session — works after `gh auth login`)

A missing token is not an error here: PR commands turn it into a
"re-authentication required" message, everything else works without one.
"""

from __future__ import annotations

import getpass
import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises — callers should check for None.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except FileNotFoundError:
        logger.debug("gh CLI not installed; no GitHub token available.")
    except subprocess.TimeoutExpired:
        logger.debug("`gh auth token` timed out.")

    return None


def resolve_user() -> str:
    """Return the identity reviews are stored under and rate-limited by."""
    user = os.environ.get("ROASTLENS_USER")
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "anonymous"
