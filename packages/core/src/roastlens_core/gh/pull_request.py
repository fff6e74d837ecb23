"""Pull request diff source backed by PyGithub.

Converts PyGithub objects into the plain PullRequestMetadata /
PullRequestFile dataclasses so nothing past this module touches the SDK.
GitHub failures are translated into the pipeline's error taxonomy:
a missing or rejected token is GithubAuthError (the user has to
re-authenticate), anything else is UpstreamError.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager

from github import BadCredentialsException, Github, GithubException, UnknownObjectException

from roastlens_core.errors import GithubAuthError, UpstreamError
from roastlens_core.models import PullRequestFile, PullRequestMetadata

logger = logging.getLogger(__name__)


@contextmanager
def _github_errors(what: str):
    try:
        yield
    except BadCredentialsException as e:
        raise GithubAuthError("GitHub rejected the access token. Please re-authenticate.") from e
    except UnknownObjectException as e:
        raise UpstreamError(f"{what} not found on GitHub.") from e
    except GithubException as e:
        raise UpstreamError(f"GitHub API error while fetching {what}: {e.status}") from e


def get_repo(owner: str, repo: str, token: str | None):
    if not token:
        raise GithubAuthError("GitHub access token not found. Set GITHUB_TOKEN or run `gh auth login`.")
    with _github_errors(f"{owner}/{repo}"):
        return Github(token).get_repo(f"{owner}/{repo}")


def get_pull_requests(repo, state: str = "open"):
    with _github_errors(f"pull requests of {repo.full_name}"):
        return list(repo.get_pulls(state=state, sort="updated"))


def get_pull_request_metadata(repo, number: int) -> PullRequestMetadata:
    with _github_errors(f"PR #{number}"):
        pr = repo.get_pull(number)
        return PullRequestMetadata(
            number=pr.number,
            title=pr.title or "",
            state=pr.state,
            url=pr.html_url,
            author=pr.user.login if pr.user else "",
            head_ref=pr.head.ref,
            base_ref=pr.base.ref,
            additions=pr.additions,
            deletions=pr.deletions,
            changed_file_count=pr.changed_files,
        )


def get_pull_request_files(repo, number: int) -> list[PullRequestFile]:
    with _github_errors(f"files of PR #{number}"):
        return [
            PullRequestFile(
                filename=f.filename,
                status=f.status,
                additions=f.additions,
                deletions=f.deletions,
                changes=f.changes,
                patch=f.patch,
            )
            for f in repo.get_pull(number).get_files()
        ]


def fetch_pull_request(repo, number: int) -> tuple[PullRequestMetadata, list[PullRequestFile]]:
    """Fetch metadata and the file list concurrently and return both."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        metadata = pool.submit(get_pull_request_metadata, repo, number)
        files = pool.submit(get_pull_request_files, repo, number)
        result = metadata.result(), files.result()
    logger.debug("Fetched PR #%d: %d file(s)", number, len(result[1]))
    return result
