"""GitHub service - business logic layer."""

import asyncio

from github import GithubException

from src.config import settings
from src.core.exceptions import ChangeSetFetchError, PostingError
from src.core.logging import get_logger
from src.core.pr_parser import PRTarget, PullRequestRef
from src.services.github.client import create_issue_comment, fetch_pr_files, fetch_pull_request
from src.services.reviewer.formatting import render_comment
from src.services.reviewer.schemas import ChangedFile

logger = get_logger("github.service")


def _describe(error: BaseException) -> str:
    if isinstance(error, GithubException):
        message = error.data.get("message") if isinstance(error.data, dict) else None
        return f"{error.status} {message or ''}".strip()
    if isinstance(error, asyncio.TimeoutError):
        return "timed out"
    return str(error) or type(error).__name__


class GitHubChangeSetFetcher:
    """Lists the changed files of a PR through the GitHub API."""

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout or settings.github_timeout_seconds

    async def fetch(self, pr: PullRequestRef) -> list[ChangedFile]:
        logger.info(f"Fetching changed files: {pr.label}")
        try:
            files = await asyncio.wait_for(
                asyncio.to_thread(fetch_pr_files, pr.owner_login, pr.repo_name, pr.number),
                timeout=self._timeout,
            )
        except Exception as e:
            raise ChangeSetFetchError(pr.label, _describe(e)) from e

        logger.info(f"Found {len(files)} files in PR")
        return [ChangedFile(**f) for f in files]


class GitHubCommentPoster:
    """Posts automated feedback as PR conversation comments.

    Not wrapped in an outer deadline: an abandoned worker thread could still
    create the comment after it was reported as failed. Each request is
    bounded by the client's own ``GITHUB_TIMEOUT_SECONDS``.
    """

    async def post(self, pr: PullRequestRef, body: str) -> None:
        try:
            await asyncio.to_thread(
                create_issue_comment,
                pr.owner_login,
                pr.repo_name,
                pr.number,
                render_comment(body),
            )
        except Exception as e:
            raise PostingError(pr.label, _describe(e)) from e

        logger.info(f"Posted comment on {pr.label}")


def resolve_pull_request(target: PRTarget) -> PullRequestRef:
    """Look up the author of a PR named by owner/repo/number."""
    pr = fetch_pull_request(target.owner, target.repo, target.pr_number)
    return PullRequestRef(
        number=target.pr_number,
        author_login=pr.user.login,
        owner_login=target.owner,
        repo_name=target.repo,
    )
