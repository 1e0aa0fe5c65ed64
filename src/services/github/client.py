"""GitHub API client - data layer."""

from typing import Optional
from github import Auth, Github
from github.PullRequest import PullRequest
from github.Repository import Repository
from loguru import logger

from src.config import settings

_github_client: Optional[Github] = None


def _build_auth() -> Auth.Auth:
    if settings.github_token:
        return Auth.Token(settings.github_token)

    if not all([settings.github_app_id, settings.github_private_key, settings.github_installation_id]):
        raise ValueError("GitHub credentials not configured (GITHUB_TOKEN or GitHub App)")

    private_key = settings.github_private_key.replace("\\n", "\n")
    app_auth = Auth.AppAuth(int(settings.github_app_id), private_key)
    # Installation auth renews its token before expiry
    return app_auth.get_installation_auth(int(settings.github_installation_id))


def get_github_client() -> Github:
    """Get an authenticated GitHub client.

    A personal access token wins when configured; otherwise the client
    authenticates as the App installation.
    """
    global _github_client

    if _github_client:
        return _github_client

    auth = _build_auth()
    _github_client = Github(auth=auth, timeout=int(settings.github_timeout_seconds))

    mode = "token" if isinstance(auth, Auth.Token) else "App installation"
    logger.info(f"GitHub {mode} client initialized")
    return _github_client


def get_repository(owner: str, repo: str) -> Repository:
    """Repository handle without a lookup request."""
    return get_github_client().get_repo(f"{owner}/{repo}", lazy=True)


def fetch_pull_request(owner: str, repo: str, pr_number: int) -> PullRequest:
    """Fetch a pull request from GitHub API."""
    return get_repository(owner, repo).get_pull(pr_number)


def fetch_pr_files(owner: str, repo: str, pr_number: int) -> list[dict]:
    """Fetch changed files of a PR, in API order."""
    pr = fetch_pull_request(owner, repo, pr_number)
    return [{"filename": f.filename, "patch": f.patch} for f in pr.get_files()]


def create_issue_comment(owner: str, repo: str, pr_number: int, body: str) -> None:
    """Create a conversation comment on a PR."""
    get_repository(owner, repo).get_issue(pr_number).create_comment(body)
