"""GitHub service."""

from src.services.github.service import (
    GitHubChangeSetFetcher,
    GitHubCommentPoster,
    resolve_pull_request,
)

__all__ = [
    "GitHubChangeSetFetcher",
    "GitHubCommentPoster",
    "resolve_pull_request",
]
