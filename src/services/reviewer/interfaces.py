"""Collaborator interfaces injected into the review orchestrator."""

from typing import Any, Protocol

from src.core.pr_parser import PullRequestRef
from src.services.reviewer.schemas import ChangedFile, ReviewFeedback


class ChangeSetFetcher(Protocol):
    async def fetch(self, pr: PullRequestRef) -> list[ChangedFile]:
        """Changed files in API order. Raises ChangeSetFetchError."""
        ...


class CommentPoster(Protocol):
    async def post(self, pr: PullRequestRef, body: str) -> None:
        """Post a comment on the PR. Raises PostingError."""
        ...


class Reviewer(Protocol):
    async def review(self, instruction: str) -> ReviewFeedback:
        ...


class ChatModel(Protocol):
    """The subset of a LangChain chat model the invoker relies on."""

    async def ainvoke(self, input: Any, **kwargs: Any) -> Any:
        ...


class FailureNotifier(Protocol):
    async def notify(self, title: str, details: str) -> None:
        """Report an operational failure. Must not raise."""
        ...
