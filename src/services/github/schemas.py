"""Pydantic schemas for GitHub webhook payloads."""

from pydantic import BaseModel

from src.core.pr_parser import PullRequestRef

SUPPORTED_ACTIONS = ("opened", "synchronize")

WEBHOOK_RECEIVED = "Webhook received!"
EVENT_IGNORED = "Event ignored"


class GitHubAccount(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    owner: GitHubAccount
    name: str


class BaseBranch(BaseModel):
    repo: GitHubRepository


class PullRequestPayload(BaseModel):
    """The subset of ``pull_request`` the reviewer reads."""

    number: int
    user: GitHubAccount
    base: BaseBranch


class PullRequestEvent(BaseModel):
    """Body of a ``pull_request`` webhook delivery."""

    action: str
    pull_request: PullRequestPayload

    def to_ref(self) -> PullRequestRef:
        pr = self.pull_request
        return PullRequestRef(
            number=pr.number,
            author_login=pr.user.login,
            owner_login=pr.base.repo.owner.login,
            repo_name=pr.base.repo.name,
        )
