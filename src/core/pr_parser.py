"""Pull request references."""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PullRequestRef:
    """Identifies the pull request under review. Built once per event."""

    number: int
    author_login: str
    owner_login: str
    repo_name: str

    @property
    def label(self) -> str:
        return f"{self.owner_login}/{self.repo_name}#{self.number}"


@dataclass(frozen=True)
class PRTarget:
    """A PR named in text, before its author is known."""

    owner: str
    repo: str
    pr_number: int


def parse_pr_target(text: str) -> Optional[PRTarget]:
    """
    Parse a PR target from text.

    Supported formats:
    - https://github.com/owner/repo/pull/123 -> full URL
    - owner/repo#123 -> short reference
    """
    url_pattern = r"https?://github\.com/([^/\s]+)/([^/\s]+)/pull/(\d+)"
    match = re.search(url_pattern, text)
    if match:
        return PRTarget(
            owner=match.group(1),
            repo=match.group(2),
            pr_number=int(match.group(3)),
        )

    full_ref_pattern = r"([a-zA-Z0-9_-]+)/([a-zA-Z0-9_.-]+)#(\d+)"
    match = re.search(full_ref_pattern, text)
    if match:
        return PRTarget(
            owner=match.group(1),
            repo=match.group(2),
            pr_number=int(match.group(3)),
        )

    return None
