"""Shared library utilities."""

from src.core.llm import get_review_llm
from src.core.logging import get_logger
from src.core.pr_parser import PRTarget, PullRequestRef, parse_pr_target

__all__ = [
    "get_review_llm",
    "get_logger",
    "PRTarget",
    "PullRequestRef",
    "parse_pr_target",
]
