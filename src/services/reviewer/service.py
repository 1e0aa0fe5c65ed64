"""Reviewer service - orchestration layer."""

from src.config import settings
from src.core.exceptions import ChangeSetFetchError
from src.core.llm import get_review_llm
from src.core.logging import get_logger
from src.core.pr_parser import PullRequestRef
from src.services.github.service import GitHubChangeSetFetcher, GitHubCommentPoster
from src.services.reviewer.graph import create_review_graph, recursion_limit_for
from src.services.reviewer.interfaces import (
    ChangeSetFetcher,
    CommentPoster,
    FailureNotifier,
    Reviewer,
)
from src.services.reviewer.invoker import ModelInvoker
from src.services.reviewer.schemas import ReviewResult
from src.services.reviewer.state import ReviewState
from src.services.slack.service import SlackFailureNotifier

logger = get_logger("reviewer.service")


class ReviewOrchestrator:
    """Turns the changed files of a PR into posted review comments."""

    def __init__(
        self,
        fetcher: ChangeSetFetcher,
        reviewer: Reviewer,
        poster: CommentPoster,
        notifier: FailureNotifier | None = None,
        max_files: int | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._notifier = notifier
        self._max_files = max_files
        self._graph = create_review_graph(reviewer, poster, notifier)

    async def run(self, pr: PullRequestRef) -> ReviewResult:
        """Review every changed file of ``pr`` and post the feedback."""
        logger.info(f"Starting review: {pr.label} by {pr.author_login}")

        try:
            files = await self._fetcher.fetch(pr)
        except ChangeSetFetchError as e:
            logger.error(f"Review aborted: {e.message}")
            if self._notifier:
                await self._notifier.notify(f"Review aborted on {pr.label}", e.message)
            raise

        # Binary and unchanged files carry no patch
        reviewable_files = [f for f in files if f.patch]
        if len(reviewable_files) < len(files):
            logger.info(f"Skipping {len(files) - len(reviewable_files)} files without a patch")

        if self._max_files and len(reviewable_files) > self._max_files:
            logger.warning(f"Limiting review to {self._max_files} files")
            reviewable_files = reviewable_files[: self._max_files]

        if not reviewable_files:
            logger.info("No files with patches to review")
            return ReviewResult(pr=pr.label)

        initial_state: ReviewState = {
            "pr": pr,
            "files": reviewable_files,
            "current_file_index": 0,
            "current_feedback": None,
            "file_summaries": [],
            "comment_posted": False,
            "comments_posted": 0,
            "failures": [],
            "fallback_posted": False,
        }

        final_state = await self._graph.ainvoke(
            initial_state,
            config={"recursion_limit": recursion_limit_for(len(reviewable_files))},
        )

        result = ReviewResult(
            pr=pr.label,
            files_reviewed=len(reviewable_files),
            comments_posted=final_state["comments_posted"],
            fallback_posted=final_state["fallback_posted"],
            failures=final_state["failures"],
        )
        logger.info(
            f"Review completed for {pr.label}: {result.comments_posted} comments, "
            f"fallback={result.fallback_posted}, failures={len(result.failures)}"
        )
        return result


def build_orchestrator() -> ReviewOrchestrator:
    """Wire the orchestrator to GitHub, OpenRouter and (optionally) Slack."""
    notifier = SlackFailureNotifier.from_settings()
    reviewer = ModelInvoker(
        get_review_llm(),
        timeout=settings.model_timeout_seconds,
        max_attempts=settings.model_max_attempts,
        retry_backoff=settings.model_retry_backoff_seconds,
        notifier=notifier,
    )
    return ReviewOrchestrator(
        fetcher=GitHubChangeSetFetcher(),
        reviewer=reviewer,
        poster=GitHubCommentPoster(),
        notifier=notifier,
        max_files=settings.max_files_per_review,
    )


async def review_pull_request(pr: PullRequestRef) -> ReviewResult:
    """Review a complete pull request with the configured collaborators."""
    return await build_orchestrator().run(pr)
