"""LangGraph workflow for reviewing the files of a pull request."""

import asyncio
from typing import Literal

from langgraph.graph import END, StateGraph

from src.core.exceptions import PostingError
from src.core.logging import get_logger
from src.core.pr_parser import PullRequestRef
from src.core.prompts import render_code_review_prompt, render_review_summary_prompt
from src.services.reviewer.formatting import (
    format_fallback_comment,
    format_feedback_comment,
    format_line_comment,
)
from src.services.reviewer.interfaces import CommentPoster, FailureNotifier, Reviewer
from src.services.reviewer.schemas import (
    FallbackSummaryRequest,
    GeneralFeedback,
    LineComment,
    LineFeedback,
    ParseDegraded,
    Skip,
    TransportFailure,
    feedback_summary,
)
from src.services.reviewer.state import ReviewState

logger = get_logger("reviewer.graph")


def create_review_graph(
    reviewer: Reviewer,
    poster: CommentPoster,
    notifier: FailureNotifier | None = None,
):
    """Create the review graph.

    Files are visited strictly in order: ``select_file -> review_file ->
    post_feedback`` per file, then an optional ``fallback_summary`` when no
    comment made it onto the PR.
    """

    async def report_failures(pr: PullRequestRef, failures: list[str]) -> None:
        if failures and notifier:
            await notifier.notify(f"Review comments failed on {pr.label}", "\n".join(failures))

    async def post_comment(pr: PullRequestRef, body: str, what: str) -> str | None:
        """Post one comment. Returns a failure description instead of raising."""
        try:
            await poster.post(pr, body)
        except PostingError as e:
            logger.error(f"Failed to post {what} on {pr.label}: {e.message}")
            return f"{what}: {e.message}"
        return None

    async def post_line_comments(
        pr: PullRequestRef,
        filename: str,
        line_comments: list[LineComment],
    ) -> tuple[int, list[str]]:
        """Post every line comment concurrently; one failure never blocks the rest."""

        async def post_one(line_comment: LineComment) -> None:
            await poster.post(pr, format_line_comment(filename, line_comment))

        results = await asyncio.gather(
            *(post_one(lc) for lc in line_comments),
            return_exceptions=True,
        )

        posted = 0
        failures = []
        for line_comment, result in zip(line_comments, results):
            if isinstance(result, BaseException):
                reason = result.message if isinstance(result, PostingError) else repr(result)
                logger.error(f"Failed to post comment for {filename}:{line_comment.line_number}: {reason}")
                failures.append(f"{filename}:{line_comment.line_number}: {reason}")
            else:
                posted += 1
        return posted, failures

    def select_next_file(state: ReviewState) -> dict:
        """Log progress; routing decides what runs next."""
        idx = state["current_file_index"]
        files = state["files"]

        if idx >= len(files):
            logger.info("All files reviewed")
        else:
            logger.info(f"Selecting file {idx + 1}/{len(files)}: {files[idx].filename}")
        return {}

    def route_next(
        state: ReviewState,
    ) -> Literal["review_file", "fallback_summary", "__end__"]:
        if state["current_file_index"] < len(state["files"]):
            return "review_file"
        if not state["comment_posted"] and state["file_summaries"]:
            return "fallback_summary"
        return END

    async def review_file_node(state: ReviewState) -> dict:
        """Ask the model about the current file and collect its summary."""
        current_file = state["files"][state["current_file_index"]]
        instruction = render_code_review_prompt(current_file.filename, current_file.patch)
        feedback = await reviewer.review(instruction)

        file_summaries = list(state["file_summaries"])
        summary = feedback_summary(feedback)
        if summary:
            file_summaries.append(summary)

        logger.info(f"Feedback for {current_file.filename}: {feedback.kind}")
        return {"current_feedback": feedback, "file_summaries": file_summaries}

    async def post_feedback_node(state: ReviewState) -> dict:
        """Decide which comments the current feedback turns into, and post them."""
        pr = state["pr"]
        current_file = state["files"][state["current_file_index"]]
        feedback = state["current_feedback"]

        posted = 0
        failures: list[str] = []

        if isinstance(feedback, TransportFailure):
            logger.error(f"No review for {current_file.filename}: model unavailable ({feedback.reason})")
        elif isinstance(feedback, Skip) or feedback is None:
            logger.info(f"No comment needed for {current_file.filename}")
        elif isinstance(feedback, LineFeedback) and feedback.line_comments:
            posted, failures = await post_line_comments(
                pr, current_file.filename, feedback.line_comments
            )
        elif isinstance(feedback, (LineFeedback, GeneralFeedback, ParseDegraded)):
            error = await post_comment(
                pr, format_feedback_comment(feedback), f"review of {current_file.filename}"
            )
            if error:
                failures.append(error)
            else:
                posted = 1

        await report_failures(pr, failures)

        return {
            "current_feedback": None,
            "current_file_index": state["current_file_index"] + 1,
            "comment_posted": state["comment_posted"] or posted > 0,
            "comments_posted": state["comments_posted"] + posted,
            "failures": state["failures"] + failures,
        }

    async def fallback_summary_node(state: ReviewState) -> dict:
        """Post one PR-level overview built from the per-file summaries."""
        pr = state["pr"]
        request = FallbackSummaryRequest(summaries=state["file_summaries"])
        logger.info(f"No per-file comments on {pr.label}, requesting overview from {len(request.summaries)} summaries")

        feedback = await reviewer.review(render_review_summary_prompt(request.summaries))
        error = await post_comment(pr, format_fallback_comment(feedback), "fallback overview")

        failures = [error] if error else []
        await report_failures(pr, failures)

        return {
            "fallback_posted": error is None,
            "comment_posted": error is None,
            "comments_posted": state["comments_posted"] + (0 if error else 1),
            "failures": state["failures"] + failures,
        }

    graph = StateGraph(ReviewState)

    graph.add_node("select_file", select_next_file)
    graph.add_node("review_file", review_file_node)
    graph.add_node("post_feedback", post_feedback_node)
    graph.add_node("fallback_summary", fallback_summary_node)

    graph.set_entry_point("select_file")

    graph.add_conditional_edges(
        "select_file",
        route_next,
        {
            "review_file": "review_file",
            "fallback_summary": "fallback_summary",
            END: END,
        },
    )

    graph.add_edge("review_file", "post_feedback")
    graph.add_edge("post_feedback", "select_file")
    graph.add_edge("fallback_summary", END)

    return graph.compile()


def recursion_limit_for(file_count: int) -> int:
    """Step budget for a run: three nodes per file plus the final pass."""
    return 3 * file_count + 10
