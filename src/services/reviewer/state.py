"""Graph state for a single review run."""

from typing import TypedDict

from src.core.pr_parser import PullRequestRef
from src.services.reviewer.schemas import ChangedFile, FeedbackVariant


class ReviewState(TypedDict):
    """State for the review graph. Created per run, discarded afterwards."""

    # PR Context (immutable)
    pr: PullRequestRef

    # Files to review, all with a non-empty patch
    files: list[ChangedFile]
    current_file_index: int

    # Feedback for the file being processed
    current_feedback: FeedbackVariant | None

    # Accumulated results
    file_summaries: list[str]
    comment_posted: bool
    comments_posted: int
    failures: list[str]

    # Final output
    fallback_posted: bool
