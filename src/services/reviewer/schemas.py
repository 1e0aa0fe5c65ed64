"""Pydantic schemas for reviewer service."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ChangedFile(BaseModel):
    """A file touched by the pull request."""

    filename: str
    patch: str | None = None


class LineComment(BaseModel):
    """Comment anchored to a line on the new-file side of the diff."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    line_number: int = Field(alias="lineNumber", ge=1)
    comment: str


class CodeSnippet(BaseModel):
    model_config = ConfigDict(frozen=True)

    before: str
    after: str


class ModelReviewResponse(BaseModel):
    """JSON object the review model is instructed to answer with."""

    model_config = ConfigDict(populate_by_name=True)

    comment_needed: bool = Field(default=True, alias="commentNeeded")
    message: str | None = None
    summary: str | None = None
    detailed_feedback: str | None = Field(default=None, alias="detailedFeedback")
    line_comments: list[LineComment] | None = Field(default=None, alias="lineComments")
    code_snippets: list[CodeSnippet] | None = Field(default=None, alias="codeSnippets")


# Feedback variants. Exactly one is produced per model response.


class Skip(BaseModel):
    """The model decided no comment is warranted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["skip"] = "skip"
    message: str = ""
    summary: str | None = None


class LineFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["line"] = "line"
    summary: str | None = None
    detailed_feedback: str | None = None
    line_comments: list[LineComment] = []
    code_snippets: list[CodeSnippet] | None = None


class GeneralFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["general"] = "general"
    summary: str | None = None
    detailed_feedback: str | None = None
    code_snippets: list[CodeSnippet] | None = None


class ParseDegraded(BaseModel):
    """The model answered, but not with the expected JSON object."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["degraded"] = "degraded"
    message: str
    raw_message: str


class TransportFailure(BaseModel):
    """The model could not be reached within the allowed attempts."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_failure"] = "transport_failure"
    reason: str
    attempts: int


FeedbackVariant = Union[Skip, LineFeedback, GeneralFeedback, ParseDegraded, TransportFailure]

ReviewFeedback = Annotated[FeedbackVariant, Field(discriminator="kind")]


def feedback_summary(feedback: ReviewFeedback) -> str | None:
    """Summary text carried by the feedback, if any."""
    if isinstance(feedback, (Skip, LineFeedback, GeneralFeedback)):
        summary = (feedback.summary or "").strip()
        return summary or None
    return None


class FallbackSummaryRequest(BaseModel):
    """Per-file summaries, in review order, for the PR-level overview."""

    summaries: list[str]


class ReviewResult(BaseModel):
    """Result of a PR review run."""

    pr: str
    files_reviewed: int = 0
    comments_posted: int = 0
    fallback_posted: bool = False
    failures: list[str] = []
