"""Interpret raw model text as structured review feedback."""

import json

from pydantic import ValidationError

from src.core.logging import get_logger
from src.services.reviewer.schemas import (
    GeneralFeedback,
    LineFeedback,
    ModelReviewResponse,
    ParseDegraded,
    ReviewFeedback,
    Skip,
)

logger = get_logger("reviewer.parser")

PARSE_DEGRADED_MESSAGE = (
    "⚠️ The automated review could not be parsed into structured feedback. "
    "The raw model output is included below."
)


def degraded(raw_text: str) -> ParseDegraded:
    return ParseDegraded(message=PARSE_DEGRADED_MESSAGE, raw_message=raw_text)


def _skip_from(data: dict) -> Skip:
    message = data.get("message")
    summary = data.get("summary")
    return Skip(
        message=message if isinstance(message, str) else "",
        summary=summary if isinstance(summary, str) else None,
    )


def parse_feedback(raw_text: str) -> ReviewFeedback:
    """Parse model output into one feedback variant.

    Never raises: anything that is not a valid review object becomes
    ``ParseDegraded`` so the author still hears about the review.
    """
    # Find JSON in the response (models like to wrap it in fences)
    json_start = raw_text.find("{")
    json_end = raw_text.rfind("}") + 1
    if json_start == -1 or json_end <= json_start:
        logger.warning("Model response contains no JSON object")
        return degraded(raw_text)

    try:
        data = json.loads(raw_text[json_start:json_end])
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to decode review JSON: {e.msg}")
        return degraded(raw_text)

    # An explicit "no comment needed" wins over any other field, valid or not
    if isinstance(data, dict) and data.get("commentNeeded") is False:
        return _skip_from(data)

    try:
        response = ModelReviewResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Failed to parse review JSON: {e.error_count()} error(s)")
        return degraded(raw_text)

    if not response.comment_needed:
        return Skip(message=response.message or "", summary=response.summary)

    if response.line_comments is not None:
        return LineFeedback(
            summary=response.summary,
            detailed_feedback=response.detailed_feedback,
            line_comments=response.line_comments,
            code_snippets=response.code_snippets,
        )

    return GeneralFeedback(
        summary=response.summary,
        detailed_feedback=response.detailed_feedback,
        code_snippets=response.code_snippets,
    )
