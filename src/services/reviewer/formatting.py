"""Comment bodies posted on the pull request."""

from src.services.reviewer.schemas import (
    CodeSnippet,
    FeedbackVariant,
    GeneralFeedback,
    LineComment,
    LineFeedback,
    ParseDegraded,
    Skip,
)

AUTOMATED_FEEDBACK_MARKER = "🤖 AI Code Review Feedback:"

NO_SIGNIFICANT_CHANGES_MESSAGE = "No significant changes were detected in this pull request."


def normalize_newlines(text: str) -> str:
    """Turn literal ``\\n`` escapes left in model output into line breaks."""
    return text.replace("\\r\\n", "\n").replace("\\n", "\n")


def render_comment(body: str) -> str:
    """Final comment text: automated-feedback marker followed by the body."""
    return f"{AUTOMATED_FEEDBACK_MARKER}\n\n{normalize_newlines(body)}"


def context_window(line_number: int) -> tuple[int, int]:
    """Zero-based start and end of the context shown around a commented line."""
    start = max(line_number - 1, 0)
    end = line_number + 2
    return start, end


def format_line_comment(filename: str, line_comment: LineComment) -> str:
    start, end = context_window(line_comment.line_number)
    window_size = end - start + 1
    return (
        f"**File:** `{filename}`\n\n"
        f"```diff\n"
        f"@@ -{start + 1},{window_size} @@\n"
        f"// AI Comment (line {line_comment.line_number}): {line_comment.comment}\n"
        f"```\n\n"
        f"**AI Comment:**\n{line_comment.comment}"
    )


def _format_snippets(snippets: list[CodeSnippet]) -> str:
    blocks = []
    for snippet in snippets:
        blocks.append(
            f"**Before:**\n```\n{snippet.before}\n```\n"
            f"**After:**\n```\n{snippet.after}\n```"
        )
    return "\n\n".join(blocks)


def format_summary_comment(
    summary: str | None,
    detailed_feedback: str | None,
    code_snippets: list[CodeSnippet] | None = None,
) -> str:
    body = f"{summary or ''}\n\n{detailed_feedback or ''}"
    if code_snippets:
        body += "\n\n**Suggested changes:**\n\n" + _format_snippets(code_snippets)
    return body


def format_degraded_comment(feedback: ParseDegraded) -> str:
    return f"{feedback.message}\n\n{feedback.raw_message}"


def format_feedback_comment(feedback: GeneralFeedback | LineFeedback | ParseDegraded) -> str:
    """Single comment for feedback that is not posted line by line."""
    if isinstance(feedback, ParseDegraded):
        return format_degraded_comment(feedback)
    return format_summary_comment(
        feedback.summary, feedback.detailed_feedback, feedback.code_snippets
    )


def format_fallback_comment(feedback: FeedbackVariant) -> str:
    """Overview comment from the fallback model call.

    Falls back to a fixed message when the call produced nothing usable.
    """
    if isinstance(feedback, ParseDegraded):
        return format_degraded_comment(feedback)
    if isinstance(feedback, (LineFeedback, GeneralFeedback)):
        if feedback.summary or feedback.detailed_feedback:
            return format_feedback_comment(feedback)
    if isinstance(feedback, Skip) and feedback.summary:
        return format_summary_comment(feedback.summary, None)
    return NO_SIGNIFICANT_CHANGES_MESSAGE
