"""Tests for review instruction templates."""

from src.core.prompts import (
    SUMMARY_SEPARATOR,
    render_code_review_prompt,
    render_review_summary_prompt,
)


class TestCodeReviewPrompt:
    def test_embeds_filename_and_diff(self):
        patch = "@@ -1 +1 @@\n-x = <a>\n+x = <b>"

        prompt = render_code_review_prompt("src/app.py", patch)

        assert "**src/app.py**" in prompt
        assert f"```diff\n{patch}\n```" in prompt

    def test_describes_response_contract(self):
        prompt = render_code_review_prompt("a.py", "+x")

        for field in ("commentNeeded", "summary", "detailedFeedback", "lineComments", "lineNumber"):
            assert f'"{field}"' in prompt


class TestReviewSummaryPrompt:
    def test_joins_summaries_in_order(self):
        prompt = render_review_summary_prompt(["first", "second", "third"])

        assert SUMMARY_SEPARATOR.join(["first", "second", "third"]) in prompt
        assert "Pull Request Summary Request" in prompt
