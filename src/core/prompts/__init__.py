"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), undefined=StrictUndefined)

SUMMARY_SEPARATOR = "\n\n---\n\n"


def render_code_review_prompt(filename: str, patch: str) -> str:
    """Render the per-file review instruction."""
    template = _env.get_template("code_review.jinja2")
    return template.render(filename=filename, patch=patch)


def render_review_summary_prompt(summaries: list[str]) -> str:
    """Render the fallback overview instruction from per-file summaries."""
    template = _env.get_template("review_summary.jinja2")
    return template.render(summaries=summaries, separator=SUMMARY_SEPARATOR)
