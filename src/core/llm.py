"""LLM client using OpenRouter."""

from langchain_openai import ChatOpenAI
from src.config import settings
from src.core.logging import get_logger

logger = get_logger("llm")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Sampling is identical for per-file and fallback review calls.
REVIEW_MAX_TOKENS = 1024
REVIEW_TEMPERATURE = 0.7
REVIEW_TOP_P = 0.9

SUPPORTED_MODELS = {
    "claude-sonnet-4": {
        "provider": "openrouter",
        "model_id": "anthropic/claude-sonnet-4",
    },
    "claude-opus-4": {
        "provider": "openrouter",
        "model_id": "anthropic/claude-opus-4",
    },
    "claude-3.5-haiku": {
        "provider": "openrouter",
        "model_id": "anthropic/claude-3.5-haiku",
    },
    "gpt-4o": {
        "provider": "openrouter",
        "model_id": "openai/gpt-4o",
    },
    "gpt-4o-mini": {
        "provider": "openrouter",
        "model_id": "openai/gpt-4o-mini",
    },
}


def resolve_model_id(model: str) -> str:
    """Map a short model name to its OpenRouter id, passing unknown ids through."""
    config = SUPPORTED_MODELS.get(model)
    if config:
        return config["model_id"]
    if "/" in model:
        return model
    logger.warning(f"[LLM] Unknown model {model!r}, falling back to claude-sonnet-4")
    return SUPPORTED_MODELS["claude-sonnet-4"]["model_id"]


def get_review_llm(model: str | None = None) -> ChatOpenAI:
    """Get the chat LLM used for code review via OpenRouter.

    Retries and timeouts are owned by the caller, so the client itself
    is built with ``max_retries=0``.
    """
    api_key = settings.openrouter_api_key
    if not api_key:
        raise ValueError("OPENROUTER_API_KEY not configured")

    model = model or settings.review_model
    model_id = resolve_model_id(model)

    logger.info(f"[LLM] Using OpenRouter: {model} -> {model_id}")

    return ChatOpenAI(
        model=model_id,
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
        max_tokens=REVIEW_MAX_TOKENS,
        temperature=REVIEW_TEMPERATURE,
        top_p=REVIEW_TOP_P,
        timeout=settings.model_timeout_seconds,
        max_retries=0,
    )
