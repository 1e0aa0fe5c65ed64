"""GitHub webhook routes."""

from typing import Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import ValidationError

from src.core.security import require_github_signature
from src.services.github.schemas import (
    EVENT_IGNORED,
    SUPPORTED_ACTIONS,
    WEBHOOK_RECEIVED,
    PullRequestEvent,
)
from src.services.reviewer.service import ReviewOrchestrator, build_orchestrator

router = APIRouter()

OrchestratorFactory = Callable[[], ReviewOrchestrator]


def get_orchestrator_factory() -> OrchestratorFactory:
    """Dependency hook; tests override it with a factory returning fakes."""
    return build_orchestrator


@router.post("/webhook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    orchestrator_factory: OrchestratorFactory = Depends(get_orchestrator_factory),
) -> PlainTextResponse:
    """Handle GitHub pull_request webhook events.

    Always answers 200 once the signature checks out: the sender must never
    be pushed into redelivering because of an internal failure.
    """
    event = request.headers.get("X-GitHub-Event")
    delivery_id = request.headers.get("X-GitHub-Delivery")
    signature = request.headers.get("X-Hub-Signature-256", "")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()
    require_github_signature(body, signature)

    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Webhook body is not JSON")
        return PlainTextResponse(EVENT_IGNORED)

    action = payload.get("action") if isinstance(payload, dict) else None
    if action not in SUPPORTED_ACTIONS:
        logger.info(f"Ignoring action: {action}")
        return PlainTextResponse(EVENT_IGNORED)

    try:
        pr = PullRequestEvent.model_validate(payload).to_ref()
    except ValidationError as e:
        logger.warning(f"Malformed pull_request payload: {e.error_count()} error(s)")
        return PlainTextResponse(EVENT_IGNORED)

    logger.info(f"Pull Request #{pr.number} created/updated by {pr.author_login}")

    try:
        orchestrator = orchestrator_factory()
        await orchestrator.run(pr)
    except Exception as e:
        logger.exception(f"Review failed for {pr.label}: {e}")

    return PlainTextResponse(WEBHOOK_RECEIVED)
