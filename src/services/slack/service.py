"""Slack failure alerts for the review pipeline."""

import asyncio
from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from src.config import settings
from src.core.logging import get_logger

logger = get_logger("slack.service")

# Slack section text is capped at 3000 characters
MAX_DETAILS_LENGTH = 2900


def _build_alert_blocks(title: str, details: str) -> list[dict]:
    """Build Slack blocks for a failure alert."""
    if len(details) > MAX_DETAILS_LENGTH:
        details = details[:MAX_DETAILS_LENGTH] + "…"

    return [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f":rotating_light: {title}", "emoji": True},
        },
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"```{details}```"},
        },
        {
            "type": "context",
            "elements": [
                {"type": "mrkdwn", "text": f"environment: *{settings.environment}*"},
            ],
        },
    ]


class SlackFailureNotifier:
    """Reports pipeline failures to a Slack channel.

    Delivery problems are logged and swallowed so alerting can never
    break a review run.
    """

    def __init__(self, client: WebClient, channel_id: str) -> None:
        self._client = client
        self._channel_id = channel_id

    @classmethod
    def from_settings(cls) -> Optional["SlackFailureNotifier"]:
        """Notifier for the configured channel, or None when Slack is not set up."""
        if not settings.slack_bot_token or not settings.slack_channel_id:
            return None
        return cls(WebClient(token=settings.slack_bot_token), settings.slack_channel_id)

    async def notify(self, title: str, details: str) -> None:
        blocks = _build_alert_blocks(title, details)
        try:
            await asyncio.to_thread(
                self._client.chat_postMessage,
                channel=self._channel_id,
                blocks=blocks,
                text=f"{title}: {details}",
            )
        except SlackApiError as e:
            logger.error(f"Failed to send Slack alert: {e.response.get('error')}")
        except Exception as e:
            logger.error(f"Failed to send Slack alert: {e}")
