"""Tests for the GitHub webhook endpoint."""

import hashlib
import hmac
import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.core.pr_parser import PullRequestRef
from src.main import app
from src.services.github.routes import get_orchestrator_factory
from tests.fakes import webhook_payload


class RecordingOrchestrator:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.runs: list[PullRequestRef] = []

    async def run(self, pr: PullRequestRef):
        self.runs.append(pr)
        if self.error:
            raise self.error


@pytest.fixture
def orchestrator():
    return RecordingOrchestrator()


@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[get_orchestrator_factory] = lambda: (lambda: orchestrator)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGithubWebhook:
    """Tests for POST /webhook."""

    @pytest.mark.parametrize("action", ["opened", "synchronize"])
    def test_supported_actions_run_review(self, client, orchestrator, action):
        """Opened and synchronize events run the orchestrator exactly once."""
        response = client.post("/webhook", json=webhook_payload(action=action, number=42))

        assert response.status_code == 200
        assert response.text == "Webhook received!"
        assert orchestrator.runs == [
            PullRequestRef(number=42, author_login="octocat", owner_login="acme", repo_name="widgets")
        ]

    @pytest.mark.parametrize("action", ["closed", "edited", "labeled", None])
    def test_other_actions_ignored(self, client, orchestrator, action):
        response = client.post("/webhook", json=webhook_payload(action=action))

        assert response.status_code == 200
        assert response.text == "Event ignored"
        assert orchestrator.runs == []

    def test_malformed_pull_request_ignored(self, client, orchestrator):
        payload = {"action": "opened", "pull_request": {"number": 3}}

        response = client.post("/webhook", json=payload)

        assert response.status_code == 200
        assert response.text == "Event ignored"
        assert orchestrator.runs == []

    def test_ping_ignored(self, client, orchestrator):
        response = client.post(
            "/webhook", json={"zen": "Keep it logically awesome."}, headers={"X-GitHub-Event": "ping"}
        )

        assert response.text == "Event ignored"
        assert orchestrator.runs == []

    def test_internal_failure_still_acknowledged(self):
        """Review failures never surface as a retry-inducing status."""
        failing = RecordingOrchestrator(error=RuntimeError("GitHub down"))
        app.dependency_overrides[get_orchestrator_factory] = lambda: (lambda: failing)
        try:
            response = TestClient(app).post("/webhook", json=webhook_payload())
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.text == "Webhook received!"
        assert len(failing.runs) == 1


class TestWebhookSignature:
    """Tests for X-Hub-Signature-256 verification."""

    @patch("src.core.security.settings")
    def test_valid_signature_accepted(self, mock_settings, client, orchestrator):
        mock_settings.github_webhook_secret = "s3cret"
        body = json.dumps(webhook_payload()).encode()
        digest = hmac.new(b"s3cret", body, hashlib.sha256).hexdigest()

        response = client.post(
            "/webhook",
            content=body,
            headers={"Content-Type": "application/json", "X-Hub-Signature-256": f"sha256={digest}"},
        )

        assert response.status_code == 200
        assert len(orchestrator.runs) == 1

    @patch("src.core.security.settings")
    def test_invalid_signature_rejected(self, mock_settings, client, orchestrator):
        mock_settings.github_webhook_secret = "s3cret"

        response = client.post(
            "/webhook",
            json=webhook_payload(),
            headers={"X-Hub-Signature-256": "sha256=deadbeef"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid GitHub webhook signature"
        assert orchestrator.runs == []


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "service": "ai-pr-reviewer"}
