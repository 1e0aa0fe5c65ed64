"""Tests for model invocation, retry and timeout handling."""

import asyncio

import pytest

from src.core.exceptions import ModelTransportError
from src.services.reviewer.invoker import ModelInvoker
from src.services.reviewer.schemas import GeneralFeedback, ParseDegraded, Skip, TransportFailure
from tests.fakes import FakeNotifier, ScriptedChatModel


class SlowChatModel:
    async def ainvoke(self, input, **kwargs):
        await asyncio.sleep(1)


def make_invoker(llm, notifier=None, max_attempts=2) -> ModelInvoker:
    return ModelInvoker(llm, timeout=0.05, max_attempts=max_attempts, retry_backoff=0, notifier=notifier)


class TestModelInvoker:
    """Tests for ModelInvoker.review."""

    async def test_success_is_parsed(self):
        """Model text is handed to the feedback parser."""
        llm = ScriptedChatModel(['{"summary": "ok"}'])

        feedback = await make_invoker(llm).review("review this")

        assert feedback == GeneralFeedback(summary="ok")
        assert llm.prompts == ["review this"]

    async def test_unparsable_text_degrades(self):
        feedback = await make_invoker(ScriptedChatModel(["not json"])).review("x")

        assert isinstance(feedback, ParseDegraded)

    async def test_empty_response_is_skip(self):
        """An empty body means the model had nothing to say."""
        feedback = await make_invoker(ScriptedChatModel(["   "])).review("x")

        assert feedback == Skip()

    async def test_retries_once_then_succeeds(self):
        """A transport error is retried before giving up."""
        llm = ScriptedChatModel([ConnectionError("reset"), '{"commentNeeded": false}'])
        notifier = FakeNotifier()

        feedback = await make_invoker(llm, notifier).review("x")

        assert isinstance(feedback, Skip)
        assert len(llm.prompts) == 2
        assert notifier.alerts == []

    async def test_repeated_failure_is_transport_failure(self):
        """After the last attempt the failure is reported, not turned into a comment."""
        llm = ScriptedChatModel([RuntimeError("429 throttled"), RuntimeError("429 throttled")])
        notifier = FakeNotifier()

        feedback = await make_invoker(llm, notifier).review("x")

        assert isinstance(feedback, TransportFailure)
        assert feedback.attempts == 2
        assert "429 throttled" in feedback.reason
        assert len(notifier.alerts) == 1
        assert notifier.alerts[0][0] == "Review model unreachable"

    async def test_timeout_is_transport_failure(self):
        feedback = await make_invoker(SlowChatModel(), max_attempts=1).review("x")

        assert isinstance(feedback, TransportFailure)
        assert "no response within" in feedback.reason

    async def test_invoke_raises_transport_error(self):
        """The single-call API surfaces failures as ModelTransportError."""
        invoker = make_invoker(ScriptedChatModel([ValueError("bad gateway")]))

        with pytest.raises(ModelTransportError, match="bad gateway"):
            await invoker.invoke("x")
