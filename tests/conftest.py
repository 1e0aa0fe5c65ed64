"""Shared fixtures for the test suite."""

import pytest

from src.core.pr_parser import PullRequestRef
from tests.fakes import FakeNotifier, FakePoster, ScriptedChatModel


@pytest.fixture
def pr() -> PullRequestRef:
    return PullRequestRef(number=42, author_login="octocat", owner_login="acme", repo_name="widgets")


@pytest.fixture
def poster() -> FakePoster:
    return FakePoster()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture(autouse=True)
def no_unscripted_model_calls():
    ScriptedChatModel.instances.clear()
    yield
    overflow = [m.prompts[-m.unexpected_calls:] for m in ScriptedChatModel.instances if m.unexpected_calls]
    ScriptedChatModel.instances.clear()
    assert not overflow, f"model called beyond its script: {overflow}"
