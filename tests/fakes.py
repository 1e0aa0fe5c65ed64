"""In-memory collaborators for review pipeline tests."""

from langchain_core.messages import AIMessage

from src.core.exceptions import ChangeSetFetchError, PostingError
from src.core.pr_parser import PullRequestRef
from src.services.reviewer.schemas import ChangedFile


class FakeFetcher:
    def __init__(self, files: list[ChangedFile] | None = None, error: Exception | None = None):
        self.files = files or []
        self.error = error
        self.calls: list[PullRequestRef] = []

    async def fetch(self, pr: PullRequestRef) -> list[ChangedFile]:
        self.calls.append(pr)
        if self.error:
            raise self.error
        return list(self.files)


class FakePoster:
    """Records posted bodies; raises PostingError for bodies containing ``fail_on``."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.bodies: list[str] = []
        self.attempts: list[str] = []

    async def post(self, pr: PullRequestRef, body: str) -> None:
        self.attempts.append(body)
        if self.fail_on and self.fail_on in body:
            raise PostingError(pr.label, "500 boom")
        self.bodies.append(body)


class FakeNotifier:
    def __init__(self):
        self.alerts: list[tuple[str, str]] = []

    async def notify(self, title: str, details: str) -> None:
        self.alerts.append((title, details))


class ScriptedChatModel:
    """Answers calls in order with the scripted text, or raises scripted errors.

    Calls past the end of the script are recorded in ``unexpected_calls``;
    the invoker turns the raised error into a transport failure, so the
    suite checks the count after every test.
    """

    instances: list["ScriptedChatModel"] = []

    def __init__(self, responses: list):
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.unexpected_calls = 0
        ScriptedChatModel.instances.append(self)

    async def ainvoke(self, input, **kwargs):
        self.prompts.append(input[0].content)
        if not self.responses:
            self.unexpected_calls += 1
            raise RuntimeError("unexpected model call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return AIMessage(content=response)


def fetch_error(pr: PullRequestRef) -> ChangeSetFetchError:
    return ChangeSetFetchError(pr.label, "502 Bad Gateway")


def webhook_payload(action: str = "opened", number: int = 42) -> dict:
    return {
        "action": action,
        "pull_request": {
            "number": number,
            "user": {"login": "octocat"},
            "base": {"repo": {"owner": {"login": "acme"}, "name": "widgets"}},
        },
    }
