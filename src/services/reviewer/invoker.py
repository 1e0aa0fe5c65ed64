"""Model invocation with bounded timeout and retry."""

import asyncio

from langchain_core.messages import HumanMessage

from src.core.exceptions import ModelTransportError
from src.core.logging import get_logger
from src.services.reviewer.interfaces import ChatModel, FailureNotifier
from src.services.reviewer.parser import parse_feedback
from src.services.reviewer.schemas import ReviewFeedback, Skip, TransportFailure

logger = get_logger("reviewer.invoker")


class ModelInvoker:
    """Send review instructions to the chat model and parse the answers.

    Sampling parameters live on the chat model itself (see
    ``src.core.llm.get_review_llm``) so every call uses the same ones.
    """

    def __init__(
        self,
        llm: ChatModel,
        *,
        timeout: float = 60.0,
        max_attempts: int = 2,
        retry_backoff: float = 1.0,
        notifier: FailureNotifier | None = None,
    ) -> None:
        self._llm = llm
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._retry_backoff = retry_backoff
        self._notifier = notifier

    async def invoke(self, instruction: str) -> str:
        """Single model call. Returns the raw response text.

        Raises:
            ModelTransportError: on timeout or any provider/network error
        """
        try:
            response = await asyncio.wait_for(
                self._llm.ainvoke([HumanMessage(content=instruction)]),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ModelTransportError(f"no response within {self._timeout:g}s") from e
        except Exception as e:
            raise ModelTransportError(str(e) or type(e).__name__) from e

        content = getattr(response, "content", response)
        return content if isinstance(content, str) else str(content)

    async def review(self, instruction: str) -> ReviewFeedback:
        """Invoke the model and interpret its answer as review feedback."""
        delay = self._retry_backoff
        last_error: ModelTransportError | None = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                raw_text = await self.invoke(instruction)
            except ModelTransportError as e:
                last_error = e
                logger.warning(f"Model call failed (attempt {attempt}/{self._max_attempts}): {e.message}")
                if attempt < self._max_attempts:
                    await asyncio.sleep(delay)
                    delay *= 2
                continue

            if not raw_text.strip():
                logger.info("Model returned an empty response")
                return Skip()
            return parse_feedback(raw_text)

        reason = last_error.message if last_error else "unknown error"
        logger.error(f"Giving up on model call after {self._max_attempts} attempt(s): {reason}")
        if self._notifier:
            await self._notifier.notify(
                "Review model unreachable",
                f"{reason} (after {self._max_attempts} attempt(s))",
            )
        return TransportFailure(reason=reason, attempts=self._max_attempts)
