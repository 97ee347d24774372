import asyncio
import logging

from agent.errors import ProviderError
from agent.llm.base import LLMClient

logger = logging.getLogger(__name__)


class CompletionGateway:
    """The one completion capability the rest of the system talks to.

    Created once at process start and passed to whoever needs it; the
    wrapped client is only read from after construction.
    """

    def __init__(
        self,
        client: LLMClient,
        timeout: float = 60.0,
        temperature: float = 0.7,
        max_tokens: int = 1500,
    ):
        self.client = client
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def provider(self) -> str:
        return self.client.provider

    @property
    def model(self) -> str:
        return self.client.model

    async def complete(
        self,
        messages: list[dict],
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Return the raw completion text (possibly empty).

        Raises ProviderError on any provider failure, including the call
        running past ``timeout`` seconds.
        """
        try:
            response = await asyncio.wait_for(
                self.client.complete(
                    messages,
                    max_tokens=max_tokens or self.max_tokens,
                    temperature=self.temperature if temperature is None else temperature,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderError(
                f"Completion request timed out after {self.timeout:g}s.",
                reason="timeout",
            ) from exc

        logger.debug(
            "Completion from %s/%s: %d tokens", self.provider, self.model, response.tokens_used
        )
        return response.content
