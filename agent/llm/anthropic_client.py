import anthropic

from agent.errors import ProviderError
from agent.llm.base import LLMClient, LLMResponse


def _translate(exc: anthropic.AnthropicError) -> ProviderError:
    if isinstance(exc, anthropic.APITimeoutError):
        return ProviderError("Anthropic API Error: request timed out", reason="timeout")
    if isinstance(exc, anthropic.APIConnectionError):
        return ProviderError(f"Anthropic API Error: {exc}", reason="network")
    if isinstance(exc, anthropic.AuthenticationError):
        reason = "authentication"
    elif isinstance(exc, anthropic.RateLimitError):
        reason = "rate_limited"
    elif isinstance(exc, anthropic.BadRequestError):
        reason = "bad_request"
    else:
        reason = "provider"
    status = getattr(exc, "status_code", None)
    message = getattr(exc, "message", None) or str(exc)
    return ProviderError(f"Anthropic API Error: {message}", reason=reason, status_hint=status)


def _split_system(messages: list[dict]) -> tuple[str, list[dict]]:
    """Anthropic takes the system prompt separately from the turn list."""
    system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
    turns = [m for m in messages if m["role"] != "system"]
    return system, turns


class AnthropicClient(LLMClient):
    provider = "anthropic"

    def __init__(self, api_key: str, model: str):
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 1500,
        temperature: float = 0.7,
    ) -> LLMResponse:
        system, turns = _split_system(messages)
        kwargs = {"system": system} if system else {}
        try:
            msg = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=turns,
                **kwargs,
            )
        except anthropic.AnthropicError as exc:
            raise _translate(exc) from exc
        content = "".join(
            block.text for block in msg.content if getattr(block, "type", "") == "text"
        )
        tokens = (msg.usage.input_tokens or 0) + (msg.usage.output_tokens or 0)
        return LLMResponse(content=content, tokens_used=tokens, model=self.model)
