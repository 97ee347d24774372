import openai
from openai import AsyncOpenAI

from agent.errors import ProviderError
from agent.llm.base import LLMClient, LLMResponse


def _translate(exc: openai.OpenAIError) -> ProviderError:
    if isinstance(exc, openai.APITimeoutError):
        return ProviderError("OpenAI API Error: request timed out", reason="timeout")
    if isinstance(exc, openai.APIConnectionError):
        return ProviderError(f"OpenAI API Error: {exc}", reason="network")
    if isinstance(exc, openai.AuthenticationError):
        reason = "authentication"
    elif isinstance(exc, openai.RateLimitError):
        reason = "rate_limited"
    elif isinstance(exc, openai.BadRequestError):
        reason = "bad_request"
    else:
        reason = "provider"
    status = getattr(exc, "status_code", None)
    message = getattr(exc, "message", None) or str(exc)
    return ProviderError(f"OpenAI API Error: {message}", reason=reason, status_hint=status)


class OpenAIClient(LLMClient):
    provider = "openai"

    def __init__(self, api_key: str, model: str, base_url: str | None = None, json_mode: bool = True):
        kwargs = {"api_key": api_key}
        if base_url:
            kwargs["base_url"] = base_url
        self._client = AsyncOpenAI(**kwargs)
        self.model = model
        self._json_mode = json_mode

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 1500,
        temperature: float = 0.7,
    ) -> LLMResponse:
        kwargs = {}
        if self._json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=messages,
                **kwargs,
            )
        except openai.OpenAIError as exc:
            raise _translate(exc) from exc
        content = (resp.choices[0].message.content or "") if resp.choices else ""
        tokens = resp.usage.total_tokens if resp.usage else 0
        return LLMResponse(content=content, tokens_used=tokens, model=self.model)
