from agent.llm.base import LLMClient
from agent.llm.gateway import CompletionGateway


def get_llm_client(settings=None) -> LLMClient:
    if settings is None:
        from config import settings

    provider = settings.llm_provider.lower()

    if provider in ("openai", "custom"):
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please configure it in your .env file."
            )
        from agent.llm.openai_client import OpenAIClient
        return OpenAIClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url or None,
            json_mode=settings.openai_json_mode,
        )

    if provider == "anthropic":
        if not settings.anthropic_api_key:
            raise RuntimeError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Please configure it in your .env file."
            )
        from agent.llm.anthropic_client import AnthropicClient
        return AnthropicClient(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
        )

    raise ValueError(f"Unknown LLM_PROVIDER: {provider!r}")


def build_gateway(settings=None) -> CompletionGateway:
    """Build the process-wide gateway. Call once at startup."""
    if settings is None:
        from config import settings

    return CompletionGateway(
        get_llm_client(settings),
        timeout=settings.completion_timeout_seconds,
        temperature=settings.temperature,
        max_tokens=settings.completion_max_tokens,
    )
