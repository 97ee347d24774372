from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    content: str
    tokens_used: int = 0
    model: str = ""


class LLMClient(ABC):
    """Abstract base for all LLM providers.

    Implementations translate their SDK's failures into ProviderError so
    nothing provider-specific leaks past this seam.
    """

    provider: str = ""
    model: str = ""

    @abstractmethod
    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 1500,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Send a single completion request.

        messages: [{"role": "system"|"user"|"assistant", "content": "..."}, ...]
        """
        ...
