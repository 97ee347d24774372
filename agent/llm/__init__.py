from agent.llm.base import LLMClient, LLMResponse
from agent.llm.factory import build_gateway, get_llm_client
from agent.llm.gateway import CompletionGateway

__all__ = ["LLMClient", "LLMResponse", "CompletionGateway", "build_gateway", "get_llm_client"]
