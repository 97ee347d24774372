from __future__ import annotations

import asyncio
import json

from agent.llm.base import LLMClient, LLMResponse
from agent.modules.prompt import platform_name
from agent.modules.transcript import ResolvedSource


def variation(n: int = 1, tags=("x",)) -> dict:
    return {
        "topic": f"topic {n}",
        "hook": f"hook {n}",
        "description": f"description {n}",
        "tags": list(tags),
    }


def triple_json(wrapped: bool = True) -> str:
    items = [variation(1), variation(2, tags=()), variation(3, tags=("z", "z"))]
    return json.dumps({"variations": items} if wrapped else items)


class FakeLLMClient(LLMClient):
    """Answers per platform, recognised from the user prompt.

    Each response is a string, an exception instance to raise, or missing
    (then a valid triple is returned). ``delays`` holds per-platform sleeps.
    """

    provider = "fake"
    model = "fake-model"

    def __init__(self, responses: dict | None = None, delays: dict | None = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls: list[str] = []
        self.cancelled: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _platform_of(self, messages: list[dict]) -> str:
        user = messages[-1]["content"]
        for platform in ("twitter", "instagram", "tiktok", "youtube"):
            if f"3 distinct {platform_name(platform)} variations" in user:
                return platform
        raise AssertionError("prompt did not name a known platform")

    async def complete(self, messages, max_tokens=1500, temperature=0.7) -> LLMResponse:
        platform = self._platform_of(messages)
        self.calls.append(platform)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(platform, 0.01))
        except asyncio.CancelledError:
            self.cancelled.append(platform)
            raise
        finally:
            self.in_flight -= 1

        response = self.responses.get(platform, triple_json())
        if isinstance(response, BaseException):
            raise response
        return LLMResponse(content=response, tokens_used=42, model=self.model)


class FakeResolver:
    def __init__(self, source: ResolvedSource | None = None, error: BaseException | None = None):
        self.source = source or ResolvedSource(transcript="we build a robot arm", title="Robot Arm")
        self.error = error
        self.urls: list[str] = []

    async def resolve(self, url: str) -> ResolvedSource:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.source
