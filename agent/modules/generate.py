"""
Concurrent per-platform generation with fail-fast aggregation.

Each platform runs build -> complete -> validate as its own task and reports
back a PlatformSuccess or PlatformFailure value. The aggregate is Success
only if every platform succeeded; the first platform to finish with a
failure decides the Failure, and the calls still in flight are cancelled.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Union

from agent.errors import GenerationError, RequestValidationError
from agent.llm.gateway import CompletionGateway
from agent.models import Failure, GenerationContext, GenerationOutcome, Success, VariationTriple
from agent.modules.prompt import DEFAULT_TRANSCRIPT_MAX_CHARS, build_messages
from agent.modules.validate import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformSuccess:
    platform: str
    variations: VariationTriple


@dataclass(frozen=True)
class PlatformFailure:
    platform: str
    error: GenerationError


PlatformOutcome = Union[PlatformSuccess, PlatformFailure]


async def generate_for_platform(
    platform: str,
    context: GenerationContext,
    gateway: CompletionGateway,
    transcript_max_chars: int = DEFAULT_TRANSCRIPT_MAX_CHARS,
) -> PlatformOutcome:
    messages = build_messages(platform, context, transcript_max_chars)
    try:
        raw = await gateway.complete(messages)
        variations = validate(platform, raw)
    except GenerationError as exc:
        if exc.platform is None:
            exc.platform = platform
        return PlatformFailure(platform, exc)
    return PlatformSuccess(platform, variations)


async def generate(
    context: GenerationContext,
    gateway: CompletionGateway,
    platforms: Iterable[str],
    transcript_max_chars: int = DEFAULT_TRANSCRIPT_MAX_CHARS,
) -> GenerationOutcome:
    """Generate variations for every platform concurrently.

    Returns Success with data keyed in requested platform order, or the
    Failure of the first platform that failed. Exceptions that are not
    GenerationError propagate to the caller.
    """
    requested = list(dict.fromkeys(platforms))
    if not requested:
        raise RequestValidationError("At least one platform is required.")

    logger.info("Generating for %s with %s/%s", ", ".join(requested), gateway.provider, gateway.model)

    tasks = [
        asyncio.create_task(generate_for_platform(p, context, gateway, transcript_max_chars))
        for p in requested
    ]
    results: dict[str, VariationTriple] = {}
    try:
        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            if isinstance(outcome, PlatformFailure):
                logger.warning(
                    "Platform %s failed (%s): %s",
                    outcome.platform, outcome.error.kind, outcome.error.message,
                )
                return Failure.from_error(outcome.error)
            results[outcome.platform] = outcome.variations
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    return Success(data={p: results[p] for p in requested})
