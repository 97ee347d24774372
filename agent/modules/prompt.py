from agent.models import GenerationContext
from agent.prompts import generate as prompts

DEFAULT_TRANSCRIPT_MAX_CHARS = 12_000
_TRUNCATION_NOTICE = " [transcript truncated]"

_PLATFORM_NAMES = {
    "twitter": "Twitter",
    "instagram": "Instagram",
    "tiktok": "TikTok / Shorts",
    "youtube": "YouTube description",
}


def platform_name(platform: str) -> str:
    return _PLATFORM_NAMES.get(platform, platform.capitalize())


def build_messages(
    platform: str,
    context: GenerationContext,
    transcript_max_chars: int = DEFAULT_TRANSCRIPT_MAX_CHARS,
) -> list[dict]:
    """Build the [system, user] message pair for one platform."""
    platform_instruction = prompts.PLATFORM_INSTRUCTIONS.get(
        platform,
        f"Platform: {platform}.\nWrite content optimized for {platform}.",
    )
    system = prompts.SYSTEM.format(
        platform_instruction=platform_instruction,
        json_instruction=prompts.JSON_OUTPUT_INSTRUCTION,
    )

    if context.is_transcript:
        title_part = f' titled "{context.title}"' if context.title else ""
        user = prompts.TRANSCRIPT_TEMPLATE.format(
            title_part=title_part,
            transcript=_truncate(context.transcript, transcript_max_chars),
            vibe=context.vibe,
            platform=platform_name(platform),
        )
    else:
        user = prompts.TOPIC_TEMPLATE.format(
            content_type=context.content_type or "",
            topic=context.topic or "",
            highlight=context.highlight or "",
            vibe=context.vibe,
            platform=platform_name(platform),
        )

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def _truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    truncated = text[:max_chars]
    # Try not to cut mid-word
    last_space = truncated.rfind(" ")
    if last_space > max_chars - 50:
        truncated = truncated[:last_space]
    return truncated + _TRUNCATION_NOTICE
