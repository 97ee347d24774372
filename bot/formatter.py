"""Format generated variations as Telegram MarkdownV2 messages."""
import re

from agent.models import Variation
from agent.modules.prompt import platform_name

# Characters that must be escaped in MarkdownV2
_ESCAPE_CHARS = r"\_*[]()~`>#+-=|{}.!"

_MAX_MESSAGE_CHARS = 4000  # leave headroom below 4096

# Escaped length caps per field, so one variation block always fits a message
_MAX_TOPIC_CHARS = 300
_MAX_HOOK_CHARS = 600
_MAX_DESCRIPTION_CHARS = 2400
_MAX_TAGS_CHARS = 400
_CLIP_NOTICE = " …[truncated]"

_PLATFORM_ICONS = {
    "twitter": "🐦",
    "instagram": "📸",
    "tiktok": "🎬",
    "youtube": "▶️",
}


def escape(text: str) -> str:
    """Escape special characters for Telegram MarkdownV2."""
    return re.sub(r"([" + re.escape(_ESCAPE_CHARS) + r"])", r"\\\1", text)


def escape_code(text: str) -> str:
    """Escape text for use inside a MarkdownV2 pre/code entity."""
    return text.replace("\\", "\\\\").replace("`", "\\`")


def _clip(text: str, limit: int, escaper) -> str:
    """Shorten text so that escaper(text) fits in limit, marking the cut."""
    if len(escaper(text)) <= limit:
        return text
    budget = limit - len(escaper(_CLIP_NOTICE))
    clipped = text[:budget]
    # Escaping at most doubles a character, so dropping the excess is enough
    excess = len(escaper(clipped)) - budget
    if excess > 0:
        clipped = clipped[:len(clipped) - excess]
    last_space = clipped.rfind(" ")
    if last_space > len(clipped) - 50:
        clipped = clipped[:last_space]
    return clipped + _CLIP_NOTICE


def _copy_block(text: str, limit: int) -> str:
    # Telegram copies a pre block to the clipboard on tap.
    return f"```\n{escape_code(_clip(text, limit, escape_code))}\n```"


def format_variation(index: int, variation: Variation) -> str:
    lines = [f"*Variation {index + 1}*: _{escape(_clip(variation.topic, _MAX_TOPIC_CHARS, escape))}_"]
    lines.append("Hook:")
    lines.append(_copy_block(variation.hook, _MAX_HOOK_CHARS))
    lines.append("Description:")
    lines.append(_copy_block(variation.description, _MAX_DESCRIPTION_CHARS))
    if variation.tags:
        lines.append("Tags:")
        lines.append(_copy_block(" ".join(variation.tags), _MAX_TAGS_CHARS))
    return "\n".join(lines)


def format_platform_result(platform: str, variations: tuple[Variation, ...]) -> list[str]:
    """Return the message(s) for one platform's variations."""
    icon = _PLATFORM_ICONS.get(platform, "📄")
    separator = escape("─" * 17)
    header = f"{icon} *{escape(platform_name(platform))}*\n{separator}"

    messages = []
    current = header
    for index, variation in enumerate(variations):
        block = format_variation(index, variation)
        if len(current) + len(block) + 2 > _MAX_MESSAGE_CHARS:
            messages.append(current)
            current = block
        else:
            current = f"{current}\n\n{block}"
    messages.append(current)
    return messages


def format_error(message: str) -> str:
    return f"❌ {escape(message)}"


def format_vibes(vibes: list[str], default: str) -> str:
    lines = ["🎚 *Available vibes*", ""]
    for vibe in vibes:
        marker = " \\(default\\)" if vibe == default else ""
        lines.append(f"• `{escape_code(vibe)}`{marker}")
    return "\n".join(lines)
