"""HypeGen - Telegram Bot entry point."""
import logging
import sys

from telegram import BotCommand
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
)

from config import settings
from agent.llm import build_gateway
from agent.modules.transcript import TranscriptResolver
from bot.handlers import (
    cmd_start,
    cmd_help,
    cmd_vibes,
    handle_plain_message,
    build_conversation,
)

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=settings.log_level.upper(),
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


async def _set_commands(app: Application) -> None:
    await app.bot.set_my_commands([
        BotCommand("generate", "Generate hype copy for a YouTube video"),
        BotCommand("vibes",    "List available vibes"),
        BotCommand("help",     "Show all commands"),
        BotCommand("cancel",   "Exit current mode"),
    ])


def main() -> None:
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN not set in .env.")

    # Fails fast when the provider credential is missing
    gateway = build_gateway(settings)
    logger.info("Completion gateway ready: %s/%s", gateway.provider, gateway.model)

    app = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_init(_set_commands)
        .build()
    )
    app.bot_data["gateway"] = gateway
    app.bot_data["resolver"] = TranscriptResolver.from_settings(settings)

    # Register ConversationHandler first (higher priority)
    app.add_handler(build_conversation())

    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("vibes", cmd_vibes))

    # A bare YouTube link generates with the default vibe
    app.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, handle_plain_message)
    )

    logger.info("Polling mode.")
    app.run_polling(drop_pending_updates=True)


if __name__ == "__main__":
    main()
