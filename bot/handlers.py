"""All Telegram command and message handlers."""
import asyncio
import logging
from contextlib import asynccontextmanager

from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ChatAction, ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    ContextTypes,
    ConversationHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from config import settings
from bot import formatter
from agent.errors import GenerationError
from agent.models import GenerationContext
from agent.modules.generate import generate
from agent.modules.transcript import extract_video_id

logger = logging.getLogger(__name__)

# ConversationHandler states
WAITING_URL = 1
WAITING_VIBE = 2

VIBES = ["Excited", "Funny", "Informative", "Intriguing", "Urgent"]

_GENERIC_ERR = "❌ Generation failed. Please try again shortly."
_INVALID_URL_MSG = (
    "That doesn't look like a YouTube link.\n"
    "Supported: youtube.com/watch?v=…, youtu.be/…, /shorts/…, /live/…"
)


@asynccontextmanager
async def _typing(context: ContextTypes.DEFAULT_TYPE, chat_id: int):
    """Sends TYPING chat action repeatedly until the block exits.

    Telegram expires the indicator after ~5 s, so we refresh every 4 s.
    """
    stop = asyncio.Event()

    async def _loop():
        while not stop.is_set():
            try:
                await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
            except TelegramError as exc:
                logger.debug("Typing indicator failed: %s", exc)
            try:
                await asyncio.wait_for(stop.wait(), timeout=4)
            except asyncio.TimeoutError:
                pass

    task = asyncio.create_task(_loop())
    try:
        yield
    finally:
        stop.set()
        await asyncio.gather(task, return_exceptions=True)


# ── helpers ───────────────────────────────────────────────────────────────────

def _cid(update: Update) -> int:
    return update.effective_chat.id


def _normalize_vibe(text: str) -> str:
    text = text.strip()
    for vibe in VIBES:
        if vibe.lower() == text.lower():
            return vibe
    return text


def _vibe_keyboard() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        [VIBES[:3], VIBES[3:]],
        one_time_keyboard=True,
        resize_keyboard=True,
        input_field_placeholder="Pick a vibe",
    )


async def _run_generation(
    url: str,
    vibe: str,
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
) -> bool:
    """Core flow: resolve transcript → generate per platform → send."""
    status_msg = await update.message.reply_text(
        "🔍 Fetching transcript, please wait…", reply_markup=ReplyKeyboardRemove()
    )
    gateway = context.bot_data["gateway"]
    resolver = context.bot_data["resolver"]

    try:
        async with _typing(context, _cid(update)):
            source = await resolver.resolve(url)
            await status_msg.edit_text(f"✍️ Writing {vibe.lower()} variations…")
            gen_context = GenerationContext.from_transcript(
                source.transcript, vibe, title=source.title
            )
            outcome = await generate(
                gen_context,
                gateway,
                settings.platforms,
                transcript_max_chars=settings.transcript_max_chars,
            )
    except GenerationError as exc:
        logger.warning("Generation failed (%s): %s", exc.kind, exc.message)
        await _show_error(status_msg, exc.message)
        return False
    except Exception:
        logger.exception("Generation error")
        await status_msg.edit_text(_GENERIC_ERR)
        return False

    if not outcome.ok:
        await _show_error(status_msg, outcome.error)
        return False

    try:
        await status_msg.delete()
        for platform, variations in outcome.data.items():
            for msg in formatter.format_platform_result(platform, variations):
                await update.message.reply_text(msg, parse_mode=ParseMode.MARKDOWN_V2)
    except TelegramError:
        logger.exception("Failed to deliver results")
        await update.message.reply_text(_GENERIC_ERR)
        return False
    return True


async def _show_error(status_msg, message: str) -> None:
    await status_msg.edit_text(formatter.format_error(message), parse_mode=ParseMode.MARKDOWN_V2)


# ── /start ────────────────────────────────────────────────────────────────────

async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "👋 Welcome to *HypeGen*\n\n"
        "Send a YouTube link and get ready\\-to\\-post hype copy for every platform\\.\n\n"
        "Send /help to see all available commands\\.",
        parse_mode=ParseMode.MARKDOWN_V2,
    )


# ── /help ─────────────────────────────────────────────────────────────────────

async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = (
        "📖 *Commands*\n\n"
        "/generate \\- Guided flow: link, then vibe\n"
        "/generate \\<url\\> \\[vibe\\] \\- Generate in one step\n"
        "/vibes \\- List available vibes\n"
        "/cancel \\- Exit current mode\n\n"
        "Or just paste a YouTube link to use the default vibe\\.\n"
        "Tap any grey block to copy it\\."
    )
    await update.message.reply_text(text, parse_mode=ParseMode.MARKDOWN_V2)


# ── /vibes ────────────────────────────────────────────────────────────────────

async def cmd_vibes(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        formatter.format_vibes(VIBES, settings.default_vibe),
        parse_mode=ParseMode.MARKDOWN_V2,
    )


# ── /generate (ConversationHandler) ──────────────────────────────────────────

async def cmd_generate(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if context.args:
        url = context.args[0]
        vibe = _normalize_vibe(" ".join(context.args[1:])) or settings.default_vibe
        if not extract_video_id(url):
            await update.message.reply_text(_INVALID_URL_MSG)
            return ConversationHandler.END
        await _run_generation(url, vibe, update, context)
        return ConversationHandler.END

    await update.message.reply_text(
        "Send the YouTube link you want to hype.\n\nSend /cancel to exit."
    )
    return WAITING_URL


async def receive_url(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    url = update.message.text.strip()
    if not extract_video_id(url):
        await update.message.reply_text(_INVALID_URL_MSG + "\n\nTry again, or /cancel.")
        return WAITING_URL

    context.user_data["pending_url"] = url
    await update.message.reply_text("Pick a vibe:", reply_markup=_vibe_keyboard())
    return WAITING_VIBE


async def receive_vibe(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    vibe = _normalize_vibe(update.message.text)
    url = context.user_data.pop("pending_url", None)
    if not vibe:
        context.user_data["pending_url"] = url
        await update.message.reply_text("Vibe is empty, please pick one.", reply_markup=_vibe_keyboard())
        return WAITING_VIBE
    if not url:
        await update.message.reply_text("Lost track of the link. Please start over with /generate.")
        return ConversationHandler.END

    await _run_generation(url, vibe, update, context)
    return ConversationHandler.END


async def cmd_cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    context.user_data.pop("pending_url", None)
    await update.message.reply_text("Cancelled.", reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END


# ── plain text ────────────────────────────────────────────────────────────────

async def handle_plain_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """A bare YouTube link runs generation with the default vibe."""
    if not update.message or not update.message.text:
        return

    url = update.message.text.strip()
    if not extract_video_id(url):
        await update.message.reply_text(
            "Paste a YouTube link, or send /help to see all commands."
        )
        return

    await _run_generation(url, settings.default_vibe, update, context)


# ── build ConversationHandler ─────────────────────────────────────────────────

def build_conversation() -> ConversationHandler:
    return ConversationHandler(
        entry_points=[CommandHandler("generate", cmd_generate)],
        states={
            WAITING_URL: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, receive_url),
            ],
            WAITING_VIBE: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, receive_vibe),
            ],
        },
        fallbacks=[CommandHandler("cancel", cmd_cancel)],
    )
