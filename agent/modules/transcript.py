"""Resolve a YouTube URL into transcript text and (best-effort) title."""
import asyncio
import logging
import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse

import httpx
from youtube_transcript_api import (
    AgeRestricted,
    CouldNotRetrieveTranscript,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeTranscriptApi,
)

from agent.errors import RequestValidationError, TranscriptFetchError, TranscriptNotFoundError

logger = logging.getLogger(__name__)

_OEMBED_URL = "https://www.youtube.com/oembed"
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_\-]{11}$")
_FALLBACK_RE = re.compile(
    r"^(?:https?://)?(?:(?:www|m)\.)?"
    r"(?:youtube\.com/(?:watch\?v=|shorts/|live/)|youtu\.be/)([\w\-]+)",
    re.IGNORECASE,
)


def _is_host(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


@dataclass(frozen=True)
class ResolvedSource:
    transcript: str
    title: str | None = None


def extract_video_id(url: str) -> str | None:
    """Return the 11-character video id from a YouTube URL, or None.

    Supports youtube.com/watch?v=, youtu.be/, youtube.com/shorts/ and
    youtube.com/live/.
    """
    if not url:
        return None
    url = url.strip()
    video_id = None

    parsed = urlparse(url if "://" in url else f"https://{url}")
    host = (parsed.hostname or "").lower()
    path = parsed.path

    if _is_host(host, "youtube.com"):
        if path == "/watch":
            video_id = (parse_qs(parsed.query).get("v") or [None])[0]
        elif path.startswith("/shorts/"):
            video_id = path[len("/shorts/"):].split("/")[0]
        elif path.startswith("/live/"):
            video_id = path[len("/live/"):].split("/")[0]
    elif _is_host(host, "youtu.be"):
        video_id = path.lstrip("/").split("/")[0]

    if video_id is None:
        match = _FALLBACK_RE.match(url)
        if match:
            video_id = match.group(1)

    if video_id and _VIDEO_ID_RE.match(video_id):
        return video_id
    return None


class TranscriptResolver:
    def __init__(
        self,
        languages: list[str] | tuple[str, ...] = ("en",),
        title_timeout: float = 10.0,
        api: YouTubeTranscriptApi | None = None,
    ):
        self._languages = tuple(languages)
        self._title_timeout = title_timeout
        self._api = api or YouTubeTranscriptApi()

    @classmethod
    def from_settings(cls, settings) -> "TranscriptResolver":
        return cls(
            languages=settings.transcript_languages,
            title_timeout=settings.title_lookup_timeout_seconds,
        )

    async def resolve(self, url: str) -> ResolvedSource:
        video_id = extract_video_id(url)
        if not video_id:
            raise RequestValidationError("Invalid YouTube URL.")

        transcript = await asyncio.to_thread(self._fetch_transcript, video_id)
        title = await self._fetch_title(video_id)
        return ResolvedSource(transcript=transcript, title=title)

    def _fetch_transcript(self, video_id: str) -> str:
        logger.info("Fetching transcript for video ID: %s", video_id)
        try:
            fetched = self._api.fetch(video_id, languages=self._languages)
        except TranscriptsDisabled as exc:
            raise TranscriptNotFoundError("Transcripts are disabled for this video.") from exc
        except InvalidVideoId as exc:
            raise RequestValidationError("Invalid YouTube URL.") from exc
        except (NoTranscriptFound, VideoUnavailable, VideoUnplayable, AgeRestricted) as exc:
            raise TranscriptNotFoundError(
                "No transcript found for this video (may be unavailable or unsupported language)."
            ) from exc
        except (CouldNotRetrieveTranscript, OSError) as exc:
            logger.warning("Transcript fetch failed for %s: %s", video_id, exc)
            raise TranscriptFetchError("Failed to fetch transcript.") from exc

        parts = (re.sub(r"\s+", " ", snippet.text).strip() for snippet in fetched)
        transcript = " ".join(p for p in parts if p)
        if not transcript:
            raise TranscriptNotFoundError("Transcript is empty or unavailable for this video.")

        logger.info("Transcript fetched (length: %d)", len(transcript))
        return transcript

    async def _fetch_title(self, video_id: str) -> str | None:
        try:
            async with httpx.AsyncClient(timeout=self._title_timeout) as client:
                r = await client.get(
                    _OEMBED_URL,
                    params={
                        "url": f"https://www.youtube.com/watch?v={video_id}",
                        "format": "json",
                    },
                )
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Title lookup failed for %s: %s", video_id, exc)
            return None
        title = data.get("title") if isinstance(data, dict) else None
        if not isinstance(title, str) or not title.strip():
            return None
        return title.strip()
