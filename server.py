"""HypeGen HTTP server.

FastAPI app exposing POST /generate. The completion gateway is built once
at startup (a missing credential aborts startup) and handed to the
orchestrator per request.

Usage:
    python server.py
    # POST http://localhost:8000/generate  {"url": "...", "vibe": "Excited"}
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agent.errors import GenerationError, RequestValidationError
from agent.llm import CompletionGateway, build_gateway
from agent.models import GenerationContext, GenerationOutcome
from agent.modules.generate import generate
from agent.modules.transcript import TranscriptResolver
from agent.prompts.generate import PLATFORM_INSTRUCTIONS
from config import settings

logger = logging.getLogger(__name__)

_GENERIC_ERR = "Internal Server Error occurred during generation."


# ── request bodies ────────────────────────────────────────────────────────────

class _GenerateBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    vibe: str = Field(min_length=1)
    platforms: Optional[list[str]] = None


class UrlGenerateRequest(_GenerateBase):
    url: str = Field(min_length=1)


class TopicGenerateRequest(_GenerateBase):
    content_type: str = Field(min_length=1, alias="contentType")
    topic: str = Field(min_length=1)
    highlight: str = Field(min_length=1)


def _describe(exc: ValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err["loc"]) or "body"
    if err["type"] in ("missing", "string_too_short"):
        return f"Missing required field: {field}"
    return f"Invalid field: {field}"


def _parse_body(body: Any) -> UrlGenerateRequest | TopicGenerateRequest:
    if not isinstance(body, dict):
        raise RequestValidationError("Request body must be a JSON object.")
    model = UrlGenerateRequest if "url" in body else TopicGenerateRequest
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(_describe(exc)) from exc


def _resolve_platforms(requested: list[str] | None) -> list[str]:
    platforms = requested if requested is not None else list(settings.platforms)
    platforms = [p.strip().lower() for p in platforms]
    if not platforms:
        raise RequestValidationError("At least one platform is required.")
    unknown = [p for p in platforms if p not in PLATFORM_INSTRUCTIONS]
    if unknown:
        raise RequestValidationError(f"Unknown platform: {', '.join(unknown)}")
    return list(dict.fromkeys(platforms))


async def _build_context(
    req: UrlGenerateRequest | TopicGenerateRequest, resolver: TranscriptResolver
) -> GenerationContext:
    if isinstance(req, UrlGenerateRequest):
        source = await resolver.resolve(req.url)
        return GenerationContext.from_transcript(source.transcript, req.vibe, title=source.title)
    return GenerationContext.from_topic(req.content_type, req.topic, req.highlight, req.vibe)


def _outcome_response(outcome: GenerationOutcome) -> JSONResponse:
    status = 200 if outcome.ok else outcome.status_code
    return JSONResponse(outcome.to_payload(), status_code=status)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


# ── app ───────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def _lifespan(app: FastAPI):
    if app.state.gateway is None:
        app.state.gateway = build_gateway(settings)
        logger.info(
            "Completion gateway ready: %s/%s", app.state.gateway.provider, app.state.gateway.model
        )
    yield


def create_app(
    gateway: CompletionGateway | None = None,
    resolver: TranscriptResolver | None = None,
) -> FastAPI:
    app = FastAPI(title="HypeGen", version="1.0.0", lifespan=_lifespan)
    app.state.gateway = gateway
    app.state.resolver = resolver or TranscriptResolver.from_settings(settings)

    @app.get("/health")
    async def api_health():
        gw = app.state.gateway
        return {
            "status": "ok",
            "provider": gw.provider if gw else None,
            "model": gw.model if gw else None,
        }

    @app.post("/generate")
    async def api_generate(request: Request):
        logger.info("Received request for /generate")
        try:
            body = await request.json()
        except ValueError:
            logger.warning("Rejected request: body is not valid JSON")
            return _error_response("Invalid JSON in request body", 400)

        try:
            req = _parse_body(body)
            platforms = _resolve_platforms(req.platforms)
            context = await _build_context(req, app.state.resolver)
            outcome = await generate(
                context,
                app.state.gateway,
                platforms,
                transcript_max_chars=settings.transcript_max_chars,
            )
        except GenerationError as exc:
            logger.warning("Generation failed (%s): %s", exc.kind, exc.message)
            return _error_response(exc.message, exc.status_code)
        except Exception:
            logger.exception("Error during generation process")
            return _error_response(_GENERIC_ERR, 500)

        if outcome.ok:
            logger.info("Returning variations for %s", ", ".join(outcome.data))
        return _outcome_response(outcome)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=settings.log_level.upper(),
        stream=sys.stdout,
    )
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
