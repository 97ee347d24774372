"""
Validation of raw LLM output into a VariationTriple.

The model's reply is untrusted text. It is accepted only if it is, verbatim,
JSON in one of two shapes:

  [v1, v2, v3]                   bare array
  {"variations": [v1, v2, v3]}   single-key envelope

where every v matches the Variation schema. Each check below is a hard
gate and the first one that fails decides the error. Nothing is repaired
(no fence stripping, no substring extraction) and nothing partial is
returned: downstream code indexes variations positionally.
"""
import json
import logging

from pydantic import ValidationError

from agent.errors import (
    InvalidArity,
    InvalidItemShape,
    InvalidRootShape,
    MalformedJSON,
    MissingContent,
)
from agent.models import Variation, VariationTriple

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ("variations",)
EXPECTED_VARIATIONS = 3

_LOG_PREVIEW_CHARS = 500


def validate(platform: str, raw: str | None) -> VariationTriple:
    """Parse and validate ``raw`` into exactly three variations.

    Raises one of MissingContent, MalformedJSON, InvalidRootShape,
    InvalidArity or InvalidItemShape (all ResponseValidationError).
    """
    if not raw:
        logger.warning("Validation failed for %s: empty content", platform)
        raise MissingContent(platform)

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning(
            "Validation failed for %s: JSON parse error (%s). Raw: %r",
            platform, exc, _preview(raw),
        )
        raise MalformedJSON(platform) from exc

    items = _extract_items(parsed)
    if items is None:
        logger.warning("Validation failed for %s: invalid root shape. Raw: %r", platform, _preview(raw))
        raise InvalidRootShape(platform)

    if len(items) != EXPECTED_VARIATIONS:
        logger.warning(
            "Validation failed for %s: expected %d variations, got %d",
            platform, EXPECTED_VARIATIONS, len(items),
        )
        raise InvalidArity(platform, got=len(items))

    variations = []
    for index, item in enumerate(items):
        try:
            variations.append(Variation.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Validation failed for %s: variation %d invalid: %s",
                platform, index, _summarize(exc),
            )
            raise InvalidItemShape(platform, index) from exc

    logger.info("Validated %d variations for %s.", len(variations), platform)
    return tuple(variations)


def _extract_items(parsed) -> list | None:
    """Return the variations list from either accepted shape, or None."""
    if isinstance(parsed, dict):
        present = [key for key in WRAPPER_KEYS if key in parsed]
        if len(present) != 1:
            return None
        items = parsed[present[0]]
    else:
        items = parsed

    if not isinstance(items, list):
        return None
    # A non-empty list with no object at all is a list of scalars, not
    # a list of (possibly malformed) variations.
    if items and not any(isinstance(item, dict) for item in items):
        return None
    return items


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )


def _preview(raw: str) -> str:
    if len(raw) <= _LOG_PREVIEW_CHARS:
        return raw
    return raw[:_LOG_PREVIEW_CHARS] + "…"
