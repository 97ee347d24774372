"""Error taxonomy shared by the validator, the gateway and the adapters.

Every error carries a machine-readable ``kind`` and the HTTP status the
presentation layer should answer with. Messages are safe to show to the
caller; raw provider output never goes into them.
"""


class GenerationError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str, platform: str | None = None):
        super().__init__(message)
        self.message = message
        self.platform = platform


# ── request / upstream ────────────────────────────────────────────────────────

class RequestValidationError(GenerationError):
    kind = "request_validation"
    status_code = 400


class UpstreamResolutionError(GenerationError):
    kind = "upstream_resolution"
    status_code = 502


class TranscriptNotFoundError(UpstreamResolutionError):
    status_code = 404


class TranscriptFetchError(UpstreamResolutionError):
    status_code = 502


# ── provider ──────────────────────────────────────────────────────────────────

class ProviderError(GenerationError):
    """The completion call itself failed.

    reason: authentication | rate_limited | bad_request | network | timeout | provider
    """

    kind = "provider_error"

    def __init__(
        self,
        message: str,
        reason: str = "provider",
        status_hint: int | None = None,
        platform: str | None = None,
    ):
        super().__init__(message, platform)
        self.reason = reason
        self.status_hint = status_hint

    @property
    def status_code(self) -> int:
        return self.status_hint or 500


# ── response validation ───────────────────────────────────────────────────────

class ResponseValidationError(GenerationError):
    kind = "response_validation"


class MissingContent(ResponseValidationError):
    kind = "missing_content"

    def __init__(self, platform: str):
        super().__init__(f"Missing content from LLM for {platform}.", platform)


class MalformedJSON(ResponseValidationError):
    kind = "malformed_json"

    def __init__(self, platform: str):
        super().__init__(
            f"Invalid JSON format received from LLM for {platform}. Parsing failed.",
            platform,
        )


class InvalidRootShape(ResponseValidationError):
    kind = "invalid_root_shape"

    def __init__(self, platform: str):
        super().__init__(
            f"Invalid root structure from LLM for {platform}. "
            "Expected a JSON array or { variations: [...] }.",
            platform,
        )


class InvalidArity(ResponseValidationError):
    kind = "invalid_arity"

    def __init__(self, platform: str, got: int):
        super().__init__(
            f"Invalid response from LLM for {platform}. Expected exactly 3 variations, got {got}.",
            platform,
        )
        self.got = got


class InvalidItemShape(ResponseValidationError):
    kind = "invalid_item_shape"

    def __init__(self, platform: str, index: int):
        super().__init__(
            f"Invalid response structure from LLM for {platform}. "
            f"Variation {index + 1} is missing fields or has the wrong types.",
            platform,
        )
        self.index = index
