from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, ConfigDict, StrictStr

from agent.errors import GenerationError


class Variation(BaseModel):
    """One generated content unit for one platform.

    Field types are strict: a number is never accepted as a string and a
    string is never accepted as the tag sequence. Unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    topic: StrictStr
    hook: StrictStr
    description: StrictStr
    tags: tuple[StrictStr, ...]


# Exactly three variations, in model output order ("Variation 1/2/3").
VariationTriple = tuple[Variation, Variation, Variation]

PlatformResult = dict[str, VariationTriple]


@dataclass(frozen=True)
class GenerationContext:
    """Input for one generation request.

    Built either from a video transcript (URL flow) or from a direct topic
    description; ``vibe`` is the requested tone in both cases.
    """

    vibe: str
    transcript: str | None = None
    title: str | None = None
    content_type: str | None = None
    topic: str | None = None
    highlight: str | None = None

    @classmethod
    def from_transcript(cls, transcript: str, vibe: str, title: str | None = None) -> "GenerationContext":
        return cls(vibe=vibe, transcript=transcript, title=title)

    @classmethod
    def from_topic(cls, content_type: str, topic: str, highlight: str, vibe: str) -> "GenerationContext":
        return cls(vibe=vibe, content_type=content_type, topic=topic, highlight=highlight)

    @property
    def is_transcript(self) -> bool:
        return self.transcript is not None


@dataclass(frozen=True)
class Success:
    data: PlatformResult = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    def to_payload(self) -> dict:
        return {
            "success": True,
            "data": {
                platform: [v.model_dump(mode="json") for v in triple]
                for platform, triple in self.data.items()
            },
        }


@dataclass(frozen=True)
class Failure:
    error: str
    kind: str = "internal"
    status_code: int = 500
    platform: str | None = None

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, exc: GenerationError) -> "Failure":
        return cls(
            error=exc.message,
            kind=exc.kind,
            status_code=exc.status_code,
            platform=exc.platform,
        )

    def to_payload(self) -> dict:
        return {"success": False, "error": self.error}


GenerationOutcome = Union[Success, Failure]
