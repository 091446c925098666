"""Data models for content acquisition and generation."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentSource(str, Enum):
    """Kind of material a notes request is built from."""
    TEXT = "text"
    WEBSITE = "website"
    VIDEO = "video"
    IMAGE = "image"
    VOICE = "voice"
    PDF = "pdf"


class NoteLength(str, Enum):
    """Requested depth of generated notes."""
    BRIEF = "brief"
    STANDARD = "standard"
    DETAILED = "detailed"


class CaptionTrack(BaseModel):
    """One subtitle stream advertised on a video's watch page."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language_code: str = Field(alias="languageCode")
    base_url: str = Field(alias="baseUrl")


class CaptionFragment(BaseModel):
    """A single caption fragment returned by the captions lookup."""
    text: str


class Attachment(BaseModel):
    """Binary payload sent to the generation engine alongside a prompt."""
    mime_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @property
    def is_audio(self) -> bool:
        return self.mime_type.startswith("audio/")


class TierOutcome(str, Enum):
    """Outcome of a single transcript tier."""
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class TierResult:
    """Tagged result of one transcript tier."""

    tier: str
    outcome: TierOutcome
    text: str = ""
    error: Optional[Exception] = None

    @classmethod
    def success(cls, tier: str, text: str) -> "TierResult":
        return cls(tier=tier, outcome=TierOutcome.SUCCESS, text=text)

    @classmethod
    def empty(cls, tier: str) -> "TierResult":
        return cls(tier=tier, outcome=TierOutcome.EMPTY)

    @classmethod
    def failed(cls, tier: str, error: Exception) -> "TierResult":
        return cls(tier=tier, outcome=TierOutcome.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome == TierOutcome.SUCCESS


@dataclass
class RetryState:
    """Retry budget for one generation call."""

    attempts_remaining: int
    next_delay_ms: int

    @property
    def exhausted(self) -> bool:
        return self.attempts_remaining <= 0

    def consume(self) -> int:
        """Use one retry and return the delay to wait before it (ms)."""
        delay = self.next_delay_ms
        self.attempts_remaining -= 1
        self.next_delay_ms *= 2
        return delay


CandidateSet = List[str]
