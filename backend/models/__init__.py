"""Data models for the Smart Notes backend."""

from backend.models.content import (
    Attachment,
    CandidateSet,
    CaptionFragment,
    CaptionTrack,
    ContentSource,
    NoteLength,
    RetryState,
    TierOutcome,
    TierResult,
)

__all__ = [
    "Attachment",
    "CandidateSet",
    "CaptionFragment",
    "CaptionTrack",
    "ContentSource",
    "NoteLength",
    "RetryState",
    "TierOutcome",
    "TierResult",
]
