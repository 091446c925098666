"""Services module for the Smart Notes backend."""

from backend.services.errors import (
    AccessBlockedError,
    FetchFailedError,
    InvalidRequestError,
    NoCaptionsAvailableError,
    PipelineError,
    TranscriptUnavailableError,
    TransientEngineFailure,
)
from backend.services.url_resolver import resolve_video_id, watch_url
from backend.services.web_extractor import WebContentExtractor, fetch_website_content
from backend.services.transcription import (
    TranscriptResolver,
    YouTubeCaptionsLookup,
    extract_caption_tracks,
    fetch_transcript,
    select_caption_track,
)
from backend.services.retry import invoke_with_retry, is_transient_error
from backend.services.candidates import parse_candidates
from backend.services.generation import GenerationEngine, OpenAIGenerationEngine
from backend.services.pipeline import ContentPipeline

__all__ = [
    # Errors
    "AccessBlockedError",
    "FetchFailedError",
    "InvalidRequestError",
    "NoCaptionsAvailableError",
    "PipelineError",
    "TranscriptUnavailableError",
    "TransientEngineFailure",
    # Content acquisition
    "resolve_video_id",
    "watch_url",
    "WebContentExtractor",
    "fetch_website_content",
    "TranscriptResolver",
    "YouTubeCaptionsLookup",
    "extract_caption_tracks",
    "fetch_transcript",
    "select_caption_track",
    # Generation
    "invoke_with_retry",
    "is_transient_error",
    "parse_candidates",
    "GenerationEngine",
    "OpenAIGenerationEngine",
    "ContentPipeline",
]
