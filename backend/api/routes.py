"""API routes for the Smart Notes backend."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.api.schemas import (
    HealthResponse,
    NotesRequest,
    NotesResponse,
    ReplyRequest,
    ReplyResponse,
)
from backend.services.errors import (
    AccessBlockedError,
    FetchFailedError,
    InvalidRequestError,
    NoCaptionsAvailableError,
    TranscriptUnavailableError,
)
from backend.services.pipeline import ContentPipeline
from backend.services.retry import is_transient_error

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# ============== Dependencies ==============


def get_pipeline() -> ContentPipeline:
    """Dependency to get the ContentPipeline instance."""
    from backend.api.app import get_services
    return get_services()["pipeline"]


def _to_http_error(error: Exception, action: str) -> HTTPException:
    """Translate a pipeline error into the response the user should see."""
    if isinstance(error, InvalidRequestError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(
        error, (AccessBlockedError, TranscriptUnavailableError, NoCaptionsAvailableError)
    ):
        # User has to paste the content manually
        return HTTPException(status_code=422, detail=error.message)
    if isinstance(error, FetchFailedError):
        return HTTPException(status_code=502, detail=error.message)
    if is_transient_error(error):
        return HTTPException(
            status_code=503,
            detail="The AI service is busy right now. Please try again in a moment.",
        )

    logger.error(f"{action} error: {error}")
    return HTTPException(status_code=500, detail=f"Failed to {action}: {error}")


# ============== Health Check ==============


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check API health status."""
    return HealthResponse(
        status="ok",
        version=API_VERSION,
        services={
            "notes": "ok",
            "reply": "ok",
        },
    )


# ============== Notes ==============


@router.post("/notes", response_model=NotesResponse, tags=["Notes"])
async def generate_notes(
    request: NotesRequest,
    pipeline: ContentPipeline = Depends(get_pipeline),
):
    """
    Generate organized notes from text, a website, a video, an image,
    a voice recording or a PDF file name.

    Websites and videos are fetched server-side. When a site or video
    blocks automated access the response is 422 and the content should be
    pasted as text instead.
    """
    try:
        notes = await asyncio.to_thread(
            pipeline.generate_notes,
            request.type,
            request.content,
            request.note_length,
        )
    except Exception as e:
        raise _to_http_error(e, "generate notes")

    return NotesResponse(notes=notes)


# ============== Replies ==============


@router.post("/reply", response_model=ReplyResponse, tags=["Reply"])
async def generate_reply(
    request: ReplyRequest,
    pipeline: ContentPipeline = Depends(get_pipeline),
):
    """Generate three ready-to-send replies to a message."""
    try:
        replies = await asyncio.to_thread(
            pipeline.generate_replies,
            request.message,
            request.tone,
            request.style,
            request.format,
        )
    except Exception as e:
        raise _to_http_error(e, "generate reply")

    return ReplyResponse(replies=replies)
