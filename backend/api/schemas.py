"""API request and response schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from backend.models.content import NoteLength


# ============== Notes ==============


class NotesRequest(BaseModel):
    """Request to generate notes from one piece of content."""

    type: str = Field(..., description="One of: text, website, video, image, voice, pdf")
    content: str = Field(
        "",
        description="Text, website URL, video URL/ID, base64 image/audio, or PDF file name",
    )
    note_length: str = Field(NoteLength.STANDARD.value, alias="noteLength")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "website",
                "content": "https://example.com/article",
                "noteLength": "standard",
            }
        }


class NotesResponse(BaseModel):
    """Generated notes."""

    notes: str


# ============== Replies ==============


class ReplyRequest(BaseModel):
    """Request to generate candidate replies to a message."""

    message: str = Field("", description="The message to reply to")
    tone: Optional[str] = Field(None, description="e.g. friendly, professional, casual")
    style: Optional[str] = Field(None, description="e.g. short, detailed, direct")
    format: Optional[str] = Field(None, description="e.g. email, whatsapp, sms")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Can we move our meeting to Thursday?",
                "tone": "friendly",
                "style": "short",
                "format": "email",
            }
        }


class ReplyResponse(BaseModel):
    """Candidate replies, always exactly the configured count."""

    replies: List[str]


# ============== Health Check ==============


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    services: dict
