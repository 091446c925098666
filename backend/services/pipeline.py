"""Per-request content pipeline for the Smart Notes backend.

Acquires text for a request (raw text, web page or video transcript),
builds the prompt, calls the generation engine through the retry wrapper
and, for replies, splits the output into candidates.
"""

import base64
import binascii
import logging
from typing import List, Optional

from backend.config.settings import Settings, get_settings
from backend.models.content import Attachment, ContentSource, NoteLength
from backend.services.candidates import parse_candidates
from backend.services.errors import InvalidRequestError
from backend.services.generation import GenerationEngine, OpenAIGenerationEngine
from backend.services.prompts import (
    build_notes_prompt,
    build_reply_prompt,
    build_voice_fallback_prompt,
)
from backend.services.retry import invoke_with_retry, is_transient_error
from backend.services.transcription import TranscriptResolver
from backend.services.url_resolver import resolve_video_id, watch_url
from backend.services.web_extractor import WebContentExtractor

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/jpeg"
VOICE_MIME_TYPE = "audio/mp4"


def _decode_attachment(content: str, mime_type: str) -> Attachment:
    try:
        data = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidRequestError(f"Attachment is not valid base64: {e}") from e
    return Attachment(mime_type=mime_type, data=data)


class ContentPipeline:
    """
    Coordinates content acquisition and generation for one request at a time.

    Holds no per-request state, so one instance can serve concurrent
    requests.

    Usage:
        pipeline = ContentPipeline()
        notes = pipeline.generate_notes("website", "https://example.com/post")
        replies = pipeline.generate_replies("Can we meet tomorrow?", tone="friendly")
    """

    def __init__(
        self,
        engine: Optional[GenerationEngine] = None,
        web_extractor: Optional[WebContentExtractor] = None,
        transcript_resolver: Optional[TranscriptResolver] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the ContentPipeline.

        Args:
            engine: Generation engine (OpenAI-backed if not provided)
            web_extractor: WebContentExtractor (creates one if not provided)
            transcript_resolver: TranscriptResolver (creates one if not provided)
            settings: Settings instance (uses the global settings if not provided)
        """
        self._settings = settings or get_settings()
        self._engine = engine or OpenAIGenerationEngine(settings=self._settings)
        self._web_extractor = web_extractor or WebContentExtractor(settings=self._settings)
        self._transcript_resolver = transcript_resolver or TranscriptResolver(
            settings=self._settings
        )

    def _generate(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        return invoke_with_retry(
            lambda: self._engine.invoke(prompt, attachment),
            retries=self._settings.retry_attempts,
            base_delay_ms=self._settings.retry_base_delay_ms,
        )

    # === NOTES ===

    def generate_notes(
        self,
        source: str,
        content: str,
        note_length: str = NoteLength.STANDARD.value,
    ) -> str:
        """
        Generate notes from one piece of source material.

        Args:
            source: One of text, website, video, image, voice, pdf
            content: Raw text, page URL, video URL/ID, base64 payload or PDF file name
            note_length: brief, standard or detailed

        Returns:
            The generated notes

        Raises:
            InvalidRequestError: If content is empty or the source is unknown
            AccessBlockedError, FetchFailedError: From website extraction
            TranscriptUnavailableError: From transcript resolution
        """
        if not content or not content.strip():
            raise InvalidRequestError("Content is required")

        try:
            source = ContentSource(source)
        except ValueError:
            raise InvalidRequestError(f"Invalid input type: {source}")

        logger.info(f"Generating {note_length} notes from {source.value} content")

        if source == ContentSource.WEBSITE:
            text = self._web_extractor.fetch(content.strip())
            prompt = build_notes_prompt(source, text, note_length, source_url=content.strip())
            return self._generate(prompt)

        if source == ContentSource.VIDEO:
            video_id = resolve_video_id(content)
            transcript = self._transcript_resolver.fetch(video_id)
            prompt = build_notes_prompt(
                source, transcript, note_length, source_url=watch_url(video_id)
            )
            return self._generate(prompt)

        if source == ContentSource.IMAGE:
            attachment = _decode_attachment(content, IMAGE_MIME_TYPE)
            return self._generate(build_notes_prompt(source, "", note_length), attachment)

        if source == ContentSource.VOICE:
            return self._generate_voice_notes(content, note_length)

        return self._generate(build_notes_prompt(source, content, note_length))

    def _generate_voice_notes(self, content: str, note_length: str) -> str:
        """Voice notes, falling back to a template when the audio is rejected."""
        attachment = _decode_attachment(content, VOICE_MIME_TYPE)
        prompt = build_notes_prompt(ContentSource.VOICE, "", note_length)

        try:
            return self._generate(prompt, attachment)
        except Exception as e:
            if is_transient_error(e):
                raise
            logger.warning(f"Audio processing failed, using template prompt: {e}")

        return self._generate(build_voice_fallback_prompt())

    # === REPLIES ===

    def generate_replies(
        self,
        message: str,
        tone: Optional[str] = None,
        style: Optional[str] = None,
        format: Optional[str] = None,
    ) -> List[str]:
        """
        Generate candidate replies to a message.

        Returns:
            Exactly ``candidate_count`` reply strings

        Raises:
            InvalidRequestError: If the message is empty
        """
        if not message or not message.strip():
            raise InvalidRequestError("Message is required")

        count = self._settings.candidate_count
        prompt = build_reply_prompt(
            message,
            tone=tone,
            style=style,
            format=format,
            count=count,
            delimiter=self._settings.reply_delimiter,
        )
        raw_text = self._generate(prompt)
        return parse_candidates(raw_text, n=count, delimiter=self._settings.reply_delimiter)
