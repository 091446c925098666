"""Generation engine for the Smart Notes backend.

Submits a prompt, optionally with an image or audio attachment, to the
OpenAI chat completions API and returns the generated text. Audio in
containers the chat API cannot take inline (m4a recordings from the mobile
clients, webm, ogg) is transcribed with Whisper first.
"""

import base64
import logging
from typing import List, Optional, Protocol

from openai import OpenAI

from backend.config.settings import Settings, get_settings
from backend.models.content import Attachment

logger = logging.getLogger(__name__)

# Containers the chat completions API accepts as inline input_audio
AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}

# Containers sent to the transcription endpoint; the upload file name
# carries the container type
TRANSCRIPTION_EXTENSIONS = {
    "audio/mp4": "m4a",
    "audio/m4a": "m4a",
    "audio/x-m4a": "m4a",
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}

TRANSCRIPT_SECTION = '\n\nTRANSCRIPT OF THE RECORDING:\n"""\n{transcript}\n"""'


class GenerationEngine(Protocol):
    """Anything that turns a prompt (plus optional attachment) into text."""

    def invoke(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        ...


class OpenAIGenerationEngine:
    """
    Generation engine backed by OpenAI chat completions.

    Client errors are not caught here: rate-limit and overload errors carry
    their HTTP status in the message, which is what the retry wrapper looks
    for.

    Usage:
        engine = OpenAIGenerationEngine()
        text = engine.invoke("Summarize this: ...")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[OpenAI] = None,
    ):
        """
        Initialize the OpenAIGenerationEngine.

        Args:
            settings: Settings instance (uses the global settings if not provided)
            client: OpenAI client (created from settings if not provided)
        """
        self._settings = settings or get_settings()
        self._client = client or OpenAI(api_key=self._settings.openai_api_key)

        logger.info(f"Generation engine initialized with model '{self._settings.openai_model}'")

    def _content_parts(self, prompt: str, attachment: Attachment) -> List[dict]:
        encoded = base64.b64encode(attachment.data).decode("ascii")
        if attachment.is_image:
            media = {
                "type": "image_url",
                "image_url": {"url": f"data:{attachment.mime_type};base64,{encoded}"},
            }
        else:
            media = {
                "type": "input_audio",
                "input_audio": {
                    "data": encoded,
                    "format": AUDIO_FORMATS[attachment.mime_type],
                },
            }

        return [{"type": "text", "text": prompt}, media]

    def transcribe(self, attachment: Attachment) -> str:
        """
        Transcribe an audio attachment with the transcription model.

        Raises:
            ValueError: If the container is not supported or no speech was found
        """
        extension = TRANSCRIPTION_EXTENSIONS.get(attachment.mime_type)
        if extension is None:
            raise ValueError(f"Unsupported audio type: {attachment.mime_type}")

        logger.info(
            f"Transcribing {len(attachment.data)} bytes of {attachment.mime_type} "
            f"with {self._settings.transcription_model}"
        )
        response = self._client.audio.transcriptions.create(
            model=self._settings.transcription_model,
            file=(f"recording.{extension}", attachment.data, attachment.mime_type),
        )

        transcript = (getattr(response, "text", None) or "").strip()
        if not transcript:
            raise ValueError("No speech found in the recording")
        return transcript

    def invoke(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Prompt text
            attachment: Optional image or audio payload

        Returns:
            The generated text (empty string if the model returned none)

        Raises:
            ValueError: If the attachment type is not supported
        """
        model = self._settings.openai_model
        if attachment is None:
            content = prompt
        elif attachment.is_image:
            content = self._content_parts(prompt, attachment)
        elif attachment.is_audio and attachment.mime_type in AUDIO_FORMATS:
            content = self._content_parts(prompt, attachment)
            model = self._settings.openai_audio_model
        elif attachment.is_audio:
            transcript = self.transcribe(attachment)
            content = prompt + TRANSCRIPT_SECTION.format(transcript=transcript)
        else:
            raise ValueError(f"Unsupported attachment type: {attachment.mime_type}")

        response = self._client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": content}],
            temperature=self._settings.temperature,
            top_p=self._settings.top_p,
            max_tokens=self._settings.max_output_tokens,
        )

        text = response.choices[0].message.content or ""
        tokens_used = response.usage.total_tokens if response.usage else None
        logger.info(f"Generated {len(text)} chars with {model} ({tokens_used} tokens)")
        return text
