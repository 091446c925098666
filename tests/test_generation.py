"""Tests for the OpenAI-backed generation engine.

The OpenAI client is replaced with a MagicMock, so no API key is needed.
"""

import base64
import pytest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.config.settings import Settings
from backend.models.content import Attachment
from backend.services.generation import OpenAIGenerationEngine


def _completion(text, total_tokens=42):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


@pytest.fixture
def client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("# Notes")
    return client


@pytest.fixture
def engine(client):
    return OpenAIGenerationEngine(settings=Settings(), client=client)


def _sent(client):
    return client.chat.completions.create.call_args.kwargs


class TestTextPrompts:
    """Tests for prompt-only calls."""

    def test_returns_generated_text(self, engine):
        assert engine.invoke("Summarize this") == "# Notes"

    def test_sampling_parameters(self, engine, client):
        engine.invoke("Summarize this")

        sent = _sent(client)
        assert sent["model"] == "gpt-4o-mini"
        assert sent["temperature"] == 0.7
        assert sent["top_p"] == 0.9
        assert sent["max_tokens"] == 2048
        assert sent["messages"] == [{"role": "user", "content": "Summarize this"}]

    def test_none_content_becomes_empty_string(self, engine, client):
        client.chat.completions.create.return_value = _completion(None)
        assert engine.invoke("Summarize this") == ""

    def test_missing_usage_tolerated(self, engine, client):
        response = _completion("text")
        response.usage = None
        client.chat.completions.create.return_value = response

        assert engine.invoke("Summarize this") == "text"

    def test_client_errors_propagate(self, engine, client):
        """Errors reach the caller unchanged so the retry wrapper can classify them."""
        client.chat.completions.create.side_effect = RuntimeError("Error code: 429")

        with pytest.raises(RuntimeError, match="429"):
            engine.invoke("Summarize this")


class TestAttachments:
    """Tests for image and audio payloads."""

    def test_image_sent_as_data_url(self, engine, client):
        attachment = Attachment(mime_type="image/jpeg", data=b"\xff\xd8\xff")

        engine.invoke("Describe this image", attachment)

        sent = _sent(client)
        text_part, image_part = sent["messages"][0]["content"]
        assert text_part == {"type": "text", "text": "Describe this image"}
        assert image_part["type"] == "image_url"
        assert image_part["image_url"]["url"] == (
            "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xff").decode()
        )
        assert sent["model"] == "gpt-4o-mini"

    def test_audio_uses_audio_model(self, engine, client):
        attachment = Attachment(mime_type="audio/wav", data=b"RIFF")

        engine.invoke("Transcribe this", attachment)

        sent = _sent(client)
        audio_part = sent["messages"][0]["content"][1]
        assert sent["model"] == "gpt-4o-audio-preview"
        assert audio_part == {
            "type": "input_audio",
            "input_audio": {"data": base64.b64encode(b"RIFF").decode(), "format": "wav"},
        }

    def test_m4a_recording_transcribed_first(self, engine, client):
        """m4a is never sent inline; it goes to the transcription endpoint."""
        client.audio.transcriptions.create.return_value = SimpleNamespace(
            text="Remember to book the venue by Friday."
        )
        recording = b"\x00\x00\x00\x20ftypM4A "

        engine.invoke("Turn this recording into notes", Attachment(mime_type="audio/mp4", data=recording))

        transcription = client.audio.transcriptions.create.call_args.kwargs
        assert transcription["model"] == "whisper-1"
        assert transcription["file"] == ("recording.m4a", recording, "audio/mp4")

        sent = _sent(client)
        assert sent["model"] == "gpt-4o-mini"
        content = sent["messages"][0]["content"]
        assert isinstance(content, str)
        assert content.startswith("Turn this recording into notes")
        assert "Remember to book the venue by Friday." in content

    def test_transcription_errors_propagate(self, engine, client):
        client.audio.transcriptions.create.side_effect = RuntimeError("Error code: 429")

        with pytest.raises(RuntimeError, match="429"):
            engine.invoke("Notes", Attachment(mime_type="audio/mp4", data=b"\x00"))

        client.chat.completions.create.assert_not_called()

    def test_silent_recording_rejected(self, engine, client):
        client.audio.transcriptions.create.return_value = SimpleNamespace(text="  ")

        with pytest.raises(ValueError, match="No speech"):
            engine.invoke("Notes", Attachment(mime_type="audio/webm", data=b"\x1a\x45"))

        client.chat.completions.create.assert_not_called()

    def test_unknown_audio_container_rejected(self, engine, client):
        with pytest.raises(ValueError, match="audio/amr"):
            engine.invoke("Notes", Attachment(mime_type="audio/amr", data=b"#!AMR"))

        client.audio.transcriptions.create.assert_not_called()
        client.chat.completions.create.assert_not_called()

    def test_unsupported_attachment_rejected(self, engine, client):
        with pytest.raises(ValueError, match="application/pdf"):
            engine.invoke("Read this", Attachment(mime_type="application/pdf", data=b"%PDF"))

        client.chat.completions.create.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
