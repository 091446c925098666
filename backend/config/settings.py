"""Configuration settings for the Smart Notes backend."""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # HTTP scraping
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"
    http_timeout: float = 30.0  # seconds, per request

    # Content ceilings (characters)
    website_max_chars: int = 20_000
    transcript_max_chars: int = 25_000
    min_block_length: int = 20  # shorter headings/paragraphs are dropped

    # Captions
    preferred_languages: List[str] = ["en", "en-US", "en-GB"]

    # Generation retry policy
    retry_attempts: int = 3
    retry_base_delay_ms: int = 2000

    # Reply candidates
    candidate_count: int = 3
    reply_delimiter: str = "---REPLY---"

    # OpenAI generation engine
    openai_api_key: Optional[str] = None  # falls back to OPENAI_API_KEY
    openai_model: str = "gpt-4o-mini"
    openai_audio_model: str = "gpt-4o-audio-preview"  # inline wav/mp3
    transcription_model: str = "whisper-1"  # other recording containers
    temperature: float = 0.7
    top_p: float = 0.9
    max_output_tokens: int = 2048

    # API
    cors_origins: List[str] = ["*"]

    class Config:
        env_prefix = "SNB_"  # Smart Notes Backend
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars like OPENAI_API_KEY


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance (lazy initialization)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
