"""Error taxonomy shared by the content pipeline.

Callers must be able to tell apart "ask the user to paste the content"
(AccessBlockedError, TranscriptUnavailableError), "try again later"
(transient engine failures) and "there is nothing usable here"
(NoCaptionsAvailableError).
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for content pipeline errors."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(self.message)


class InvalidRequestError(PipelineError):
    """Raised when a request is missing content or names an unknown source."""

    pass


class AccessBlockedError(PipelineError):
    """Raised when a website refuses automated access (HTTP 403).

    Terminal: retrying will not help, the user has to supply the content.
    """

    DEFAULT_MESSAGE = (
        "This website blocks automated access. "
        "Please copy the article text and paste it as text instead."
    )

    def __init__(self, message: Optional[str] = None, source: Optional[str] = None):
        super().__init__(message or self.DEFAULT_MESSAGE, source=source)


class FetchFailedError(PipelineError):
    """Raised when fetching or parsing a page fails for any other reason."""

    pass


class NoCaptionsAvailableError(PipelineError):
    """Raised when a video exposes no caption tracks."""

    pass


class TranscriptUnavailableError(PipelineError):
    """Raised when every transcript tier came back empty or failed."""

    DEFAULT_MESSAGE = (
        "Could not retrieve a transcript for this video: automated access "
        "was blocked or no captions exist. Please paste the transcript "
        "manually as text."
    )

    NO_CAPTIONS_MESSAGE = (
        "No captions were found for this video. If it does have captions, "
        "automated access was blocked: please paste the transcript manually "
        "as text."
    )

    def __init__(self, message: Optional[str] = None, source: Optional[str] = None):
        super().__init__(message or self.DEFAULT_MESSAGE, source=source)


class TransientEngineFailure(PipelineError):
    """Retryable generation engine failure (rate limit or overload).

    Engine errors are classified by message and re-raised unchanged; this
    class names the category for callers that raise their own transient
    errors, and is itself recognised as transient.
    """

    pass
