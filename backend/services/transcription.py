"""Transcript resolution for the Smart Notes backend.

Obtains a video's caption text through ordered tiers:

1. The captions lookup (youtube-transcript-api)
2. A manual scrape of the watch page's caption track list

The first tier that produces non-empty text wins.
"""

import json
import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import requests
from bs4 import BeautifulSoup
from youtube_transcript_api import YouTubeTranscriptApi

from backend.config.settings import Settings, get_settings
from backend.models.content import CaptionFragment, CaptionTrack, TierResult
from backend.services.errors import (
    FetchFailedError,
    NoCaptionsAvailableError,
    TranscriptUnavailableError,
)
from backend.services.url_resolver import resolve_video_id, watch_url

logger = logging.getLogger(__name__)

CaptionsLookup = Callable[[str], Iterable[CaptionFragment]]

CAPTION_TRACKS_MARKER = '"captionTracks":'
CAPTION_TRACKS_PATTERN = re.compile(r'"captionTracks":(\[.*?\])')

# &amp; goes last so "&amp;quot;" becomes "&quot;" rather than '"'
CAPTION_ENTITIES = (("&#39;", "'"), ("&quot;", '"'), ("&amp;", "&"))


# === CAPTION TRACK HELPERS ===


def extract_caption_tracks(html: str) -> List[CaptionTrack]:
    """
    Pull the caption track list embedded in a watch page.

    Best effort: the list is located by its JSON key inside the page's
    inline player config, so markup changes upstream can break it.

    Returns:
        Tracks in page order, or an empty list if none were found.
    """
    if CAPTION_TRACKS_MARKER not in html:
        return []

    match = CAPTION_TRACKS_PATTERN.search(html)
    if not match:
        return []

    try:
        raw_tracks = json.loads(match.group(1))
    except json.JSONDecodeError:
        # Nested arrays end the non-greedy match early; decode from the
        # opening bracket instead.
        raw_tracks, _ = json.JSONDecoder().raw_decode(html, match.start(1))

    return [CaptionTrack.model_validate(track) for track in raw_tracks]


def select_caption_track(tracks: Sequence[CaptionTrack]) -> CaptionTrack:
    """
    Pick the English track, or the first one if there is no English track.

    Raises:
        NoCaptionsAvailableError: If ``tracks`` is empty
    """
    if not tracks:
        raise NoCaptionsAvailableError("Video has no caption tracks")

    for track in tracks:
        if track.language_code == "en":
            return track
    return tracks[0]


def decode_caption_entities(text: str) -> str:
    """Decode the entities left over in caption text after markup parsing."""
    for entity, char in CAPTION_ENTITIES:
        text = text.replace(entity, char)
    return text


def parse_caption_markup(markup: str) -> str:
    """Join the content of every ``<text>`` element in a timed-text document."""
    soup = BeautifulSoup(markup, "html.parser")
    text = " ".join(element.get_text() for element in soup.find_all("text"))
    return decode_caption_entities(text).strip()


def cookie_header(response: requests.Response) -> Optional[str]:
    """
    Build a ``Cookie`` header value from the cookies a response set.

    Cookies set on redirect hops (consent pages) are included; a later hop
    overrides an earlier cookie of the same name.
    """
    cookies = {}
    for hop in list(response.history) + [response]:
        cookies.update(hop.cookies.items())
    pairs = [f"{name}={value}" for name, value in cookies.items()]
    return "; ".join(pairs) if pairs else None


# === CAPTIONS LOOKUP ===


class YouTubeCaptionsLookup:
    """Captions lookup backed by youtube-transcript-api."""

    def __init__(self, languages: Optional[List[str]] = None):
        self._languages = languages or get_settings().preferred_languages
        self._transcript_api = YouTubeTranscriptApi()

    def __call__(self, video_id: str) -> List[CaptionFragment]:
        fetched = self._transcript_api.fetch(video_id, languages=self._languages)
        return [CaptionFragment(text=snippet.text) for snippet in fetched]


# === MAIN CLASS ===


class TranscriptResolver:
    """
    Resolves a video reference to its transcript text.

    Each tier returns a TierResult; tiers are tried in order and the first
    success wins. Nothing is retried within a tier.

    Usage:
        resolver = TranscriptResolver()
        transcript = resolver.fetch("https://youtu.be/dQw4w9WgXcQ")
    """

    def __init__(
        self,
        captions_lookup: Optional[CaptionsLookup] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the TranscriptResolver.

        Args:
            captions_lookup: Primary tier collaborator (youtube-transcript-api if not provided)
            settings: Settings instance (uses the global settings if not provided)
        """
        self._settings = settings or get_settings()
        self._captions_lookup = captions_lookup or YouTubeCaptionsLookup(
            self._settings.preferred_languages
        )

    @property
    def tiers(self) -> List[Tuple[str, Callable[[str], TierResult]]]:
        return [
            ("captions_lookup", self._lookup_tier),
            ("watch_page", self._watch_page_tier),
        ]

    def fetch(self, video_ref: str) -> str:
        """
        Get the transcript for a video.

        Args:
            video_ref: Video URL or bare video ID

        Returns:
            Transcript text, at most ``transcript_max_chars`` characters

        Raises:
            TranscriptUnavailableError: If every tier came back empty or failed
        """
        video_id = resolve_video_id(video_ref)

        last_error = None
        for name, tier in self.tiers:
            result = tier(video_id)
            if result.ok:
                logger.info(
                    f"Transcript for {video_id} from {name} tier ({len(result.text)} chars)"
                )
                return result.text[: self._settings.transcript_max_chars]

            if result.error is not None:
                last_error = result.error
                logger.warning(f"{name} tier failed for {video_id}: {result.error}")
            else:
                logger.warning(f"{name} tier returned no text for {video_id}")

        logger.error(f"No transcript available for {video_id}")
        message = None
        if isinstance(last_error, NoCaptionsAvailableError):
            message = TranscriptUnavailableError.NO_CAPTIONS_MESSAGE
        raise TranscriptUnavailableError(message, source=video_id) from last_error

    def _lookup_tier(self, video_id: str) -> TierResult:
        """Primary tier: the captions lookup capability."""
        try:
            fragments = self._captions_lookup(video_id)
            text = " ".join(fragment.text for fragment in fragments)
        except Exception as e:
            return TierResult.failed("captions_lookup", e)

        if not text.strip():
            return TierResult.empty("captions_lookup")
        return TierResult.success("captions_lookup", text)

    def _watch_page_tier(self, video_id: str) -> TierResult:
        """Fallback tier: scrape the caption track list from the watch page."""
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept-Language": self._settings.accept_language,
        }

        try:
            page = requests.get(
                watch_url(video_id), headers=headers, timeout=self._settings.http_timeout
            )
            page.raise_for_status()

            track = select_caption_track(extract_caption_tracks(page.text))
            logger.debug(f"Selected {track.language_code} caption track for {video_id}")

            track_headers = dict(headers)
            cookies = cookie_header(page)
            if cookies:
                track_headers["Cookie"] = cookies

            response = requests.get(
                track.base_url, headers=track_headers, timeout=self._settings.http_timeout
            )
            response.raise_for_status()
            text = parse_caption_markup(response.text)
        except NoCaptionsAvailableError as e:
            e.source = video_id
            return TierResult.failed("watch_page", e)
        except Exception as e:
            error = FetchFailedError(f"Watch page scrape failed: {e}", source=video_id)
            error.__cause__ = e
            return TierResult.failed("watch_page", error)

        if not text:
            return TierResult.empty("watch_page")
        return TierResult.success("watch_page", text)


def fetch_transcript(video_ref: str) -> str:
    """Fetch a transcript with a default TranscriptResolver."""
    return TranscriptResolver().fetch(video_ref)
