"""Splitting of multi-reply generation output into a fixed set of candidates."""

import logging
import re
from typing import List

from backend.models.content import CandidateSet

logger = logging.getLogger(__name__)

REPLY_DELIMITER = "---REPLY---"
FALLBACK_REPLY = "Sorry, I couldn't generate a reply. Please try again."

# Blank line followed by a typical English reply opener. Other languages are
# not recognised; output without delimiters in them falls through to padding.
OPENER_SPLIT_PATTERN = re.compile(r"\n\n(?=(?:Hi|Hello|Dear|Hey|Thank|I ))", re.IGNORECASE)
LABEL_PATTERN = re.compile(r"^(Reply\s*\d+:?|Option\s*\d+:?|\d+\.)", re.IGNORECASE)

MIN_OPENER_SEGMENT_LENGTH = 15


def _split_on_delimiter(raw_text: str, delimiter: str) -> List[str]:
    segments = (segment.strip() for segment in raw_text.split(delimiter))
    return [segment for segment in segments if segment]


def _split_on_openers(raw_text: str) -> List[str]:
    segments = (segment.strip() for segment in OPENER_SPLIT_PATTERN.split(raw_text))
    return [segment for segment in segments if len(segment) > MIN_OPENER_SEGMENT_LENGTH]


def parse_candidates(
    raw_text: str, n: int = 3, delimiter: str = REPLY_DELIMITER
) -> CandidateSet:
    """
    Split generated text into exactly ``n`` candidate replies.

    Segments come from the delimiter first; if that yields fewer than ``n``,
    the raw text is split on blank lines before greeting words instead.
    Leading "Reply 1:" / "Option 2:" / "3." labels are stripped. Short
    results are padded with the first candidate (or a fallback message),
    long ones are cut to the first ``n``. Never raises.
    """
    raw_text = raw_text or ""

    candidates = _split_on_delimiter(raw_text, delimiter)
    if len(candidates) < n:
        candidates = _split_on_openers(raw_text)

    candidates = [LABEL_PATTERN.sub("", candidate, count=1).strip() for candidate in candidates]
    candidates = [candidate for candidate in candidates if candidate]

    if len(candidates) < n:
        logger.warning(f"Parsed {len(candidates)} of {n} candidates; padding")
    while len(candidates) < n:
        candidates.append(candidates[0] if candidates else FALLBACK_REPLY)

    return candidates[:n]
