"""Video reference resolution.

Turns the many shapes a user can paste (watch URLs, youtu.be short links,
shorts links, bare IDs) into one canonical video ID.
"""

import re

SHORTS_PATTERN = re.compile(r"shorts/([a-zA-Z0-9_-]+)")
QUERY_PATTERN = re.compile(r"v=([^&]+)")
SHORT_LINK_PATTERN = re.compile(r"youtu\.be/([^?&/#]+)")

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def resolve_video_id(url_or_id: str) -> str:
    """
    Extract the video ID from a URL, or return the input as-is.

    Checked in order: ``shorts/<id>``, a ``v=`` query parameter,
    ``youtu.be/<id>``. Anything else is assumed to already be an ID, so
    bad input surfaces later as a fetch error instead of here.

    Args:
        url_or_id: Video URL or bare video ID.

    Returns:
        The video ID.
    """
    value = url_or_id.strip()

    if "shorts/" in value:
        match = SHORTS_PATTERN.search(value)
        if match:
            return match.group(1)

    if "v=" in value:
        match = QUERY_PATTERN.search(value)
        if match:
            return match.group(1)

    if "youtu.be/" in value:
        match = SHORT_LINK_PATTERN.search(value)
        if match:
            return match.group(1)

    return value


def watch_url(video_id: str) -> str:
    """Return the canonical watch page URL for a video ID."""
    return WATCH_URL.format(video_id=video_id)
