"""Web content extraction for the Smart Notes backend.

Fetches a web page with browser-like headers and reduces it to the
headings, paragraphs and list items that carry its actual content.
"""

import logging
import re
from typing import Optional, Union

import requests
from bs4 import BeautifulSoup

from backend.config.settings import Settings, get_settings
from backend.services.errors import AccessBlockedError, FetchFailedError

logger = logging.getLogger(__name__)


BOILERPLATE_TAGS = ["script", "style", "nav", "footer"]
CONTENT_TAGS = ["h1", "h2", "h3", "p", "li"]

# class/id tokens such as "ad", "ads", "ad-slot", "google-ad", "advertisement"
AD_TOKEN_PATTERN = re.compile(
    r"^(ads?|advert\w*|sponsor\w*)$|^ads?[-_]|[-_]ads?$", re.IGNORECASE
)


def _is_advertisement(tag) -> bool:
    """Check whether an element is marked as an ad by its class or id."""
    tokens = list(tag.get("class") or [])
    if tag.get("id"):
        tokens.append(tag["id"])
    return any(AD_TOKEN_PATTERN.search(token) for token in tokens)


def _declares_charset(response: requests.Response) -> bool:
    return "charset=" in response.headers.get("Content-Type", "").lower()


class WebContentExtractor:
    """
    Fetches web pages and extracts a bounded plain-text excerpt.

    A single attempt is made per call; retrying is left to the caller.

    Usage:
        extractor = WebContentExtractor()
        text = extractor.fetch("https://example.com/article")
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the WebContentExtractor.

        Args:
            settings: Settings instance (uses the global settings if not provided)
        """
        self._settings = settings or get_settings()

    def _headers(self) -> dict:
        return {
            "User-Agent": self._settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self._settings.accept_language,
        }

    def fetch(self, url: str) -> str:
        """
        Fetch a page and return its extracted text.

        Args:
            url: Page URL

        Returns:
            Extracted text, at most ``website_max_chars`` characters

        Raises:
            AccessBlockedError: If the site answers 403
            FetchFailedError: On any other network, HTTP or parse failure
        """
        try:
            response = requests.get(
                url,
                headers=self._headers(),
                timeout=self._settings.http_timeout,
                allow_redirects=True,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise FetchFailedError(f"Failed to fetch website: {e}", source=url) from e

        if response.status_code == 403:
            logger.warning(f"Access blocked (403) for {url}")
            raise AccessBlockedError(source=url)

        # No charset header: the parser reads <meta charset>, the BOM, or detects
        encoding = response.encoding if _declares_charset(response) else None

        try:
            response.raise_for_status()
            text = self.extract_text(response.content, encoding=encoding)
        except Exception as e:
            logger.error(f"Failed to extract content from {url}: {e}")
            raise FetchFailedError(f"Failed to fetch website: {e}", source=url) from e

        logger.info(f"Extracted {len(text)} chars from {url}")
        return text

    def extract_text(self, html: Union[str, bytes], encoding: Optional[str] = None) -> str:
        """
        Reduce an HTML document to its content blocks.

        Boilerplate (scripts, styles, navigation, footers and ad-marked
        elements) is removed first. Headings, paragraphs and list items are
        then taken in document order, one per line, skipping any whose
        trimmed text is not longer than ``min_block_length``.

        Raw bytes are decoded with ``encoding`` when given, otherwise the
        document's own declaration (or detection) decides.
        """
        if isinstance(html, bytes):
            soup = BeautifulSoup(html, "html.parser", from_encoding=encoding)
        else:
            soup = BeautifulSoup(html, "html.parser")

        for element in soup.find_all(BOILERPLATE_TAGS) + soup.find_all(_is_advertisement):
            # nested boilerplate may already be gone with its parent
            if not element.decomposed:
                element.decompose()

        min_length = self._settings.min_block_length
        parts = []
        for element in soup.find_all(CONTENT_TAGS):
            text = element.get_text().strip()
            if len(text) > min_length:
                parts.append(text + "\n")

        return "".join(parts)[: self._settings.website_max_chars]


def fetch_website_content(url: str) -> str:
    """Fetch ``url`` with a default WebContentExtractor."""
    return WebContentExtractor().fetch(url)
