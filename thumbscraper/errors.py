"""Exceptions raised by the scraping pipeline."""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ImageCandidate


class ThumbscraperError(Exception):
    """Base exception for thumbscraper."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        # Filled in by the extractor when a page fails part-way through.
        self.candidates: List["ImageCandidate"] = []


class TransportError(ThumbscraperError):
    """Request could not be completed (network, DNS, timeout)."""


class HTTPStatusError(ThumbscraperError):
    """Server answered with anything other than 200."""

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        super().__init__(f"Unexpected HTTP status {status_code} for {url}", url)
        self.status_code = status_code


class DecodeError(ThumbscraperError):
    """Response body is not an image any registered decoder understands."""


class EmptyInputError(ThumbscraperError):
    """Thumbnail selection was given nothing to choose from."""

    def __init__(self, message: str = "No images to select a thumbnail from") -> None:
        super().__init__(message)


class InvalidPageURLError(ThumbscraperError):
    """Page URL is empty or blank."""
