"""Helpers for repairing image URLs and managing HTTP sessions."""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator, Optional

import requests

SCHEMA_PATTERN = re.compile(r"^https?://")
ORIGIN_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://[^/?#.]+(?:\.[^/?#.]+)*")


def normalize_url(page_url: str, raw_url: str) -> str:
    """Turn a relative or schema-less image URL into an absolute one.

    This is string repair rather than RFC 3986 resolution: no encoding or
    validation happens, and a page URL without an origin yields a bare path.
    """
    if SCHEMA_PATTERN.match(raw_url):
        return raw_url
    if raw_url.startswith("//"):
        return "https:" + raw_url

    match = ORIGIN_PATTERN.match(page_url)
    origin = match.group(0) if match else ""
    if not raw_url.startswith("/"):
        return f"{origin}/{raw_url}"
    return origin + raw_url


def image_name_from_url(url: str) -> str:
    """Return the last non-empty path segment of ``url``."""
    segments = [segment for segment in url.split("/") if segment]
    return segments[-1] if segments else ""


@contextmanager
def session_scope(session: Optional[requests.Session] = None) -> Iterator[requests.Session]:
    """Yield ``session``, or a fresh one that is closed on exit."""
    if session is not None:
        yield session
        return
    with requests.Session() as owned:
        yield owned
