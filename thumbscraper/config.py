"""Configuration objects and constants for the thumbnail scraper."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_USER_AGENT = "thumbscraper/0.1 (+https://github.com/thumbscraper/thumbscraper)"


def default_user_agent() -> str:
    return os.getenv("THUMBSCRAPER_USER_AGENT") or DEFAULT_USER_AGENT


@dataclass(frozen=True)
class FetchOptions:
    """Settings applied to each individual image fetch.

    ``timeout`` of ``None`` leaves the transport default in place.
    """

    retain_pixel_data: bool = False
    timeout: Optional[float] = None


@dataclass(frozen=True)
class BatchOptions:
    """Settings for fetching a list of candidates in one pass."""

    fetch_options: FetchOptions = field(default_factory=FetchOptions)
    require_all_succeed: bool = False
    max_workers: int = 1


@dataclass(frozen=True)
class ScrapeConfig:
    """Top-level settings that control page loading and image resolution."""

    user_agent: str = field(default_factory=default_user_agent)
    page_timeout: Optional[float] = 30.0
    render: bool = False
    wait_after_load: float = 1.0
    batch: BatchOptions = field(default_factory=BatchOptions)
