"""High-level orchestration for finding a page's thumbnail."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .collector import HTMLCollector
from .config import ScrapeConfig
from .content import extract_image_nodes
from .images import ImageDecoder, fetch_image_info_batch
from .models import ImageCandidate, ImageInfo
from .selector import select_thumbnail
from .utils import session_scope

logger = logging.getLogger("thumbscraper")


@dataclass
class ThumbnailResult:
    """Everything learned about a page while choosing its thumbnail."""

    page_url: str
    thumbnail: ImageInfo
    candidates: List[ImageCandidate] = field(default_factory=list)
    images: List[ImageInfo] = field(default_factory=list)
    total_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_url": self.page_url,
            "thumbnail": self.thumbnail.to_dict(),
            "candidates": len(self.candidates),
            "resolved": len(self.images),
            "total_seconds": round(self.total_seconds, 3),
        }


def scrape_thumbnail(
    page_url: str,
    config: Optional[ScrapeConfig] = None,
    collector: Optional[HTMLCollector] = None,
    session: Optional[requests.Session] = None,
    decoder: Optional[ImageDecoder] = None,
) -> ThumbnailResult:
    """Extract, fetch and rank the images on ``page_url``."""
    config = config or ScrapeConfig()
    start = time.perf_counter()

    candidates = extract_image_nodes(page_url, config, collector)
    logger.info("Found %d image candidates on %s", len(candidates), page_url)

    with session_scope(session) as http:
        if session is None:
            http.headers["User-Agent"] = config.user_agent
        images = fetch_image_info_batch(candidates, config.batch, http, decoder)
    logger.info(
        "Resolved %d/%d images for %s", len(images), len(candidates), page_url
    )

    thumbnail = select_thumbnail(images)
    elapsed = time.perf_counter() - start
    logger.info(
        "Selected %s (%dx%d) in %.2fs",
        thumbnail.url,
        thumbnail.width,
        thumbnail.height,
        elapsed,
    )
    return ThumbnailResult(
        page_url=page_url,
        thumbnail=thumbnail,
        candidates=candidates,
        images=images,
        total_seconds=elapsed,
    )
