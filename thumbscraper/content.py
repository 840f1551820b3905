"""Discovery of candidate thumbnail images on a web page."""

from __future__ import annotations

import logging
from typing import List, Optional

from .collector import HTMLCollector, HTMLElement, build_collector
from .config import ScrapeConfig
from .errors import InvalidPageURLError, ThumbscraperError
from .models import ImageCandidate
from .utils import image_name_from_url, normalize_url

logger = logging.getLogger("thumbscraper")

# og:image is what Facebook, Reddit and friends use to pick a link preview.
OPEN_GRAPH_IMAGE_SELECTOR = 'meta[property="og:image"][content]'
IMAGE_ELEMENT_SELECTOR = "img[src]"


def _build_candidate(
    page_url: str, raw_url: str, alt_text: str, is_open_graph_image: bool
) -> ImageCandidate:
    url = normalize_url(page_url, raw_url)
    return ImageCandidate(
        name=image_name_from_url(url),
        alt_text=alt_text,
        url=url,
        is_open_graph_image=is_open_graph_image,
    )


def extract_image_nodes(
    page_url: str,
    config: Optional[ScrapeConfig] = None,
    collector: Optional[HTMLCollector] = None,
) -> List[ImageCandidate]:
    """Return every image candidate on ``page_url`` in document order.

    Raises ``InvalidPageURLError`` for a blank URL. Page fetch failures are
    raised as-is with the candidates gathered so far attached to the error.
    """
    if not page_url or not page_url.strip():
        raise InvalidPageURLError("Page URL must not be empty", page_url)

    if collector is None:
        collector = build_collector(config or ScrapeConfig())

    candidates: List[ImageCandidate] = []
    errors: List[ThumbscraperError] = []

    def on_open_graph_image(element: HTMLElement) -> None:
        candidates.append(
            _build_candidate(page_url, element.attr("content"), "", True)
        )

    def on_image_element(element: HTMLElement) -> None:
        candidates.append(
            _build_candidate(page_url, element.attr("src"), element.attr("alt"), False)
        )

    collector.on_html(OPEN_GRAPH_IMAGE_SELECTOR, on_open_graph_image)
    collector.on_html(IMAGE_ELEMENT_SELECTOR, on_image_element)
    collector.on_error(errors.append)
    collector.visit(page_url)

    if errors:
        error = errors[0]
        error.candidates = list(candidates)
        raise error

    logger.debug("Found %d image candidates on %s", len(candidates), page_url)
    return candidates
