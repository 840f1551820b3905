"""Find the best thumbnail image for a web page."""

from .config import BatchOptions, FetchOptions, ScrapeConfig
from .content import extract_image_nodes
from .errors import (
    DecodeError,
    EmptyInputError,
    HTTPStatusError,
    InvalidPageURLError,
    ThumbscraperError,
    TransportError,
)
from .images import ImageDecoder, fetch_image_info, fetch_image_info_batch
from .models import ImageCandidate, ImageInfo
from .scraper import ThumbnailResult, scrape_thumbnail
from .selector import select_thumbnail
from .utils import normalize_url

__all__ = [
    "BatchOptions",
    "DecodeError",
    "EmptyInputError",
    "FetchOptions",
    "HTTPStatusError",
    "ImageCandidate",
    "ImageDecoder",
    "ImageInfo",
    "InvalidPageURLError",
    "ScrapeConfig",
    "ThumbnailResult",
    "ThumbscraperError",
    "TransportError",
    "extract_image_nodes",
    "fetch_image_info",
    "fetch_image_info_batch",
    "normalize_url",
    "scrape_thumbnail",
    "select_thumbnail",
]
