"""Image downloading and decoding utilities."""

from __future__ import annotations

import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import requests
from filetype import guess
from PIL import Image, UnidentifiedImageError

from .config import BatchOptions, FetchOptions
from .errors import DecodeError, HTTPStatusError, ThumbscraperError, TransportError
from .models import ImageCandidate, ImageInfo
from .utils import session_scope

logger = logging.getLogger("thumbscraper")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


@dataclass
class DecodedImage:
    format: str
    width: int
    height: int
    image: Optional[Image.Image] = None


class ImageDecoder:
    """Registry of the image formats an image fetch is allowed to decode.

    Decoding is done by Pillow, restricted to the registered formats. The
    registry itself never changes; ``register`` returns a widened copy.
    """

    def __init__(self, formats: Iterable[str] = ("GIF", "JPEG", "PNG")) -> None:
        self._formats: Tuple[str, ...] = tuple(
            dict.fromkeys(name.upper() for name in formats)
        )

    @property
    def formats(self) -> Tuple[str, ...]:
        return self._formats

    def register(self, format_name: str) -> "ImageDecoder":
        return ImageDecoder(self._formats + (format_name,))

    def decode(self, data: bytes, retain_pixels: bool = False) -> DecodedImage:
        # filetype only vouches that this is an image; Pillow names the format.
        # Animated PNGs sniff as "apng" but Pillow opens them as PNG.
        extension = detect_image_format(data)
        if extension is None:
            raise DecodeError("Unrecognized image data")

        try:
            with Image.open(io.BytesIO(data), formats=list(self._formats)) as img:
                img.load()
                width, height = img.size
                pixels = img.copy() if retain_pixels else None
                format_name = (img.format or extension).lower()
        except UnidentifiedImageError as exc:
            raise DecodeError(f"No decoder registered for {extension} images") from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Cannot decode image: {exc}") from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Corrupt image data: {exc}") from exc
        return DecodedImage(format=format_name, width=width, height=height, image=pixels)


DEFAULT_DECODER = ImageDecoder()


def fetch_image_info(
    candidate: ImageCandidate,
    options: Optional[FetchOptions] = None,
    session: Optional[requests.Session] = None,
    decoder: Optional[ImageDecoder] = None,
) -> ImageInfo:
    """Download ``candidate`` and describe the decoded image.

    Raises ``TransportError``, ``HTTPStatusError`` (anything but 200) or
    ``DecodeError``. Nothing is retried.
    """
    options = options or FetchOptions()
    decoder = decoder or DEFAULT_DECODER

    with session_scope(session) as http:
        try:
            resp = http.get(candidate.url, timeout=options.timeout)
        except requests.RequestException as exc:
            raise TransportError(
                f"Failed to fetch image {candidate.url}: {exc}", candidate.url
            ) from exc
        if resp.status_code != 200:
            raise HTTPStatusError(resp.status_code, candidate.url)
        data = resp.content

    try:
        decoded = decoder.decode(data, retain_pixels=options.retain_pixel_data)
    except DecodeError as exc:
        exc.url = candidate.url
        raise

    logger.debug(
        "Decoded %s as %s (%dx%d)",
        candidate.url,
        decoded.format,
        decoded.width,
        decoded.height,
    )
    return ImageInfo.from_candidate(
        candidate,
        format=decoded.format,
        width=decoded.width,
        height=decoded.height,
        pixel_data=decoded.image,
    )


def _skip(candidate: ImageCandidate, exc: ThumbscraperError) -> None:
    logger.warning("Skipping image %s: %s", candidate.url, exc)


def fetch_image_info_batch(
    candidates: List[ImageCandidate],
    options: Optional[BatchOptions] = None,
    session: Optional[requests.Session] = None,
    decoder: Optional[ImageDecoder] = None,
) -> List[ImageInfo]:
    """Fetch every candidate, keeping input order in the result.

    Failed candidates are skipped unless ``require_all_succeed`` is set, in
    which case the first failure (in input order) is raised.
    """
    if not candidates:
        return []
    options = options or BatchOptions()

    with session_scope(session) as http:
        if options.max_workers > 1:
            return _fetch_parallel(candidates, options, http, decoder)

        infos: List[ImageInfo] = []
        for candidate in candidates:
            try:
                info = fetch_image_info(candidate, options.fetch_options, http, decoder)
            except ThumbscraperError as exc:
                if options.require_all_succeed:
                    raise
                _skip(candidate, exc)
                continue
            infos.append(info)
        return infos


def _fetch_parallel(
    candidates: List[ImageCandidate],
    options: BatchOptions,
    session: requests.Session,
    decoder: Optional[ImageDecoder],
) -> List[ImageInfo]:
    infos: List[ImageInfo] = []
    with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
        futures: List[Future] = [
            executor.submit(
                fetch_image_info, candidate, options.fetch_options, session, decoder
            )
            for candidate in candidates
        ]
        for candidate, future in zip(candidates, futures):
            try:
                info = future.result()
            except ThumbscraperError as exc:
                if options.require_all_succeed:
                    for pending in futures:
                        pending.cancel()
                    raise
                _skip(candidate, exc)
                continue
            infos.append(info)
    return infos
