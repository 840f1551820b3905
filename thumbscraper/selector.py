"""Selection of a single thumbnail from fetched images."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import EmptyInputError
from .models import ImageInfo


def select_thumbnail(infos: Sequence[ImageInfo]) -> ImageInfo:
    """Pick the page thumbnail.

    The first OpenGraph image always wins. Without one, the image with the
    largest pixel area wins and ties keep the earliest image.
    """
    best: Optional[ImageInfo] = None
    for info in infos:
        if info.is_open_graph_image:
            return info
        if best is None or info.area > best.area:
            best = info
    if best is None:
        raise EmptyInputError()
    return best
