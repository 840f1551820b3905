"""Data models used throughout the scraping pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class ImageCandidate:
    """Image reference discovered on a page, before it is fetched."""

    name: str
    alt_text: str
    url: str
    is_open_graph_image: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ImageInfo(ImageCandidate):
    """Candidate that has been fetched and decoded."""

    format: str = ""
    width: int = 0
    height: int = 0
    pixel_data: Optional["Image.Image"] = None

    @classmethod
    def from_candidate(
        cls,
        candidate: ImageCandidate,
        format: str,
        width: int,
        height: int,
        pixel_data: Optional["Image.Image"] = None,
    ) -> "ImageInfo":
        return cls(
            name=candidate.name,
            alt_text=candidate.alt_text,
            url=candidate.url,
            is_open_graph_image=candidate.is_open_graph_image,
            format=format,
            width=width,
            height=height,
            pixel_data=pixel_data,
        )

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alt_text": self.alt_text,
            "url": self.url,
            "is_open_graph_image": self.is_open_graph_image,
            "format": self.format,
            "width": self.width,
            "height": self.height,
        }
