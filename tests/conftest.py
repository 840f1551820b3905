import io
from types import SimpleNamespace

import pytest
import requests
from PIL import Image


def _encode_image(width, height, fmt="PNG"):
    buffer = io.BytesIO()
    mode = "P" if fmt == "GIF" else "RGB"
    Image.new(mode, (width, height)).save(buffer, format=fmt)
    return buffer.getvalue()


class FakeSession:
    """Stands in for requests.Session; routes map URL -> (status, body) or exception."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requested = []

    def get(self, url, headers=None, timeout=None):
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, str):
            body = body.encode("utf-8")
        return SimpleNamespace(
            status_code=status,
            content=body,
            text=body.decode("utf-8", errors="replace"),
        )


@pytest.fixture
def make_image():
    """Encode a blank ``width`` x ``height`` image in the given Pillow format."""
    return _encode_image


@pytest.fixture
def fake_session():
    """Build a fake requests session from a URL -> response mapping."""
    return FakeSession


@pytest.fixture
def session():
    return FakeSession()
