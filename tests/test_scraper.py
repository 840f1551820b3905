import pytest

from thumbscraper.collector import HTMLCollector, HTTPPageSource
from thumbscraper.config import BatchOptions, ScrapeConfig
from thumbscraper.errors import EmptyInputError, TransportError
from thumbscraper.scraper import scrape_thumbnail

PAGE_URL = "https://news.example.com/story"

OPEN_GRAPH_PAGE = """
<html><head>
<meta property="og:image" content="//cdn.co/hero.jpg">
</head><body>
<img src="/a.png"><img src="thumb.png">
</body></html>
"""

PLAIN_PAGE = """
<html><body>
<img src="/square.png" alt="square"><img src="/wide.png" alt="wide">
</body></html>
"""


@pytest.fixture
def scrape(fake_session):
    def run(html, images, config=None):
        routes = {PAGE_URL: (200, html)}
        routes.update(images)
        session = fake_session(routes)
        collector = HTMLCollector(HTTPPageSource("test-agent", session=session))
        return scrape_thumbnail(PAGE_URL, config, collector=collector, session=session)

    return run


def test_open_graph_image_wins_over_larger_images(scrape, make_image):
    result = scrape(
        OPEN_GRAPH_PAGE,
        {
            "https://cdn.co/hero.jpg": (200, make_image(10, 10, "JPEG")),
            "https://news.example.com/a.png": (200, make_image(800, 600)),
            "https://news.example.com/thumb.png": (200, make_image(1200, 900)),
        },
    )

    assert len(result.candidates) == 3
    assert result.candidates[0].is_open_graph_image
    assert result.candidates[0].name == "hero.jpg"
    assert result.thumbnail.url == "https://cdn.co/hero.jpg"
    assert result.thumbnail.format == "jpeg"


def test_equal_areas_keep_first_seen_image(scrape, make_image):
    result = scrape(
        PLAIN_PAGE,
        {
            "https://news.example.com/square.png": (200, make_image(100, 100)),
            "https://news.example.com/wide.png": (200, make_image(200, 50)),
        },
    )
    assert result.thumbnail.name == "square.png"
    assert (result.thumbnail.width, result.thumbnail.height) == (100, 100)


def test_failed_images_are_skipped(scrape, make_image):
    result = scrape(
        PLAIN_PAGE,
        {"https://news.example.com/wide.png": (200, make_image(20, 5))},
    )
    assert [image.name for image in result.images] == ["wide.png"]
    assert result.thumbnail.name == "wide.png"
    assert result.to_dict()["resolved"] == 1
    assert result.to_dict()["candidates"] == 2


def test_strict_mode_propagates_failures(scrape, make_image):
    config = ScrapeConfig(batch=BatchOptions(require_all_succeed=True))
    with pytest.raises(TransportError):
        scrape(
            PLAIN_PAGE,
            {"https://news.example.com/wide.png": (200, make_image(20, 5))},
            config,
        )


def test_page_without_usable_images_has_no_thumbnail(scrape):
    with pytest.raises(EmptyInputError):
        scrape(PLAIN_PAGE, {})
