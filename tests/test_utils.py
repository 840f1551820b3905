from unittest.mock import MagicMock, patch

import pytest

from thumbscraper.utils import image_name_from_url, normalize_url, session_scope

PAGE = "https://ex.com/page"


def test_absolute_urls_are_untouched():
    assert normalize_url(PAGE, "http://a/b.png") == "http://a/b.png"
    assert normalize_url(PAGE, "https://a/b.png") == "https://a/b.png"


def test_protocol_relative_url_gets_https():
    result = normalize_url(PAGE, "//cdn.com/x.png")
    assert result.startswith("https:")
    assert result == "https://cdn.com/x.png"


@pytest.mark.parametrize("raw", ["/img/x.png", "img/x.png"])
def test_relative_paths_use_page_origin(raw):
    assert normalize_url(PAGE, raw) == "https://ex.com/img/x.png"


def test_origin_keeps_subdomains_and_drops_path():
    page = "http://static.news.example.co.uk/articles/2024/story.html?id=1"
    assert normalize_url(page, "a.png") == "http://static.news.example.co.uk/a.png"


def test_query_strings_are_left_alone():
    assert normalize_url(PAGE, "/x.png?w=100&h=50") == "https://ex.com/x.png?w=100&h=50"


def test_page_without_origin_yields_bare_path():
    assert normalize_url("not a url", "/x.png") == "/x.png"
    assert normalize_url("", "x.png") == "/x.png"


def test_name_is_last_segment():
    assert image_name_from_url("https://cdn.co/hero.jpg") == "hero.jpg"


def test_name_ignores_trailing_and_repeated_slashes():
    assert image_name_from_url("https://ex.com/a/b/") == "b"
    assert image_name_from_url("https://ex.com/a//b//") == "b"


def test_name_of_empty_url():
    assert image_name_from_url("") == ""
    assert image_name_from_url("///") == ""


def test_session_scope_closes_the_session_it_creates():
    with patch("thumbscraper.utils.requests.Session") as session_cls:
        with session_scope() as http:
            assert http is session_cls.return_value.__enter__.return_value
    session_cls.return_value.__exit__.assert_called_once()


def test_session_scope_leaves_caller_session_open():
    session = MagicMock()
    with session_scope(session) as http:
        assert http is session
    session.close.assert_not_called()
    session.__exit__.assert_not_called()
