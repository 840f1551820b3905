"""Page retrieval and selector matching for scraped HTML."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

import requests
from bs4 import BeautifulSoup, Tag
from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import ScrapeConfig
from .errors import HTTPStatusError, ThumbscraperError, TransportError
from .utils import session_scope

logger = logging.getLogger("thumbscraper")


class PageSource(Protocol):
    def fetch(self, url: str) -> str:
        ...


class HTTPPageSource:
    """Download raw HTML with a plain GET request."""

    def __init__(
        self,
        user_agent: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session

    def fetch(self, url: str) -> str:
        logger.info("Loading %s", url)
        with session_scope(self.session) as http:
            try:
                resp = http.get(
                    url,
                    headers={"User-Agent": self.user_agent},
                    timeout=self.timeout,
                )
            except requests.RequestException as exc:
                raise TransportError(f"Failed to fetch page {url}: {exc}", url) from exc
            if resp.status_code != 200:
                raise HTTPStatusError(resp.status_code, url)
            return resp.text


class PlaywrightPageSource:
    """Render a page in headless Chromium and return the resulting HTML."""

    def __init__(
        self,
        user_agent: str,
        timeout: Optional[float] = 30.0,
        wait_after_load: float = 1.0,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.wait_after_load = wait_after_load

    async def render(self, url: str) -> str:
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            page = await browser.new_page(user_agent=self.user_agent)
            if self.timeout:
                page.set_default_navigation_timeout(self.timeout * 1000)
            try:
                logger.info("Rendering %s", url)
                response = await page.goto(url, wait_until="networkidle")
                if response is not None and response.status != 200:
                    raise HTTPStatusError(response.status, url)
                if self.wait_after_load:
                    await page.wait_for_timeout(int(self.wait_after_load * 1000))
                html = await page.content()
            finally:
                await browser.close()
        return html

    def fetch(self, url: str) -> str:
        try:
            return asyncio.run(self.render(url))
        except PlaywrightTimeoutError as exc:
            raise TransportError(f"Timeout while rendering {url}: {exc}", url) from exc
        except PlaywrightError as exc:
            raise TransportError(f"Failed to render {url}: {exc}", url) from exc


@dataclass
class HTMLElement:
    """Matched element handed to ``on_html`` callbacks."""

    tag: Tag
    request_url: str

    def attr(self, name: str) -> str:
        value = self.tag.get(name)
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return value


HTMLCallback = Callable[[HTMLElement], None]
ErrorCallback = Callable[[ThumbscraperError], None]


class HTMLCollector:
    """Visit a page and dispatch matching elements to registered callbacks.

    Callbacks fire in document order. When an element matches several rules,
    the rules run in registration order.
    """

    def __init__(self, source: PageSource) -> None:
        self.source = source
        self._rules: List[Tuple[str, HTMLCallback]] = []
        self._error_callbacks: List[ErrorCallback] = []

    def on_html(self, selector: str, callback: HTMLCallback) -> None:
        self._rules.append((selector, callback))

    def on_error(self, callback: ErrorCallback) -> None:
        self._error_callbacks.append(callback)

    def visit(self, url: str) -> None:
        try:
            html = self.source.fetch(url)
        except ThumbscraperError as exc:
            logger.debug("Visit of %s failed: %s", url, exc)
            self._report(exc)
            return
        self.dispatch(html, url)

    def dispatch(self, html: str, url: str) -> None:
        if not self._rules:
            return
        soup = BeautifulSoup(html, "html.parser")
        matched_ids = [
            {id(tag) for tag in soup.select(selector)} for selector, _ in self._rules
        ]
        combined = ", ".join(selector for selector, _ in self._rules)
        for tag in soup.select(combined):
            element = HTMLElement(tag=tag, request_url=url)
            for (_, callback), ids in zip(self._rules, matched_ids):
                if id(tag) in ids:
                    callback(element)

    def _report(self, exc: ThumbscraperError) -> None:
        if not self._error_callbacks:
            raise exc
        for callback in self._error_callbacks:
            callback(exc)


def build_collector(config: ScrapeConfig) -> HTMLCollector:
    """Create a collector backed by the page source ``config`` asks for."""
    if config.render:
        source: PageSource = PlaywrightPageSource(
            config.user_agent,
            timeout=config.page_timeout,
            wait_after_load=config.wait_after_load,
        )
    else:
        source = HTTPPageSource(config.user_agent, timeout=config.page_timeout)
    return HTMLCollector(source)
