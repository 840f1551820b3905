"""MCP server exposing thumbscraper tools."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from .config import ScrapeConfig
from .content import extract_image_nodes
from .scraper import scrape_thumbnail

logger = logging.getLogger("thumbscraper.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="thumbscraper")


# The pipeline does blocking I/O (and runs its own event loop when rendering),
# so it stays off the server loop.
@mcp.tool()
async def thumbnail(url: str, render: bool = False) -> Dict[str, Any]:
    """Return the best thumbnail image for a web page."""
    result = await asyncio.to_thread(scrape_thumbnail, url, ScrapeConfig(render=render))
    return result.to_dict()


@mcp.tool()
async def images(url: str, render: bool = False) -> List[Dict[str, Any]]:
    """List the image candidates discovered on a web page."""
    candidates = await asyncio.to_thread(
        extract_image_nodes, url, ScrapeConfig(render=render)
    )
    return [candidate.to_dict() for candidate in candidates]


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
