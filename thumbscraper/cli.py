"""Command-line entry point for thumbscraper."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Sequence

from .config import BatchOptions, FetchOptions, ScrapeConfig, default_user_agent
from .content import extract_image_nodes
from .errors import ThumbscraperError
from .scraper import scrape_thumbnail

logger = logging.getLogger("thumbscraper.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("thumbnail", *argv)


def _add_page_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Page load timeout in seconds",
    )
    parser.add_argument(
        "--user-agent",
        default=default_user_agent(),
        help="User-Agent header sent with every request",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render the page in headless Chromium before looking for images",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=1.0,
        help="Seconds to wait after network idle when rendering",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_thumbnail_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("urls", nargs="+", help="One or more page URLs")
    parser.add_argument(
        "--image-timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each image download",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when any image cannot be fetched or decoded",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of images to fetch concurrently",
    )
    _add_page_arguments(parser)


def _add_images_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", help="Page URL to inspect")
    _add_page_arguments(parser)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the best thumbnail image for web pages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    thumbnail_parser = subparsers.add_parser(
        "thumbnail", help="Fetch every image on a page and print the best one"
    )
    _add_thumbnail_arguments(thumbnail_parser)

    images_parser = subparsers.add_parser(
        "images", help="List image candidates found on a page without fetching them"
    )
    _add_images_arguments(images_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def build_config(args: argparse.Namespace) -> ScrapeConfig:
    batch = BatchOptions(
        fetch_options=FetchOptions(timeout=getattr(args, "image_timeout", None)),
        require_all_succeed=getattr(args, "strict", False),
        max_workers=getattr(args, "workers", 1),
    )
    return ScrapeConfig(
        user_agent=args.user_agent,
        page_timeout=args.timeout,
        render=args.render,
        wait_after_load=args.wait,
        batch=batch,
    )


def _run_thumbnail(args: argparse.Namespace) -> int:
    config = build_config(args)
    failures = 0
    results = []
    for url in args.urls:
        try:
            result = scrape_thumbnail(url, config)
        except ThumbscraperError as exc:
            logger.error("No thumbnail for %s: %s", url, exc)
            failures += 1
            continue
        results.append(result)
        if not args.json:
            thumb = result.thumbnail
            marker = "  [og]" if thumb.is_open_graph_image else ""
            sys.stdout.write(
                f"{url}\t{thumb.url}\t{thumb.width}x{thumb.height}\t{thumb.format}{marker}\n"
            )

    if args.json:
        json.dump([result.to_dict() for result in results], sys.stdout, indent=2)
        sys.stdout.write("\n")
    sys.stdout.flush()

    logger.info(
        "Finished (%d/%d succeeded, %d failed)",
        len(results),
        len(args.urls),
        failures,
    )
    return 1 if failures else 0


def _run_images(args: argparse.Namespace) -> int:
    config = build_config(args)
    try:
        candidates = extract_image_nodes(args.url, config)
    except ThumbscraperError as exc:
        logger.error("Failed to read %s: %s", args.url, exc)
        return 1

    if args.json:
        json.dump([candidate.to_dict() for candidate in candidates], sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for candidate in candidates:
            marker = "  [og]" if candidate.is_open_graph_image else ""
            sys.stdout.write(f"{candidate.name}\t{candidate.url}{marker}\n")
    sys.stdout.flush()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "thumbnail":
        return _run_thumbnail(args)
    return _run_images(args)


if __name__ == "__main__":
    sys.exit(main())
