"""Standalone CLI for finding an article image without the API server.

Usage::

    python -m image_discovery.cli --title "Guida al Risparmio Energetico" \\
        --content-file article.txt
    python -m image_discovery.cli --title "..." --content "..." --json
    python -m image_discovery.cli --title "..." --content-file a.txt --force-regenerate

Runs the same service graph as the API (see ``build_discovery_service``)
and prints a short report, or the JSON payload with ``--json``.  Logs go
to stderr so stdout carries only the result.  Ctrl-C cancels the search
cleanly between or during provider calls.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import signal
import sys
from pathlib import Path
from uuid import uuid4

from image_discovery.models.payload import ImageSearchRequest, ImageSearchResponse

# Exit codes: 0 success, 1 no image, 2 usage/validation/config, 130 cancelled.
_EXIT_NO_IMAGE = 1
_EXIT_USAGE = 2
_EXIT_CANCELLED = 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m image_discovery.cli",
        description="Find or generate a representative image for an article.",
    )
    parser.add_argument("--title", required=True, help="Article title.")
    content = parser.add_mutually_exclusive_group(required=True)
    content.add_argument("--content", help="Article body text.")
    content.add_argument("--content-file", type=Path, help="File holding the article body.")
    parser.add_argument("--article-id", default="", help="Identifier echoed in the result.")
    parser.add_argument("--ai-prompt", default="", help="Custom prompt for image generation.")
    parser.add_argument("--alt-text", default="", help="Alt text for the chosen image.")
    parser.add_argument("--filename", default="", help="Filename stem for the suggestion.")
    parser.add_argument(
        "--force-regenerate",
        action="store_true",
        help="Skip searching and generate an image directly.",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-call timeout in seconds.")
    parser.add_argument("--json", action="store_true", help="Print the JSON payload.")
    return parser


def _format_text_output(response: ImageSearchResponse) -> str:
    image = response.image
    results = response.search_results
    meta = response.metadata
    sep = "=" * 60
    lines = [
        sep,
        "  Image Discovery — Result",
        sep,
        f"URL:        {image.url}",
        f"Level:      {image.search_level.value}",
        f"Score:      {image.relevance_score}",
        f"Alt text:   {image.alt_text}",
        f"Filename:   {image.filename}",
        f"Provider:   {meta.provider}",
        f"Candidates: {results.candidates_evaluated}",
        f"Time:       {meta.total_time} ms (search {meta.search_time} ms)",
        f"Keywords:   {', '.join(meta.keywords) or '-'}",
    ]
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> int:
    from image_discovery.config.settings import Settings
    from image_discovery.main import build_discovery_service
    from image_discovery.utils.errors import (
        ImageDiscoveryError,
        NoSuitableImagesError,
        SearchCancelledError,
    )

    body = args.content if args.content is not None else args.content_file.read_text(encoding="utf-8")
    request = ImageSearchRequest(
        article_id=args.article_id or f"cli-{uuid4().hex[:8]}",
        article_title=args.title,
        article_content=body,
        ai_prompt=args.ai_prompt,
        alt_text=args.alt_text,
        filename=args.filename,
        force_regenerate=args.force_regenerate,
    )

    service, _providers = build_discovery_service(Settings())

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except NotImplementedError:  # pragma: no cover — Windows event loops
        pass

    try:
        response = await service.discover(request, timeout=args.timeout, cancel_event=cancel_event)
    except SearchCancelledError:
        print("Search cancelled.", file=sys.stderr)
        return _EXIT_CANCELLED
    except NoSuitableImagesError as exc:
        print(f"No image could be found or generated for this content: {exc}", file=sys.stderr)
        return _EXIT_NO_IMAGE
    except ImageDiscoveryError as exc:
        print(f"Error [{exc.code}]: {exc}", file=sys.stderr)
        return _EXIT_USAGE

    if args.json:
        print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    else:
        print(_format_text_output(response))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run one search, and return the process exit code."""
    from image_discovery.utils.logging import configure_logging

    args = _build_parser().parse_args(argv)
    if args.content_file is not None and not args.content_file.is_file():
        print(f"Content file not found: {args.content_file}", file=sys.stderr)
        return _EXIT_USAGE

    configure_logging(log_level="WARNING", stream=sys.stderr)
    return asyncio.run(_run(args))
