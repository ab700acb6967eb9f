"""Turns a provider's free-text answer into typed image candidates.

Search providers answer in prose, bullet lists, or markdown.  The parser
only needs one capability from that text: find URL-like substrings that
end in an image extension, and keep the ones whose host is on the
trusted allow-list.  Anything else (other hosts, garbled URLs, URLs
without an image extension) is skipped silently, because partial
provider output is expected and recoverable.

Each surviving URL becomes one :class:`ImageCandidate` with score 0.
When the line holding the URL carries a label (``- Solar panels: <url>``
or ``![Solar panels](<url>)``), that label is the description;
otherwise a synthetic ``"image from <host>"`` is used.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

import structlog

from image_discovery.config.vocabulary import IMAGE_EXTENSIONS, TRUSTED_IMAGE_HOSTS
from image_discovery.models.image import ImageCandidate, KeywordSet
from image_discovery.utils.logging import get_logger

MAX_CANDIDATES = 10
SYNTHETIC_DESCRIPTION_PREFIX = "image from "

_URL_RE = re.compile(
    r"https?://[^\s)\]\"'<>]+\.(?:" + "|".join(IMAGE_EXTENSIONS) + r")\b",
    re.IGNORECASE,
)
_MARKDOWN_LABEL_RE = re.compile(r"!?\[([^\]]*)\]\($")
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")
_LABEL_NOISE = frozenset({"url", "link", "image", "images", "source", "photo"})


class CandidateParser:
    """Extracts allow-listed image URLs from provider text."""

    def __init__(
        self,
        trusted_hosts: tuple[str, ...] = TRUSTED_IMAGE_HOSTS,
        max_candidates: int = MAX_CANDIDATES,
    ) -> None:
        self._trusted_hosts = tuple(host.lower() for host in trusted_hosts)
        self._max_candidates = max_candidates
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def parse(self, text: str, keywords: KeywordSet) -> list[ImageCandidate]:
        """Return up to ``max_candidates`` trusted candidates in first-seen order."""
        candidates: list[ImageCandidate] = []
        seen: set[str] = set()
        rejected = 0

        for match in _URL_RE.finditer(text or ""):
            url = match.group(0)
            if url in seen:
                continue
            seen.add(url)

            host = self._host_of(url)
            if host is None or not self.is_trusted(host):
                rejected += 1
                continue

            candidates.append(
                ImageCandidate(
                    url=url,
                    source_domain=host,
                    description=self._describe(text, match, host),
                    keywords=keywords.terms,
                )
            )
            if len(candidates) >= self._max_candidates:
                break

        self._logger.debug(
            "candidates_parsed",
            accepted=len(candidates),
            rejected=rejected,
        )
        return candidates

    def is_trusted(self, host: str) -> bool:
        """Return ``True`` if *host* is an allow-listed host or a subdomain of one."""
        host = host.lower()
        return any(
            host == trusted or host.endswith("." + trusted)
            for trusted in self._trusted_hosts
        )

    @staticmethod
    def _host_of(url: str) -> str | None:
        try:
            return urlparse(url).hostname
        except ValueError:
            return None

    @staticmethod
    def _describe(text: str, match: re.Match[str], host: str) -> str:
        line_start = text.rfind("\n", 0, match.start()) + 1
        prefix = text[line_start:match.start()]

        markdown = _MARKDOWN_LABEL_RE.search(prefix)
        if markdown:
            label = markdown.group(1)
        else:
            label = _LIST_MARKER_RE.sub("", prefix).replace("**", "")
            label = label.strip().rstrip(":-–—(").strip()

        if (
            len(label) >= 3
            and "http" not in label
            and any(ch.isalpha() for ch in label)
            and label.lower() not in _LABEL_NOISE
        ):
            return label
        return f"{SYNTHETIC_DESCRIPTION_PREFIX}{host}"
