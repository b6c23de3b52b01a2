"""
Line and link classifiers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from urllib.parse import urljoin

import structlog

from ..config.config import KeywordConfig
from .collector import heading_section, is_collection_heading
from .protocols import DocumentNode

logger = structlog.get_logger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n|[.;]\s+")
ELLIPSIS = "…"


def split_to_lines(text: str) -> List[str]:
    """Split on newlines and on sentence/clause ends followed by whitespace."""
    if not text:
        return []
    return [line.strip() for line in _LINE_SPLIT_RE.split(text) if line.strip()]


def shorten(line: str, length: int = 200) -> str:
    line = line.strip()
    if len(line) <= length:
        return line
    return line[:length].strip() + ELLIPSIS


@dataclass
class LineMatches:
    eligibility: List[str] = field(default_factory=list)
    documents: List[str] = field(default_factory=list)

    def extend(self, other: LineMatches) -> None:
        self.eligibility.extend(other.eligibility)
        self.documents.extend(other.documents)


class LineClassifier:
    """Tags lines as eligibility facts, document requirements, both or neither."""

    def __init__(self, keywords: KeywordConfig | None = None, max_line_length: int = 200) -> None:
        self.keywords = keywords or KeywordConfig()
        self.max_line_length = max_line_length
        self._regulatory = re.compile(self.keywords.regulatory_pattern)

    def is_eligibility_line(self, line: str) -> bool:
        if not line:
            return False
        lowered = line.lower()
        if any(k in lowered for k in self.keywords.eligibility_keywords):
            return True
        return bool(self._regulatory.search(lowered))

    def is_document_line(self, line: str) -> bool:
        if not line:
            return False
        lowered = line.lower()
        return any(k in lowered for k in self.keywords.document_keywords)

    def classify(self, text: str) -> LineMatches:
        matches = LineMatches()
        for line in split_to_lines(text):
            if self.is_eligibility_line(line):
                matches.eligibility.append(shorten(line, self.max_line_length))
            if self.is_document_line(line):
                matches.documents.append(shorten(line, self.max_line_length))
        return matches


def make_absolute_url(href: str, base: Optional[str]) -> str:
    """Resolve ``href`` against ``base``; hrefs that cannot be parsed pass through."""
    if not base:
        return href
    try:
        return urljoin(base, href)
    except ValueError:
        return href


class LinkClassifier:
    """Finds anchors that lead to an application or registration flow."""

    def __init__(self, keywords: KeywordConfig | None = None, max_heading_siblings: int = 30) -> None:
        self.keywords = keywords or KeywordConfig()
        self.max_heading_siblings = max_heading_siblings
        self._apply_re = re.compile("|".join(re.escape(t) for t in self.keywords.apply_tokens), re.IGNORECASE)

    def looks_like_apply_link(self, anchor: DocumentNode) -> bool:
        text = anchor.text().strip()
        title = anchor.get_attribute("title") or ""
        href = anchor.get_attribute("href") or ""
        return any(self._apply_re.search(value) for value in (text, title, href) if value)

    def anchors_near(self, node: DocumentNode) -> List[DocumentNode]:
        """Anchors in a block's subtree.

        A heading block's content lives in the siblings after the heading, so
        those siblings are searched as well.
        """
        anchors = node.anchors()
        if is_collection_heading(node):
            for sibling in heading_section(node, self.max_heading_siblings):
                if sibling.tag == "a" and sibling.get_attribute("href") is not None:
                    anchors.append(sibling)
                anchors.extend(sibling.anchors())
        return anchors

    def classify(self, anchors: Iterable[DocumentNode], base_url: Optional[str]) -> List[str]:
        links: List[str] = []
        for anchor in anchors:
            if not self.looks_like_apply_link(anchor):
                continue
            href = (anchor.get_attribute("href") or "").strip()
            if not href:
                continue
            links.append(make_absolute_url(href, base_url))
        return links

