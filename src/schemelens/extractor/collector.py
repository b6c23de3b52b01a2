"""
Candidate block discovery.

Walks a parsed page and collects regions of content that may hold
eligibility, document or application information. Six strategies run in
order; a node contributes at most one block:

1. Heading-following: each h1-h4 with the sibling content up to the next h1-h4
2. Structured containers: lists and tables
3. Semantic containers: section/article/main/aside and region/main landmarks
4. Hint-matched containers: class/id/aria-label/role mentions a domain hint
5. Text density: text-heavy divs on pages without semantic markup
6. Last resort: paragraphs of the body text when nothing else was found
"""

from __future__ import annotations

import re
from typing import List, Optional, Set

import structlog

from ..config.config import ExtractionSettings, KeywordConfig
from .models import CandidateBlock
from .protocols import Document, DocumentNode

logger = structlog.get_logger(__name__)

COLLECTION_HEADINGS = ("h1", "h2", "h3", "h4")
ANCESTOR_HEADINGS = ("h1", "h2", "h3")
STRUCTURED_TAGS = ("ul", "ol", "table")
SEMANTIC_TAGS = frozenset({"section", "article", "main", "aside"})
LANDMARK_ROLES = frozenset({"region", "main"})
HINT_TAGS = frozenset({"div", "section", "article"})
NEAREST_HEADING_SIBLINGS = 6

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def is_collection_heading(node: Optional[DocumentNode]) -> bool:
    """True for h1-h4, the headings that open and close a heading block."""
    if node is None:
        return False
    level = node.heading_level
    return level is not None and level <= 4


def heading_section(heading: DocumentNode, max_siblings: int) -> List[DocumentNode]:
    """Element siblings after a heading, up to the next h1-h4 or ``max_siblings``."""
    section: List[DocumentNode] = []
    sibling = heading.next_sibling()
    while sibling is not None and not is_collection_heading(sibling) and len(section) < max_siblings:
        section.append(sibling)
        sibling = sibling.next_sibling()
    return section


def compute_text_density(text: str, child_count: int) -> float:
    """Words per descendant element, smoothed by one."""
    words = len(text.split()) or 1
    return words / max(1, child_count + 1)


def node_metadata(node: DocumentNode, include_role: bool = True) -> str:
    """Lowercased class, id, aria-label (and role) of a node, space separated."""
    names = ["class", "id", "aria-label"]
    if include_role:
        names.append("role")
    return " ".join(node.get_attribute(name) or "" for name in names).lower()


def find_nearest_heading(node: DocumentNode) -> str:
    """Heading text for a container.

    Looks at up to six previous siblings for an h1-h4, then walks up the
    ancestors up to ``body`` for the first h1-h3 in their subtree.
    """
    current: Optional[DocumentNode] = node
    for _ in range(NEAREST_HEADING_SIBLINGS):
        current = current.previous_sibling() if current is not None else None
        if current is None:
            break
        if is_collection_heading(current):
            return current.text().strip()

    parent = node.parent()
    while parent is not None and parent.tag != "html":
        heading = parent.find_first(ANCESTOR_HEADINGS)
        if heading is not None:
            return heading.text().strip()
        parent = parent.parent()
    return ""


class BlockCollector:
    """Collects deduplicated candidate blocks from a parsed page."""

    def __init__(self, settings: ExtractionSettings | None = None, keywords: KeywordConfig | None = None) -> None:
        self.settings = settings or ExtractionSettings()
        self.keywords = keywords or KeywordConfig()

    def collect(self, document: Document, body_text: str = "") -> List[CandidateBlock]:
        blocks: List[CandidateBlock] = []
        seen: Set[int] = set()

        self._collect_heading_blocks(document, blocks, seen)
        self._collect_structured(document, blocks, seen)
        self._collect_semantic(document, blocks, seen)
        self._collect_hinted(document, blocks, seen)
        self._collect_dense(document, blocks, seen)

        if not blocks and body_text:
            blocks.extend(self._paragraph_blocks(body_text))

        logger.debug("Collected candidate blocks", count=len(blocks))
        return blocks

    def _push(
        self,
        blocks: List[CandidateBlock],
        seen: Set[int],
        node: DocumentNode,
        heading: str,
        content: Optional[str] = None,
    ) -> None:
        key = id(node)
        if key in seen:
            return
        seen.add(key)
        text = (content if content is not None else node.text()).strip()
        if not text:
            return
        blocks.append(CandidateBlock.create(heading, text[: self.settings.max_block_chars], node))

    def _collect_heading_blocks(self, document: Document, blocks: List[CandidateBlock], seen: Set[int]) -> None:
        for heading in document.find_all(COLLECTION_HEADINGS):
            parts = [sibling.text() for sibling in heading_section(heading, self.settings.max_heading_siblings)]
            content = "\n".join(parts)
            # The heading itself is the source node so links near it stay reachable
            if content.strip():
                self._push(blocks, seen, heading, heading.text(), content)

    def _collect_structured(self, document: Document, blocks: List[CandidateBlock], seen: Set[int]) -> None:
        for node in document.find_all(STRUCTURED_TAGS):
            if node.text().strip():
                self._push(blocks, seen, node, find_nearest_heading(node))

    def _collect_semantic(self, document: Document, blocks: List[CandidateBlock], seen: Set[int]) -> None:
        for node in document.iter_elements():
            role = (node.get_attribute("role") or "").strip().lower()
            if node.tag in SEMANTIC_TAGS or role in LANDMARK_ROLES:
                if node.text().strip():
                    self._push(blocks, seen, node, find_nearest_heading(node))

    def _collect_hinted(self, document: Document, blocks: List[CandidateBlock], seen: Set[int]) -> None:
        for node in document.iter_elements():
            if node.tag not in HINT_TAGS or id(node) in seen:
                continue
            meta = node_metadata(node)
            if not meta.strip():
                continue
            if any(hint in meta for hint in self.keywords.class_hints):
                if len(node.text().strip()) >= self.settings.min_hint_text_length:
                    self._push(blocks, seen, node, find_nearest_heading(node))

    def _collect_dense(self, document: Document, blocks: List[CandidateBlock], seen: Set[int]) -> None:
        for node in document.find_all(("div",)):
            if id(node) in seen:
                continue
            text = node.text().strip()
            if len(text) < self.settings.min_density_text_length:
                continue
            density = compute_text_density(text, node.descendant_count())
            if density >= self.settings.density_threshold or len(text) > self.settings.large_text_length:
                self._push(blocks, seen, node, find_nearest_heading(node))

    def _paragraph_blocks(self, body_text: str) -> List[CandidateBlock]:
        paragraphs = [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(body_text)]
        paragraphs = [p for p in paragraphs if p][: self.settings.max_fallback_paragraphs]
        return [CandidateBlock.create("", p[: self.settings.max_block_chars]) for p in paragraphs]
