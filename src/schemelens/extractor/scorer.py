"""
Block relevance scoring.

Each candidate block gets a score in [0, 1] built from independent,
individually capped signals. The rich mode is used whenever the block has a
source node; headless blocks from the body-text fallback have no element
metadata and are scored with the basic weights.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Pattern, Tuple

import structlog

from ..config.config import KeywordConfig
from .collector import node_metadata
from .models import CandidateBlock, ScoredBlock

logger = structlog.get_logger(__name__)

_LIST_MARKER_RE = re.compile(r"^\s*(•|-|\d+\.)")
_ROLE_RE = re.compile(r"region|main|content|article")


@dataclass(frozen=True)
class ScoringWeights:
    heading: float
    structure: float
    density_cap: float
    hint: float = 0.0
    role: float = 0.0
    long_text: float = 0.0
    very_long_text: float = 0.0


RICH_WEIGHTS = ScoringWeights(
    heading=0.36,
    structure=0.28,
    density_cap=0.26,
    hint=0.25,
    role=0.12,
    long_text=0.08,
    very_long_text=0.06,
)
BASIC_WEIGHTS = ScoringWeights(heading=0.40, structure=0.30, density_cap=0.30)

LONG_TEXT_WORDS = 200
VERY_LONG_TEXT_WORDS = 600


def match_keywords(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    if not text:
        return False
    lowered = text.lower()
    return any(k in lowered for k in keywords)


def has_list_structure(content: str) -> bool:
    """Starts with a bullet or number marker, or spans more than three lines."""
    return bool(_LIST_MARKER_RE.match(content)) or len(content.split("\n")) > 3


class BlockScorer:
    """Scores candidate blocks against the eligibility keyword set."""

    def __init__(self, keywords: KeywordConfig | None = None) -> None:
        self.keywords = keywords or KeywordConfig()
        self._keyword_patterns: Tuple[Pattern[str], ...] = tuple(
            re.compile(r"\b" + re.escape(k) + r"\b", re.IGNORECASE) for k in self.keywords.eligibility_keywords
        )

    def keyword_density(self, text: str) -> float:
        """Distinct whole-word keyword hits per 50 words."""
        if not text:
            return 0.0
        words = max(1, len(text.split()))
        count = sum(1 for pattern in self._keyword_patterns if pattern.search(text))
        return count / max(1.0, words / 50)

    def score(self, block: CandidateBlock) -> float:
        node = block.node
        if node is None:
            return self.score_basic(block.heading, block.content)
        metadata = {
            "meta": node_metadata(node, include_role=False),
            "role": (node.get_attribute("role") or "").lower(),
        }
        return self._score(block.heading, block.content, RICH_WEIGHTS, metadata=metadata)

    def score_basic(self, heading: str, content: str) -> float:
        """Three-signal score for blocks without element metadata."""
        return self._score(heading, content, BASIC_WEIGHTS, metadata=None)

    def _score(self, heading: str, content: str, weights: ScoringWeights, metadata: Dict[str, str] | None) -> float:
        score = 0.0
        content = content or ""

        if match_keywords(heading, self.keywords.eligibility_keywords):
            score += weights.heading

        if has_list_structure(content):
            score += weights.structure

        score += min(weights.density_cap, self.keyword_density(content) * 3)

        if metadata is not None:
            meta = metadata.get("meta", "")
            if meta.strip() and any(hint in meta for hint in self.keywords.class_hints):
                score += weights.hint
            role = metadata.get("role", "")
            if role and _ROLE_RE.search(role):
                score += weights.role

            words = max(1, len(content.split()))
            if words > LONG_TEXT_WORDS:
                score += weights.long_text
            if words > VERY_LONG_TEXT_WORDS:
                score += weights.very_long_text

        return max(0.0, min(1.0, score))

    def rank(self, blocks: List[CandidateBlock]) -> List[ScoredBlock]:
        """Score and sort descending; ties keep discovery order."""
        scored = [ScoredBlock(block=b, score=self.score(b), order=i) for i, b in enumerate(blocks)]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def top_blocks(self, blocks: List[CandidateBlock], threshold: float) -> Tuple[List[ScoredBlock], List[ScoredBlock]]:
        """Return (all ranked blocks, blocks scoring at or above ``threshold``)."""
        ranked = self.rank(blocks)
        top = [s for s in ranked if s.score >= threshold]
        logger.debug("Scored candidate blocks", total=len(ranked), top=len(top), threshold=threshold)
        return ranked, top
