"""
Data models for candidate blocks and extraction results.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

if TYPE_CHECKING:
    from .protocols import DocumentNode

Method = Literal["heuristic", "readability+heuristic"]

ERROR_EXCEPTION = "exception"
ERROR_INVALID_SCHEMA = "invalid_output_schema"
ERROR_SPA_SHELL = "spa_shell"


@dataclass(frozen=True)
class CandidateBlock:
    """A contiguous region of page content considered for relevance scoring.

    The source node is held through a weak reference: it is a lookup handle
    for link extraction and metadata inspection and never keeps the parsed
    document alive.
    """

    heading: str
    content: str
    node_ref: Optional[weakref.ReferenceType[Any]] = field(default=None, compare=False, repr=False)

    @classmethod
    def create(cls, heading: str, content: str, node: Optional[DocumentNode] = None) -> CandidateBlock:
        return cls(
            heading=(heading or "").strip(),
            content=content,
            node_ref=weakref.ref(node) if node is not None else None,
        )

    @property
    def node(self) -> Optional[DocumentNode]:
        """The source node, or None for headless blocks or a collected document."""
        if self.node_ref is None:
            return None
        return self.node_ref()


@dataclass(frozen=True)
class ScoredBlock:
    """A candidate block with its relevance score and discovery position."""

    block: CandidateBlock
    score: float
    order: int

    def __post_init__(self) -> None:
        if not (0.0 <= self.score <= 1.0):
            raise ValueError("Score must be between 0.0 and 1.0")

    @property
    def heading(self) -> str:
        return self.block.heading

    @property
    def content(self) -> str:
        return self.block.content

    @property
    def node(self) -> Optional[DocumentNode]:
        return self.block.node


@dataclass(slots=True, frozen=True)
class ExtractionRecord:
    """Structured eligibility / documents / apply-link facts for one page."""

    title: Optional[str]
    source_url: Optional[str]
    eligibility: List[str]
    documents: List[str]
    apply_links: List[str]
    raw_text_snippet: str
    method: Method
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "source_url": self.source_url,
            "eligibility": list(self.eligibility),
            "documents": list(self.documents),
            "apply_links": list(self.apply_links),
            "raw_text_snippet": self.raw_text_snippet,
            "method": self.method,
            "confidence": self.confidence,
        }


@dataclass(slots=True, frozen=True)
class ErrorRecord:
    """Failure result; callers tell it apart from ExtractionRecord by ``error``."""

    error: str
    message: Optional[str] = None
    details: Any = None
    raw_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        if self.details is not None:
            payload["details"] = self.details
        if self.raw_text is not None:
            payload["raw_text"] = self.raw_text
        return payload
