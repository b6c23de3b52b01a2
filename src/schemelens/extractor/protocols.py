"""
Protocols for the document tree the classification pipeline walks.

The collector, scorer and classifiers only need tag introspection,
innerText-style text, attribute lookup and element navigation. Any parser
can be plugged in by providing an adapter that satisfies these protocols.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class DocumentNode(Protocol):
    """Read-only view of one element in a parsed page."""

    @property
    def tag(self) -> str:
        """Lowercase tag name."""
        ...

    @property
    def heading_level(self) -> Optional[int]:
        """1-6 for h1-h6 elements, otherwise None."""
        ...

    def text(self) -> str:
        """Flattened, layout-aware text of the subtree (like ``innerText``)."""
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value; multi-valued attributes are joined with spaces."""
        ...

    def parent(self) -> Optional[DocumentNode]:
        ...

    def next_sibling(self) -> Optional[DocumentNode]:
        """Next element sibling, skipping text nodes."""
        ...

    def previous_sibling(self) -> Optional[DocumentNode]:
        """Previous element sibling, skipping text nodes."""
        ...

    def find_all(self, tags: Sequence[str]) -> List[DocumentNode]:
        """Descendant elements with any of ``tags``, in document order."""
        ...

    def find_first(self, tags: Sequence[str]) -> Optional[DocumentNode]:
        ...

    def descendant_count(self) -> int:
        """Number of descendant elements."""
        ...

    def anchors(self) -> List[DocumentNode]:
        """Descendant ``<a>`` elements that carry an ``href``."""
        ...


@runtime_checkable
class Document(Protocol):
    """A parsed page."""

    @property
    def title(self) -> Optional[str]:
        ...

    @property
    def body(self) -> Optional[DocumentNode]:
        ...

    def body_text(self) -> str:
        ...

    def iter_elements(self) -> Iterator[DocumentNode]:
        """All elements in document order."""
        ...

    def find_all(self, tags: Sequence[str]) -> List[DocumentNode]:
        ...

    def anchors(self) -> List[DocumentNode]:
        ...
