"""
BeautifulSoup adapter for the document protocols.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

_HEADING_RE = re.compile(r"^h([1-6])$")
_WHITESPACE_RE = re.compile(r"\s+")

# Elements whose text is never rendered
SKIP_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title", "meta", "link"})

BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "caption",
        "dd",
        "details",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "li",
        "main",
        "nav",
        "ol",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "tfoot",
        "thead",
        "tr",
        "ul",
    }
)

CELL_TAGS = frozenset({"td", "th"})


def render_text(root: Tag) -> str:
    """Flatten a subtree to text the way a browser's ``innerText`` lays it out.

    Block elements start on their own line, paragraphs are separated by a
    blank line, ``<br>`` is a newline and table cells are space separated.
    Consecutive block boundaries collapse into the widest one. Whitespace
    inside text collapses to single spaces except under ``<pre>``.
    """
    parts: List[str] = []
    pending = 0
    stack: List[Tuple[bool, Any, bool]] = [(False, child, False) for child in reversed(root.contents)]

    while stack:
        is_break, item, in_pre = stack.pop()
        if is_break:
            pending = max(pending, item)
            continue

        if isinstance(item, Tag):
            name = (item.name or "").lower()
            if name in SKIP_TAGS:
                continue
            if name == "br":
                parts.append("\n")
                continue
            if name == "p":
                width = 2
            elif name in BLOCK_TAGS:
                width = 1
            else:
                width = 0
            if width:
                pending = max(pending, width)
                stack.append((True, width, in_pre))
            elif name in CELL_TAGS:
                parts.append(" ")
            in_pre = in_pre or name == "pre"
            stack.extend((False, child, in_pre) for child in reversed(item.contents))
        elif isinstance(item, NavigableString) and not isinstance(item, PreformattedString):
            text = str(item) if in_pre else _WHITESPACE_RE.sub(" ", str(item))
            if not text.strip():
                if not pending:
                    parts.append(" ")
                continue
            if pending and parts:
                parts.append("\n" * pending)
            pending = 0
            parts.append(text)

    return _normalize("".join(parts))


def _normalize(text: str) -> str:
    lines: List[str] = []
    blank = False
    for raw in text.split("\n"):
        line = " ".join(raw.split())
        if line:
            lines.append(line)
            blank = False
        elif lines and not blank:
            lines.append("")
            blank = True
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


class SoupNode:
    """DocumentNode backed by a ``bs4.Tag``.

    Instances are owned by their SoupDocument so identity is stable for the
    lifetime of one parse.
    """

    def __init__(self, tag: Tag, document: SoupDocument) -> None:
        self._tag = tag
        self._document = document
        self._text: Optional[str] = None

    def __repr__(self) -> str:
        return f"<SoupNode {self.tag}>"

    @property
    def tag(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def heading_level(self) -> Optional[int]:
        match = _HEADING_RE.match(self.tag)
        return int(match.group(1)) if match else None

    def text(self) -> str:
        if self._text is None:
            self._text = render_text(self._tag)
        return self._text

    def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    def parent(self) -> Optional[SoupNode]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return self._document.wrap(parent)

    def next_sibling(self) -> Optional[SoupNode]:
        sibling = self._tag.find_next_sibling(True)
        return self._document.wrap(sibling) if sibling is not None else None

    def previous_sibling(self) -> Optional[SoupNode]:
        sibling = self._tag.find_previous_sibling(True)
        return self._document.wrap(sibling) if sibling is not None else None

    def find_all(self, tags: Sequence[str]) -> List[SoupNode]:
        return [self._document.wrap(t) for t in self._tag.find_all(list(tags))]

    def find_first(self, tags: Sequence[str]) -> Optional[SoupNode]:
        found = self._tag.find(list(tags))
        return self._document.wrap(found) if found is not None else None

    def descendant_count(self) -> int:
        return len(self._tag.find_all(True))

    def anchors(self) -> List[SoupNode]:
        return [self._document.wrap(a) for a in self._tag.find_all("a", href=True)]


class SoupDocument:
    """Document backed by a BeautifulSoup parse of sanitized markup."""

    def __init__(self, html: str, parser: str = "lxml") -> None:
        self.soup = BeautifulSoup(html or "", parser)
        self._nodes: Dict[int, SoupNode] = {}

    def wrap(self, tag: Tag) -> SoupNode:
        node = self._nodes.get(id(tag))
        if node is None:
            node = SoupNode(tag, self)
            self._nodes[id(tag)] = node
        return node

    @property
    def title(self) -> Optional[str]:
        title_tag = self.soup.title
        if title_tag is None:
            return None
        return " ".join(title_tag.get_text().split()) or None

    @property
    def body(self) -> Optional[SoupNode]:
        body = self.soup.body
        return self.wrap(body) if body is not None else None

    def body_text(self) -> str:
        body = self.body
        if body is not None:
            return body.text().strip()
        # html.parser keeps bare fragments without a <body>
        return render_text(self.soup).strip()

    def iter_elements(self) -> Iterator[SoupNode]:
        for tag in self.soup.find_all(True):
            yield self.wrap(tag)

    def find_all(self, tags: Sequence[str]) -> List[SoupNode]:
        return [self.wrap(t) for t in self.soup.find_all(list(tags))]

    def anchors(self) -> List[SoupNode]:
        return [self.wrap(a) for a in self.soup.find_all("a", href=True)]
