"""
Readability-based article pass.

Optionally narrows a page to its main article before the heuristic
pipeline reads the body text and title from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog
from readability import Document

from .soup_adapter import SoupDocument

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReadabilityArticle:
    title: Optional[str]
    text: str


class ReadabilityExtractor:
    """Extractor using readability-lxml for main-content detection."""

    name = "readability"

    def __init__(self, min_text_length: int = 25, parser: str = "lxml") -> None:
        self.parser = parser
        self.config = {
            "min_text_length": min_text_length,
            "retry_length": 250,
            "positive_keywords": [
                "article",
                "content",
                "main",
                "eligibility",
                "scheme",
                "apply",
            ],
            "negative_keywords": [
                "comment",
                "footer",
                "masthead",
                "promo",
                "related",
                "sidebar",
                "sponsor",
                "widget",
            ],
        }

    def extract(self, html: str, url: str | None = None) -> Optional[ReadabilityArticle]:
        """Return the article text and title, or None when readability finds nothing usable.

        Args:
            html: Sanitized page markup
            url: Optional page URL, used by readability to resolve links

        Returns:
            ReadabilityArticle when the article text is long enough, else None
        """
        if not html or not html.strip():
            return None

        try:
            doc = Document(
                html,
                url=url,
                min_text_length=self.config["min_text_length"],
                retry_length=self.config["retry_length"],
                positive_keywords=self.config["positive_keywords"],
                negative_keywords=self.config["negative_keywords"],
            )
            title = doc.short_title() or doc.title()
            content_html = doc.summary()
        except Exception as e:
            logger.warning("Readability extraction failed", error=str(e), error_type=type(e).__name__)
            return None

        text = SoupDocument(content_html, parser=self.parser).body_text()
        if len(text) < self.config["min_text_length"]:
            logger.debug("Readability article too short, ignoring", length=len(text))
            return None

        # readability reports "[no-title]" when the page has no title
        if title and title.strip() and title.strip() != "[no-title]":
            title = title.strip()
        else:
            title = None
        return ReadabilityArticle(title=title, text=text)
