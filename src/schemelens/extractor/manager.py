"""
SchemeExtractor: the page-to-record pipeline.

Sanitizes markup, optionally narrows it with readability, discovers and
scores candidate blocks, classifies lines and links, then assembles and
validates the output record.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

import structlog

from ..config.config import ExtractionSettings, KeywordConfig
from .classifiers import LineClassifier, LineMatches, LinkClassifier
from .collector import BlockCollector
from .confidence_scorer import ConfidenceScorer
from .models import ERROR_EXCEPTION, ERROR_INVALID_SCHEMA, ErrorRecord, ExtractionRecord
from .readability_extractor import ReadabilityExtractor
from .redaction import redact_pii
from .sanitizer import sanitize_html
from .schema import validate_output_schema
from .scorer import BlockScorer
from .soup_adapter import SoupDocument

logger = structlog.get_logger(__name__)


def unique(values: Iterable[str]) -> List[str]:
    """Trimmed, non-empty values in first-seen order."""
    seen = set()
    result: List[str] = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


class SchemeExtractor:
    """
    Extracts eligibility, document and apply-link facts from one page.

    Instances hold only configuration and the stateless pipeline stages, so a
    single extractor can be shared across threads. ``extract`` never raises:
    failures come back as an ErrorRecord.
    """

    def __init__(
        self,
        settings: ExtractionSettings | None = None,
        keywords: KeywordConfig | None = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.keywords = keywords or KeywordConfig()
        self.logger = logger.bind(component="SchemeExtractor")

        self.collector = BlockCollector(self.settings, self.keywords)
        self.scorer = BlockScorer(self.keywords)
        self.line_classifier = LineClassifier(self.keywords, self.settings.max_line_length)
        self.link_classifier = LinkClassifier(self.keywords, self.settings.max_heading_siblings)
        self.confidence_scorer = ConfidenceScorer()
        self.readability = ReadabilityExtractor(
            min_text_length=self.settings.readability_min_text_length,
            parser=self.settings.parser,
        )

    def extract(self, html: str, source_url: Optional[str] = None) -> Union[ExtractionRecord, ErrorRecord]:
        """
        Run the full pipeline over raw page markup.

        Args:
            html: Raw page markup
            source_url: Page URL, used to resolve relative apply links

        Returns:
            ExtractionRecord on success, ErrorRecord otherwise
        """
        try:
            return self._extract(html, source_url)
        except Exception as e:
            self.logger.error(
                "Extraction failed",
                event_type="extraction_failed",
                source_url=source_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ErrorRecord(error=ERROR_EXCEPTION, message=str(e))

    def _extract(self, html: str, source_url: Optional[str]) -> Union[ExtractionRecord, ErrorRecord]:
        settings = self.settings
        self.logger.debug("Starting extraction", source_url=source_url, length=len(html or ""))

        cleaned = sanitize_html(html)
        document = SoupDocument(cleaned, parser=settings.parser)

        article = self.readability.extract(cleaned, url=source_url) if settings.use_readability else None
        if settings.use_readability and article is None:
            self.logger.debug("Readability pass produced nothing, using body text", source_url=source_url)

        body_text = article.text if article is not None else document.body_text()
        title = (article.title if article is not None else None) or document.title

        candidates = self.collector.collect(document, body_text)
        ranked, top = self.scorer.top_blocks(candidates, settings.top_block_threshold)
        self.logger.debug("Blocks ranked", candidates=len(ranked), top=len(top))

        matches = LineMatches()
        links: List[str] = []
        for block in top:
            matches.extend(self.line_classifier.classify(block.content))
            node = block.node
            if node is not None:
                links.extend(self.link_classifier.classify(self.link_classifier.anchors_near(node), source_url))

        # Only missing eligibility triggers the whole-page rescan
        if not matches.eligibility and body_text:
            self.logger.debug("No eligibility lines in top blocks, scanning whole page", source_url=source_url)
            matches.extend(self.line_classifier.classify(body_text))
            links.extend(self.link_classifier.classify(document.anchors(), source_url))

        confidence = self.confidence_scorer.calculate_confidence(matches.eligibility, matches.documents, top)

        eligibility = unique(redact_pii(line) or "" for line in matches.eligibility)[: settings.max_eligibility]
        documents = unique(redact_pii(line) or "" for line in matches.documents)[: settings.max_documents]
        snippet = (redact_pii(body_text) or "")[: settings.snippet_length]

        record = ExtractionRecord(
            title=title or None,
            source_url=source_url or None,
            eligibility=eligibility,
            documents=documents,
            apply_links=unique(links)[: settings.max_apply_links],
            raw_text_snippet=snippet,
            method="readability+heuristic" if article is not None else "heuristic",
            confidence=round(confidence, 2),
        )

        errors = validate_output_schema(record.to_dict())
        if errors:
            self.logger.warning("Record failed schema validation", source_url=source_url, errors=errors)
            return ErrorRecord(error=ERROR_INVALID_SCHEMA, details=errors, raw_text=snippet)

        self.logger.info(
            "Extraction completed",
            source_url=source_url,
            method=record.method,
            eligibility=len(record.eligibility),
            documents=len(record.documents),
            apply_links=len(record.apply_links),
            confidence=record.confidence,
        )
        return record


def extract_from_html(
    html: str,
    source_url: Optional[str] = None,
    settings: ExtractionSettings | None = None,
    keywords: KeywordConfig | None = None,
) -> Union[ExtractionRecord, ErrorRecord]:
    """Convenience wrapper building a one-off SchemeExtractor."""
    return SchemeExtractor(settings=settings, keywords=keywords).extract(html, source_url)
