"""
SchemeLens extraction pipeline.

Turns saved government-scheme pages into structured eligibility,
required-document and apply-link records:

1. Sanitize markup and parse it with BeautifulSoup
2. Optionally narrow the page with readability-lxml
3. Collect candidate blocks (headings, lists, landmarks, hints, dense divs)
4. Score blocks and classify lines and links from the top-scoring ones
5. Estimate confidence, redact PII and validate the record
"""

from .classifiers import LineClassifier, LinkClassifier
from .collector import BlockCollector
from .confidence_scorer import ConfidenceScorer
from .manager import SchemeExtractor, extract_from_html
from .models import CandidateBlock, ErrorRecord, ExtractionRecord, ScoredBlock
from .protocols import Document, DocumentNode
from .readability_extractor import ReadabilityExtractor
from .redaction import redact_pii, redact_record
from .sanitizer import sanitize_html
from .scorer import BlockScorer
from .soup_adapter import SoupDocument
from .spa import detect_spa_shell

__all__ = [
    "BlockCollector",
    "BlockScorer",
    "CandidateBlock",
    "ConfidenceScorer",
    "Document",
    "DocumentNode",
    "ErrorRecord",
    "ExtractionRecord",
    "LineClassifier",
    "LinkClassifier",
    "ReadabilityExtractor",
    "SchemeExtractor",
    "ScoredBlock",
    "SoupDocument",
    "detect_spa_shell",
    "extract_from_html",
    "redact_pii",
    "redact_record",
    "sanitize_html",
]
