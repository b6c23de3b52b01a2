"""
SchemeLens - structured eligibility facts from government-scheme pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ErrorRecord, ExtractionRecord, SchemeExtractor, extract_from_html

__all__ = ["__version__", "Config", "ErrorRecord", "ExtractionRecord", "SchemeExtractor", "extract_from_html"]
