"""
PII redaction for text that leaves the extractor.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Optional, Union

from .models import ErrorRecord, ExtractionRecord

PHONE_TOKEN = "[REDACTED_PHONE]"
EMAIL_TOKEN = "[REDACTED_EMAIL]"
ID_TOKEN = "[REDACTED_ID]"

# Optional +91 prefix, then a 10-digit subscriber number
_PHONE_RE = re.compile(r"(?:\+91[-\s]?|\b)\d{10}\b")
_EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.IGNORECASE)
# 12-digit national ID, optionally grouped 4-4-4
_NATIONAL_ID_RE = re.compile(r"\b\d{4}\s*\d{4}\s*\d{4}\b")


def redact_pii(text: Optional[str]) -> Optional[str]:
    """Replace phone numbers, email addresses and national-ID numbers with tokens."""
    if not text:
        return text
    text = _PHONE_RE.sub(PHONE_TOKEN, text)
    text = _EMAIL_RE.sub(EMAIL_TOKEN, text)
    text = _NATIONAL_ID_RE.sub(ID_TOKEN, text)
    return text


def redact_record(record: Union[ExtractionRecord, ErrorRecord]) -> Union[ExtractionRecord, ErrorRecord]:
    """Second redaction pass over a finished record; error records pass through."""
    if isinstance(record, ErrorRecord):
        return record
    return dataclasses.replace(
        record,
        eligibility=[redact_pii(line) or "" for line in record.eligibility],
        documents=[redact_pii(line) or "" for line in record.documents],
        raw_text_snippet=redact_pii(record.raw_text_snippet) or "",
    )
