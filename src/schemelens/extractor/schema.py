"""
Output schema for extraction records.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ExtractionRecordSchema(BaseModel):
    """Wire contract every returned extraction record must satisfy."""

    model_config = ConfigDict(strict=True, extra="forbid")

    title: Optional[str]
    source_url: Optional[str]
    eligibility: List[str] = Field(max_length=20)
    documents: List[str] = Field(max_length=20)
    apply_links: List[str] = Field(max_length=10)
    raw_text_snippet: str = Field(max_length=500)
    method: Literal["heuristic", "readability+heuristic"]
    confidence: float = Field(ge=0.0, le=1.0)


def validate_output_schema(payload: Dict[str, Any]) -> List[str]:
    """Return the list of violated checks; empty when the payload is valid."""
    try:
        ExtractionRecordSchema.model_validate(payload)
    except ValidationError as e:
        return [f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()]
    return []
