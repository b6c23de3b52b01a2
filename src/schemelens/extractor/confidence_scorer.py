"""
Extraction Confidence Scorer

Heuristic estimate of extraction quality from the volume of classified
facts and the average relevance of the blocks they came from.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from .models import ScoredBlock

logger = structlog.get_logger(__name__)


class ConfidenceScorer:
    """
    Volume-and-relevance confidence scorer.

    Eligibility facts are worth 0.15 each up to six, document facts 0.1 each
    up to four, with the volume part capped at 0.6. The average top-block
    score adds up to 0.4 on top, and the total is capped at 0.98. A page
    with no classified lines gets a 0.12 floor lifted slightly by structure.
    """

    def __init__(self) -> None:
        self.weights = {
            "eligibility": 0.15,
            "documents": 0.10,
            "volume_cap": 0.60,
            "relevance": 0.40,
            "ceiling": 0.98,
            "empty_floor": 0.12,
            "empty_relevance": 0.10,
        }
        self.max_counted = {"eligibility": 6, "documents": 4}

    def calculate_confidence(
        self,
        eligibility: Sequence[str],
        documents: Sequence[str],
        top_blocks: Sequence[ScoredBlock],
    ) -> float:
        w = self.weights
        base = min(
            w["volume_cap"],
            w["eligibility"] * min(self.max_counted["eligibility"], len(eligibility))
            + w["documents"] * min(self.max_counted["documents"], len(documents)),
        )
        avg_top = sum(b.score for b in top_blocks) / len(top_blocks) if top_blocks else 0.0

        if not eligibility and not documents:
            confidence = w["empty_floor"] + avg_top * w["empty_relevance"]
        else:
            confidence = min(w["ceiling"], base + w["relevance"] * avg_top)

        logger.debug(
            "Confidence computed",
            eligibility=len(eligibility),
            documents=len(documents),
            avg_top_score=round(avg_top, 3),
            confidence=round(confidence, 3),
        )
        return max(0.0, min(1.0, confidence))
