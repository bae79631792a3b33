# foia_intel/engine/exemptions.py

"""Keyword-weighted scoring against the statutory FOIA exemptions (b1-b9)."""

import logging
from typing import List, Optional, Sequence, Tuple

from foia_intel.core.definitions import ReviewStatus
from foia_intel.core.domain import ExemptionClassification
from foia_intel.core.loader import PatternLoader
from foia_intel.core.interfaces import AnalysisStore

logger = logging.getLogger(__name__)

ExemptionTable = Sequence[Tuple[str, str, Sequence[str], float]]


class ExemptionClassifier:
    """Suggests exemptions whose keyword score exceeds the acceptance threshold."""

    def __init__(self, table: Optional[ExemptionTable] = None, threshold: float = 0.3):
        self.table = (
            tuple(table) if table is not None else PatternLoader.get_instance().get_exemptions()
        )
        self.threshold = threshold

    def score(self, text: str) -> List[ExemptionClassification]:
        """Scores the text without persisting anything.

        Score is (matched keywords / total keywords) x base confidence; only
        exemptions scoring strictly above the threshold are returned.
        """
        lowered = text.lower()
        results = []

        for code, name, keywords, base_confidence in self.table:
            if not keywords:
                continue
            matched = [k for k in keywords if k.lower() in lowered]
            confidence = (len(matched) / len(keywords)) * base_confidence

            if confidence > self.threshold:
                results.append(
                    ExemptionClassification(
                        id=None,
                        exemption_type=code,
                        name=name,
                        confidence=min(confidence, 1.0),
                        reasoning=f"Detected keywords: {', '.join(matched)}",
                        matched_keywords=matched,
                    )
                )

        return results

    async def classify(
        self, text: str, analysis_id: str, store: AnalysisStore
    ) -> List[ExemptionClassification]:
        """Scores the text and persists one row per suggested exemption."""
        persisted = []

        for candidate in self.score(text):
            row = await store.create_exemption_classification(
                {
                    "analysis_id": analysis_id,
                    "exemption_type": candidate.exemption_type,
                    "exemption_name": candidate.name,
                    "confidence": candidate.confidence,
                    "reasoning": candidate.reasoning,
                    "page_references": list(candidate.page_references),
                    "status": ReviewStatus.SUGGESTED,
                }
            )
            persisted.append(
                ExemptionClassification(
                    id=row["id"],
                    exemption_type=candidate.exemption_type,
                    name=candidate.name,
                    confidence=candidate.confidence,
                    reasoning=candidate.reasoning,
                    matched_keywords=candidate.matched_keywords,
                    page_references=candidate.page_references,
                )
            )

        logger.info(
            "Exemption classification complete",
            extra={"analysis_id": analysis_id, "exemption_count": len(persisted)},
        )
        return persisted
