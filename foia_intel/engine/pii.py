# foia_intel/engine/pii.py

"""Document-level PII detection and redaction-suggestion generation.

Matched values never leave this module in clear text: stored rows carry a
partially-masked value and every context has all detected matches masked
by offset.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from foia_intel.core.definitions import PiiType, RedactionMethod, RedactionStatus
from foia_intel.core.domain import DetectedPII, RedactionSuggestion
from foia_intel.core.interfaces import AnalysisStore
from foia_intel.engine.patterns import PatternLibrary, get_library
from foia_intel.logic.validators import (
    mask_value,
    mask_window,
    validate_credit_card,
    validate_ssn,
)

logger = logging.getLogger(__name__)

PAGE_BREAK = "\f"

# Type -> (validator, confidence used when validation fails)
SECONDARY_VALIDATION: Dict[str, Tuple[Callable[[str], bool], float]] = {
    PiiType.CREDIT_CARD: (validate_credit_card, 0.50),
    PiiType.SSN: (validate_ssn, 0.70),
}


def page_number_at(text: str, position: int) -> int:
    """1-based page index of ``position``, counting form-feed page breaks."""
    return text.count(PAGE_BREAK, 0, position) + 1


class PIIDetector:
    """Applies the document pattern library with type-specific validation."""

    def __init__(self, library: Optional[PatternLibrary] = None, context_radius: int = 50):
        self.library = library or get_library("document")
        self.context_radius = context_radius

    def confidence_for(self, pii_type: str, value: str, base: float) -> float:
        check = SECONDARY_VALIDATION.get(pii_type)
        if check is None:
            return base
        validator, fallback = check
        return base if validator(value) else fallback

    async def detect(
        self, text: str, analysis_id: str, store: AnalysisStore
    ) -> List[DetectedPII]:
        """Detects PII and persists one masked row per match.

        Args:
            text: Extracted document text
            analysis_id: Owning document analysis
            store: Analysis store receiving DetectedPII rows

        Returns:
            Detected items with masked values and masked contexts
        """
        matches = [
            (pattern, match) for pattern in self.library for match in pattern.finditer(text)
        ]
        spans = [(match.start(), match.end()) for _, match in matches]
        detected = []

        for pattern, match in matches:
            value = match.group(0)
            start, end = match.start(), match.end()

            safe_context = mask_window(
                text,
                max(0, start - self.context_radius),
                min(len(text), end + self.context_radius),
                spans,
            )
            confidence = self.confidence_for(pattern.name, value, pattern.score)
            page_number = page_number_at(text, start)

            row = await store.create_detected_pii(
                {
                    "analysis_id": analysis_id,
                    "pii_type": pattern.name,
                    "value": mask_value(value),
                    "page_number": page_number,
                    "coordinates": None,
                    "confidence": confidence,
                    "context": safe_context,
                }
            )

            detected.append(
                DetectedPII(
                    id=row["id"],
                    pii_type=pattern.name,
                    start=start,
                    end=end,
                    confidence=confidence,
                    context=safe_context,
                    page_number=page_number,
                )
            )

        logger.info(
            "PII detection complete",
            extra={
                "analysis_id": analysis_id,
                "pii_count": len(detected),
                "text_length": len(text),
            },
        )
        return detected


def redaction_plan(pii_type: str) -> Tuple[str, str]:
    """Maps a PII type to its (redaction method, reason)."""
    if pii_type in (PiiType.EMAIL, PiiType.PHONE):
        return RedactionMethod.REPLACE, f"{pii_type} constitutes personal contact information"
    if pii_type in (PiiType.SSN, PiiType.CREDIT_CARD):
        return RedactionMethod.BLACK_BOX, f"{pii_type} is highly sensitive personal information"
    if pii_type == PiiType.ADDRESS:
        return RedactionMethod.BLACK_BOX, "Home address may reveal personal privacy information"
    return RedactionMethod.BLACK_BOX, f"Protect {pii_type}"


class RedactionSuggester:
    """Creates exactly one 'suggested' redaction per detected PII item."""

    async def suggest(
        self, detected: Sequence[DetectedPII], store: AnalysisStore
    ) -> List[RedactionSuggestion]:
        suggestions = []

        for pii in detected:
            method, reason = redaction_plan(pii.pii_type)
            row = await store.create_redaction_suggestion(
                {
                    "pii_id": pii.id,
                    "status": RedactionStatus.SUGGESTED,
                    "redaction_method": method,
                    "reason": reason,
                }
            )
            suggestions.append(
                RedactionSuggestion(
                    id=row["id"],
                    pii_id=pii.id,
                    pii_type=pii.pii_type,
                    method=method,
                    reason=reason,
                    status=RedactionStatus.SUGGESTED,
                )
            )

        return suggestions
