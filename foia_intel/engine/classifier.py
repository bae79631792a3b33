# foia_intel/engine/classifier.py

"""Keyword-signature classification of document types."""

import logging
from typing import Optional, Sequence, Tuple

from foia_intel.core.definitions import OTHER_DOCUMENT_TYPE
from foia_intel.core.domain import DocumentTypeResult
from foia_intel.core.loader import PatternLoader

logger = logging.getLogger(__name__)


class DocumentClassifier:
    """Assigns a document type from the share of its signature keywords present."""

    def __init__(
        self,
        signatures: Optional[Sequence[Tuple[str, Sequence[str]]]] = None,
        threshold: float = 0.2,
    ):
        self.signatures = (
            tuple(signatures)
            if signatures is not None
            else PatternLoader.get_instance().get_document_types()
        )
        self.threshold = threshold

    def classify(self, text: str) -> DocumentTypeResult:
        """Scores every document type and picks the best one above threshold.

        Args:
            text: Extracted document text

        Returns:
            DocumentTypeResult; type 'other' with confidence equal to the
            threshold when no type scores above it
        """
        lowered = text.lower()
        scores = {}

        for doc_type, keywords in self.signatures:
            matched = sum(1 for keyword in keywords if keyword.lower() in lowered)
            scores[doc_type] = matched / len(keywords) if keywords else 0.0

        best_type = OTHER_DOCUMENT_TYPE
        best_score = self.threshold

        for doc_type, score in scores.items():
            if score > best_score:
                best_type = doc_type
                best_score = score

        logger.debug(
            "Document classified",
            extra={"document_type": best_type, "score": best_score},
        )

        return DocumentTypeResult(
            type=best_type, confidence=min(best_score, 1.0), scores=scores
        )
