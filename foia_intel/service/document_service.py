# foia_intel/service/document_service.py

"""Document flow: classification, PII detection, exemptions, and redaction review."""

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from foia_intel.core.definitions import ActivityType, ProcessingStatus, RedactionStatus
from foia_intel.core.domain import DocumentAnalysisResult
from foia_intel.core.exceptions import AnalysisError, FoiaIntelError, ValidationError
from foia_intel.core.interfaces import ActivityLogSink, AnalysisStore, Row
from foia_intel.service.activity import ActivityLogger
from foia_intel.service.pipeline import AnalysisComponents, ComponentRegistry
from foia_intel.service.request_service import validate_text

logger = logging.getLogger(__name__)


class DocumentAnalysisService:
    """Analyzes extracted document text and manages redaction approval.

    There is at most one analysis record per document: an existing record
    is reused and its earlier PII, redaction, and exemption rows are
    cleared before re-analysis. The lookup-then-create is not locked; callers
    needing exactly-once creation under concurrent retries must serialize
    per document id themselves.
    """

    def __init__(
        self,
        store: AnalysisStore,
        activity_sink: Optional[ActivityLogSink] = None,
        components: Optional[AnalysisComponents] = None,
    ):
        self.store = store
        self.components = components or ComponentRegistry.get_instance()
        self.activity = ActivityLogger(activity_sink)

    async def _start_analysis(self, document_id: str) -> Row:
        analysis = await self.store.find_document_analysis(document_id)
        if analysis is None:
            analysis = await self.store.create_document_analysis(
                {"document_id": document_id, "processing_status": ProcessingStatus.PENDING}
            )
        else:
            await self.store.clear_analysis_results(analysis["id"])
        return await self.store.update_document_analysis(
            analysis["id"], {"processing_status": ProcessingStatus.PROCESSING}
        )

    async def analyze_document(
        self, document_id: str, text: str, page_count: int = 1
    ) -> DocumentAnalysisResult:
        """Runs the full document flow and marks the analysis completed.

        Args:
            document_id: Document being analyzed
            text: Extracted (OCR or native) document text
            page_count: Number of pages in the source document

        Returns:
            DocumentAnalysisResult

        Raises:
            ValidationError: If the document id or text is missing
            AnalysisError: If any step fails; the record is left in
                'processing' for the caller to resolve
        """
        if not document_id:
            raise ValidationError("Document id is required")
        validate_text(text, "Document text")

        started = time.monotonic()
        c = self.components
        analysis_id = None

        try:
            analysis = await self._start_analysis(document_id)
            analysis_id = analysis["id"]

            document_type = c.classifier.classify(text)
            detected = await c.pii_detector.detect(text, analysis_id, self.store)
            exemptions = await c.exemptions.classify(text, analysis_id, self.store)
            suggestions = await c.suggester.suggest(detected, self.store)

            processing_ms = int((time.monotonic() - started) * 1000)
            await self.store.update_document_analysis(
                analysis_id,
                {
                    "document_type": document_type.type,
                    "type_confidence": document_type.confidence,
                    "page_count": page_count or 1,
                    "processing_status": ProcessingStatus.COMPLETED,
                    "metadata": {
                        "processing_time_ms": processing_ms,
                        "pii_count": len(detected),
                        "exemption_count": len(exemptions),
                        "redaction_count": len(suggestions),
                    },
                },
            )

        except FoiaIntelError:
            logger.error(
                "Document analysis failed",
                exc_info=True,
                extra={"document_id": document_id, "analysis_id": analysis_id},
            )
            raise
        except Exception as e:
            logger.error(
                "Unexpected error in document analysis",
                exc_info=True,
                extra={"document_id": document_id, "analysis_id": analysis_id},
            )
            raise AnalysisError(f"Failed to analyze document {document_id}: {e}") from e

        await self.activity.log(
            ActivityType.DOCUMENT_ANALYZED,
            "Document analyzed",
            document_id=document_id,
            analysis_id=analysis_id,
            pii_count=len(detected),
        )

        logger.info(
            "Document analysis complete",
            extra={
                "document_id": document_id,
                "analysis_id": analysis_id,
                "document_type": document_type.type,
                "pii_count": len(detected),
                "exemption_count": len(exemptions),
                "processing_time_ms": processing_ms,
            },
        )

        return DocumentAnalysisResult(
            analysis_id=analysis_id,
            document_type=document_type,
            detected_pii=detected,
            exemptions=exemptions,
            redaction_suggestions=suggestions,
            processing_time=processing_ms,
        )

    async def apply_redactions(
        self, analysis_id: str, approved_redaction_ids: Sequence[str]
    ) -> Dict[str, Any]:
        """Marks the named redaction suggestions approved.

        Only the given ids change; applying the redactions to the source
        document is left to a separate document processor.

        Raises:
            ValidationError: If the ids are not a list
        """
        if not isinstance(approved_redaction_ids, (list, tuple)):
            raise ValidationError("approved_redaction_ids must be a list of ids")

        approved = 0
        for redaction_id in approved_redaction_ids:
            if await self.store.update_redaction_status(
                redaction_id, RedactionStatus.APPROVED, analysis_id=analysis_id
            ):
                approved += 1
            else:
                logger.warning(
                    "Redaction id not found for analysis",
                    extra={"analysis_id": analysis_id, "redaction_id": redaction_id},
                )

        await self.activity.log(
            ActivityType.REDACTION_APPROVED,
            "Redactions approved",
            analysis_id=analysis_id,
            approved_count=approved,
        )

        return {
            "success": True,
            "approvedCount": approved,
            "message": "Redactions approved. Apply to document using PDF processor.",
        }

    async def get_analysis_results(self, document_id: str) -> Optional[Dict[str, Any]]:
        """Stored analysis for a document, or None if it was never analyzed."""
        analysis = await self.store.find_document_analysis(document_id)
        if analysis is None:
            return None

        pii_rows = await self.store.list_detected_pii(analysis["id"])
        detected = []
        for pii in pii_rows:
            suggestion = await self.store.find_redaction_suggestion(pii["id"])
            detected.append(
                {
                    "id": pii["id"],
                    "type": pii["pii_type"],
                    "confidence": pii["confidence"],
                    "pageNumber": pii["page_number"],
                    "redactionSuggestion": (
                        {
                            "id": suggestion["id"],
                            "status": suggestion["status"],
                            "method": suggestion["redaction_method"],
                            "reason": suggestion["reason"],
                        }
                        if suggestion
                        else None
                    ),
                }
            )

        exemptions = [
            {
                "id": ex["id"],
                "type": ex["exemption_type"],
                "name": ex["exemption_name"],
                "confidence": ex["confidence"],
                "reasoning": ex["reasoning"],
                "status": ex["status"],
            }
            for ex in await self.store.list_exemptions(analysis["id"])
        ]

        return {
            "analysisId": analysis["id"],
            "documentType": analysis.get("document_type"),
            "typeConfidence": analysis.get("type_confidence"),
            "processingStatus": analysis["processing_status"],
            "detectedPII": detected,
            "exemptions": exemptions,
            "metadata": analysis.get("metadata", {}),
        }

    async def batch_analyze(self, documents: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Analyzes documents one after another, collecting per-document failures.

        Each document is ``{"id", "text", "pageCount"?}``.
        """
        if not isinstance(documents, (list, tuple)):
            raise ValidationError("documents must be a list")

        results: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []

        for doc in documents:
            document_id = doc.get("id") if isinstance(doc, dict) else None
            try:
                if not isinstance(doc, dict):
                    raise ValidationError("Each document must be an object with id and text")
                analysis = await self.analyze_document(
                    document_id, doc.get("text"), page_count=doc.get("pageCount") or 1
                )
                results.append({"documentId": document_id, "success": True, "analysis": analysis})
            except Exception as e:
                logger.warning(
                    "Batch document failed",
                    extra={"document_id": document_id, "error_type": type(e).__name__},
                )
                errors.append({"documentId": document_id, "error": str(e)})

        return {
            "success": True,
            "processed": len(results),
            "failed": len(errors),
            "results": results,
            "errors": errors,
        }
