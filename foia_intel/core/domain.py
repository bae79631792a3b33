# foia_intel/core/domain.py

"""Domain models for request and document analysis results.

Every model exposes ``to_dict()`` producing the JSON-serializable,
camelCase shape consumed by the HTTP layer and the operator console.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from foia_intel.core.definitions import REDACTED_PLACEHOLDER, ReviewStatus


@dataclass(frozen=True)
class EntitySpan:
    """A located, typed, confidence-scored substring of request text.

    Attributes:
        entity_type: Type of entity (e.g., PERSON, EMAIL)
        value: Matched text
        start: Starting character offset in the source text
        end: Ending character offset in the source text
        confidence: Heuristic confidence score (0.0 to 1.0)
        method: 'pattern' or 'heuristic'
        context: Surrounding text window
    """

    entity_type: str
    value: str
    start: int
    end: int
    confidence: float
    method: str
    context: str = ""

    @property
    def key(self):
        return (self.entity_type, self.value, self.start)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.entity_type,
            "value": self.value,
            "start": self.start,
            "end": self.end,
            "confidence": self.confidence,
            "method": self.method,
            "context": self.context,
        }


@dataclass(frozen=True)
class DepartmentCandidate:
    id: str
    name: str
    relevance_score: float
    matched_keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "relevanceScore": self.relevance_score,
            "matchedKeywords": list(self.matched_keywords),
        }


@dataclass(frozen=True)
class Ambiguity:
    issue: str
    suggestion: str
    severity: str

    def to_dict(self) -> Dict[str, Any]:
        return {"issue": self.issue, "suggestion": self.suggestion, "severity": self.severity}


@dataclass(frozen=True)
class DocumentRange:
    min: int
    max: int

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass
class ScopeAnalysis:
    """Scope and complexity findings for a single request text.

    Attributes:
        estimated_documents: Expected responsive document range
        estimated_timeframe: 'specified' when the text carries a date range
        complexity_score: Heuristic complexity (0.0 to 1.0)
        ambiguities: Findings in rule-check order
        has_date_range: Whether a date range was detected
        department_count: Number of routed departments
        word_count: Whitespace-delimited token count
    """

    estimated_documents: DocumentRange
    estimated_timeframe: str
    complexity_score: float
    ambiguities: List[Ambiguity] = field(default_factory=list)
    has_date_range: bool = False
    department_count: int = 0
    word_count: int = 0

    @classmethod
    def empty(cls) -> "ScopeAnalysis":
        return cls(
            estimated_documents=DocumentRange(0, 0),
            estimated_timeframe="unspecified",
            complexity_score=0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimatedDocuments": self.estimated_documents.to_dict(),
            "estimatedTimeframe": self.estimated_timeframe,
            "complexityScore": self.complexity_score,
            "ambiguities": [a.to_dict() for a in self.ambiguities],
            "hasDateRange": self.has_date_range,
            "departmentCount": self.department_count,
            "wordCount": self.word_count,
        }


@dataclass
class FeeEstimate:
    min: int
    max: int
    factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max, "factors": list(self.factors)}


@dataclass
class TimelineEstimate:
    days: int
    business_days: int
    calendar_days: int
    confidence: float
    factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "businessDays": self.business_days,
            "calendarDays": self.calendar_days,
            "confidence": self.confidence,
            "factors": list(self.factors),
        }


@dataclass
class Estimate:
    fee: FeeEstimate
    timeline: TimelineEstimate


@dataclass(frozen=True)
class SimilarRequest:
    id: str
    tracking_number: Optional[str]
    title: str
    similarity: float
    has_public_records: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "trackingNumber": self.tracking_number,
            "title": self.title,
            "similarity": self.similarity,
            "hasPublicRecords": self.has_public_records,
        }


@dataclass
class RequestAnalysisResult:
    """Aggregate result of the request-architect flow."""

    analysis_id: Optional[str]
    entities: List[EntitySpan] = field(default_factory=list)
    suggested_departments: List[DepartmentCandidate] = field(default_factory=list)
    scope_analysis: ScopeAnalysis = field(default_factory=ScopeAnalysis.empty)
    similar_requests: List[SimilarRequest] = field(default_factory=list)
    fee_estimate: Optional[FeeEstimate] = None
    processing_time_estimate: Optional[TimelineEstimate] = None
    suggestions: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def empty(cls, error: Optional[str] = None) -> "RequestAnalysisResult":
        """Well-shaped result returned when analysis degrades."""
        return cls(analysis_id=None, error=error)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "analysisId": self.analysis_id,
            "entities": [e.to_dict() for e in self.entities],
            "suggestedDepartments": [d.to_dict() for d in self.suggested_departments],
            "scopeAnalysis": self.scope_analysis.to_dict(),
            "similarRequests": [s.to_dict() for s in self.similar_requests],
            "feeEstimate": self.fee_estimate.to_dict() if self.fee_estimate else None,
            "processingTimeEstimate": (
                self.processing_time_estimate.to_dict()
                if self.processing_time_estimate
                else None
            ),
            "suggestions": list(self.suggestions),
        }
        if self.error:
            result["error"] = self.error
        return result


@dataclass(frozen=True)
class DocumentTypeResult:
    type: str
    confidence: float
    scores: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "confidence": self.confidence, "scores": dict(self.scores)}


@dataclass(frozen=True)
class DetectedPII:
    """A PII match as returned to callers.

    There is no field for the matched text: ``value`` always yields the
    redaction placeholder and ``context`` is already masked.
    """

    id: str
    pii_type: str
    start: int
    end: int
    confidence: float
    context: str
    page_number: int = 1

    @property
    def value(self) -> str:
        return REDACTED_PLACEHOLDER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.pii_type,
            "value": self.value,
            "position": {"start": self.start, "end": self.end},
            "confidence": self.confidence,
            "context": self.context,
            "pageNumber": self.page_number,
        }


@dataclass(frozen=True)
class RedactionSuggestion:
    id: str
    pii_id: str
    pii_type: str
    method: str
    reason: str
    status: str = ReviewStatus.SUGGESTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "piiId": self.pii_id,
            "piiType": self.pii_type,
            "method": self.method,
            "reason": self.reason,
            "status": self.status,
        }


@dataclass(frozen=True)
class ExemptionClassification:
    """A suggested FOIA exemption for a document.

    ``id`` is None for in-memory scoring results that were not persisted.
    """

    id: Optional[str]
    exemption_type: str
    name: str
    confidence: float
    reasoning: str
    matched_keywords: List[str] = field(default_factory=list)
    page_references: List[int] = field(default_factory=lambda: [1])
    status: str = ReviewStatus.SUGGESTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.exemption_type,
            "name": self.name,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "pageReferences": list(self.page_references),
            "status": self.status,
        }


@dataclass
class DocumentAnalysisResult:
    """Aggregate result of the document flow."""

    analysis_id: str
    document_type: DocumentTypeResult
    detected_pii: List[DetectedPII] = field(default_factory=list)
    exemptions: List[ExemptionClassification] = field(default_factory=list)
    redaction_suggestions: List[RedactionSuggestion] = field(default_factory=list)
    processing_time: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysisId": self.analysis_id,
            "documentType": self.document_type.to_dict(),
            "detectedPII": [p.to_dict() for p in self.detected_pii],
            "exemptions": [e.to_dict() for e in self.exemptions],
            "redactionSuggestions": [r.to_dict() for r in self.redaction_suggestions],
            "processingTime": self.processing_time,
        }
