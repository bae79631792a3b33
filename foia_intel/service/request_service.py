# foia_intel/service/request_service.py

"""Request Architect flow: analysis of a submitted FOIA request text."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from foia_intel.core.definitions import ActivityType
from foia_intel.core.domain import RequestAnalysisResult, SimilarRequest
from foia_intel.core.exceptions import ConfigurationError, ValidationError
from foia_intel.core.interfaces import ActivityLogSink, AnalysisStore, RequestRepository
from foia_intel.engine.scope import generate_suggestions, overall_confidence
from foia_intel.engine.similarity import SimilarityFinder
from foia_intel.service.activity import ActivityLogger, best_effort
from foia_intel.service.config import Settings, settings as default_settings
from foia_intel.service.pipeline import AnalysisComponents, ComponentRegistry

logger = logging.getLogger(__name__)

MIN_SUGGEST_LENGTH = 10


def validate_text(text: Any, what: str = "Request text") -> str:
    """Rejects missing, non-string, or blank input.

    Raises:
        ValidationError: If the text is unusable
    """
    if not isinstance(text, str):
        raise ValidationError(f"{what} must be a string")
    if not text.strip():
        raise ValidationError(f"{what} is required")
    return text


class RequestAnalysisService:
    """Runs extraction, routing, scoping, similarity, and estimation for a request."""

    def __init__(
        self,
        store: AnalysisStore,
        repository: Optional[RequestRepository] = None,
        activity_sink: Optional[ActivityLogSink] = None,
        components: Optional[AnalysisComponents] = None,
        config: Optional[Settings] = None,
    ):
        self.store = store
        self.config = config or default_settings
        self.components = components or ComponentRegistry.get_instance()
        self.similarity = SimilarityFinder(repository, self.config)
        self.repository = repository
        self.activity = ActivityLogger(activity_sink)

    async def analyze_request(
        self, text: str, context: Optional[Dict[str, Any]] = None
    ) -> RequestAnalysisResult:
        """Analyzes request text and persists the analysis and its entities.

        Args:
            text: Request text as typed by the requester
            context: Optional caller context stored with the analysis

        Returns:
            RequestAnalysisResult

        Raises:
            ValidationError: If the text is empty; nothing is computed or stored
        """
        validate_text(text)
        started = time.monotonic()
        c = self.components

        entities = c.extractor.extract(text)
        departments = c.router.route(text)
        scope = c.scope.analyze(text, entities, departments)
        similar = await self._find_similar(text)
        estimate = c.estimator.estimate(scope, departments)
        suggestions = generate_suggestions(scope)

        processing_ms = int((time.monotonic() - started) * 1000)

        analysis = await self.store.create_request_analysis(
            {
                "analysis_type": "comprehensive",
                "input_text": text,
                "context": dict(context or {}),
                "analysis_result": {
                    "entities": [e.to_dict() for e in entities],
                    "departments": [d.to_dict() for d in departments],
                    "scope_analysis": scope.to_dict(),
                    "similar_requests": [s.to_dict() for s in similar],
                    "estimates": {
                        "fee": estimate.fee.to_dict(),
                        "timeline": estimate.timeline.to_dict(),
                    },
                    "suggestions": suggestions,
                },
                "confidence_score": overall_confidence(entities, departments, scope),
                "model_version": self.config.model_version,
                "processing_time_ms": processing_ms,
            }
        )

        for entity in entities:
            await self.store.create_extracted_entity(
                {
                    "analysis_id": analysis["id"],
                    "entity_type": entity.entity_type,
                    "entity_value": entity.value,
                    "start_position": entity.start,
                    "end_position": entity.end,
                    "confidence": entity.confidence,
                    "context_snippet": entity.context,
                }
            )

        await self.activity.log(
            ActivityType.AI_ANALYSIS,
            "Request text analyzed",
            analysis_id=analysis["id"],
            entity_count=len(entities),
        )

        logger.info(
            "Request analysis complete",
            extra={
                "analysis_id": analysis["id"],
                "entity_count": len(entities),
                "department_count": len(departments),
                "complexity_score": scope.complexity_score,
                "processing_time_ms": processing_ms,
            },
        )

        return RequestAnalysisResult(
            analysis_id=analysis["id"],
            entities=entities,
            suggested_departments=departments,
            scope_analysis=scope,
            similar_requests=similar,
            fee_estimate=estimate.fee,
            processing_time_estimate=estimate.timeline,
            suggestions=suggestions,
        )

    async def suggest(self, text: Any) -> List[str]:
        """Real-time tips while the requester types; never raises."""
        if not isinstance(text, str) or len(text.strip()) < MIN_SUGGEST_LENGTH:
            return []
        try:
            c = self.components
            entities = c.extractor.extract(text)
            departments = c.router.route(text)
            return generate_suggestions(c.scope.analyze(text, entities, departments))
        except Exception:
            logger.error("Suggestion generation failed", exc_info=True)
            return []

    async def find_existing(self, text: Any) -> List[SimilarRequest]:
        """Similar completed requests for a draft text; lookup failures yield [].

        Raises:
            ValidationError: If the text is empty
        """
        validate_text(text)
        return await self._find_similar(text)

    async def _find_similar(self, text: str) -> List[SimilarRequest]:
        return await best_effort(
            self.similarity.find_similar(text), "similar-request search", default=[]
        )

    async def dashboard_stats(self) -> Dict[str, Any]:
        """Request counts for the staff dashboard.

        Raises:
            ConfigurationError: If no request repository is configured
        """
        if self.repository is None:
            raise ConfigurationError("No request repository configured")

        now = datetime.now(timezone.utc)
        return {
            "totalRequests": await self.repository.count(),
            "byStatus": await self.repository.count_by_status(),
            "byPriority": await self.repository.count_by_priority(),
            "overdue": await self.repository.count_overdue(now),
        }
