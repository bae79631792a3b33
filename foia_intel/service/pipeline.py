# foia_intel/service/pipeline.py

"""Shared analysis components and the degrading request entry point."""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from foia_intel.core.domain import RequestAnalysisResult
from foia_intel.core.exceptions import ConfigurationError, ValidationError
from foia_intel.engine.classifier import DocumentClassifier
from foia_intel.engine.departments import DepartmentRouter
from foia_intel.engine.entities import EntityExtractor
from foia_intel.engine.estimates import FeeTimelineEstimator
from foia_intel.engine.exemptions import ExemptionClassifier
from foia_intel.engine.pii import PIIDetector, RedactionSuggester
from foia_intel.engine.scope import ScopeAnalyzer
from foia_intel.service.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisComponents:
    """Stateless analyzers built once from the lookup tables and settings."""

    extractor: EntityExtractor
    router: DepartmentRouter
    scope: ScopeAnalyzer
    estimator: FeeTimelineEstimator
    classifier: DocumentClassifier
    pii_detector: PIIDetector
    suggester: RedactionSuggester
    exemptions: ExemptionClassifier

    @classmethod
    def build(cls, config: Settings) -> "AnalysisComponents":
        return cls(
            extractor=EntityExtractor(context_radius=config.entity_context_radius),
            router=DepartmentRouter(limit=config.max_departments),
            scope=ScopeAnalyzer(),
            estimator=FeeTimelineEstimator(config),
            classifier=DocumentClassifier(threshold=config.classification_threshold),
            pii_detector=PIIDetector(context_radius=config.context_radius),
            suggester=RedactionSuggester(),
            exemptions=ExemptionClassifier(threshold=config.exemption_threshold),
        )


class ComponentRegistry:
    """Singleton holder for the analysis components.

    Components hold only immutable configuration, so one instance is shared
    by every request.
    """

    _instance: Optional[AnalysisComponents] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> AnalysisComponents:
        """Returns the shared components, building them on first use.

        Raises:
            ConfigurationError: If the lookup tables cannot be loaded
        """
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    try:
                        logger.info("Initializing analysis components")
                        cls._instance = AnalysisComponents.build(settings)
                        logger.info("Analysis components initialized successfully")

                    except Exception as e:
                        logger.error(
                            "Failed to initialize analysis components", exc_info=True
                        )
                        if isinstance(e, ConfigurationError):
                            raise
                        raise ConfigurationError(
                            "Analysis component initialization failed"
                        ) from e

        return cls._instance


async def analyze_request_safe(
    service, text: str, context: Optional[Dict[str, Any]] = None
) -> RequestAnalysisResult:
    """Runs request analysis, degrading to an empty result on failure.

    Input validation errors still propagate so the caller can answer with
    a 4xx; every other failure yields a well-shaped empty result.

    Args:
        service: RequestAnalysisService to run
        text: Request text
        context: Optional caller context stored with the analysis

    Returns:
        RequestAnalysisResult; on failure, ``error`` is set and all
        sub-structures are empty
    """
    try:
        return await service.analyze_request(text, context)

    except ValidationError:
        raise

    except Exception as e:
        logger.error(
            f"Request analysis degraded: {type(e).__name__}",
            exc_info=True,
            extra={"text_length": len(text) if isinstance(text, str) else 0},
        )
        return RequestAnalysisResult.empty(error="Analysis temporarily unavailable")
