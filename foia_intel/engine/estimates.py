# foia_intel/engine/estimates.py

"""Deterministic fee and response-timeline estimates."""

import logging
from typing import Any, Sequence

from foia_intel.core.domain import (
    DepartmentCandidate,
    Estimate,
    FeeEstimate,
    ScopeAnalysis,
    TimelineEstimate,
)
from foia_intel.logic.scoring import round_int

logger = logging.getLogger(__name__)


class FeeTimelineEstimator:
    """Converts a scope analysis into a fee range and a business-day timeline.

    Rates come from the injected settings (``search_fee_per_department``,
    ``review_fee_per_page``, ``copy_fee_per_page``, ``base_response_days``,
    ``calendar_day_factor``) so a jurisdiction can override its fee
    schedule without code changes.
    """

    def __init__(self, config: Any):
        self.config = config

    def estimate(
        self, scope: ScopeAnalysis, departments: Sequence[DepartmentCandidate]
    ) -> Estimate:
        docs = scope.estimated_documents
        avg_docs = (docs.min + docs.max) / 2
        department_count = len(departments)

        return Estimate(
            fee=self._fee(avg_docs, department_count, docs.min, docs.max),
            timeline=self._timeline(avg_docs, department_count, scope.complexity_score),
        )

    def _fee(
        self, avg_docs: float, department_count: int, doc_min: int, doc_max: int
    ) -> FeeEstimate:
        search_fee = department_count * self.config.search_fee_per_department
        review_fee = avg_docs * self.config.review_fee_per_page
        copy_fee = avg_docs * self.config.copy_fee_per_page

        return FeeEstimate(
            min=max(0, round_int(search_fee + review_fee * 0.3)),
            max=round_int(search_fee + review_fee + copy_fee),
            factors=[
                f"{department_count} department(s) to search",
                f"Estimated {doc_min}-{doc_max} documents",
                "Review and redaction fees may apply",
                "First 2 hours of staff time may be free",
            ],
        )

    def _timeline(
        self, avg_docs: float, department_count: int, complexity: float
    ) -> TimelineEstimate:
        base_days = self.config.base_response_days
        complexity_days = round_int(complexity * 10)
        volume_days = round_int(avg_docs / 100) * 2
        dept_days = 5 if department_count > 2 else 0

        total_days = base_days + complexity_days + volume_days + dept_days

        factors = [f"Base response time: {base_days} days"]
        if complexity > 0.5:
            factors.append(f"Complex request: +{complexity_days} days")
        if volume_days > 0:
            factors.append(f"High volume: +{volume_days} days")
        if dept_days > 0:
            factors.append(f"Multiple departments: +{dept_days} days")

        logger.debug(
            "Timeline estimated",
            extra={"total_days": total_days, "department_count": department_count},
        )

        return TimelineEstimate(
            days=total_days,
            business_days=total_days,
            calendar_days=round_int(total_days * self.config.calendar_day_factor),
            confidence=0.85 if complexity < 0.5 else 0.65,
            factors=factors,
        )
