# foia_intel/engine/scope.py

"""Scope, complexity, and ambiguity analysis for FOIA request text."""

import logging
import re
from typing import List, Sequence

from foia_intel.core.definitions import EntityType, Severity
from foia_intel.core.domain import (
    Ambiguity,
    DepartmentCandidate,
    DocumentRange,
    EntitySpan,
    ScopeAnalysis,
)
from foia_intel.logic.scoring import clamp, round_half_up, round_int

logger = logging.getLogger(__name__)

DATE_RANGE_PATTERN = re.compile(
    r"\b(?:from|between|during|since|through)\b"
    r"|\bto\s+\d"
    r"|\b(?:0?[1-9]|1[0-2])[/\-](?:0?[1-9]|[12]\d|3[01])[/\-](?:\d{4}|\d{2})\b",
    re.IGNORECASE,
)
BREADTH_PATTERN = re.compile(
    r"\b(?:all|every|any|complete|entire|comprehensive)\b", re.IGNORECASE
)
ALL_COMMUNICATIONS_PATTERN = re.compile(
    r"\ball\s+(?:communications?|correspondence|emails?)\b", re.IGNORECASE
)

BRIEF_REQUEST_WORDS = 20


def count_words(text: str) -> int:
    return len(text.split())


def has_date_range(text: str) -> bool:
    return bool(DATE_RANGE_PATTERN.search(text))


def has_breadth_terms(text: str) -> bool:
    return bool(BREADTH_PATTERN.search(text))


def complexity_score(
    word_count: int,
    date_range: bool,
    breadth: bool,
    department_count: int,
    entity_count: int,
) -> float:
    """Additive heuristic complexity, clamped to [0, 1] and rounded to 2 dp."""
    score = 0.0
    score += 0.2 if word_count > 100 else 0.1 if word_count > 50 else 0.0
    # A missing date range scores higher here and is also reported as a
    # separate ambiguity below; the two checks are independent.
    score += 0.1 if date_range else 0.2
    score += 0.3 if breadth else 0.0
    score += 0.2 if department_count > 2 else 0.1 if department_count > 1 else 0.0
    score += 0.2 if entity_count > 5 else 0.1 if entity_count > 3 else 0.0
    return round_half_up(clamp(score), 2)


def estimate_documents(breadth: bool, department_count: int) -> DocumentRange:
    base = 200 if breadth else 50
    multiplier = department_count * 0.7 if department_count > 1 else 1
    return DocumentRange(
        min=round_int(base * multiplier * 0.5),
        max=round_int(base * multiplier * 2),
    )


class ScopeAnalyzer:
    """Derives volume, complexity, and ambiguity findings from request text."""

    def analyze(
        self,
        text: str,
        entities: Sequence[EntitySpan],
        departments: Sequence[DepartmentCandidate],
    ) -> ScopeAnalysis:
        word_count = count_words(text)
        date_range = has_date_range(text)
        breadth = has_breadth_terms(text)
        department_count = len(departments)

        analysis = ScopeAnalysis(
            estimated_documents=estimate_documents(breadth, department_count),
            estimated_timeframe="specified" if date_range else "unspecified",
            complexity_score=complexity_score(
                word_count, date_range, breadth, department_count, len(entities)
            ),
            ambiguities=self.find_ambiguities(text, entities, word_count, date_range, breadth),
            has_date_range=date_range,
            department_count=department_count,
            word_count=word_count,
        )

        logger.debug(
            "Scope analysis complete",
            extra={
                "word_count": word_count,
                "complexity_score": analysis.complexity_score,
                "ambiguity_count": len(analysis.ambiguities),
            },
        )
        return analysis

    @staticmethod
    def find_ambiguities(
        text: str,
        entities: Sequence[EntitySpan],
        word_count: int,
        date_range: bool,
        breadth: bool,
    ) -> List[Ambiguity]:
        """Runs each ambiguity rule independently, in fixed order."""
        ambiguities = []

        if ALL_COMMUNICATIONS_PATTERN.search(text):
            ambiguities.append(
                Ambiguity(
                    issue='"All communications" is very broad and may result in thousands of documents',
                    suggestion="Consider specifying: emails only, or include texts/calls? Specific date range?",
                    severity=Severity.HIGH,
                )
            )

        if breadth and not date_range:
            ambiguities.append(
                Ambiguity(
                    issue="No date range specified for a broad request",
                    suggestion='Adding a date range (e.g., "from January 2024 to June 2024") will significantly speed up processing',
                    severity=Severity.MEDIUM,
                )
            )

        people = []
        for entity in entities:
            if entity.entity_type == EntityType.PERSON and entity.value not in people:
                people.append(entity.value)
        if len(people) > 1:
            ambiguities.append(
                Ambiguity(
                    issue=f"Multiple people mentioned: {', '.join(people)}",
                    suggestion="Clarify which person's records you need, or confirm you need records for all mentioned individuals",
                    severity=Severity.MEDIUM,
                )
            )

        if word_count < BRIEF_REQUEST_WORDS:
            ambiguities.append(
                Ambiguity(
                    issue="Request is very brief and may lack necessary detail",
                    suggestion="Consider adding more context about what specific records or information you're seeking",
                    severity=Severity.LOW,
                )
            )

        return ambiguities


def generate_suggestions(scope: ScopeAnalysis) -> List[str]:
    """Requester-facing tips derived from a scope analysis."""
    suggestions = []

    if not scope.has_date_range:
        suggestions.append("Add a specific date range to narrow your request")

    if scope.ambiguities:
        suggestions.append("Review and clarify the ambiguities identified above")

    if scope.complexity_score > 0.7:
        suggestions.append(
            "Consider breaking this into multiple smaller requests for faster processing"
        )

    if scope.word_count < 30:
        suggestions.append("Provide more detail about what specific information you're seeking")

    return suggestions


def overall_confidence(
    entities: Sequence[EntitySpan],
    departments: Sequence[DepartmentCandidate],
    scope: ScopeAnalysis,
) -> float:
    """Confidence that the request was understood, in [0, 1]."""
    confidence = 0.5
    confidence += min(len(entities) * 0.05, 0.2)

    if departments and departments[0].relevance_score > 0.7:
        confidence += 0.2

    confidence += max(0.0, 0.3 - len(scope.ambiguities) * 0.1)

    return min(round_half_up(confidence, 2), 1.0)
