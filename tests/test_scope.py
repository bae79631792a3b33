"""Tests for scope, complexity, ambiguity findings, and suggestion helpers."""

import pytest

from foia_intel.core.definitions import Severity
from foia_intel.core.domain import DepartmentCandidate, EntitySpan
from foia_intel.engine.departments import DepartmentRouter
from foia_intel.engine.entities import EntityExtractor
from foia_intel.engine.scope import (
    ScopeAnalyzer,
    complexity_score,
    count_words,
    estimate_documents,
    generate_suggestions,
    has_breadth_terms,
    has_date_range,
    overall_confidence,
)

from conftest import EXAMPLE_REQUEST


def person(value, start):
    return EntitySpan("PERSON", value, start, start + len(value), 0.7, "heuristic")


class TestSignals:
    def test_count_words(self):
        assert count_words("  records  for\tthe park ") == 4
        assert count_words("") == 0

    @pytest.mark.parametrize(
        "text",
        [
            "records from last year",
            "between March and May",
            "reports since the audit",
            "January to 2024",
            "the 03/15/2024 meeting",
        ],
    )
    def test_date_range_detected(self, text):
        assert has_date_range(text)

    def test_date_range_needs_whole_words(self):
        assert not has_date_range("Send the records to me")
        assert not has_date_range("fromage and frontier files")

    def test_breadth_terms(self):
        assert has_breadth_terms("ANY records")
        assert not has_breadth_terms("a wallet and many files")


class TestComplexityAndVolume:
    def test_minimum_with_date_range(self):
        assert complexity_score(0, True, False, 0, 0) == 0.1

    def test_missing_date_range_scores_higher(self):
        assert complexity_score(0, False, False, 0, 0) == 0.2

    def test_mid_range(self):
        assert complexity_score(60, True, True, 2, 4) == 0.7

    def test_clamped_to_one(self):
        assert complexity_score(150, False, True, 3, 6) == 1.0

    def test_estimate_documents_narrow(self):
        estimate = estimate_documents(False, 0)
        assert (estimate.min, estimate.max) == (25, 100)

    def test_estimate_documents_broad_multi_department(self):
        estimate = estimate_documents(True, 3)
        assert (estimate.min, estimate.max) == (210, 840)


class TestScopeAnalyzer:
    def setup_method(self):
        self.analyzer = ScopeAnalyzer()

    def test_example_request(self):
        entities = EntityExtractor().extract(EXAMPLE_REQUEST)
        departments = DepartmentRouter().route(EXAMPLE_REQUEST)

        scope = self.analyzer.analyze(EXAMPLE_REQUEST, entities, departments)

        assert scope.has_date_range
        assert scope.estimated_timeframe == "specified"
        assert scope.word_count == 21
        assert scope.department_count == 1
        assert scope.complexity_score == 0.4
        assert scope.estimated_documents.to_dict() == {"min": 100, "max": 400}
        assert [a.severity for a in scope.ambiguities] == [Severity.HIGH, Severity.MEDIUM]
        assert scope.ambiguities[1].issue == "Multiple people mentioned: John Smith, Jane Doe"

    def test_broad_request_without_dates(self):
        scope = self.analyzer.analyze("Give me every record about the park.", [], [])

        assert not scope.has_date_range
        assert scope.estimated_timeframe == "unspecified"
        assert [a.severity for a in scope.ambiguities] == [Severity.MEDIUM, Severity.LOW]
        assert scope.ambiguities[0].issue.startswith("No date range")

    def test_repeated_person_counts_once(self):
        text = "Ann Lee wrote to Ann Lee " + "about the budget " * 10
        entities = [person("Ann Lee", 0), person("Ann Lee", 17)]

        scope = self.analyzer.analyze(text, entities, [])

        assert all("Multiple people" not in a.issue for a in scope.ambiguities)

    def test_empty_text_is_brief(self):
        scope = self.analyzer.analyze("", [], [])

        assert scope.word_count == 0
        assert [a.severity for a in scope.ambiguities] == [Severity.LOW]


class TestSuggestionsAndConfidence:
    def test_example_request_suggestions(self):
        entities = EntityExtractor().extract(EXAMPLE_REQUEST)
        departments = DepartmentRouter().route(EXAMPLE_REQUEST)
        scope = ScopeAnalyzer().analyze(EXAMPLE_REQUEST, entities, departments)

        assert generate_suggestions(scope) == [
            "Review and clarify the ambiguities identified above",
            "Provide more detail about what specific information you're seeking",
        ]
        assert overall_confidence(entities, departments, scope) == 0.95

    def test_broad_undated_request_suggests_date_range(self):
        scope = ScopeAnalyzer().analyze(
            "all records " * 60, [], []
        )
        suggestions = generate_suggestions(scope)

        assert "Add a specific date range to narrow your request" in suggestions
        assert (
            "Consider breaking this into multiple smaller requests for faster processing"
            not in suggestions
        )

    def test_low_relevance_earns_no_routing_bonus(self):
        scope = ScopeAnalyzer().analyze("x", [], [])
        low = [DepartmentCandidate("parks", "Parks & Recreation", 0.5)]

        # one ambiguity leaves 0.2 of the clarity bonus
        assert overall_confidence([], low, scope) == 0.7


class TestScopeBounds:
    @pytest.mark.parametrize("word_count", [0, 1, 50, 51, 100, 101, 5000])
    @pytest.mark.parametrize("date_range", [True, False])
    @pytest.mark.parametrize("breadth", [True, False])
    @pytest.mark.parametrize("department_count", [0, 1, 3, 8])
    @pytest.mark.parametrize("entity_count", [0, 4, 6, 50])
    def test_complexity_in_unit_interval(
        self, word_count, date_range, breadth, department_count, entity_count
    ):
        score = complexity_score(word_count, date_range, breadth, department_count, entity_count)

        assert 0.0 <= score <= 1.0

    @pytest.mark.parametrize("breadth", [True, False])
    @pytest.mark.parametrize("department_count", [0, 1, 2, 3, 8])
    def test_document_range_ordered(self, breadth, department_count):
        documents = estimate_documents(breadth, department_count)

        assert 0 < documents.min <= documents.max

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "park",
            EXAMPLE_REQUEST,
            "all " * 400 + "police permit budget employee lawsuit meeting park road",
        ],
    )
    def test_pipeline_scope_bounds(self, text):
        entities = EntityExtractor().extract(text)
        departments = DepartmentRouter().route(text)

        scope = ScopeAnalyzer().analyze(text, entities, departments)

        assert 0.0 <= scope.complexity_score <= 1.0
        assert scope.estimated_documents.min <= scope.estimated_documents.max
        assert 0.0 <= overall_confidence(entities, departments, scope) <= 1.0
