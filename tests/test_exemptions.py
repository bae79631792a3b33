"""Tests for FOIA exemption scoring and persistence."""

import pytest

from foia_intel.core.definitions import ReviewStatus
from foia_intel.engine.exemptions import ExemptionClassifier


class TestExemptionScoring:
    def setup_method(self):
        self.classifier = ExemptionClassifier()

    def test_national_security(self):
        results = self.classifier.score("classified national security intelligence")

        assert [r.exemption_type for r in results] == ["b1"]
        assert results[0].name == "National Security"
        assert results[0].confidence == pytest.approx(0.425)
        assert results[0].reasoning == (
            "Detected keywords: classified, national security, intelligence"
        )
        assert results[0].page_references == [1]
        assert results[0].id is None

    def test_single_keyword_stays_below_threshold(self):
        # b6: 1 of 4 keywords x 0.85 = 0.2125
        assert self.classifier.score("see medical records") == []

    def test_threshold_is_strict(self):
        classifier = ExemptionClassifier(table=[("b0", "Test", ["alpha", "beta"], 0.6)])
        assert classifier.score("alpha") == []

    def test_case_insensitive(self):
        results = self.classifier.score("DRAFT, DELIBERATIVE and PREDECISIONAL notes")
        assert [r.exemption_type for r in results] == ["b5"]

    def test_empty_keyword_list_ignored(self):
        classifier = ExemptionClassifier(table=[("b0", "Empty", [], 0.9)])
        assert classifier.score("anything") == []


class TestExemptionPersistence:
    async def test_rows_persisted_as_suggested(self, store):
        classifier = ExemptionClassifier()

        results = await classifier.classify(
            "classified national security intelligence", "analysis-1", store
        )

        assert len(results) == 1
        assert results[0].id in store.exemptions
        row = store.exemptions[results[0].id]
        assert row["analysis_id"] == "analysis-1"
        assert row["exemption_type"] == "b1"
        assert row["exemption_name"] == "National Security"
        assert row["status"] == ReviewStatus.SUGGESTED
        assert row["page_references"] == [1]

    async def test_nothing_persisted_without_matches(self, store):
        results = await ExemptionClassifier().classify("routine text", "analysis-1", store)

        assert results == []
        assert store.exemptions == {}
