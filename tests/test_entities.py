"""Tests for the pattern library, lookup tables, and entity extraction."""

import re

import pytest

from foia_intel.core.definitions import EntityType, ExtractionMethod
from foia_intel.core.domain import EntitySpan
from foia_intel.core.exceptions import ConfigurationError
from foia_intel.core.loader import PatternLoader
from foia_intel.engine.entities import EntityExtractor, context_window, deduplicate
from foia_intel.engine.patterns import PatternDef, PatternLibrary, get_library

from conftest import EXAMPLE_REQUEST


class TestLookupTables:
    def test_departments_in_table_order(self):
        ids = [dept_id for dept_id, _, _ in PatternLoader.get_instance().get_departments()]
        assert ids == [
            "police", "building", "finance", "hr", "legal", "clerk", "parks", "public_works",
        ]

    def test_nine_exemptions(self):
        codes = [code for code, _, _, _ in PatternLoader.get_instance().get_exemptions()]
        assert codes == [f"b{i}" for i in range(1, 10)]

    def test_document_pattern_group(self):
        names = [p.name for p in get_library("document")]
        assert names == [
            "SSN", "PHONE", "EMAIL", "CREDIT_CARD", "DRIVERS_LICENSE", "DOB", "ADDRESS", "ZIP_CODE",
        ]

    def test_base_confidences(self):
        library = get_library("document")
        assert library.get("SSN").score == 0.95
        assert library.get("CREDIT_CARD").score == 0.85
        assert library.get("DRIVERS_LICENSE").score == 0.70

    def test_invalid_regex_is_a_configuration_error(self, monkeypatch):
        monkeypatch.setattr(
            PatternLoader,
            "get_patterns",
            lambda self, group: {"BROKEN": {"regex": "(", "score": 0.5}},
        )
        with pytest.raises(ConfigurationError):
            PatternLibrary("request")


class TestEntityExtractor:
    def setup_method(self):
        self.extractor = EntityExtractor()

    def _values(self, entities, entity_type):
        return [e.value for e in entities if e.entity_type == entity_type]

    def test_example_request(self):
        entities = self.extractor.extract(EXAMPLE_REQUEST)

        assert self._values(entities, EntityType.PERSON) == ["John Smith", "Jane Doe"]
        assert self._values(entities, EntityType.ORG) == ["ABC Corp"]

    def test_person_entities_are_heuristic(self):
        entities = self.extractor.extract("Records about Maria Lopez please")
        person = [e for e in entities if e.entity_type == EntityType.PERSON][0]

        assert person.method == ExtractionMethod.HEURISTIC
        assert person.confidence == 0.7
        assert person.start == 14
        assert person.end == 25

    def test_org_entities(self):
        entities = self.extractor.extract("Contract with Acme Widgets LLC for paving")
        org = [e for e in entities if e.entity_type == EntityType.ORG][0]

        assert org.value == "Acme Widgets LLC"
        assert org.confidence == 0.85
        assert org.method == ExtractionMethod.PATTERN

    def test_common_phrases_excluded(self):
        entities = self.extractor.extract("the minutes from The City Council session")
        assert self._values(entities, EntityType.PERSON) == []

    def test_pattern_entities(self):
        text = (
            "Incident on 01/15/2024 at 120 Main Street, fine of $1,500.00, "
            "contact clerk@city.gov or 555-123-4567, see case #4411"
        )
        entities = self.extractor.extract(text)

        assert self._values(entities, EntityType.DATE) == ["01/15/2024"]
        assert self._values(entities, EntityType.ADDRESS) == ["120 Main Street"]
        assert self._values(entities, EntityType.MONEY) == ["$1,500.00"]
        assert self._values(entities, EntityType.EMAIL) == ["clerk@city.gov"]
        assert self._values(entities, EntityType.PHONE) == ["555-123-4567"]
        assert self._values(entities, EntityType.CASE_NUMBER) == ["case #4411"]

        email = [e for e in entities if e.entity_type == EntityType.EMAIL][0]
        assert text[email.start:email.end] == "clerk@city.gov"
        assert email.confidence == 0.95

    def test_no_duplicate_triples(self):
        text = "John Smith met John Smith. Acme Inc and Acme Inc again."
        entities = self.extractor.extract(text)
        keys = [e.key for e in entities]

        assert len(keys) == len(set(keys))

    def test_empty_text(self):
        assert self.extractor.extract("") == []

    def test_pattern_confidence_comes_from_library(self):
        library = [PatternDef("EMAIL", re.compile(r"\S+@\S+"), 0.6)]
        extractor = EntityExtractor(library=library)

        entities = extractor.extract("write to clerk@city.gov today")
        email = [e for e in entities if e.entity_type == EntityType.EMAIL][0]

        assert email.confidence == 0.6

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "John Smith " * 30,
            "Acme Inc, Acme Inc, Acme Inc. John Smith and Jane Doe on 01/15/2024 and 01/15/2024. "
            "Call 555-123-4567 or 555-123-4567, write clerk@city.gov, case #4411 and case #4411, "
            "$1,500.00 paid to Acme Widgets LLC at 120 Main Street",
            " ".join(f"Person{i} Name{i} paid ${i},000.00 on 0{i % 9 + 1}/01/2024" for i in range(40)),
        ],
    )
    def test_triples_unique_and_spans_consistent(self, text):
        entities = self.extractor.extract(text)
        keys = [e.key for e in entities]

        assert len(keys) == len(set(keys))
        for entity in entities:
            assert 0 <= entity.start < entity.end <= len(text)
            assert text[entity.start:entity.end] == entity.value
            assert 0.0 <= entity.confidence <= 1.0


class TestHelpers:
    def test_deduplicate_keeps_first_seen(self):
        first = EntitySpan("PERSON", "Ann Lee", 0, 7, 0.7, "heuristic", "a")
        again = EntitySpan("PERSON", "Ann Lee", 0, 7, 0.9, "pattern", "b")
        other = EntitySpan("PERSON", "Ann Lee", 10, 17, 0.7, "heuristic", "c")

        assert deduplicate([first, again, other]) == [first, other]

    def test_context_window(self):
        text = "a" * 100 + "TARGET" + "b" * 100
        window = context_window(text, 100, 50)

        assert window == "a" * 50 + "TARGET" + "b" * 44
