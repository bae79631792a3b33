# foia_intel/engine/entities.py

"""Entity extraction for FOIA request text.

Combines the request pattern library with two lightweight heuristics:
Title-Case person names and capitalised phrases ending in an
organisation suffix.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from foia_intel.core.definitions import EntityType, ExtractionMethod
from foia_intel.core.domain import EntitySpan
from foia_intel.core.loader import PatternLoader
from foia_intel.engine.patterns import PatternLibrary, get_library

logger = logging.getLogger(__name__)

PERSON_CONFIDENCE = 0.7
ORG_CONFIDENCE = 0.85

NAME_PATTERN = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b")


def context_window(text: str, position: int, radius: int) -> str:
    """Returns the stripped text within ``radius`` characters of ``position``."""
    start = max(0, position - radius)
    end = min(len(text), position + radius)
    return text[start:end].strip()


def deduplicate(entities: Iterable[EntitySpan]) -> List[EntitySpan]:
    """Drops repeated (type, value, start) triples, keeping first-seen order."""
    seen = set()
    unique = []
    for entity in entities:
        if entity.key in seen:
            continue
        seen.add(entity.key)
        unique.append(entity)
    return unique


class EntityExtractor:
    """Extracts positioned, confidence-scored entity spans from request text."""

    def __init__(
        self,
        library: Optional[PatternLibrary] = None,
        context_radius: int = 50,
        common_phrases: Optional[Sequence[str]] = None,
        org_suffixes: Optional[Sequence[str]] = None,
    ):
        loader = PatternLoader.get_instance()
        self.library = library or get_library("request")
        self.context_radius = context_radius
        self.common_phrases = tuple(
            common_phrases
            if common_phrases is not None
            else loader.get_vocabulary("common_phrases")
        )
        suffixes = (
            org_suffixes
            if org_suffixes is not None
            else loader.get_vocabulary("org_suffixes")
        )
        self._org_patterns = tuple(
            re.compile(r"\b(?:[A-Z][\w&'-]*\s+)+" + re.escape(suffix) + r"\.?\b")
            for suffix in suffixes
        )

    def extract(self, text: str) -> List[EntitySpan]:
        """Extracts entities from text.

        Args:
            text: Raw request text

        Returns:
            Deduplicated entity spans: pattern matches first, then people,
            then organisations
        """
        entities: List[EntitySpan] = []
        entities.extend(self._pattern_entities(text))
        entities.extend(self._person_entities(text))
        entities.extend(self._org_entities(text))

        unique = deduplicate(entities)

        logger.debug(
            "Entity extraction complete",
            extra={
                "text_length": len(text),
                "raw_count": len(entities),
                "entity_count": len(unique),
            },
        )
        return unique

    def _pattern_entities(self, text: str) -> List[EntitySpan]:
        results = []
        for pattern in self.library:
            for match in pattern.finditer(text):
                results.append(
                    EntitySpan(
                        entity_type=pattern.name,
                        value=match.group(0),
                        start=match.start(),
                        end=match.end(),
                        confidence=pattern.score,
                        method=ExtractionMethod.PATTERN,
                        context=context_window(text, match.start(), self.context_radius),
                    )
                )
        return results

    def _person_entities(self, text: str) -> List[EntitySpan]:
        results = []
        for match in NAME_PATTERN.finditer(text):
            name = match.group(1)
            if self.is_common_phrase(name):
                continue
            results.append(
                EntitySpan(
                    entity_type=EntityType.PERSON,
                    value=name,
                    start=match.start(1),
                    end=match.end(1),
                    confidence=PERSON_CONFIDENCE,
                    method=ExtractionMethod.HEURISTIC,
                    context=context_window(text, match.start(1), self.context_radius),
                )
            )
        return results

    def _org_entities(self, text: str) -> List[EntitySpan]:
        results = []
        for pattern in self._org_patterns:
            for match in pattern.finditer(text):
                results.append(
                    EntitySpan(
                        entity_type=EntityType.ORG,
                        value=match.group(0),
                        start=match.start(),
                        end=match.end(),
                        confidence=ORG_CONFIDENCE,
                        method=ExtractionMethod.PATTERN,
                        context=context_window(text, match.start(), self.context_radius),
                    )
                )
        return results

    def is_common_phrase(self, value: str) -> bool:
        """True if the candidate name contains a denylisted institutional phrase."""
        return any(phrase in value for phrase in self.common_phrases)
