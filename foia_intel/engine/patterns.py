# foia_intel/engine/patterns.py

"""Compiled regex pattern library for entity and PII matching."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, Pattern, Tuple

from foia_intel.core.exceptions import ConfigurationError
from foia_intel.core.loader import PatternLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternDef:
    """A named matcher with its base confidence."""

    name: str
    regex: Pattern
    score: float

    def finditer(self, text: str) -> Iterator["re.Match[str]"]:
        """Global, non-overlapping matches, skipping empty ones."""
        for match in self.regex.finditer(text):
            if match.group(0):
                yield match


class PatternLibrary:
    """Immutable, ordered set of compiled patterns for one pattern group."""

    def __init__(self, group: str):
        self.group = group
        self._patterns: Tuple[PatternDef, ...] = self._compile(group)

    @staticmethod
    def _compile(group: str) -> Tuple[PatternDef, ...]:
        loader = PatternLoader.get_instance()
        compiled = []

        for name, definition in loader.get_patterns(group).items():
            flags = re.IGNORECASE if definition.get("ignore_case") else 0
            try:
                regex = re.compile(definition["regex"], flags)
            except (re.error, KeyError) as e:
                raise ConfigurationError(
                    f"Invalid pattern '{name}' in group '{group}': {e}"
                ) from e
            compiled.append(PatternDef(name, regex, float(definition["score"])))

        logger.debug(
            "Compiled pattern group",
            extra={"group": group, "pattern_count": len(compiled)},
        )
        return tuple(compiled)

    def __iter__(self) -> Iterator[PatternDef]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def get(self, name: str) -> PatternDef:
        for pattern in self._patterns:
            if pattern.name == name:
                return pattern
        raise KeyError(name)


_LIBRARY_CACHE: Dict[str, PatternLibrary] = {}


def get_library(group: str) -> PatternLibrary:
    """Returns the cached library for a pattern group ('request' or 'document')."""
    if group not in _LIBRARY_CACHE:
        _LIBRARY_CACHE[group] = PatternLibrary(group)
    return _LIBRARY_CACHE[group]
