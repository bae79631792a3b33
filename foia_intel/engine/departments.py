# foia_intel/engine/departments.py

"""Keyword-frequency routing of request text to handling departments."""

import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from foia_intel.core.domain import DepartmentCandidate
from foia_intel.core.loader import PatternLoader
from foia_intel.logic.scoring import round_half_up

logger = logging.getLogger(__name__)

LONG_KEYWORD_LENGTH = 5
MAX_MATCHED_KEYWORDS = 3

DepartmentTable = Sequence[Tuple[str, str, Sequence[str]]]


class DepartmentRouter:
    """Ranks candidate departments by weighted whole-word keyword hits."""

    def __init__(self, table: Optional[DepartmentTable] = None, limit: int = 5):
        self.table = tuple(table) if table is not None else PatternLoader.get_instance().get_departments()
        self.limit = limit
        self._keyword_regex: Dict[str, Pattern] = {
            keyword: re.compile(r"\b" + re.escape(keyword) + r"\b", re.IGNORECASE)
            for _, _, keywords in self.table
            for keyword in keywords
        }

    def route(self, text: str) -> List[DepartmentCandidate]:
        """Scores every department against the text.

        Args:
            text: Request text

        Returns:
            At most ``limit`` candidates, highest relevance first. The top
            candidate always has relevance 1.0.
        """
        scores: List[Tuple[str, str, int, List[str]]] = []

        for dept_id, name, keywords in self.table:
            score = 0
            matched = []
            for keyword in keywords:
                count = len(self._keyword_regex[keyword].findall(text))
                if count:
                    score += count * (2 if len(keyword) > LONG_KEYWORD_LENGTH else 1)
                    matched.append(keyword)
            if score > 0:
                scores.append((dept_id, name, score, matched))

        max_score = max([score for _, _, score, _ in scores] + [1])

        candidates = [
            DepartmentCandidate(
                id=dept_id,
                name=name,
                relevance_score=round_half_up(score / max_score, 2),
                matched_keywords=matched[:MAX_MATCHED_KEYWORDS],
            )
            for dept_id, name, score, matched in scores
        ]
        # sorted() is stable, so ties keep table order
        candidates = sorted(candidates, key=lambda c: c.relevance_score, reverse=True)

        logger.debug(
            "Department routing complete",
            extra={"scored": len(scores), "returned": min(len(candidates), self.limit)},
        )
        return candidates[: self.limit]
