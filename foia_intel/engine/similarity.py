# foia_intel/engine/similarity.py

"""Keyword-overlap search for similar completed FOIA requests."""

import logging
import re
from typing import Any, List, Optional

from foia_intel.core.definitions import RequestStatus
from foia_intel.core.domain import SimilarRequest
from foia_intel.core.interfaces import RequestRepository, Row

logger = logging.getLogger(__name__)

NON_WORD = re.compile(r"\W+")
MIN_TERM_LENGTH = 4
MAX_TERMS = 10


def key_terms(text: str) -> List[str]:
    """Lowercased tokens longer than four characters, first ten in text order."""
    tokens = NON_WORD.split(text.lower())
    return [t for t in tokens if len(t) > MIN_TERM_LENGTH][:MAX_TERMS]


class SimilarityFinder:
    """Finds completed requests that share key terms with a new request.

    The reported similarity is a constant placeholder, not a computed
    score; results are ranked by completion date only. Repository and row
    errors propagate; the request flow decides how to degrade.

    Args:
        repository: Request repository, or None when none is configured
        config: Settings providing ``completed_statuses``,
            ``similar_request_limit`` and ``similarity_placeholder``
    """

    def __init__(self, repository: Optional[RequestRepository], config: Any):
        self.repository = repository
        self.config = config

    async def find_similar(self, text: str) -> List[SimilarRequest]:
        terms = key_terms(text)
        if not terms or self.repository is None:
            return []

        limit = self.config.similar_request_limit
        rows = await self.repository.search_completed(
            terms, statuses=tuple(self.config.completed_statuses), limit=limit
        )

        results = [self._to_similar(row) for row in rows[:limit]]
        logger.debug(
            "Similar request search complete",
            extra={"term_count": len(terms), "match_count": len(results)},
        )
        return results

    def _to_similar(self, row: Row) -> SimilarRequest:
        return SimilarRequest(
            id=row["id"],
            tracking_number=row.get("tracking_number"),
            title=row.get("subject") or "",
            similarity=self.config.similarity_placeholder,
            has_public_records=row.get("status") == RequestStatus.RELEASED,
        )
