# foia_intel/service/store.py

"""In-memory backend for every storage interface in ``core.interfaces``."""

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from foia_intel.core.definitions import ProcessingStatus, RequestStatus
from foia_intel.core.exceptions import NotFoundError
from foia_intel.core.interfaces import (
    ActivityLogSink,
    AnalysisStore,
    RequestRepository,
    Row,
)

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore(AnalysisStore, RequestRepository, ActivityLogSink):
    """Dict-backed implementation of every storage interface.

    Used by the operator console and the test suite. Each call works on
    copies so callers never hold references into the store.
    """

    def __init__(self, requests: Optional[Iterable[Row]] = None):
        self.request_analyses: Dict[str, Row] = {}
        self.entities: Dict[str, Row] = {}
        self.document_analyses: Dict[str, Row] = {}
        self.detected_pii: Dict[str, Row] = {}
        self.exemptions: Dict[str, Row] = {}
        self.redactions: Dict[str, Row] = {}
        self.requests: Dict[str, Row] = {}
        self.activity: List[Row] = []

        for request in requests or []:
            row = dict(request)
            row.setdefault("id", _new_id())
            self.requests[row["id"]] = row

    @staticmethod
    def _insert(table: Dict[str, Row], fields: Row) -> Row:
        row = dict(fields)
        row["id"] = _new_id()
        row.setdefault("created_at", _utcnow())
        table[row["id"]] = row
        return dict(row)

    # -- AnalysisStore -----------------------------------------------------

    async def create_request_analysis(self, fields: Row) -> Row:
        return self._insert(self.request_analyses, fields)

    async def create_extracted_entity(self, fields: Row) -> Row:
        return self._insert(self.entities, fields)

    async def find_document_analysis(self, document_id: str) -> Optional[Row]:
        for row in self.document_analyses.values():
            if row["document_id"] == document_id:
                return dict(row)
        return None

    async def create_document_analysis(self, fields: Row) -> Row:
        row = {"processing_status": ProcessingStatus.PENDING, "metadata": {}}
        row.update(fields)
        return self._insert(self.document_analyses, row)

    async def update_document_analysis(self, analysis_id: str, fields: Row) -> Row:
        if analysis_id not in self.document_analyses:
            raise NotFoundError(f"Document analysis not found: {analysis_id}")
        self.document_analyses[analysis_id].update(fields)
        return dict(self.document_analyses[analysis_id])

    async def clear_analysis_results(self, analysis_id: str) -> None:
        pii_ids = {k for k, r in self.detected_pii.items() if r["analysis_id"] == analysis_id}
        self.detected_pii = {k: r for k, r in self.detected_pii.items() if k not in pii_ids}
        self.redactions = {k: r for k, r in self.redactions.items() if r["pii_id"] not in pii_ids}
        self.exemptions = {
            k: r for k, r in self.exemptions.items() if r["analysis_id"] != analysis_id
        }

    async def create_detected_pii(self, fields: Row) -> Row:
        return self._insert(self.detected_pii, fields)

    async def list_detected_pii(self, analysis_id: str) -> List[Row]:
        return [dict(r) for r in self.detected_pii.values() if r["analysis_id"] == analysis_id]

    async def create_exemption_classification(self, fields: Row) -> Row:
        return self._insert(self.exemptions, fields)

    async def list_exemptions(self, analysis_id: str) -> List[Row]:
        return [dict(r) for r in self.exemptions.values() if r["analysis_id"] == analysis_id]

    async def create_redaction_suggestion(self, fields: Row) -> Row:
        return self._insert(self.redactions, fields)

    async def find_redaction_suggestion(self, pii_id: str) -> Optional[Row]:
        for row in self.redactions.values():
            if row["pii_id"] == pii_id:
                return dict(row)
        return None

    async def update_redaction_status(
        self, redaction_id: str, status: str, analysis_id: Optional[str] = None
    ) -> bool:
        row = self.redactions.get(redaction_id)
        if row is None:
            return False
        if analysis_id is not None:
            pii = self.detected_pii.get(row["pii_id"])
            if pii is None or pii["analysis_id"] != analysis_id:
                return False
        row["status"] = status
        return True

    # -- RequestRepository -------------------------------------------------

    async def create(self, fields: Row) -> Row:
        row = {"status": RequestStatus.SUBMITTED, "priority": "normal"}
        row.update(fields)
        return self._insert(self.requests, row)

    async def get(self, request_id: str) -> Optional[Row]:
        row = self.requests.get(request_id)
        return dict(row) if row else None

    async def count(self) -> int:
        return len(self.requests)

    async def search_completed(
        self, terms: Sequence[str], statuses: Sequence[str], limit: int
    ) -> List[Row]:
        lowered = [t.lower() for t in terms]
        matches = []
        for row in self.requests.values():
            if row.get("status") not in statuses:
                continue
            haystack = f"{row.get('subject') or ''}\n{row.get('description') or ''}".lower()
            if any(term in haystack for term in lowered):
                matches.append(row)

        oldest = datetime.min.replace(tzinfo=timezone.utc)
        matches.sort(key=lambda r: r.get("date_completed") or oldest, reverse=True)
        return [dict(r) for r in matches[:limit]]

    async def count_by_status(self) -> Dict[str, int]:
        return dict(Counter(r.get("status") for r in self.requests.values()))

    async def count_by_priority(self) -> Dict[str, int]:
        return dict(Counter(r.get("priority") for r in self.requests.values()))

    async def count_overdue(self, now: datetime) -> int:
        return sum(
            1
            for r in self.requests.values()
            if r.get("date_due") is not None
            and r["date_due"] < now
            and r.get("status") not in RequestStatus.TERMINAL
        )

    # -- ActivityLogSink ---------------------------------------------------

    async def append(self, entry: Row) -> Row:
        row = dict(entry)
        row["id"] = _new_id()
        self.activity.append(row)
        return dict(row)
