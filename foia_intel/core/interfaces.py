# foia_intel/core/interfaces.py

"""Storage interfaces the analyzers and flows call into.

The relational schema lives outside this package. Everything here depends
only on these abstract classes; rows travel as plain dicts keyed by UUID
strings.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]


class AnalysisStore(ABC):
    """Persistence for analysis, entity, PII, exemption, and redaction rows."""

    @abstractmethod
    async def create_request_analysis(self, fields: Row) -> Row: ...

    @abstractmethod
    async def create_extracted_entity(self, fields: Row) -> Row: ...

    @abstractmethod
    async def find_document_analysis(self, document_id: str) -> Optional[Row]: ...

    @abstractmethod
    async def create_document_analysis(self, fields: Row) -> Row: ...

    @abstractmethod
    async def update_document_analysis(self, analysis_id: str, fields: Row) -> Row:
        """Raises NotFoundError for an unknown analysis id."""
        ...

    @abstractmethod
    async def clear_analysis_results(self, analysis_id: str) -> None:
        """Deletes the PII, redaction, and exemption rows of an analysis."""
        ...

    @abstractmethod
    async def create_detected_pii(self, fields: Row) -> Row: ...

    @abstractmethod
    async def list_detected_pii(self, analysis_id: str) -> List[Row]: ...

    @abstractmethod
    async def create_exemption_classification(self, fields: Row) -> Row: ...

    @abstractmethod
    async def list_exemptions(self, analysis_id: str) -> List[Row]: ...

    @abstractmethod
    async def create_redaction_suggestion(self, fields: Row) -> Row: ...

    @abstractmethod
    async def find_redaction_suggestion(self, pii_id: str) -> Optional[Row]: ...

    @abstractmethod
    async def update_redaction_status(
        self, redaction_id: str, status: str, analysis_id: Optional[str] = None
    ) -> bool:
        """Sets a suggestion's status.

        Returns False when the id is unknown or, if ``analysis_id`` is
        given, belongs to a different analysis.
        """
        ...


class RequestRepository(ABC):
    """Read/write access to FOIA requests."""

    @abstractmethod
    async def create(self, fields: Row) -> Row: ...

    @abstractmethod
    async def get(self, request_id: str) -> Optional[Row]: ...

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def search_completed(
        self, terms: Sequence[str], statuses: Sequence[str], limit: int
    ) -> List[Row]:
        """Requests in ``statuses`` whose subject or description contains any term.

        Matching is case-insensitive; results are ordered by completion
        date, newest first.
        """
        ...

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]: ...

    @abstractmethod
    async def count_by_priority(self) -> Dict[str, int]: ...

    @abstractmethod
    async def count_overdue(self, now: datetime) -> int: ...


class ActivityLogSink(ABC):
    """Append-only audit trail."""

    @abstractmethod
    async def append(self, entry: Row) -> Row: ...
