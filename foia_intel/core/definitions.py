# foia_intel/core/definitions.py

"""Type vocabularies and status constants for FOIA request and document analysis."""


class EntityType:
    """Constants representing entity types extracted from request text."""

    PERSON = "PERSON"
    ORG = "ORG"
    SSN = "SSN"
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    DATE = "DATE"
    MONEY = "MONEY"
    CASE_NUMBER = "CASE_NUMBER"
    ADDRESS = "ADDRESS"


class PiiType:
    """Constants representing PII types detected at document granularity."""

    SSN = "SSN"
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    CREDIT_CARD = "CREDIT_CARD"
    DRIVERS_LICENSE = "DRIVERS_LICENSE"
    DOB = "DOB"
    ADDRESS = "ADDRESS"
    ZIP_CODE = "ZIP_CODE"


class ExtractionMethod:
    PATTERN = "pattern"
    HEURISTIC = "heuristic"


class Severity:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RedactionMethod:
    REPLACE = "replace"
    BLACK_BOX = "black_box"


class ProcessingStatus:
    """Lifecycle of a document analysis record."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ReviewStatus:
    """Review states for exemption classifications."""

    SUGGESTED = "suggested"
    APPROVED = "approved"
    REJECTED = "rejected"


class RedactionStatus(ReviewStatus):
    """Review states for redaction suggestions, which may also be applied."""

    APPLIED = "applied"


class RequestStatus:
    """Subset of FOIA request statuses the analysis layer reads."""

    SUBMITTED = "submitted"
    RELEASED = "released"
    CLOSED = "closed"
    DENIED = "denied"

    TERMINAL = (RELEASED, CLOSED, DENIED)


class ActivityType:
    AI_ANALYSIS = "ai_analysis"
    DOCUMENT_ANALYZED = "document_analyzed"
    REDACTION_APPROVED = "redaction_approved"


OTHER_DOCUMENT_TYPE = "other"
REDACTED_PLACEHOLDER = "***REDACTED***"
