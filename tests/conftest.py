"""
Shared test fixtures for the FOIA intelligence layer.
Provides an in-memory store, the shared analysis components, and both services.
"""

from datetime import datetime, timezone

import pytest

from foia_intel.service.document_service import DocumentAnalysisService
from foia_intel.service.pipeline import ComponentRegistry
from foia_intel.service.request_service import RequestAnalysisService
from foia_intel.service.store import InMemoryStore

EXAMPLE_REQUEST = (
    "Please provide all emails between John Smith and Jane Doe from January 2024 "
    "to June 2024 regarding the ABC Corp contract."
)

EXAMPLE_INVOICE = (
    "Invoice Number: 4521\nAmount Due: $1,245.00\nPayment Terms: Net 30\nContact: jane@acme.com"
)


def utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def components():
    return ComponentRegistry.get_instance()


@pytest.fixture
def request_service(store, components):
    return RequestAnalysisService(
        store, repository=store, activity_sink=store, components=components
    )


@pytest.fixture
def document_service(store, components):
    return DocumentAnalysisService(store, activity_sink=store, components=components)
