# main.py

"""Streamlit operator console for the FOIA intelligence layer.

Lets staff draft-check a FOIA request and analyze extracted document text
for PII, exemptions, and redaction suggestions, backed by an in-memory
store for the session.
"""

import asyncio
import logging

import streamlit as st

from foia_intel.core.exceptions import FoiaIntelError, ValidationError
from foia_intel.logging_config import configure_logging
from foia_intel.service.config import settings
from foia_intel.service.document_service import DocumentAnalysisService
from foia_intel.service.pipeline import analyze_request_safe
from foia_intel.service.request_service import RequestAnalysisService
from foia_intel.service.store import InMemoryStore

configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


def _get_store() -> InMemoryStore:
    if "store" not in st.session_state:
        st.session_state["store"] = InMemoryStore()
    return st.session_state["store"]


def render_request_tab(store: InMemoryStore) -> None:
    """Request Architect: entities, departments, scope, and estimates."""
    text = st.text_area(
        "Request Text",
        height=250,
        placeholder="Please provide all emails between ... from January 2024 to June 2024 ...",
    )

    if not st.button("Analyze Request", type="primary"):
        return

    service = RequestAnalysisService(store, repository=store, activity_sink=store)

    try:
        with st.spinner("Analyzing request..."):
            result = asyncio.run(analyze_request_safe(service, text))
    except ValidationError as e:
        st.warning(str(e))
        logger.warning("Request analysis attempted with empty input")
        return

    if result.error:
        st.error(f"Analysis unavailable: {result.error}")

    scope = result.scope_analysis
    col1, col2, col3 = st.columns(3)
    col1.metric("Complexity", f"{scope.complexity_score:.2f}")
    col2.metric(
        "Estimated documents",
        f"{scope.estimated_documents.min}-{scope.estimated_documents.max}",
    )
    if result.processing_time_estimate:
        col3.metric("Business days", result.processing_time_estimate.business_days)

    st.subheader("Suggested Departments")
    st.table([d.to_dict() for d in result.suggested_departments])

    st.subheader("Entities")
    st.table([e.to_dict() for e in result.entities])

    if scope.ambiguities:
        st.subheader("Ambiguities")
        for ambiguity in scope.ambiguities:
            st.markdown(f"**{ambiguity.severity.upper()}** {ambiguity.issue}  \n_{ambiguity.suggestion}_")

    if result.fee_estimate:
        st.subheader("Fee Estimate")
        st.write(f"${result.fee_estimate.min} - ${result.fee_estimate.max}")
        st.write(result.fee_estimate.factors)

    for suggestion in result.suggestions:
        st.info(suggestion)


def render_document_tab(store: InMemoryStore) -> None:
    """Document review: type, PII, exemptions, and redaction approval."""
    document_id = st.text_input("Document ID", value="doc-1")
    page_count = st.number_input("Page count", min_value=1, value=1)
    text = st.text_area("Extracted Document Text", height=250)

    service = DocumentAnalysisService(store, activity_sink=store)

    if st.button("Analyze Document", type="primary"):
        try:
            with st.spinner("Analyzing document..."):
                result = asyncio.run(
                    service.analyze_document(document_id, text, page_count=int(page_count))
                )
            st.session_state["last_document"] = result
            st.success(
                f"Classified as {result.document_type.type} "
                f"({result.document_type.confidence:.2f}). "
                f"Found {len(result.detected_pii)} PII items."
            )
        except ValidationError as e:
            st.warning(str(e))
        except FoiaIntelError:
            st.error("Document analysis failed.")
            logger.error("Document analysis failed in console", exc_info=True)

    result = st.session_state.get("last_document")
    if result is None:
        return

    st.subheader("Detected PII")
    st.table([p.to_dict() for p in result.detected_pii])

    st.subheader("Exemptions")
    st.table([e.to_dict() for e in result.exemptions])

    st.subheader("Redaction Suggestions")
    selected = []
    for suggestion in result.redaction_suggestions:
        label = f"{suggestion.pii_type}: {suggestion.method} ({suggestion.reason})"
        if st.checkbox(label, key=suggestion.id):
            selected.append(suggestion.id)

    if st.button("Approve Selected Redactions") and selected:
        outcome = asyncio.run(service.apply_redactions(result.analysis_id, selected))
        st.success(f"{outcome['approvedCount']} redaction(s) approved. {outcome['message']}")


def main():
    """Run the Streamlit application UI."""
    st.set_page_config(layout="wide", page_title="FOIA Intelligence Console")

    st.title("FOIA Intelligence Console")
    st.markdown(
        "Triage public-records requests and review documents for PII and exemptions before release."
    )
    st.markdown("---")

    store = _get_store()
    request_tab, document_tab = st.tabs(["Request Architect", "Document Review"])

    with request_tab:
        render_request_tab(store)

    with document_tab:
        render_document_tab(store)

    with st.sidebar:
        st.header("About")
        st.markdown("""
        Pattern-based analysis only; confidence scores are heuristic.

        - **Request Architect**: entities, department routing, scope, fee and timeline
        - **Document Review**: document type, PII with masking, FOIA exemptions b1-b9
        """)

        st.header("Session")
        st.write(f"Request analyses: {len(store.request_analyses)}")
        st.write(f"Document analyses: {len(store.document_analyses)}")


if __name__ == "__main__":
    main()
