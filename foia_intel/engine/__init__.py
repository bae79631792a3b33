# foia_intel/engine/__init__.py

"""Engine package providing the pattern library and analysis components.

This package contains the pure, table-driven analyzers used by the request
and document flows: extraction, routing, scoping, estimation, similarity,
classification, PII detection, and exemption scoring.
"""
