# foia_intel/core/__init__.py

"""Core domain models and table loading used across the FOIA intelligence layer.

This package provides domain types, exceptions, and the lookup-table loader
shared by the analysis engine and the service flows.
"""
