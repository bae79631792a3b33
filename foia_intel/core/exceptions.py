# foia_intel/core/exceptions.py

"""Custom exception hierarchy for the FOIA intelligence layer.

This module defines the specific error types used throughout the application
to differentiate between configuration, input, analysis, and storage errors.
"""


class FoiaIntelError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigurationError(FoiaIntelError):
    """Raised when configuration or lookup-table loading fails."""

    pass


class ValidationError(FoiaIntelError):
    """Raised when input validation fails (e.g., empty request text)."""

    pass


class AnalysisError(FoiaIntelError):
    """Raised when an analysis step fails unexpectedly."""

    pass


class PersistenceError(FoiaIntelError):
    """Raised when the analysis store cannot complete an operation."""

    pass


class NotFoundError(PersistenceError):
    """Raised when a referenced record does not exist in the store."""

    pass
