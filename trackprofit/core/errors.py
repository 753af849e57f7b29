"""
Domain exceptions for TrackProfit.

Services raise these; the server's exception handlers translate them into
HTTP responses.
"""

from __future__ import annotations


class TrackProfitError(Exception):
    """Base class for all TrackProfit domain errors."""


class InvalidMonthLabel(TrackProfitError, ValueError):
    """Raised when a month label is not in ``YYYY-MM`` form."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Invalid month label '{label}', expected YYYY-MM")
        self.label = label


class RecordNotFound(TrackProfitError):
    """Raised when a tracked row does not exist for the requesting user."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} '{key}' not found")
        self.entity = entity
        self.key = key


class ArchiveError(TrackProfitError):
    """Raised when a table cannot be moved to its archive counterpart."""

    def __init__(self, src_table: str, message: str) -> None:
        super().__init__(f"{src_table}: {message}")
        self.src_table = src_table
        self.message = message


class NarrativeGenerationError(TrackProfitError):
    """Raised when the language model fails to produce a narrative."""
