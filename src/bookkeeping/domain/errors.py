"""Error taxonomy for data-pass synchronization.

``ParseError`` and ``DatasetDetailFetchError`` are recovered per record and
reported; ``ExternalSourceError`` and ``PersistenceError`` abort a run.
"""

from __future__ import annotations


class SynchronizationError(RuntimeError):
    """Base class for synchronization failures."""


class ParseError(SynchronizationError, ValueError):
    """Raised when a name does not follow the expected naming convention."""


class ExternalSourceError(SynchronizationError):
    """Raised when the external data source cannot be read."""


class DatasetDetailFetchError(ExternalSourceError):
    """Raised when the details of a single data pass cannot be fetched."""

    def __init__(self, data_pass_name: str, message: str) -> None:
        super().__init__(f"{data_pass_name}: {message}")
        self.data_pass_name = data_pass_name


class PersistenceError(SynchronizationError):
    """Raised when the store rejects a read or write."""
