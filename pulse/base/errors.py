# ==============================================================================
# Exceptions
# ==============================================================================
"""
Exception hierarchy shared by the stores, ingestion and the HTTP boundary.

The core engine never raises these: data-quality problems degrade gracefully
there. They exist so collaborators can tell "no data yet" apart from
"backend error".
"""


class PulseError(Exception):
    """Base class for all pulse errors."""


class StoreUnavailableError(PulseError):
    """An event store could not read, append or clear its collection.

    A store that simply has no data yet returns an empty collection instead.
    """

    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f"{backend}: {message}")


class IngestionError(PulseError):
    """An incoming event was rejected before reaching the store."""
