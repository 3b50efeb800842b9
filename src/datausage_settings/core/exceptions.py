"""Exceptions raised by platform collaborators and the evaluation layer."""

from __future__ import annotations


class StatsUnavailableError(Exception):
    """Raised when the network statistics service cannot be queried.

    The Ethernet usability probe treats this as "no traffic observed"
    instead of propagating it, since traffic history is advisory only.
    """

    def __init__(self, message: str, *, cause: str | None = None) -> None:
        """Initialize StatsUnavailableError.

        Args:
            message: Error message
            cause: Short description of the underlying failure, if known
        """
        super().__init__(message)
        self.cause: str | None = cause
