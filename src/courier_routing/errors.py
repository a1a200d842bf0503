"""Exceptions raised at the edges of the routing service."""

from __future__ import annotations


class CourierRoutingError(Exception):
    """Base class for errors surfaced to API callers."""


class StopsUnavailableError(CourierRoutingError):
    """Pending stops could not be loaded from the deliveries backend."""

    def __init__(self, driver_id: str, reason: str | None = None) -> None:
        self.driver_id = driver_id
        self.reason = reason
        message = f"Could not load stops for driver '{driver_id}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RoutingServiceError(CourierRoutingError):
    """The road routing service failed or returned an unusable response."""
