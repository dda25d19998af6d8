"""Custom exception hierarchy for the swapmap domain."""

from __future__ import annotations


class SwapMapError(RuntimeError):
    """Base class for errors raised by swapmap."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidCoordinateError(SwapMapError, ValueError):
    """Raised when a latitude/longitude pair is not finite or out of range."""


class GeocodingError(SwapMapError):
    """Raised when the geocoding service cannot be reached or decoded."""


class ListingError(SwapMapError):
    """Raised when the listing export cannot be read."""


class MapLifecycleError(SwapMapError):
    """Raised when a map widget cannot be attached to or removed from a container."""
