"""
Failures a dispatch search can settle with.

Adapters raise their own exceptions (GeocodingError, MatrixServiceError);
the session maps them onto these so the presentation layer only has to
tell "fix the address" apart from "try again".
"""


class DispatchError(Exception):
    """Base class. `message` is safe to show to the operator."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AddressNotFound(DispatchError):
    """Geocoding returned zero results. User-correctable."""


class ServiceUnavailable(DispatchError):
    """Geocoding or travel-time service failed. Retry by searching again."""
