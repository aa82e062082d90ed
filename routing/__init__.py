#Marks routing as a package.
#Re-exports the public adapters (OSRMClient, matrix providers, geocoder,
#great-circle distance) so other modules import from routing without knowing
#internal file names.
#No dispatch logic.

from .osrm_client import OSRMClient, OSRMError
from .geodesy import great_circle_meters
from .units import TravelMode, UnitSystem, format_distance, format_duration
from .matrix_adapter import (
    UNAVAILABLE,
    LegOutcome,
    MatrixServiceError,
    OSRMMatrixProvider,
    TravelLeg,
    TravelMatrixProvider,
    Unavailable,
)
from .google_distance_matrix import GoogleDistanceMatrixProvider
from .geocoder import (
    AddressNotFoundError,
    GeocodeResult,
    Geocoder,
    GeocodingError,
    GeocodingServiceError,
    GoogleGeocoder,
    PlaceSelection,
    RegionBias,
)

__all__ = [
    "OSRMClient",
    "OSRMError",
    "great_circle_meters",
    "TravelMode",
    "UnitSystem",
    "format_distance",
    "format_duration",
    "UNAVAILABLE",
    "LegOutcome",
    "MatrixServiceError",
    "OSRMMatrixProvider",
    "TravelLeg",
    "TravelMatrixProvider",
    "Unavailable",
    "GoogleDistanceMatrixProvider",
    "AddressNotFoundError",
    "GeocodeResult",
    "Geocoder",
    "GeocodingError",
    "GeocodingServiceError",
    "GoogleGeocoder",
    "PlaceSelection",
    "RegionBias",
]
