#Purpose: Resolve free-text incident addresses to a coordinate.
#One request per dispatch search, biased toward the department's region and
#restricted to one country. Distinguishes "nothing found" from "service down".

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from loguru import logger

from .google_client import GoogleMapsClient, GoogleMapsError

LatLng = Tuple[float, float]


class GeocodingError(Exception):
    """Base class for geocoding failures."""
    pass


class AddressNotFoundError(GeocodingError):
    """The service answered but had zero results for the address."""
    pass


class GeocodingServiceError(GeocodingError):
    """Transport, quota or request failure; the address itself may be fine."""
    pass


@dataclass(frozen=True)
class RegionBias:
    """
    Bounding box used to prefer (not require) results inside the department's area.
    """
    south_west: LatLng
    north_east: LatLng

    def as_param(self) -> str:
        return (
            f"{self.south_west[0]},{self.south_west[1]}"
            f"|{self.north_east[0]},{self.north_east[1]}"
        )


@dataclass(frozen=True)
class GeocodeResult:
    coordinate: LatLng
    formatted_address: str


@dataclass(frozen=True)
class PlaceSelection:
    """
    An autocomplete suggestion the operator picked. It already carries a
    coordinate, so no geocoding round trip is needed.
    """
    coordinate: LatLng
    label: str


class Geocoder(Protocol):
    def geocode(
        self,
        address: str,
        *,
        region_bias: Optional[RegionBias] = None,
        country: Optional[str] = None,
    ) -> GeocodeResult:
        ...


class GoogleGeocoder:
    """
    Google Geocoding API. Only the first result is used.
    """
    def __init__(self, client: Optional[GoogleMapsClient] = None):
        self.client = client or GoogleMapsClient()

    def geocode(
        self,
        address: str,
        *,
        region_bias: Optional[RegionBias] = None,
        country: Optional[str] = None,
    ) -> GeocodeResult:
        address = address.strip()
        if not address:
            raise AddressNotFoundError("No address entered")

        params = {"address": address}
        if region_bias is not None:
            params["bounds"] = region_bias.as_param()
        if country:
            params["components"] = f"country:{country}"

        try:
            data = self.client.get_json("geocode", params)
        except GoogleMapsError as exc:
            raise GeocodingServiceError(str(exc)) from exc

        status = data.get("status")
        if status == "ZERO_RESULTS":
            raise AddressNotFoundError(f"No results found for '{address}'")
        if status != "OK":
            logger.error(f"Geocoding failed with status {status}: {data.get('error_message', '')}")
            raise GeocodingServiceError(f"Geocoding failed: {status}")

        results = data.get("results") or []
        if not results:
            raise AddressNotFoundError(f"No results found for '{address}'")

        first = results[0]
        try:
            location = first["geometry"]["location"]
            coordinate = (float(location["lat"]), float(location["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingServiceError(f"Malformed geocoding result: {exc}") from exc

        return GeocodeResult(
            coordinate=coordinate,
            formatted_address=first.get("formatted_address", address),
        )
