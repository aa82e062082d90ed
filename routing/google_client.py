#Purpose: The Google Maps web-service "adapter/client".
#Sole responsibility: send authenticated GET requests to the Maps JSON APIs
#and hand back the decoded body. Status interpretation is left to callers
#(geocoder, distance matrix) because each API reports "no result" differently.

from dotenv import load_dotenv
import os
from typing import Any, Dict, Optional
import requests
from loguru import logger

# Example in .env:
# GOOGLE_MAPS_KEY=AIza...
load_dotenv()
API_KEY = os.getenv("GOOGLE_MAPS_KEY")

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api"


class GoogleMapsError(Exception):
    """Transport failure or undecodable response from a Google Maps API."""
    pass


class GoogleMapsClient:
    def __init__(self, api_key: Optional[str] = None, timeout: int = 5, base_url: str = DEFAULT_BASE_URL):
        self.api_key = api_key or API_KEY
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

        if not self.api_key:
            raise ValueError("Google Maps API key not set. Please set GOOGLE_MAPS_KEY in the .env file.")

    def get_json(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        GET {base_url}/{endpoint}/json with the API key attached.
        """
        url = f"{self.base_url}/{endpoint}/json"
        try:
            response = requests.get(url, params={**params, "key": self.api_key}, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            # never log the url, it carries the key
            logger.error(f"Google Maps {endpoint} request failed: {type(exc).__name__}")
            raise GoogleMapsError(f"{endpoint} request failed: {exc}") from exc
