#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/table)
#timeouts and error handling
#parsing response JSON into your internal shape
#It should not contain dispatch rules or ranking.


from dotenv import load_dotenv
import os
from typing import List, Tuple, Dict, Optional
import requests
from loguru import logger

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("OSRM_BASE_URL")

# Internal coordinate type: (lat, lng)
LatLng = Tuple[float, float]

class OSRMError(Exception):
    """Raised when OSRM cannot be reached or answers with a non-Ok code."""
    pass

class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lng) → OSRM (lng,lat)
    - Return normalized outputs

    """
    def __init__(self, profile: str = "driving", timeout: int = 5, base_url: Optional[str] = None):
        self.base_url = (base_url or BASE_URL or "").rstrip("/")
        self.timeout = timeout #seconds to wait for OSRM before giving up
        self.profile = profile #the mode of transportation (driving, foot, bike)

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinates(self, coords: List[LatLng]) -> str:
        """Convert list of (lat, lng) to OSRM format 'lng,lat;lng,lat;...'"""
        return ';'.join([f"{lng},{lat}" for lat, lng in coords])

    def _get(self, url: str, params: Dict[str, str]) -> dict:
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"OSRM request to {self.profile} profile failed: {exc}")
            raise OSRMError(f"OSRM request failed: {exc}") from exc

        #validating OSRM response
        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")
        return data

    #----------------
    # table service (batch routing)
    #----------------
    def compute_table(self, sources: List[LatLng],
                      destinations: List[LatLng]
                      ) -> Dict[str, List[List[Optional[float]]]]:
        """
        calls the OSRM /table endpoint.
        used to get travel metrics from many members to one incident in a single request.

        returns :
        {
            "durations": [[seconds | None, ...], ...],  # rows = sources, cols = destinations
            "distances": [[meters | None, ...], ...],
        }
        A None cell means OSRM could not route that pair.
        """
        if not sources or not destinations:
            return {"durations": [], "distances": []}

        coordinates = self.format_coordinates(list(sources) + list(destinations))
        source_index = ";".join(str(i) for i in range(len(sources)))
        destination_index = ";".join(
            str(i) for i in range(len(sources), len(sources) + len(destinations))
        )
        params = {
            "sources": source_index,
            "destinations": destination_index,
            "annotations": "duration,distance",
        }

        url = f"{self.base_url}/table/v1/{self.profile}/{coordinates}"
        data = self._get(url, params)

        durations = data.get("durations")
        distances = data.get("distances")
        if durations is None or distances is None:
            raise OSRMError("OSRM table response is missing durations or distances")

        return {
            "durations": durations,
            "distances": distances,
        }
