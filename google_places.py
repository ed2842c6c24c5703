"""Google Geocoding / Places client used to enrich a property with neighborhood context."""

import logging
from typing import Any, Dict, List

from config import Settings
from service_utils import ServiceCallError, ServiceConfigError, request_json


logger = logging.getLogger(__name__)

SERVICE = "Google Places"

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
PLACE_DETAILS_URL = "https://places.googleapis.com/v1/places/{place_id}"
NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

PLACE_DETAIL_FIELDS = ",".join(
    [
        "id",
        "displayName",
        "formattedAddress",
        "types",
        "location",
        "rating",
        "userRatingCount",
        "priceLevel",
        "nationalPhoneNumber",
        "websiteUri",
        "regularOpeningHours",
        "businessStatus",
        "primaryType",
        "reviews",
        "photos",
        "addressComponents",
        "viewport",
    ]
)
NEARBY_RADIUS_METERS = 1500
POI_TYPES = "school|store|restaurant|park|transit_station"
MAX_POINTS_OF_INTEREST = 10


class GooglePlacesClient:
    def __init__(self, settings: Settings):
        self.api_key = settings.google_places_api_key
        self.timeout = settings.http_timeout_s

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ServiceConfigError(SERVICE, "GOOGLE_PLACES_API_KEY is not set")
        return request_json(SERVICE, "GET", url, self.timeout, params={**params, "key": self.api_key})

    def geocode(self, address: str) -> Dict[str, Any]:
        data = self._get(GEOCODE_URL, {"address": address})
        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.warning(f"Geocoding failed for {address}: {status}")
            raise ServiceCallError(SERVICE, f"Geocoding failed: {status}")
        return results[0]

    def nearby(self, location: Dict[str, Any], place_type: str) -> List[Dict[str, Any]]:
        data = self._get(
            NEARBY_SEARCH_URL,
            {
                "location": f"{location['lat']},{location['lng']}",
                "radius": NEARBY_RADIUS_METERS,
                "type": place_type,
            },
        )
        return data.get("results") or []

    def get_place_details(self, address: str) -> Dict[str, Any]:
        """
        Resolve ``address`` and collect the neighborhood context around it.

        Returns a dict with ``address``, ``location``, ``placeId``,
        ``neighborhoods`` and ``pointsOfInterest``.
        """
        geocoded = self.geocode(address)
        location = geocoded["geometry"]["location"]
        place_id = geocoded["place_id"]

        details = self._get(
            PLACE_DETAILS_URL.format(place_id=place_id),
            {"fields": PLACE_DETAIL_FIELDS},
        )

        neighborhoods = [
            {
                "name": place.get("name"),
                "vicinity": place.get("vicinity"),
                "types": place.get("types"),
            }
            for place in self.nearby(location, "neighborhood")
        ]

        points_of_interest = [
            {
                "name": place.get("name"),
                "type": (place.get("types") or [None])[0],
                "vicinity": place.get("vicinity"),
                "rating": place.get("rating"),
            }
            for place in self.nearby(location, POI_TYPES)[:MAX_POINTS_OF_INTEREST]
        ]

        logger.info(
            f"Places lookup for {address}: {len(neighborhoods)} neighborhoods, "
            f"{len(points_of_interest)} points of interest"
        )
        return {
            "address": details.get("formattedAddress") or address,
            "location": details.get("location") or location,
            "placeId": place_id,
            "neighborhoods": neighborhoods,
            "pointsOfInterest": points_of_interest,
        }
