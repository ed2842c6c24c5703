"""Helpers for scraping listings with HomeHarvest and summarising them."""

from typing import Optional, List, Dict
import logging
from homeharvest import scrape_property

from schemas import ListingSummary, MarketDataResponse


logger = logging.getLogger(__name__)


def safe_int(value) -> Optional[int]:
    """Safely convert to int, handling None."""
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def safe_float(value) -> Optional[float]:
    """Safely convert to float, handling None."""
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def safe_str(value) -> Optional[str]:
    if value is None:
        return None
    s = str(value)
    return s if s else None


def get_nested(data, *keys, default=None):
    """Walk nested dicts/lists by key or index, returning ``default`` on any miss."""
    for key in keys:
        if isinstance(data, dict):
            data = data.get(key)
        elif isinstance(data, list) and isinstance(key, int):
            if 0 <= key < len(data):
                data = data[key]
            else:
                return default
        else:
            return default
        if data is None:
            return default
    return data


def get_first(data, *paths):
    """Get the first non-empty value from a list of keys or nested paths."""
    for path in paths:
        if isinstance(path, (list, tuple)):
            value = get_nested(data, *path)
        else:
            value = data.get(path) if isinstance(data, dict) else None
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def median(values: List[float]) -> Optional[float]:
    if not values:
        return None
    values_sorted = sorted(values)
    mid = len(values_sorted) // 2
    if len(values_sorted) % 2 == 0:
        return (values_sorted[mid - 1] + values_sorted[mid]) / 2
    return values_sorted[mid]


def safe_scrape(params: dict) -> Optional[List[Dict]]:
    """Scrape listings in raw form, returning None on any error."""
    try:
        result = scrape_property(**{**params, "return_type": "raw"})

        if result and isinstance(result, list):
            logger.info(f"Scrape returned {len(result)} listings")
            return result
        return None
    except Exception as exc:
        logger.warning(f"Scrape failed for params {params}: {str(exc)}")
        return None


def raw_listing_to_summary(prop: Dict) -> ListingSummary:
    """Flatten a raw HomeHarvest listing into the fields a deal screen needs."""
    address_info = get_nested(prop, "location", "address") or {}
    details = prop.get("description") if isinstance(prop.get("description"), dict) else {}

    bathrooms = safe_float(details.get("baths")) or safe_float(prop.get("baths"))
    if not bathrooms:
        full_baths = safe_float(details.get("baths_full")) or 0
        half_baths = safe_float(details.get("baths_half")) or 0
        bathrooms = (full_baths + half_baths * 0.5) or None

    url = safe_str(get_first(prop, "href", "permalink", "property_url"))
    if url and not url.startswith("http"):
        url = f"https://www.realtor.com{url}"

    return ListingSummary(
        address=safe_str(get_first(address_info, "line")) or safe_str(prop.get("street")),
        city=safe_str(address_info.get("city")) or safe_str(prop.get("city")),
        state=safe_str(get_first(address_info, "state_code", "state")) or safe_str(prop.get("state")),
        zip_code=safe_str(address_info.get("postal_code")) or safe_str(prop.get("zip_code")),
        price=safe_float(get_first(prop, "list_price", "price", ("listing", "price"))),
        bedrooms=safe_int(details.get("beds")) or safe_int(prop.get("beds")),
        bathrooms=bathrooms,
        sqft=safe_int(details.get("sqft")) or safe_int(prop.get("sqft")),
        days_on_mls=safe_int(prop.get("days_on_mls")),
        url=url,
    )


def scrape_listings(location: str, limit: int = 50) -> List[ListingSummary]:
    """Current for-sale listings for a city, state or ZIP code."""
    raw_listings = safe_scrape({"location": location, "listing_type": "for_sale", "limit": limit})
    if not raw_listings:
        logger.warning(f"No listings found for {location}")
        return []
    return [raw_listing_to_summary(prop) for prop in raw_listings[:limit]]


def get_location_market_data(city: str, state: str, limit: int = 200) -> MarketDataResponse:
    """Median price, price per square foot and days on market for a city."""
    location = f"{city}, {state}"
    listings = scrape_listings(location, limit=limit)

    prices = [listing.price for listing in listings if listing.price]
    price_per_sqft = [
        listing.price / listing.sqft
        for listing in listings
        if listing.price and listing.sqft
    ]
    days_on_market = [float(listing.days_on_mls) for listing in listings if listing.days_on_mls is not None]

    return MarketDataResponse(
        location=location,
        median_home_price=median(prices),
        price_per_sqft=round(median(price_per_sqft), 2) if price_per_sqft else None,
        days_on_market=median(days_on_market),
        sample_size=len(prices),
    )
