"""Listing and market-snapshot endpoints backed by HomeHarvest."""

import logging

from fastapi import APIRouter, Query

import property_utils
from schemas import ListingsResponse, MarketDataResponse


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["market"])


@router.get("/listings", response_model=ListingsResponse)
def listings(
    location: str = Query(..., description="City, state or ZIP code (e.g., 'Austin, TX' or '78701')"),
    limit: int = Query(50, description="Maximum results to return", ge=1, le=500),
):
    """
    Current for-sale listings for a location.
    """
    logger.info(f"Listings request: location={location}, limit={limit}")
    found = property_utils.scrape_listings(location, limit=limit)
    logger.info(f"Found {len(found)} listings for {location}")
    return ListingsResponse(location=location, count=len(found), listings=found)


@router.get("/market-data", response_model=MarketDataResponse)
def market_data(
    city: str = Query(..., description="City name (e.g., 'Austin')"),
    state: str = Query(..., description="State code (e.g., 'TX')"),
    limit: int = Query(200, description="Maximum listings to analyze", ge=1, le=500),
):
    """
    Median price, price per square foot and days on market for a city.
    """
    logger.info(f"Market data request: location={city}, {state}")
    return property_utils.get_location_market_data(city, state, limit=limit)
