"""Property analysis endpoints and investment math."""

from typing import Any, Union
import logging
import math

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from dependencies import get_openai_service, get_places_client
from google_places import GooglePlacesClient
from openai_service import OpenAIService
from prompts import build_property_analysis_prompt, format_address
from schemas import (
    InvestmentMetrics,
    PropertyAnalysisResponse,
    RealEstateDocument,
    ValidationErrorResponse,
)
from service_utils import safe_call
from validation import validate_real_estate_data


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/property-analysis", tags=["property-analysis"])

Number = Union[int, float]

NEIGHBORHOOD_PLACEHOLDER = "Failed to fetch neighborhood data"
NARRATIVE_PLACEHOLDER = "Failed to generate AI analysis"

SEVENTY_RULE_RATIO = 0.7
MONTHLY_HOLDING_FIELDS = ("monthly_insurance", "monthly_taxes", "monthly_utilities", "monthly_other")


def percent_of(numerator: Number, denominator: Number) -> float:
    """``numerator / denominator * 100``; a zero denominator gives inf or nan rather than raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1, denominator)
    return numerator / denominator * 100


def format_percent(value: float) -> str:
    """Two-decimal string, with ``Infinity``/``-Infinity``/``NaN`` for non-finite values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    # + 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:.2f}"


def calculate_holding_costs(document: RealEstateDocument) -> Number:
    holding = document.financials.holding_costs if document.financials else None
    if holding is None:
        return 0
    monthly = sum(getattr(holding, name) or 0 for name in MONTHLY_HOLDING_FIELDS)
    return monthly * (holding.estimated_holding_period_months or 0)


def calculate_investment_metrics(document: RealEstateDocument) -> InvestmentMetrics:
    """
    Profitability figures for a validated document.

    ``rehab_costs`` comes from ``financials.rehabilitation_costs`` only; the
    property's own ``renovation_budget`` is not used here.
    """
    prop = document.property
    purchase_price = prop.purchase_price
    arv = prop.arv

    potential_profit = arv - purchase_price
    roi = percent_of(potential_profit, purchase_price)

    total_investment = purchase_price
    rehab_costs: Number = 0
    holding_costs: Number = 0

    financials = document.financials
    if financials is not None:
        if financials.purchase_costs is not None and financials.purchase_costs.closing_costs:
            total_investment += financials.purchase_costs.closing_costs

        if financials.rehabilitation_costs is not None and financials.rehabilitation_costs.total_rehab_budget:
            rehab_costs = financials.rehabilitation_costs.total_rehab_budget
            total_investment += rehab_costs

        if financials.holding_costs is not None:
            holding_costs = calculate_holding_costs(document)
            total_investment += holding_costs

    adjusted_profit = arv - total_investment
    adjusted_roi = percent_of(adjusted_profit, total_investment)

    return InvestmentMetrics(
        purchase_price=purchase_price,
        arv=arv,
        potential_profit=potential_profit,
        roi=format_percent(roi),
        total_investment=total_investment,
        rehab_costs=rehab_costs,
        holding_costs=holding_costs,
        adjusted_profit=adjusted_profit,
        adjusted_roi=format_percent(adjusted_roi),
        seventy_rule_max_offer=SEVENTY_RULE_RATIO * arv - rehab_costs,
    )


@router.post("", response_model=PropertyAnalysisResponse)
def analyze_property(
    request: Request,
    payload: Any = Body(None),
    places_client: GooglePlacesClient = Depends(get_places_client),
    openai_service: OpenAIService = Depends(get_openai_service),
):
    """
    Validate a real estate document, enrich it and return the combined analysis.

    Neighborhood lookup and narrative generation degrade to ``{"error": ...}``
    placeholders; only validation failures change the status code.
    """
    client_ip = request.client.host if request.client else None
    result = validate_real_estate_data(payload)
    if not result.valid:
        errors = [error.model_dump() for error in result.errors]
        logger.warning(
            f"Invalid property data received: {len(errors)} errors, client_ip={client_ip}, errors={errors}"
        )
        return JSONResponse(
            status_code=400,
            content=ValidationErrorResponse(errors=result.errors).model_dump(),
        )

    document = result.document
    property_id = document.property.id
    logger.info(f"Property data validation successful: property_id={property_id}, client_ip={client_ip}")

    formatted_address = format_address(document.property)
    enrichment = safe_call(
        lambda: places_client.get_place_details(formatted_address),
        service="Google Places",
        placeholder=NEIGHBORHOOD_PLACEHOLDER,
        property_id=property_id,
    )

    metrics = calculate_investment_metrics(document)

    prompt = build_property_analysis_prompt(document, enrichment.to_response())
    narrative = safe_call(
        lambda: openai_service.get_property_analysis(prompt),
        service="OpenAI",
        placeholder=NARRATIVE_PLACEHOLDER,
        property_id=property_id,
    )

    return PropertyAnalysisResponse(
        property=payload["property"],
        enrichment_data=enrichment.to_response(),
        investment_metrics=metrics,
        narrative=narrative.to_response(),
    )


@router.get("/{property_id}")
def get_property_analysis(property_id: str):
    # No persistence layer; this only acknowledges the id.
    logger.info(f"Fetching property analysis for ID: {property_id}")
    return {
        "message": f"Property analysis for ID: {property_id}",
        "status": "success",
    }
