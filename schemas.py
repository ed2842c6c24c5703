"""Shared Pydantic models for the Property Analysis API.

The request models double as the declarative schema for an inbound real
estate document. Optional fields default to ``None`` but are not declared
nullable, so an explicit ``null`` in the payload is rejected the same way a
wrong type is.
"""

import math
import re
import sys
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    PlainValidator,
    StrictBool,
    StrictStr,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


# Field types
def _check_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "Input should be a valid number")
    # Integers past the float range become a signed infinity.
    if isinstance(value, int) and abs(value) > sys.float_info.max:
        return math.inf if value > 0 else -math.inf
    return value


def bounded_number(minimum: float, maximum: float):
    """A number type that must fall within ``[minimum, maximum]``."""

    def check(value: Any) -> Union[int, float]:
        value = _check_number(value)
        if value < minimum:
            raise PydanticCustomError(
                "greater_than_equal",
                "Input should be greater than or equal to {ge}",
                {"ge": minimum},
            )
        if value > maximum:
            raise PydanticCustomError(
                "less_than_equal",
                "Input should be less than or equal to {le}",
                {"le": maximum},
            )
        return value

    return Annotated[Union[int, float], PlainValidator(check)]


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_TIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}(:?\d{2})?)$"
)


def _check_date(value: str) -> str:
    try:
        if not _DATE_RE.match(value):
            raise ValueError(value)
        date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("date_format", 'Input should be a valid date in the format "YYYY-MM-DD"')
    return value


def _check_date_time(value: str) -> str:
    try:
        if not _DATE_TIME_RE.match(value):
            raise ValueError(value)
        datetime.fromisoformat(value.upper())
    except ValueError:
        raise PydanticCustomError(
            "date_time_format",
            "Input should be a valid ISO 8601 date-time with a timezone offset",
        )
    return value


Number = Annotated[Union[int, float], PlainValidator(_check_number)]
Percent = bounded_number(0, 100)
Rating = bounded_number(1, 5)
IsoDate = Annotated[StrictStr, AfterValidator(_check_date)]
IsoDateTime = Annotated[StrictStr, AfterValidator(_check_date_time)]

PropertyType = Literal["single_family", "multi_family", "commercial", "land", "other"]
MarketStatus = Literal["lead", "under_contract", "under contract", "pending", "sold", "archived"]
ContactMethod = Literal["phone", "email", "website", "social_media", "referral", "other"]
RentalDemand = Literal["very_low", "low", "moderate", "high", "very_high"]


class RecordModel(BaseModel):
    model_config = ConfigDict(extra="allow")


# Property
class Address(RecordModel):
    street: StrictStr
    city: StrictStr
    state: StrictStr
    zip: StrictStr


class ComparableProperty(RecordModel):
    address: StrictStr
    sale_price: Number
    sale_date: IsoDate = None
    bedrooms: Number = None
    bathrooms: Number = None
    square_footage: Number = None
    distance_miles: Number = None


class PropertyRecord(RecordModel):
    id: StrictStr
    address: Address
    purchase_price: Number
    arv: Number
    market_status: MarketStatus
    property_type: PropertyType = None
    bedrooms: Number = None
    bathrooms: Number = None
    square_footage: Number = None
    year_built: Number = None
    lot_size: Number = None
    renovation_budget: Number = None
    estimated_rehab_time_days: Number = None
    comparable_properties: List[ComparableProperty] = None


# Buyer
class InvestmentCriteria(RecordModel):
    property_types: List[PropertyType] = None
    min_beds: Number = None
    min_baths: Number = None
    min_square_footage: Number = None
    preferred_locations: List[StrictStr] = None
    max_budget: Number = None
    min_cap_rate: Number = None
    cash_buyer: StrictBool = None


class PastPurchase(RecordModel):
    property_id: StrictStr
    purchase_date: IsoDate = None


class BuyerRecord(RecordModel):
    id: StrictStr
    name: StrictStr
    email: EmailStr
    phone: StrictStr = None
    investment_criteria: InvestmentCriteria = None
    past_purchases: List[PastPurchase] = None


# Lead
class LeadRecord(RecordModel):
    source: StrictStr
    date_created: IsoDateTime
    status: StrictStr = None
    followup_date: IsoDate = None
    notes: StrictStr = None
    initial_contact_method: ContactMethod = None
    lead_score: Percent = None
    lead_owner: StrictStr = None
    last_activity_date: IsoDateTime = None
    conversion_probability: Percent = None


# Contractor
class ProjectHistoryEntry(RecordModel):
    property_id: StrictStr
    start_date: IsoDate = None
    end_date: IsoDate = None
    project_cost: Number = None
    rating: Rating = None


class ContractorRecord(RecordModel):
    id: StrictStr
    name: StrictStr
    company_name: StrictStr = None
    email: EmailStr = None
    phone: StrictStr = None
    license_number: StrictStr = None
    insurance_verified: StrictBool = None
    specialties: List[StrictStr] = None
    hourly_rate: Number = None
    project_history: List[ProjectHistoryEntry] = None


# Financials
class PurchaseCosts(RecordModel):
    purchase_price: Number
    closing_costs: Number = None
    inspection_costs: Number = None
    other_acquisition_costs: Number = None


class RehabilitationCosts(RecordModel):
    total_rehab_budget: Number
    contingency_percentage: Number = None
    labor_costs: Number = None
    material_costs: Number = None
    contractor_profit: Number = None
    permits_and_fees: Number = None


class HoldingCosts(RecordModel):
    monthly_insurance: Number = None
    monthly_taxes: Number = None
    monthly_utilities: Number = None
    monthly_other: Number = None
    estimated_holding_period_months: Number = None


class ExitCosts(RecordModel):
    selling_agent_commission_percentage: Number = None
    buying_agent_commission_percentage: Number = None
    estimated_closing_costs: Number = None
    transfer_taxes: Number = None


class Financing(RecordModel):
    loan_amount: Number = None
    interest_rate: Number = None
    term_months: Number = None
    loan_points: Number = None
    other_financing_costs: Number = None


class FinancialsRecord(RecordModel):
    purchase_costs: PurchaseCosts = None
    rehabilitation_costs: RehabilitationCosts = None
    holding_costs: HoldingCosts = None
    exit_costs: ExitCosts = None
    financing: Financing = None


class MarketAnalysis(RecordModel):
    average_days_on_market: Number = None
    median_sale_price: Number = None
    price_per_sqft: Number = None
    year_over_year_appreciation: Number = None
    rental_demand: RentalDemand = None
    occupancy_rate: Number = None
    price_to_rent_ratio: Number = None


class RealEstateDocument(RecordModel):
    property: PropertyRecord
    buyer: BuyerRecord
    lead: LeadRecord
    contractor: ContractorRecord
    financials: FinancialsRecord = None
    market_analysis: MarketAnalysis = None


class PropertyDescriptionRequest(RecordModel):
    property: PropertyRecord


# Response Models
class ValidationErrorDetail(BaseModel):
    field: str
    constraint: str
    message: str


class ValidationErrorResponse(BaseModel):
    errors: List[ValidationErrorDetail]
    message: str = "Invalid real estate data."


class InvestmentMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    purchase_price: Union[int, float]
    arv: Union[int, float]
    potential_profit: Union[int, float]
    roi: str
    total_investment: Union[int, float]
    rehab_costs: Union[int, float]
    holding_costs: Union[int, float]
    adjusted_profit: Union[int, float]
    adjusted_roi: str
    seventy_rule_max_offer: Union[int, float]


class PropertyAnalysisResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Property analysis complete"
    property: Dict[str, Any]
    enrichment_data: Dict[str, Any]
    investment_metrics: InvestmentMetrics
    narrative: Dict[str, Any]


class ScrapeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    status_code: int
    data: Any = None


class ListingSummary(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    price: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    sqft: Optional[int] = None
    days_on_mls: Optional[int] = None
    url: Optional[str] = None


class ListingsResponse(BaseModel):
    location: str
    count: int
    listings: List[ListingSummary]


class MarketDataResponse(BaseModel):
    location: str
    median_home_price: Optional[float] = None
    price_per_sqft: Optional[float] = None
    days_on_market: Optional[float] = None
    sample_size: int
    source: str = "HomeHarvest"


class CallResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    call_id: str
    status: str
    phone_number: Optional[str] = None
    message: Optional[str] = None
