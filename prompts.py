"""Prompt text for the text-generation service."""

import json
from typing import Any, List, Mapping, Optional

from schemas import PropertyRecord, RealEstateDocument


ANALYSIS_DELIVERABLES = [
    "An investment analysis of this property",
    "Key risks and opportunities",
    "Recommendations for negotiation strategy",
    "Potential exit strategies",
    "Suggestions for maximizing ROI",
]

MARKET_ANALYSIS_FIELDS = [
    ("Average Days on Market", "average_days_on_market"),
    ("Median Sale Price", "median_sale_price"),
    ("Price per SqFt", "price_per_sqft"),
    ("Year over Year Appreciation", "year_over_year_appreciation"),
    ("Rental Demand", "rental_demand"),
]

CHAT_PREFIX = "Real estate professional assistant: "


def format_number(value: Any) -> str:
    """Render a number the way it arrived on the wire (``150000``, not ``150000.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_address(prop: PropertyRecord) -> str:
    address = prop.address
    return f"{address.street}, {address.city}, {address.state} {address.zip}"


def _optional_lines(prop: PropertyRecord, include_type: bool = False) -> List[str]:
    fields = [
        ("Bedrooms", prop.bedrooms),
        ("Bathrooms", prop.bathrooms),
        ("Square Footage", prop.square_footage),
        ("Year Built", prop.year_built),
    ]
    lines = [f"{label}: {format_number(value)}" for label, value in fields if value]
    if include_type and prop.property_type:
        lines.append(f"Property Type: {prop.property_type}")
    return lines


def has_enrichment(enrichment: Optional[Mapping[str, Any]]) -> bool:
    return isinstance(enrichment, Mapping) and "error" not in enrichment


def build_property_analysis_prompt(
    document: RealEstateDocument,
    enrichment: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the analysis prompt for a validated document.

    Optional property lines are dropped when absent. The neighborhood section
    is dropped entirely when the lookup degraded. Market analysis sub-fields
    fall back to ``N/A`` individually.
    """
    prop = document.property
    sections = [
        "Please analyze this real estate investment opportunity:",
        "\n".join(
            [
                f"Property: {format_address(prop)}",
                f"Purchase Price: ${format_number(prop.purchase_price)}",
                f"After Repair Value: ${format_number(prop.arv)}",
                f"Status: {prop.market_status}",
            ]
            + _optional_lines(prop)
        ),
    ]

    if has_enrichment(enrichment):
        sections.append(f"Neighborhood Information:\n{json.dumps(enrichment, indent=2)}")

    market = document.market_analysis
    if market is not None:
        lines = ["Market Analysis:"]
        for label, name in MARKET_ANALYSIS_FIELDS:
            value = getattr(market, name)
            lines.append(f"{label}: {format_number(value) if value else 'N/A'}")
        sections.append("\n".join(lines))

    deliverables = "\n".join(
        f"{number}. {item}" for number, item in enumerate(ANALYSIS_DELIVERABLES, start=1)
    )
    sections.append(f"Please provide:\n{deliverables}")
    return "\n\n".join(sections) + "\n"


def build_property_description_prompt(prop: PropertyRecord) -> str:
    lines = [f"Address: {format_address(prop)}"] + _optional_lines(prop, include_type=True)
    return (
        "Write a compelling real estate listing description for the following property:\n\n"
        + "\n".join(lines)
        + "\n\nWrite in a professional, engaging style that highlights the property's "
        "features and selling points.\n"
    )


def build_chat_prompt(user_prompt: str) -> str:
    return f"{CHAT_PREFIX}{user_prompt}"
