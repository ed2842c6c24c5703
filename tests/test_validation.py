"""
Validation of inbound real estate documents.

Run:
    pytest tests/test_validation.py -v
"""

import math

import pytest

from validation import InvalidDocumentError, validate_real_estate_data
from tests.utils import make_document, make_property


def error_fields(result):
    return [error.field for error in result.errors]


def test_minimal_document_is_valid():
    result = validate_real_estate_data(make_document())
    assert result.valid
    assert result.errors == []
    assert result.document.property.id == "prop-001"


def test_full_document_is_valid():
    document = make_document(
        property=make_property(
            property_type="single_family",
            bedrooms=3,
            bathrooms=2.5,
            square_footage=1800,
            year_built=1978,
            renovation_budget=25000,
            comparable_properties=[
                {"address": "125 Main St", "sale_price": 155000, "sale_date": "2023-11-02"},
            ],
        ),
        buyer={
            "id": "buyer-001",
            "name": "Jane Investor",
            "email": "jane@acmecapital.com",
            "investment_criteria": {"property_types": ["single_family", "multi_family"], "cash_buyer": True},
            "past_purchases": [{"property_id": "prop-000", "purchase_date": "2022-06-30"}],
        },
        lead={
            "source": "referral",
            "date_created": "2024-01-15T10:30:00-06:00",
            "initial_contact_method": "phone",
            "lead_score": 87,
        },
        contractor={
            "id": "contractor-001",
            "name": "Bob Builder",
            "insurance_verified": True,
            "project_history": [{"property_id": "prop-000", "rating": 4.5}],
        },
        financials={
            "purchase_costs": {"purchase_price": 100000, "closing_costs": 3000},
            "rehabilitation_costs": {"total_rehab_budget": 20000},
            "holding_costs": {"monthly_taxes": 200, "estimated_holding_period_months": 6},
            "exit_costs": {"transfer_taxes": 1200},
            "financing": {"loan_amount": 80000, "interest_rate": 9.5},
        },
        market_analysis={"average_days_on_market": 28, "rental_demand": "high"},
    )
    result = validate_real_estate_data(document)
    assert result.valid, result.errors


def test_unknown_fields_are_allowed():
    document = make_document(notes="walked the property", property=make_property(hoa="none"))
    assert validate_real_estate_data(document).valid


@pytest.mark.parametrize("group", ["property", "buyer", "lead", "contractor"])
def test_missing_top_level_group_is_rejected(group):
    document = make_document()
    del document[group]
    result = validate_real_estate_data(document)
    assert not result.valid
    assert group in error_fields(result)
    assert result.errors[0].constraint == "missing"


@pytest.mark.parametrize(
    "path",
    [
        ("property", "id"),
        ("property", "address"),
        ("property", "purchase_price"),
        ("property", "arv"),
        ("property", "market_status"),
        ("property", "address", "street"),
        ("property", "address", "zip"),
        ("buyer", "email"),
        ("lead", "date_created"),
        ("contractor", "name"),
    ],
)
def test_missing_required_field_is_reported_by_path(path):
    document = make_document()
    parent = document
    for key in path[:-1]:
        parent = parent[key]
    del parent[path[-1]]

    result = validate_real_estate_data(document)
    assert not result.valid
    assert ".".join(path) in error_fields(result)


def test_all_errors_are_collected():
    document = make_document(
        property=make_property(
            market_status="listed",
            purchase_price="100000",
            comparable_properties=[
                {"address": "1 Elm St"},
                {"address": "2 Elm St", "sale_price": 140000},
                {"sale_price": 150000},
            ],
        ),
        buyer={"id": "buyer-001", "name": "Jane Investor", "email": "not-an-email"},
    )
    result = validate_real_estate_data(document)
    assert not result.valid
    assert set(error_fields(result)) == {
        "property.market_status",
        "property.purchase_price",
        "property.comparable_properties.0.sale_price",
        "property.comparable_properties.2.address",
        "buyer.email",
    }


def test_error_entries_carry_constraint_and_message():
    result = validate_real_estate_data(make_document(property=make_property(market_status="listed")))
    [error] = result.errors
    assert error.field == "property.market_status"
    assert error.constraint == "literal_error"
    assert "lead" in error.message


@pytest.mark.parametrize("status", ["lead", "under_contract", "under contract", "pending", "sold", "archived"])
def test_market_status_values(status):
    assert validate_real_estate_data(make_document(property=make_property(market_status=status))).valid


def test_property_type_outside_enumeration_is_rejected():
    result = validate_real_estate_data(make_document(property=make_property(property_type="castle")))
    assert error_fields(result) == ["property.property_type"]


@pytest.mark.parametrize("value", ["3", True, None, [3]])
def test_numbers_must_be_number_typed(value):
    result = validate_real_estate_data(make_document(property=make_property(bedrooms=value)))
    assert not result.valid
    assert result.errors[0].field == "property.bedrooms"
    assert result.errors[0].constraint == "number_type"


def test_integer_numbers_keep_their_type():
    result = validate_real_estate_data(make_document())
    assert isinstance(result.document.property.purchase_price, int)


def test_integers_beyond_float_range_become_infinite():
    document = make_document(property=make_property(arv=10**309, purchase_price=-(10**309)))
    result = validate_real_estate_data(document)
    assert result.valid
    assert result.document.property.arv == math.inf
    assert result.document.property.purchase_price == -math.inf


@pytest.mark.parametrize("email", ["jane@localhost", "jane@example.test", "jane@mail.local"])
def test_buyer_email_must_be_deliverable_domain(email):
    buyer = {"id": "buyer-001", "name": "Jane Investor", "email": email}
    result = validate_real_estate_data(make_document(buyer=buyer))
    assert error_fields(result) == ["buyer.email"]


@pytest.mark.parametrize("value", ["2024-01-15", "2024-01-15T10:30:00", "yesterday", "2024-13-01T00:00:00Z"])
def test_lead_date_created_must_be_date_time(value):
    result = validate_real_estate_data(make_document(lead={"source": "website", "date_created": value}))
    assert error_fields(result) == ["lead.date_created"]


@pytest.mark.parametrize("value", ["2024-01-15T10:30:00Z", "2024-01-15T10:30:00.250+02:00", "2024-01-15 10:30:00+00:00"])
def test_lead_date_created_accepts_offsets(value):
    assert validate_real_estate_data(make_document(lead={"source": "website", "date_created": value})).valid


def test_date_fields_must_be_calendar_dates():
    document = make_document(
        buyer={
            "id": "buyer-001",
            "name": "Jane Investor",
            "email": "jane@acmecapital.com",
            "past_purchases": [{"property_id": "p1", "purchase_date": "2023-02-30"}],
        }
    )
    result = validate_real_estate_data(document)
    assert error_fields(result) == ["buyer.past_purchases.0.purchase_date"]


def test_lead_score_range_is_enforced():
    result = validate_real_estate_data(
        make_document(lead={"source": "website", "date_created": "2024-01-15T10:30:00Z", "lead_score": 150})
    )
    assert error_fields(result) == ["lead.lead_score"]
    assert result.errors[0].constraint == "less_than_equal"


def test_contractor_rating_range_is_enforced():
    document = make_document(
        contractor={"id": "c1", "name": "Bob", "project_history": [{"property_id": "p1", "rating": 0}]}
    )
    result = validate_real_estate_data(document)
    assert error_fields(result) == ["contractor.project_history.0.rating"]


def test_financial_groups_require_their_fields():
    document = make_document(financials={"purchase_costs": {}, "rehabilitation_costs": {"labor_costs": 5000}})
    result = validate_real_estate_data(document)
    assert set(error_fields(result)) == {
        "financials.purchase_costs.purchase_price",
        "financials.rehabilitation_costs.total_rehab_budget",
    }


@pytest.mark.parametrize("payload", [None, "property", 42, ["property"]])
def test_non_object_input_raises(payload):
    with pytest.raises(InvalidDocumentError):
        validate_real_estate_data(payload)
