"""Unit tests for command field validation"""

import pytest
from auto_lending.domain.exceptions import InvalidField
from auto_lending.domain.validation import (
    U64_MAX,
    parse_positive_int,
    validate_apply_for_loan,
    validate_check_default,
    validate_create_loan_offer,
    validate_dealer_address,
    validate_list_vehicle,
    validate_repay_loan,
)


@pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), (7, 7), ("+3", 3), (str(U64_MAX), U64_MAX)])
def test_parse_positive_int_accepts(raw, expected):
    assert parse_positive_int("amount", raw) == expected


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("0", "must be greater than zero"),
        ("-5", "must be greater than zero"),
        (0, "must be greater than zero"),
        ("", "is required"),
        (None, "is required"),
        ("abc", "must be a positive integer"),
        ("1.5", "must be a positive integer"),
        ("1_000", "must be a positive integer"),
        (True, "must be a positive integer"),
        (str(U64_MAX + 1), "exceeds the u64 range"),
    ],
)
def test_parse_positive_int_rejects(raw, reason):
    with pytest.raises(InvalidField) as exc_info:
        parse_positive_int("amount", raw)

    assert exc_info.value.field == "amount"
    assert exc_info.value.reason == reason


def test_list_vehicle_normalizes_to_ints():
    assert validate_list_vehicle("1", "100") == (1, 100)


def test_create_loan_offer_zero_rate_names_field():
    """Rate of 0 basis points is rejected before anything is submitted"""
    with pytest.raises(InvalidField) as exc_info:
        validate_create_loan_offer("1", "50", "0", "3600")

    assert exc_info.value.field == "interest_rate_bps"


def test_create_loan_offer_valid():
    assert validate_create_loan_offer("1", "50", "500", "3600") == (1, 50, 500, 3600)


def test_first_failing_field_is_reported():
    with pytest.raises(InvalidField) as exc_info:
        validate_list_vehicle("x", "0")

    assert exc_info.value.field == "vehicle_id"


def test_apply_for_loan_requires_lender():
    with pytest.raises(InvalidField) as exc_info:
        validate_apply_for_loan("   ", "1", "1")

    assert exc_info.value.field == "lender_address"


def test_apply_for_loan_passes_address_through():
    # Address format is left to the ledger; only emptiness is checked here
    assert validate_apply_for_loan(" 0xLENDER ", "2", "3") == ("0xLENDER", 2, 3)


def test_repay_loan_rejects_zero_amount():
    with pytest.raises(InvalidField) as exc_info:
        validate_repay_loan("0xlender", "0")

    assert exc_info.value.field == "amount"


def test_check_default_and_dealer_address():
    assert validate_check_default("0xc1") == ("0xc1",)
    assert validate_dealer_address("0xd1") == "0xd1"
    with pytest.raises(InvalidField):
        validate_check_default("")
    with pytest.raises(InvalidField):
        validate_dealer_address(None)
