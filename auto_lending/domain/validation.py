"""Field validation for ledger commands - runs before anything is signed"""

import re
from typing import Any, Tuple

from auto_lending.domain.exceptions import InvalidField

U64_MAX = 2**64 - 1

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def parse_positive_int(field: str, value: Any) -> int:
    """
    Parse a raw form value as a u64 strictly greater than zero.

    Accepts ints or decimal strings (surrounding whitespace ignored).
    Floats, digit separators and booleans are rejected.

    Raises:
        InvalidField: If the value is missing, not an integer, not positive,
            or too large for a u64
    """
    if isinstance(value, bool):
        raise InvalidField(field, "must be a positive integer")

    if isinstance(value, int):
        number = value
    else:
        text = "" if value is None else str(value).strip()
        if not text:
            raise InvalidField(field, "is required")
        if not _INTEGER_RE.match(text):
            raise InvalidField(field, "must be a positive integer")
        number = int(text)

    if number <= 0:
        raise InvalidField(field, "must be greater than zero")
    if number > U64_MAX:
        raise InvalidField(field, "exceeds the u64 range")
    return number


def require_address(field: str, value: Any) -> str:
    """Address fields only need to be non-empty; the ledger rejects malformed ones"""
    text = "" if value is None else str(value).strip()
    if not text:
        raise InvalidField(field, "is required")
    return text


def validate_initialize() -> Tuple:
    return ()


def validate_register() -> Tuple:
    return ()


def validate_list_vehicle(vehicle_id: Any, price: Any) -> Tuple[int, int]:
    return (
        parse_positive_int("vehicle_id", vehicle_id),
        parse_positive_int("price", price),
    )


def validate_create_loan_offer(
    loan_id: Any,
    amount: Any,
    interest_rate_bps: Any,
    duration_seconds: Any,
) -> Tuple[int, int, int, int]:
    """interest_rate_bps is in basis points: 500 means 5%"""
    return (
        parse_positive_int("loan_id", loan_id),
        parse_positive_int("amount", amount),
        parse_positive_int("interest_rate_bps", interest_rate_bps),
        parse_positive_int("duration_seconds", duration_seconds),
    )


def validate_apply_for_loan(lender_address: Any, offer_id: Any, vehicle_id: Any) -> Tuple[str, int, int]:
    return (
        require_address("lender_address", lender_address),
        parse_positive_int("offer_id", offer_id),
        parse_positive_int("vehicle_id", vehicle_id),
    )


def validate_repay_loan(lender_address: Any, amount: Any) -> Tuple[str, int]:
    return (
        require_address("lender_address", lender_address),
        parse_positive_int("amount", amount),
    )


def validate_check_default(customer_address: Any) -> Tuple[str]:
    return (require_address("customer_address", customer_address),)


def validate_dealer_address(dealer_address: Any) -> str:
    return require_address("dealer_address", dealer_address)
