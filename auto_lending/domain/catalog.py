"""
Command catalog: the fixed set of ledger entry points this client drives.

Argument order and count are the contract's ABI. Each entry's arg_roles
must match the parameters of its validator one for one
(tests/unit/test_catalog.py checks this).
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

from auto_lending.config import settings
from auto_lending.domain import validation
from auto_lending.domain.models import Command

INITIALIZE = "initialize"
LIST_VEHICLE = "list_vehicle"
CREATE_LOAN_OFFER = "create_loan_offer"
APPLY_FOR_LOAN = "apply_for_loan"
REPAY_LOAN = "repay_loan"
CHECK_DEFAULT = "check_default"
REGISTER = "register"

# Framework module that owns coin registration
COIN_MODULE = "0x1::coin"


@dataclass(frozen=True)
class CommandSpec:
    """Catalog entry: where a command goes and what it carries"""

    name: str
    function: str
    arg_roles: Tuple[str, ...]
    validator: Callable[..., Tuple]
    module: str | None = None  # None means the lending contract module
    needs_coin_type: bool = False

    def entry_point(self, module_address: str | None = None, module_name: str | None = None) -> str:
        if self.module is not None:
            return f"{self.module}::{self.function}"
        address = module_address or settings.module_address
        name = module_name or settings.module_name
        return f"{address}::{name}::{self.function}"


CATALOG: Dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        CommandSpec(INITIALIZE, "initialize", (), validation.validate_initialize),
        CommandSpec(LIST_VEHICLE, "list_vehicle", ("vehicle_id", "price"), validation.validate_list_vehicle),
        CommandSpec(
            CREATE_LOAN_OFFER,
            "create_loan_offer",
            ("loan_id", "amount", "interest_rate_bps", "duration_seconds"),
            validation.validate_create_loan_offer,
        ),
        CommandSpec(
            APPLY_FOR_LOAN,
            "apply_for_loan",
            ("lender_address", "offer_id", "vehicle_id"),
            validation.validate_apply_for_loan,
        ),
        CommandSpec(REPAY_LOAN, "repay_loan", ("lender_address", "amount"), validation.validate_repay_loan),
        CommandSpec(CHECK_DEFAULT, "check_default", ("customer_address",), validation.validate_check_default),
        CommandSpec(
            REGISTER,
            "register",
            (),
            validation.validate_register,
            module=COIN_MODULE,
            needs_coin_type=True,
        ),
    )
}


def vehicle_resource_type(module_address: str | None = None, module_name: str | None = None) -> str:
    """Fully qualified type of the single Vehicle resource a dealer account holds"""
    address = module_address or settings.module_address
    name = module_name or settings.module_name
    return f"{address}::{name}::Vehicle"


def coin_store_type(coin_type: str | None = None) -> str:
    """Funding-capability resource an account needs before it can hold coins"""
    return f"0x1::coin::CoinStore<{coin_type or settings.coin_type}>"


def build_command(name: str, fields: Mapping[str, Any] | None = None) -> Command:
    """
    Validate raw field values and resolve them into a Command.

    Fields are looked up by argument role; missing roles reach the validator
    as None and fail there.

    Raises:
        KeyError: Unknown command name (programmer error)
        InvalidField: A field failed validation
    """
    spec = CATALOG[name]
    fields = fields or {}
    arguments = spec.validator(**{role: fields.get(role) for role in spec.arg_roles})
    type_arguments = (settings.coin_type,) if spec.needs_coin_type else ()
    return Command(
        name=spec.name,
        entry_point=spec.entry_point(),
        type_arguments=type_arguments,
        arguments=tuple(arguments),
    )
