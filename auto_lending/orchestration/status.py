"""Turn command results and failures into the one-line status users see"""

from auto_lending.config import settings
from auto_lending.domain.exceptions import Busy, InvalidField, NotConnected
from auto_lending.domain.models import ActionResult
from auto_lending.utils.formatting import shorten_address, shorten_hash

PROCESSING = "Processing transaction..."
CONNECTING = "Connecting wallet..."
FETCHING = "Fetching vehicles..."
NOT_CONNECTED = "Wallet not connected"
BUSY = "Another operation is in progress, please wait"


def coin_name() -> str:
    return settings.coin_type.rsplit("::", 1)[-1]


def with_tx(message: str, tx_hash: str | None) -> str:
    return f"{message} Tx: {shorten_hash(tx_hash)}" if tx_hash else message


def failure_message(action: str, exc: Exception) -> str:
    """
    Local precondition failures speak for themselves; everything else is
    reported as "<action> failed: <detail>" with the remote detail untouched.
    """
    if isinstance(exc, (InvalidField, NotConnected, Busy)):
        return str(exc)
    detail = str(exc) or exc.__class__.__name__
    return f"{action} failed: {detail}"


def failure_result(action: str, exc: Exception) -> ActionResult:
    return ActionResult(
        success=False,
        message=failure_message(action, exc),
        tx_hash=getattr(exc, "tx_hash", None),
        error=getattr(exc, "kind", "UnexpectedError"),
    )


def busy_result() -> ActionResult:
    return ActionResult(success=False, message=BUSY, error=Busy.kind)


SUCCESS_MESSAGES = {
    "initialize": lambda args: "Module initialized successfully!",
    "list_vehicle": lambda args: f"Vehicle ID {args[0]} listed successfully!",
    "create_loan_offer": lambda args: f"Loan offer ID {args[0]} created!",
    "apply_for_loan": lambda args: "Loan application successful!",
    "repay_loan": lambda args: f"Loan repayment of {args[1]} APT successful!",
    "check_default": lambda args: f"Checked default for customer {shorten_address(args[0])}.",
}

FAILURE_ACTIONS = {
    "initialize": "Initialization",
    "list_vehicle": "Listing",
    "create_loan_offer": "Creating offer",
    "apply_for_loan": "Loan application",
    "repay_loan": "Loan repayment",
    "check_default": "Checking default",
}
