"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from auto_lending.domain.exceptions import DomainException


@dataclass(frozen=True)
class Command:
    """Validated ledger command, built fresh per invocation"""

    name: str
    entry_point: str  # fully qualified, e.g. 0x1::coin::register
    type_arguments: Tuple[str, ...] = ()
    arguments: Tuple[Any, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        """
        Entry-function payload handed to the signing agent.

        u64 values are sent as decimal strings, as the ledger JSON API expects.
        """
        return {
            "type": "entry_function_payload",
            "function": self.entry_point,
            "type_arguments": list(self.type_arguments),
            "arguments": [str(arg) if isinstance(arg, int) else arg for arg in self.arguments],
        }


@dataclass
class TransactionOutcome:
    """Normalized result of one pass through the transaction pipeline"""

    hash: Optional[str]
    finalized: bool
    error: Optional[DomainException] = None

    @property
    def ok(self) -> bool:
        return self.finalized and self.error is None


@dataclass(frozen=True)
class Vehicle:
    """Read-only projection of the ledger's Vehicle resource"""

    id: int
    dealer: str
    price: int  # APT units
    is_sold: bool


@dataclass
class ActionResult:
    """What an orchestrator entry point reports back to its caller"""

    success: bool
    message: str
    tx_hash: Optional[str] = None
    error: Optional[str] = None  # DomainException.kind
    vehicles: list = field(default_factory=list)
