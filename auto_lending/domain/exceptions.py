"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    kind = "DomainError"


class InvalidField(DomainException):
    """User-supplied field failed local validation"""

    kind = "InvalidField"

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.reason = reason


class NotConnected(DomainException):
    """Command needs a signer but no identity is connected"""

    kind = "NotConnected"


class Busy(DomainException):
    """Another command or query is still in flight"""

    kind = "Busy"


class AgentUnavailable(DomainException):
    """No signing agent is reachable in this runtime"""

    kind = "AgentUnavailable"


class UserRejected(DomainException):
    """User declined the signing agent prompt"""

    kind = "UserRejected"


class AgentError(DomainException):
    """Signing agent failed to sign or submit"""

    kind = "AgentError"


class FinalityTimeout(DomainException):
    """Transaction was not confirmed before the finality deadline"""

    kind = "FinalityTimeout"

    def __init__(self, message: str, tx_hash: str | None = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class ExecutionAborted(DomainException):
    """Contract rejected the transaction; detail is the ledger's vm status"""

    kind = "ExecutionAborted"

    def __init__(self, detail: str, tx_hash: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.tx_hash = tx_hash


class NotFound(DomainException):
    """Requested ledger resource does not exist or could not be read"""

    kind = "NotFound"


class LedgerAPIError(DomainException):
    """Ledger node returned an error or is unavailable"""

    kind = "LedgerAPIError"
