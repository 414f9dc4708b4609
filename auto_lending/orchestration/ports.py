"""Collaborator boundaries the orchestrator depends on"""

from typing import Any, Dict, List, Optional, Protocol


class SigningAgentPort(Protocol):
    """Holds the user's keys; prompts for and produces signatures."""

    async def connect(self) -> str: ...  # connected address
    async def account(self) -> Optional[str]: ...  # None when no session is open
    async def sign_and_submit_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...  # {"hash": ...}


class LedgerPort(Protocol):
    """Read side of the ledger plus finality confirmation."""

    async def wait_for_transaction(self, tx_hash: str) -> Dict[str, Any]: ...
    async def get_account_resource(self, address: str, resource_type: str) -> Dict[str, Any]: ...
    async def get_account_resources(self, address: str) -> List[Dict[str, Any]]: ...
