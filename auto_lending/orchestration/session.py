"""Session manager: connected identity and the funding-capability precondition"""

import logging
from typing import Optional

from auto_lending.domain.catalog import REGISTER, build_command, coin_store_type
from auto_lending.domain.exceptions import NotConnected
from auto_lending.domain.models import TransactionOutcome
from auto_lending.orchestration.pipeline import TransactionPipeline
from auto_lending.orchestration.ports import LedgerPort, SigningAgentPort

logger = logging.getLogger(__name__)


class SessionManager:
    """Tracks the single active identity for this process"""

    def __init__(
        self,
        agent: SigningAgentPort,
        ledger: LedgerPort,
        pipeline: TransactionPipeline,
    ):
        self.agent = agent
        self.ledger = ledger
        self.pipeline = pipeline
        self.coin_store_type = coin_store_type()
        self.address: Optional[str] = None

    @property
    def connected(self) -> bool:
        return self.address is not None

    def require_address(self) -> str:
        """Raises NotConnected when there is no identity to sign with"""
        if self.address is None:
            raise NotConnected("Connect wallet first!")
        return self.address

    async def connect(self) -> str:
        """
        Open a session with the signing agent and adopt its address.

        The funding-capability check is left to the caller so that a failed
        registration never undoes a successful connect.

        Raises:
            AgentUnavailable, UserRejected, AgentError
        """
        address = await self.agent.connect()
        self.address = address
        logger.info("Wallet connected", extra={"address": address})
        return address

    async def resume(self) -> Optional[str]:
        """Adopt a session the agent already has open, if any"""
        address = await self.agent.account()
        if address:
            self.address = address
            logger.info("Existing wallet session found", extra={"address": address})
        return address

    def disconnect(self) -> None:
        # The agent API has no disconnect; forget the identity locally
        self.address = None

    async def ensure_funding_capability(self, address: str) -> Optional[TransactionOutcome]:
        """
        Register the coin store for an account that lacks one.

        Idempotent from the caller's view: nothing is submitted when the
        resource already exists. Two overlapping calls can both submit; the
        second then aborts remotely and comes back as a failed outcome.

        Returns:
            None if already registered, else the registration outcome

        Raises:
            LedgerAPIError: Resource list could not be read
        """
        resources = await self.ledger.get_account_resources(address)
        if any(resource.get("type") == self.coin_store_type for resource in resources):
            return None

        logger.info("Funding capability missing, registering", extra={"address": address})
        return await self.pipeline.submit(build_command(REGISTER))
