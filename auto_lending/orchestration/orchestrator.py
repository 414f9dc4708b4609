"""
Loan lifecycle orchestrator.

Turns dealer, lender and customer intents into validated ledger commands,
runs them through the transaction pipeline and keeps the cached vehicle
view in step with what the ledger has committed.

At most one command or query is in flight. A call made while busy is
answered with Busy before any validation, and nothing is queued. Every
public coroutine returns an ActionResult; no failure escapes to the caller.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from auto_lending.domain import catalog
from auto_lending.domain.exceptions import DomainException, NotFound
from auto_lending.domain.models import ActionResult, Vehicle
from auto_lending.domain.reconciliation import VehicleView, refresh_target
from auto_lending.domain.validation import validate_dealer_address
from auto_lending.orchestration import status
from auto_lending.orchestration.pipeline import TransactionPipeline
from auto_lending.orchestration.ports import LedgerPort, SigningAgentPort
from auto_lending.orchestration.queries import ResourceQueryService
from auto_lending.orchestration.session import SessionManager
from auto_lending.utils.formatting import shorten_address

logger = logging.getLogger(__name__)


class LoanOrchestrator:
    """Holds the session identity, the busy flag and the cached vehicle list"""

    def __init__(self, agent: SigningAgentPort, ledger: LedgerPort):
        self.pipeline = TransactionPipeline(agent, ledger)
        self.session = SessionManager(agent, ledger, self.pipeline)
        self.queries = ResourceQueryService(ledger)
        self.view = VehicleView()
        self.busy = False
        self.status = ""

    @property
    def address(self) -> Optional[str]:
        return self.session.address

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self.view.vehicles)

    async def _exclusive(self, body: Callable[[], Awaitable[ActionResult]]) -> ActionResult:
        """
        Run body as the single in-flight operation.

        The busy check and set happen before the first suspension point, and
        the flag is released on every exit, cancellation included.
        """
        if self.busy:
            return status.busy_result()
        self.busy = True
        try:
            result = await body()
        finally:
            self.busy = False
        self.status = result.message
        return result

    # ---- Session ----

    async def connect(self) -> ActionResult:
        """Connect the signing agent, then make sure the account can hold coins"""
        return await self._exclusive(self._connect)

    async def _connect(self) -> ActionResult:
        self.status = status.CONNECTING
        try:
            address = await self.session.connect()
            message = await self._ensure_funding(address, "Wallet connected successfully!")
            return ActionResult(success=True, message=message)
        except DomainException as e:
            logger.warning(f"Connect failed: {e}", extra={"error_kind": e.kind})
            return status.failure_result("Connection", e)
        except Exception as e:
            logger.error(f"Unexpected error during connect: {e}")
            return status.failure_result("Connection", e)

    async def resume_session(self) -> ActionResult:
        """Pick up a session the agent already has open (start-up path)"""
        return await self._exclusive(self._resume_session)

    async def _resume_session(self) -> ActionResult:
        try:
            address = await self.session.resume()
        except DomainException as e:
            logger.info(f"No existing wallet session: {e}")
            address = None
        except Exception as e:
            logger.warning(f"Wallet session lookup failed: {e}")
            address = None

        try:
            if address:
                message = await self._ensure_funding(address, "Wallet connected")
                return ActionResult(success=True, message=message)
            return ActionResult(success=False, message=status.NOT_CONNECTED, error="NotConnected")
        except Exception as e:
            logger.error(f"Unexpected error while resuming session: {e}")
            return status.failure_result("Connection", e)

    def disconnect(self) -> ActionResult:
        if self.busy:
            return status.busy_result()
        self.session.disconnect()
        self.view.clear()
        self.status = status.NOT_CONNECTED
        return ActionResult(success=True, message=status.NOT_CONNECTED)

    async def _ensure_funding(self, address: str, connected_message: str) -> str:
        """Registration problems are reported, never fatal to the session"""
        try:
            outcome = await self.session.ensure_funding_capability(address)
        except DomainException as e:
            logger.warning(f"Funding capability check failed: {e}", extra={"address": address})
            return f"{connected_message} Failed to register {status.coin_name()}: {e}"

        if outcome is None:
            return connected_message
        if outcome.ok:
            return status.with_tx(f"{connected_message} {status.coin_name()} registered successfully!", outcome.hash)
        return f"{connected_message} Failed to register {status.coin_name()}: {outcome.error}"

    # ---- Commands ----

    async def initialize_module(self) -> ActionResult:
        return await self._run_command(catalog.INITIALIZE, {})

    async def list_vehicle(self, vehicle_id: Any, price: Any) -> ActionResult:
        """Dealer: publish a vehicle at a price in APT"""
        return await self._run_command(catalog.LIST_VEHICLE, {"vehicle_id": vehicle_id, "price": price})

    async def create_loan_offer(
        self,
        loan_id: Any,
        amount: Any,
        interest_rate_bps: Any,
        duration_seconds: Any,
    ) -> ActionResult:
        """Lender: offer a loan; rate in basis points (500 = 5%)"""
        return await self._run_command(
            catalog.CREATE_LOAN_OFFER,
            {
                "loan_id": loan_id,
                "amount": amount,
                "interest_rate_bps": interest_rate_bps,
                "duration_seconds": duration_seconds,
            },
        )

    async def apply_for_loan(self, lender_address: Any, offer_id: Any, vehicle_id: Any) -> ActionResult:
        """Customer: take a lender's offer against a vehicle"""
        return await self._run_command(
            catalog.APPLY_FOR_LOAN,
            {"lender_address": lender_address, "offer_id": offer_id, "vehicle_id": vehicle_id},
        )

    async def repay_loan(self, lender_address: Any, amount: Any) -> ActionResult:
        return await self._run_command(catalog.REPAY_LOAN, {"lender_address": lender_address, "amount": amount})

    async def check_default(self, customer_address: Any) -> ActionResult:
        return await self._run_command(catalog.CHECK_DEFAULT, {"customer_address": customer_address})

    async def _run_command(self, name: str, fields: Dict[str, Any]) -> ActionResult:
        """
        Busy check -> validation -> identity -> pipeline -> reconcile.

        The vehicle cache is only touched after the ledger confirms the
        transaction, and never on failure.
        """
        return await self._exclusive(lambda: self._submit(name, fields))

    async def _submit(self, name: str, fields: Dict[str, Any]) -> ActionResult:
        action = status.FAILURE_ACTIONS[name]
        try:
            command = catalog.build_command(name, fields)
            acting_address = self.session.require_address()

            self.status = status.PROCESSING
            outcome = await self.pipeline.submit(command)
            if outcome.error is not None:
                raise outcome.error
        except DomainException as e:
            logger.warning(f"{action} failed: {e}", extra={"command": name, "error_kind": e.kind})
            return status.failure_result(action, e)
        except Exception as e:
            logger.error(f"Unexpected error in {name}: {e}", extra={"command": name})
            return status.failure_result(action, e)

        message = status.with_tx(status.SUCCESS_MESSAGES[name](command.arguments), outcome.hash)
        result = ActionResult(success=True, message=message, tx_hash=outcome.hash)

        # Committed at this point, so a refresh failure is only logged
        target = refresh_target(name, acting_address, self.view.displayed_address)
        if target:
            try:
                await self._load_vehicles(target)
                result.vehicles = self.vehicles
            except Exception as e:
                logger.error(f"Vehicle refresh after {name} failed: {e}", extra={"command": name})
        return result

    # ---- Queries ----

    async def fetch_vehicles(self, dealer_address: Any) -> ActionResult:
        """Show the vehicle listed at a dealer address; a miss is an empty list"""
        return await self._exclusive(lambda: self._fetch_vehicles(dealer_address))

    async def _fetch_vehicles(self, dealer_address: Any) -> ActionResult:
        try:
            address = validate_dealer_address(dealer_address)
            self.status = status.FETCHING
            vehicle = await self._load_vehicles(address)
        except DomainException as e:
            return status.failure_result("Fetching vehicles", e)
        except Exception as e:
            logger.error(f"Unexpected error fetching vehicles: {e}")
            return status.failure_result("Fetching vehicles", e)

        if vehicle is None:
            return ActionResult(
                success=False,
                message=f"No vehicles found at {shorten_address(address)}",
                error=NotFound.kind,
            )
        return ActionResult(success=True, message="Vehicles fetched successfully!", vehicles=self.vehicles)

    async def _load_vehicles(self, address: str) -> Optional[Vehicle]:
        """Replace the cache with a fresh read of one dealer address"""
        try:
            vehicle = await self.queries.fetch_vehicle(address)
        except NotFound:
            logger.info("No vehicle resource", extra={"dealer_address": address})
            vehicle = None
        self.view.show(address, vehicle)
        return vehicle


def describe(orchestrator: LoanOrchestrator) -> Dict[str, Any]:
    """Snapshot of orchestrator state for status endpoints"""
    return {
        "address": orchestrator.address,
        "address_short": shorten_address(orchestrator.address),
        "busy": orchestrator.busy,
        "status": orchestrator.status,
        "displayed_dealer": orchestrator.view.displayed_address,
        "vehicles": orchestrator.vehicles,
    }
