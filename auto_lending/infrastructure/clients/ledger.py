"""Ledger node REST client: resource reads and finality polling"""

import asyncio
import logging
import time
from typing import Any, Dict, List
from urllib.parse import quote

import httpx

from auto_lending.config import settings
from auto_lending.domain.exceptions import ExecutionAborted, FinalityTimeout, LedgerAPIError, NotFound
from auto_lending.infrastructure.observability.metrics import finality_latency_histogram

logger = logging.getLogger(__name__)


class LedgerClient:
    """Client for the ledger node's REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        finality_timeout: float | None = None,
        poll_interval: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.node_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.finality_timeout = finality_timeout or settings.finality_timeout_seconds
        self.poll_interval = poll_interval if poll_interval is not None else settings.finality_poll_interval_seconds
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get_account_resource(self, address: str, resource_type: str) -> Dict[str, Any]:
        """
        Fetch one resource's data from an account.

        Raises:
            NotFound: Account or resource does not exist
            LedgerAPIError: On timeout, HTTP errors, or invalid response
        """
        url = f"{self.base_url}/accounts/{quote(address, safe='')}/resource/{quote(resource_type, safe='')}"
        async with self._client() as client:
            try:
                response = await client.get(url)
                if response.status_code == 404:
                    raise NotFound(f"{resource_type} not found at {address}")
                response.raise_for_status()
                return response.json()["data"]

            except httpx.TimeoutException as e:
                raise LedgerAPIError(f"Ledger timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LedgerAPIError(f"Ledger error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LedgerAPIError(f"Ledger unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise LedgerAPIError(f"Invalid resource data from ledger: {e}") from e

    async def get_account_resources(self, address: str) -> List[Dict[str, Any]]:
        """
        List every resource held by an account.

        An account the ledger has never seen holds nothing, so 404 yields [].

        Raises:
            LedgerAPIError: On timeout, HTTP errors, or invalid response
        """
        url = f"{self.base_url}/accounts/{quote(address, safe='')}/resources"
        async with self._client() as client:
            try:
                response = await client.get(url)
                if response.status_code == 404:
                    return []
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, list):
                    raise ValueError("expected a list of resources")
                return data

            except httpx.TimeoutException as e:
                raise LedgerAPIError(f"Ledger timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LedgerAPIError(f"Ledger error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LedgerAPIError(f"Ledger unreachable: {e}") from e
            except ValueError as e:
                raise LedgerAPIError(f"Invalid resource list from ledger: {e}") from e

    async def wait_for_transaction(self, tx_hash: str) -> Dict[str, Any]:
        """
        Block until a submitted transaction is committed.

        Polling strategy:
        - GET /transactions/by_hash every poll_interval seconds
        - 404 (not indexed yet), pending, malformed bodies, 5xx and transport errors keep polling
        - Stops at finality_timeout; nothing is ever resubmitted

        Raises:
            ExecutionAborted: Transaction committed with success=false
            FinalityTimeout: Not committed before the deadline
        """
        url = f"{self.base_url}/transactions/by_hash/{quote(tx_hash, safe='')}"
        started = time.monotonic()
        deadline = started + self.finality_timeout

        async with self._client() as client:
            while True:
                txn = None
                try:
                    response = await client.get(url)
                    if response.status_code != 404:
                        response.raise_for_status()
                        txn = response.json()
                        if not isinstance(txn, dict):
                            raise ValueError(f"Unexpected transaction body: {txn!r}")
                except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
                    logger.warning(f"Finality poll failed, retrying: {e}", extra={"tx_hash": tx_hash})
                    txn = None

                if txn is not None and txn.get("type") != "pending_transaction":
                    finality_latency_histogram.observe(time.monotonic() - started)
                    if not txn.get("success", False):
                        raise ExecutionAborted(txn.get("vm_status") or "Transaction aborted", tx_hash=tx_hash)
                    return txn

                if time.monotonic() >= deadline:
                    raise FinalityTimeout(
                        f"Transaction {tx_hash} not confirmed after {self.finality_timeout}s",
                        tx_hash=tx_hash,
                    )
                await asyncio.sleep(self.poll_interval)
