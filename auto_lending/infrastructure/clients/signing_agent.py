"""Signing agent HTTP client - the wallet bridge that holds the user's keys"""

from typing import Any, Dict, Optional

import httpx

from auto_lending.config import settings
from auto_lending.domain.exceptions import AgentError, AgentUnavailable, UserRejected
from auto_lending.infrastructure.observability.metrics import agent_failure_counter

# Wallet standard error code for a prompt the user dismissed
USER_REJECTED_CODE = 4001


def _error_detail(response: httpx.Response) -> tuple[Optional[int], str]:
    """Pull (code, message) out of an agent error body, tolerating non-JSON"""
    try:
        body = response.json()
    except ValueError:
        return None, response.text or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return None, str(body)
    return body.get("code"), str(body.get("message") or body.get("detail") or f"HTTP {response.status_code}")


class SigningAgentClient:
    """Client for a signing agent exposing connect/account/sign_and_submit"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.signing_agent_url or "").rstrip("/")
        # Signing waits on a human prompt, so the read timeout is generous
        self.timeout = timeout or max(settings.http_timeout_seconds, 60.0)
        self.transport = transport

    @property
    def available(self) -> bool:
        return bool(self.base_url)

    async def _request(self, method: str, path: str, json: Dict[str, Any] | None = None) -> httpx.Response:
        if not self.available:
            raise AgentUnavailable("No signing agent configured")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                return await client.request(method, f"{self.base_url}{path}", json=json)
            except httpx.TimeoutException as e:
                agent_failure_counter.labels(kind="timeout").inc()
                raise AgentError(f"Signing agent timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                agent_failure_counter.labels(kind="unavailable").inc()
                raise AgentUnavailable(f"Signing agent unreachable: {e}") from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        code, message = _error_detail(response)
        if response.status_code == 403 or code == USER_REJECTED_CODE:
            agent_failure_counter.labels(kind="rejected").inc()
            raise UserRejected(message or "User rejected the request")
        agent_failure_counter.labels(kind="error").inc()
        raise AgentError(message)

    async def connect(self) -> str:
        """
        Ask the agent to open a session.

        Returns:
            The connected account address

        Raises:
            AgentUnavailable, UserRejected, AgentError
        """
        response = await self._request("POST", "/connect")
        self._raise_for_status(response)
        try:
            return response.json()["address"]
        except (KeyError, ValueError, TypeError) as e:
            raise AgentError(f"Invalid connect response from agent: {e}") from e

    async def account(self) -> Optional[str]:
        """Address of an already-open session, or None if nothing is connected"""
        response = await self._request("GET", "/account")
        if response.status_code in (401, 404):
            return None
        self._raise_for_status(response)
        try:
            return response.json().get("address") or None
        except (ValueError, AttributeError) as e:
            raise AgentError(f"Invalid account response from agent: {e}") from e

    async def sign_and_submit_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Have the agent sign the payload and submit it to the ledger.

        Returns:
            {"hash": <transaction hash>}

        Raises:
            AgentUnavailable, UserRejected, AgentError
        """
        response = await self._request("POST", "/sign_and_submit", json={"payload": payload})
        self._raise_for_status(response)
        try:
            data = response.json()
            return {"hash": data["hash"]}
        except (KeyError, ValueError, TypeError) as e:
            raise AgentError(f"Invalid submit response from agent: {e}") from e
