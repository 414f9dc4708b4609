"""Pytest fixtures for testing"""

import pytest
import httpx
from unittest.mock import AsyncMock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.main import create_app
from auto_lending.domain.catalog import coin_store_type
from auto_lending.domain.exceptions import NotFound
from auto_lending.infrastructure.clients.ledger import LedgerClient
from auto_lending.infrastructure.clients.signing_agent import SigningAgentClient
from auto_lending.orchestration.orchestrator import LoanOrchestrator
from mock.ledger_node.main import create_mock_node

ACCOUNT = "0xA1"
TX_HASH = "0x" + "ab" * 32
MOCK_NODE = "http://mock-node"


@pytest.fixture
def agent() -> AsyncMock:
    """Signing agent that connects as 0xA1 and signs everything"""
    agent = AsyncMock()
    agent.connect.return_value = ACCOUNT
    agent.account.return_value = None
    agent.sign_and_submit_transaction.return_value = {"hash": TX_HASH}
    return agent


@pytest.fixture
def ledger() -> AsyncMock:
    """Ledger where the account is already registered and holds no vehicle"""
    ledger = AsyncMock()
    ledger.get_account_resources.return_value = [{"type": coin_store_type(), "data": {}}]
    ledger.get_account_resource.side_effect = NotFound("resource not found")
    ledger.wait_for_transaction.return_value = {"type": "user_transaction", "success": True}
    return ledger


@pytest.fixture
def orchestrator(agent: AsyncMock, ledger: AsyncMock) -> LoanOrchestrator:
    return LoanOrchestrator(agent=agent, ledger=ledger)


@pytest.fixture
async def connected(orchestrator: LoanOrchestrator, agent: AsyncMock, ledger: AsyncMock) -> LoanOrchestrator:
    """Orchestrator with an open session and clean call history"""
    await orchestrator.connect()
    agent.reset_mock()
    ledger.reset_mock()
    return orchestrator


@pytest.fixture
def mock_node() -> FastAPI:
    """In-memory ledger node plus wallet bridge, fresh per test"""
    return create_mock_node(signer_address="0xa1")


@pytest.fixture
def live_orchestrator(mock_node: FastAPI) -> LoanOrchestrator:
    """Orchestrator wired to the mock node through real HTTP clients"""
    transport = httpx.ASGITransport(app=mock_node)
    ledger = LedgerClient(
        base_url=f"{MOCK_NODE}/v1",
        finality_timeout=2.0,
        poll_interval=0.01,
        transport=transport,
    )
    agent = SigningAgentClient(base_url=f"{MOCK_NODE}/wallet", transport=transport)
    return LoanOrchestrator(agent=agent, ledger=ledger)


@pytest.fixture
def client(live_orchestrator: LoanOrchestrator) -> TestClient:
    """Create FastAPI test client backed by the mock node"""
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: live_orchestrator
    return TestClient(app)
