"""Unit tests for the session manager and funding-capability check"""

import pytest
from unittest.mock import AsyncMock

from auto_lending.domain.catalog import coin_store_type
from auto_lending.domain.exceptions import NotConnected
from auto_lending.orchestration.pipeline import TransactionPipeline
from auto_lending.orchestration.session import SessionManager


@pytest.fixture
def session(agent: AsyncMock, ledger: AsyncMock) -> SessionManager:
    return SessionManager(agent, ledger, TransactionPipeline(agent, ledger))


async def test_connect_stores_address(session: SessionManager):
    assert await session.connect() == "0xA1"
    assert session.address == "0xA1"
    assert session.connected


async def test_ensure_funding_noop_when_registered(session: SessionManager, agent: AsyncMock):
    assert await session.ensure_funding_capability("0xA1") is None
    agent.sign_and_submit_transaction.assert_not_awaited()


async def test_ensure_funding_registers_when_missing(session: SessionManager, agent: AsyncMock, ledger: AsyncMock):
    ledger.get_account_resources.return_value = [{"type": "0x1::account::Account", "data": {}}]

    outcome = await session.ensure_funding_capability("0xA1")

    assert outcome.ok
    agent.sign_and_submit_transaction.assert_awaited_once()
    payload = agent.sign_and_submit_transaction.await_args.args[0]
    assert payload["function"] == "0x1::coin::register"
    assert payload["type_arguments"] == ["0x1::aptos_coin::AptosCoin"]
    assert payload["arguments"] == []


async def test_ensure_funding_matches_exact_coin_store(session: SessionManager, agent: AsyncMock, ledger: AsyncMock):
    ledger.get_account_resources.return_value = [
        {"type": "0x1::coin::CoinStore<0xbeef::usd::USD>", "data": {}},
    ]
    await session.ensure_funding_capability("0xA1")
    agent.sign_and_submit_transaction.assert_awaited_once()

    agent.reset_mock()
    ledger.get_account_resources.return_value = [{"type": coin_store_type(), "data": {}}]
    await session.ensure_funding_capability("0xA1")
    agent.sign_and_submit_transaction.assert_not_awaited()


async def test_resume_adopts_open_session(session: SessionManager, agent: AsyncMock):
    agent.account.return_value = "0xB2"
    assert await session.resume() == "0xB2"
    assert session.address == "0xB2"


async def test_resume_without_session(session: SessionManager):
    assert await session.resume() is None
    assert session.address is None


async def test_require_address_and_disconnect(session: SessionManager):
    with pytest.raises(NotConnected):
        session.require_address()

    await session.connect()
    assert session.require_address() == "0xA1"

    session.disconnect()
    assert session.address is None
