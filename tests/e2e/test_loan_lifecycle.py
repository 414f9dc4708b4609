"""
End-to-end lifecycle against the in-process mock ledger node.

Real LedgerClient and SigningAgentClient talk HTTP to the mock through
httpx.ASGITransport; only the network is simulated.
"""

import pytest

from auto_lending.domain.catalog import REGISTER, build_command
from auto_lending.domain.models import Vehicle
from auto_lending.orchestration.orchestrator import LoanOrchestrator

pytestmark = pytest.mark.integration


async def test_dealer_lists_and_customer_buys(live_orchestrator: LoanOrchestrator):
    connected = await live_orchestrator.connect()
    assert connected.success
    assert "AptosCoin registered successfully!" in connected.message

    listed = await live_orchestrator.list_vehicle("1", "100")
    assert listed.success, listed.message

    fetched = await live_orchestrator.fetch_vehicles("0xa1")
    assert fetched.vehicles == [Vehicle(id=1, dealer="0xa1", price=100, is_sold=False)]

    applied = await live_orchestrator.apply_for_loan("0xlender", "1", "1")
    assert applied.success, applied.message
    # displayed dealer is re-read after the application commits
    assert live_orchestrator.vehicles == [Vehicle(id=1, dealer="0xa1", price=100, is_sold=True)]


async def test_second_application_is_aborted_and_cache_kept(live_orchestrator: LoanOrchestrator):
    await live_orchestrator.connect()
    await live_orchestrator.list_vehicle("1", "100")
    await live_orchestrator.apply_for_loan("0xlender", "1", "1")
    await live_orchestrator.fetch_vehicles("0xa1")
    cached = live_orchestrator.vehicles

    again = await live_orchestrator.apply_for_loan("0xlender", "1", "1")

    assert not again.success
    assert again.error == "ExecutionAborted"
    assert again.message == "Loan application failed: vehicle already sold"
    assert live_orchestrator.vehicles == cached


async def test_reconnect_does_not_register_twice(live_orchestrator: LoanOrchestrator):
    first = await live_orchestrator.connect()
    second = await live_orchestrator.connect()

    assert "registered" in first.message
    assert second.message == "Wallet connected successfully!"


async def test_redundant_registration_surfaces_as_status(live_orchestrator: LoanOrchestrator):
    await live_orchestrator.connect()

    # a registration issued after the store already exists aborts remotely
    outcome = await live_orchestrator.session.pipeline.submit(build_command(REGISTER))

    assert not outcome.ok
    assert outcome.error.kind == "ExecutionAborted"
    assert "ECOIN_STORE_ALREADY_PUBLISHED" in str(outcome.error)


async def test_resume_after_connect(live_orchestrator: LoanOrchestrator):
    assert (await live_orchestrator.resume_session()).message == "Wallet not connected"

    await live_orchestrator.connect()
    live_orchestrator.session.address = None

    resumed = await live_orchestrator.resume_session()
    assert resumed.success
    assert live_orchestrator.address == "0xa1"
