"""Unit tests for the transaction pipeline"""

import pytest
from unittest.mock import AsyncMock

from auto_lending.domain.catalog import build_command
from auto_lending.domain.exceptions import (
    AgentUnavailable,
    ExecutionAborted,
    FinalityTimeout,
    UserRejected,
)
from auto_lending.orchestration.pipeline import TransactionPipeline


@pytest.fixture
def command():
    return build_command("list_vehicle", {"vehicle_id": "1", "price": "100"})


async def test_submit_success(agent: AsyncMock, ledger: AsyncMock, command):
    outcome = await TransactionPipeline(agent, ledger).submit(command)

    assert outcome.ok
    assert outcome.hash == "0x" + "ab" * 32
    agent.sign_and_submit_transaction.assert_awaited_once_with(command.to_payload())
    ledger.wait_for_transaction.assert_awaited_once_with(outcome.hash)


@pytest.mark.parametrize("error", [AgentUnavailable("no agent"), UserRejected("declined")])
async def test_agent_failure_never_reaches_ledger(agent: AsyncMock, ledger: AsyncMock, command, error):
    agent.sign_and_submit_transaction.side_effect = error

    outcome = await TransactionPipeline(agent, ledger).submit(command)

    assert not outcome.finalized
    assert outcome.hash is None
    assert outcome.error is error
    ledger.wait_for_transaction.assert_not_awaited()


async def test_execution_aborted_keeps_hash(agent: AsyncMock, ledger: AsyncMock, command):
    ledger.wait_for_transaction.side_effect = ExecutionAborted("vehicle already sold")

    outcome = await TransactionPipeline(agent, ledger).submit(command)

    assert not outcome.ok
    assert outcome.hash == "0x" + "ab" * 32
    assert outcome.error.kind == "ExecutionAborted"
    assert outcome.error.tx_hash == outcome.hash


async def test_finality_timeout_is_not_retried(agent: AsyncMock, ledger: AsyncMock, command):
    ledger.wait_for_transaction.side_effect = FinalityTimeout("too slow")

    outcome = await TransactionPipeline(agent, ledger).submit(command)

    assert outcome.error.kind == "FinalityTimeout"
    assert agent.sign_and_submit_transaction.await_count == 1
    assert ledger.wait_for_transaction.await_count == 1


async def test_unexpected_errors_propagate(agent: AsyncMock, ledger: AsyncMock, command):
    agent.sign_and_submit_transaction.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await TransactionPipeline(agent, ledger).submit(command)
