"""Transaction pipeline: sign, submit, await finality, normalize the outcome"""

import logging
import time

from auto_lending.domain.exceptions import (
    AgentError,
    AgentUnavailable,
    ExecutionAborted,
    FinalityTimeout,
    UserRejected,
)
from auto_lending.domain.models import Command, TransactionOutcome
from auto_lending.infrastructure.observability.logging import log_submission
from auto_lending.infrastructure.observability.metrics import record_command
from auto_lending.orchestration.ports import LedgerPort, SigningAgentPort

logger = logging.getLogger(__name__)


class TransactionPipeline:
    """Runs one validated Command through the signing agent and the ledger"""

    def __init__(self, agent: SigningAgentPort, ledger: LedgerPort):
        self.agent = agent
        self.ledger = ledger

    async def submit(self, command: Command) -> TransactionOutcome:
        """
        Submit a command and wait for it to be committed.

        Flow:
        1. Build the entry-function payload (no I/O)
        2. Signing agent signs and submits; failure here has no hash
        3. Ledger confirms finality for the returned hash
        4. Return {hash, finalized=True}

        Exactly one submission attempt is made. Nothing is retried: resending
        a financial mutation without proof it never executed risks paying twice.

        Returns:
            TransactionOutcome; known failure kinds are reported in .error,
            anything else propagates
        """
        start_time = time.time()
        payload = command.to_payload()
        tx_hash = None

        try:
            response = await self.agent.sign_and_submit_transaction(payload)
            tx_hash = response["hash"]
            await self.ledger.wait_for_transaction(tx_hash)
            outcome = TransactionOutcome(hash=tx_hash, finalized=True)

        except (AgentUnavailable, UserRejected, AgentError) as e:
            outcome = TransactionOutcome(hash=None, finalized=False, error=e)

        except (FinalityTimeout, ExecutionAborted) as e:
            e.tx_hash = e.tx_hash or tx_hash
            outcome = TransactionOutcome(hash=e.tx_hash, finalized=False, error=e)

        error_kind = outcome.error.kind if outcome.error else None
        duration_ms = (time.time() - start_time) * 1000
        record_command(command.name, error_kind)
        log_submission(command.name, command.entry_point, outcome.hash, error_kind, duration_ms)
        return outcome
