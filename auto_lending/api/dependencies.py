"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from auto_lending.infrastructure.clients.ledger import LedgerClient
from auto_lending.infrastructure.clients.signing_agent import SigningAgentClient
from auto_lending.orchestration.orchestrator import LoanOrchestrator


def get_ledger_client() -> LedgerClient:
    """Provide ledger node client instance"""
    return LedgerClient()


def get_signing_agent() -> SigningAgentClient:
    """Provide signing agent client instance"""
    return SigningAgentClient()


@lru_cache
def get_orchestrator() -> LoanOrchestrator:
    """One orchestrator per process: it owns the session and the busy flag"""
    return LoanOrchestrator(agent=get_signing_agent(), ledger=get_ledger_client())
