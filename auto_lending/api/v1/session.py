"""Wallet session endpoints and module initialization"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.v1.results import action_response
from auto_lending.api.v1.schemas import ActionResponse, SessionResponse
from auto_lending.orchestration.orchestrator import LoanOrchestrator, describe

router = APIRouter()


@router.get("/session", response_model=SessionResponse)
def get_session(orchestrator: LoanOrchestrator = Depends(get_orchestrator)):
    """Connected address, busy flag, last status and cached vehicles"""
    snapshot = describe(orchestrator)
    snapshot["vehicles"] = [asdict(vehicle) for vehicle in snapshot["vehicles"]]
    return SessionResponse(**snapshot)


@router.post("/session/connect", response_model=ActionResponse)
async def connect(orchestrator: LoanOrchestrator = Depends(get_orchestrator)):
    """
    Connect the signing agent.

    Registers the native coin store for the account when it is missing;
    a failed registration is reported in the message but keeps the session.
    """
    return action_response(await orchestrator.connect())


@router.post("/session/resume", response_model=ActionResponse)
async def resume(orchestrator: LoanOrchestrator = Depends(get_orchestrator)):
    return action_response(await orchestrator.resume_session())


@router.post("/session/disconnect", response_model=ActionResponse)
def disconnect(orchestrator: LoanOrchestrator = Depends(get_orchestrator)):
    return action_response(orchestrator.disconnect())


@router.post("/module/initialize", response_model=ActionResponse)
async def initialize_module(orchestrator: LoanOrchestrator = Depends(get_orchestrator)):
    """Optional one-time contract setup; safe to repeat"""
    return action_response(await orchestrator.initialize_module())
