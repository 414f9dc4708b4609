"""Lender endpoints: loan offers and default checks"""

from fastapi import APIRouter, Depends

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.v1.results import action_response
from auto_lending.api.v1.schemas import ActionResponse, DefaultCheckRequest, LoanOfferRequest
from auto_lending.orchestration.orchestrator import LoanOrchestrator

router = APIRouter()


@router.post("/lender/offers", response_model=ActionResponse)
async def create_loan_offer(
    request_body: LoanOfferRequest,
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.create_loan_offer(
        request_body.loan_id,
        request_body.amount,
        request_body.interest_rate_bps,
        request_body.duration_seconds,
    )
    return action_response(result)


@router.post("/loans/default-checks", response_model=ActionResponse)
async def check_default(
    request_body: DefaultCheckRequest,
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    """Ask the contract to evaluate a customer's loan for default"""
    return action_response(await orchestrator.check_default(request_body.customer_address))
