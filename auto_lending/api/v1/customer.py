"""Customer endpoints: loan applications and repayments"""

from fastapi import APIRouter, Depends

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.v1.results import action_response
from auto_lending.api.v1.schemas import ActionResponse, LoanApplicationRequest, RepaymentRequest
from auto_lending.orchestration.orchestrator import LoanOrchestrator

router = APIRouter()


@router.post("/customer/applications", response_model=ActionResponse)
async def apply_for_loan(
    request_body: LoanApplicationRequest,
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    """
    Apply for a lender's offer against a vehicle.

    On success the displayed dealer's vehicles are re-read, since the
    vehicle may now be sold.
    """
    result = await orchestrator.apply_for_loan(
        request_body.lender_address,
        request_body.offer_id,
        request_body.vehicle_id,
    )
    return action_response(result)


@router.post("/customer/repayments", response_model=ActionResponse)
async def repay_loan(
    request_body: RepaymentRequest,
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.repay_loan(request_body.lender_address, request_body.amount)
    return action_response(result)
