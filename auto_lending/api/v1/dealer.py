"""POST /v1/dealer/vehicles - list a vehicle for financing"""

from fastapi import APIRouter, Depends

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.v1.results import action_response
from auto_lending.api.v1.schemas import ActionResponse, ListVehicleRequest
from auto_lending.orchestration.orchestrator import LoanOrchestrator

router = APIRouter()


@router.post("/dealer/vehicles", response_model=ActionResponse)
async def list_vehicle(
    request_body: ListVehicleRequest,
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    """Signed by the connected dealer account"""
    result = await orchestrator.list_vehicle(request_body.vehicle_id, request_body.price)
    return action_response(result)
