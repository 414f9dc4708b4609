"""GET /v1/vehicles - vehicle listed at a dealer address"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from auto_lending.api.dependencies import get_orchestrator
from auto_lending.api.v1.results import status_code_for, vehicles_payload
from auto_lending.api.v1.schemas import VehicleListResponse
from auto_lending.orchestration.orchestrator import LoanOrchestrator

router = APIRouter()


@router.get("/vehicles", response_model=VehicleListResponse)
async def get_vehicles(
    dealer_address: str = Query("", description="Dealer account address"),
    orchestrator: LoanOrchestrator = Depends(get_orchestrator),
):
    """
    Read the dealer's Vehicle resource.

    Returns:
        At most one vehicle; an address with none gives 404 and an empty list
    """
    result = await orchestrator.fetch_vehicles(dealer_address)
    body = VehicleListResponse(
        success=result.success,
        message=result.message,
        error=result.error,
        dealer_address=orchestrator.view.displayed_address,
        vehicles=vehicles_payload(result),
    )
    return JSONResponse(status_code=status_code_for(result), content=body.model_dump())
