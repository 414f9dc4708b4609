"""Map orchestrator results onto HTTP responses"""

from dataclasses import asdict

from fastapi.responses import JSONResponse

from auto_lending.api.v1.schemas import ActionResponse
from auto_lending.domain.models import ActionResult

STATUS_BY_ERROR = {
    "InvalidField": 422,
    "NotConnected": 401,
    "UserRejected": 403,
    "NotFound": 404,
    "Busy": 409,
    "ExecutionAborted": 409,
    "AgentError": 502,
    "AgentUnavailable": 503,
    "FinalityTimeout": 504,
}


def status_code_for(result: ActionResult) -> int:
    if result.success:
        return 200
    return STATUS_BY_ERROR.get(result.error, 500)


def action_response(result: ActionResult) -> JSONResponse:
    """The status message is always in the body, whatever the code"""
    body = ActionResponse(
        success=result.success,
        message=result.message,
        tx_hash=result.tx_hash,
        error=result.error,
    )
    return JSONResponse(status_code=status_code_for(result), content=body.model_dump())


def vehicles_payload(result: ActionResult) -> list:
    return [asdict(vehicle) for vehicle in result.vehicles]
