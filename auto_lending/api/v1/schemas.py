"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional, Union

# Numeric form fields arrive as typed text or numbers; range checks happen in
# the domain validators so every entry point gets identical rules.
FormInt = Union[int, str]


class ListVehicleRequest(BaseModel):
    """Request body for POST /v1/dealer/vehicles"""

    vehicle_id: FormInt = Field(..., description="Vehicle identifier, positive integer")
    price: FormInt = Field(..., description="Price in APT, positive integer")


class LoanOfferRequest(BaseModel):
    """Request body for POST /v1/lender/offers"""

    loan_id: FormInt
    amount: FormInt
    interest_rate_bps: FormInt = Field(..., description="Basis points, 500 = 5%")
    duration_seconds: FormInt


class LoanApplicationRequest(BaseModel):
    """Request body for POST /v1/customer/applications"""

    lender_address: str
    offer_id: FormInt
    vehicle_id: FormInt


class RepaymentRequest(BaseModel):
    """Request body for POST /v1/customer/repayments"""

    lender_address: str
    amount: FormInt


class DefaultCheckRequest(BaseModel):
    """Request body for POST /v1/loans/default-checks"""

    customer_address: str


class VehicleSchema(BaseModel):
    """Vehicle resource as read from the ledger"""

    id: int
    dealer: str
    price: int
    is_sold: bool


class ActionResponse(BaseModel):
    """Outcome of any orchestrator action"""

    success: bool
    message: str
    tx_hash: Optional[str] = None
    error: Optional[str] = None


class VehicleListResponse(ActionResponse):
    """Response for GET /v1/vehicles"""

    dealer_address: Optional[str] = None
    vehicles: List[VehicleSchema] = []


class SessionResponse(BaseModel):
    """Response for GET /v1/session"""

    address: Optional[str] = None
    address_short: str = ""
    busy: bool
    status: str
    displayed_dealer: Optional[str] = None
    vehicles: List[VehicleSchema] = []
