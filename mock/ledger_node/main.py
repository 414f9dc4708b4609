"""
Mock ledger node and signing agent for local runs and end-to-end tests.

Serves the node REST routes under /v1 and the wallet bridge under /wallet,
sharing one in-memory account store. Only the resource effects the client
observes are modelled; no loan accounting happens here.
"""

import hashlib
import itertools
import os
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

MODULE_ADDRESS = os.getenv("MODULE_ADDRESS", "0x03f4fe0fa07e8733ca0eb08be6d46e8ae929afdc33222164d79f5cdc89137970")
MODULE_NAME = os.getenv("MODULE_NAME", "AutoLending")
COIN_TYPE = "0x1::aptos_coin::AptosCoin"
COIN_STORE = f"0x1::coin::CoinStore<{COIN_TYPE}>"


class SubmitRequest(BaseModel):
    payload: Dict[str, Any]


class Abort(Exception):
    pass


def create_mock_node(signer_address: str = "0xa1", reject_signing: bool = False) -> FastAPI:
    """Fresh app with empty state; one connected wallet account"""
    app = FastAPI(title="Mock Ledger Node", version="1.0.0")
    accounts: Dict[str, Dict[str, Any]] = {}
    transactions: Dict[str, Dict[str, Any]] = {}
    session = {"address": None, "reject": reject_signing}
    sequence = itertools.count()
    vehicle_type = f"{MODULE_ADDRESS}::{MODULE_NAME}::Vehicle"

    def execute(sender: str, payload: Dict[str, Any]) -> None:
        function = payload.get("function", "")
        args = payload.get("arguments", [])
        resources = accounts.setdefault(sender, {})

        if function == "0x1::coin::register":
            if COIN_STORE in resources:
                raise Abort("ECOIN_STORE_ALREADY_PUBLISHED")
            resources[COIN_STORE] = {"coin": {"value": "0"}, "frozen": False}
        elif function == f"{MODULE_ADDRESS}::{MODULE_NAME}::list_vehicle":
            if vehicle_type in resources:
                raise Abort("RESOURCE_ALREADY_EXISTS")
            resources[vehicle_type] = {
                "id": str(args[0]),
                "dealer": sender,
                "price": str(args[1]),
                "is_sold": False,
            }
        elif function == f"{MODULE_ADDRESS}::{MODULE_NAME}::apply_for_loan":
            vehicle_id = str(args[2])
            for holder in accounts.values():
                vehicle = holder.get(vehicle_type)
                if vehicle and vehicle["id"] == vehicle_id:
                    if vehicle["is_sold"]:
                        raise Abort("vehicle already sold")
                    vehicle["is_sold"] = True
                    return
            raise Abort("vehicle not found")
        elif not function.startswith(f"{MODULE_ADDRESS}::{MODULE_NAME}::"):
            raise Abort("FUNCTION_RESOLUTION_FAILURE")

    @app.get("/health")
    def health(): return {"status": "ok"}

    # ---- node REST ----

    @app.get("/v1/accounts/{address}/resources")
    def get_resources(address: str):
        if address not in accounts:
            raise HTTPException(status_code=404, detail="account not found")
        return [{"type": t, "data": d} for t, d in accounts[address].items()]

    @app.get("/v1/accounts/{address}/resource/{resource_type}")
    def get_resource(address: str, resource_type: str):
        data = accounts.get(address, {}).get(resource_type)
        if data is None:
            return JSONResponse(status_code=404, content={"error_code": "resource_not_found"})
        return {"type": resource_type, "data": data}

    @app.get("/v1/transactions/by_hash/{tx_hash}")
    def get_transaction(tx_hash: str):
        if tx_hash not in transactions:
            return JSONResponse(status_code=404, content={"error_code": "transaction_not_found"})
        return transactions[tx_hash]

    # ---- wallet bridge ----

    @app.post("/wallet/connect")
    def connect():
        if session["reject"]:
            return JSONResponse(status_code=403, content={"code": 4001, "message": "User rejected the request"})
        session["address"] = signer_address
        return {"address": signer_address}

    @app.get("/wallet/account")
    def account():
        if session["address"] is None:
            return JSONResponse(status_code=401, content={"message": "not connected"})
        return {"address": session["address"]}

    @app.post("/wallet/sign_and_submit")
    def sign_and_submit(request: SubmitRequest):
        if session["address"] is None:
            return JSONResponse(status_code=401, content={"message": "not connected"})
        if session["reject"]:
            return JSONResponse(status_code=403, content={"code": 4001, "message": "User rejected the request"})
        tx_hash = "0x" + hashlib.sha256(f"{next(sequence)}:{request.payload}".encode()).hexdigest()
        try:
            execute(session["address"], request.payload)
            success, vm_status = True, "Executed successfully"
        except Abort as e:
            success, vm_status = False, str(e)
        transactions[tx_hash] = {
            "type": "user_transaction",
            "hash": tx_hash,
            "sender": session["address"],
            "success": success,
            "vm_status": vm_status,
            "payload": request.payload,
        }
        return {"hash": tx_hash}

    return app


app = create_mock_node()
