from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from app.actions import escrow as escrow_actions
from app.api.responses import respond
from app.services.escrow.escrow_service import EscrowService

router = APIRouter(prefix="/transactions", tags=["Escrow"])


class TransactionBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    buyer_id: str
    seller_id: str
    listing_id: str
    # checked by the service, which only takes whole positive numbers
    amount: Any


class TransactionStatusBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    status: str


@router.post("/", summary="Buy a listing securely")
async def create_transaction(
    *,
    body: TransactionBody,
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    result = await escrow_actions.create_transaction(
        escrow_service, body.buyer_id, body.seller_id, body.listing_id, body.amount
    )
    return respond(result, status.HTTP_201_CREATED)


@router.get("/", summary="Transactions of the current user")
async def get_user_transactions(
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    return respond(await escrow_actions.get_user_transactions(escrow_service))


@router.get("/{transaction_id}", summary="Get a transaction")
async def get_transaction(
    transaction_id: str,
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    return respond(await escrow_actions.get_transaction(escrow_service, transaction_id))


@router.patch("/{transaction_id}", summary="Move a transaction forward")
async def update_transaction_status(
    transaction_id: str,
    body: TransactionStatusBody,
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    result = await escrow_actions.update_transaction_status(
        escrow_service, transaction_id, body.status
    )
    return respond(result)


@router.post("/{transaction_id}/shipping", summary="Seller confirms shipping")
async def confirm_shipping(
    transaction_id: str,
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    return respond(await escrow_actions.confirm_shipping(escrow_service, transaction_id))


@router.post("/{transaction_id}/receipt", summary="Buyer confirms receipt")
async def confirm_receipt(
    transaction_id: str,
    escrow_service: EscrowService = Depends(EscrowService.get_dependency),
):
    return respond(await escrow_actions.confirm_receipt(escrow_service, transaction_id))
