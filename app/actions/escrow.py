from typing import Any

from app.actions.results import action
from app.models.transaction_model import Transaction
from app.schemas.transaction_schema import TransactionRead
from app.services.escrow.escrow_service import EscrowService


def _read(transaction: Transaction) -> TransactionRead:
    return TransactionRead.model_validate(transaction, from_attributes=True)


@action
async def create_transaction(
    service: EscrowService, buyer_id: Any, seller_id: Any, listing_id: Any, amount: Any
) -> TransactionRead:
    return _read(
        await service.create_transaction(buyer_id, seller_id, listing_id, amount)
    )


@action
async def get_transaction(service: EscrowService, transaction_id: Any) -> TransactionRead:
    return _read(await service.get_transaction(transaction_id))


@action
async def get_user_transactions(service: EscrowService) -> list[TransactionRead]:
    return [_read(transaction) for transaction in await service.list_user_transactions()]


@action
async def update_transaction_status(
    service: EscrowService, transaction_id: Any, status: Any
) -> TransactionRead:
    return _read(await service.update_transaction_status(transaction_id, status))


@action
async def confirm_shipping(service: EscrowService, transaction_id: Any) -> TransactionRead:
    return _read(await service.confirm_shipping(transaction_id))


@action
async def confirm_receipt(service: EscrowService, transaction_id: Any) -> TransactionRead:
    return _read(await service.confirm_receipt(transaction_id))
