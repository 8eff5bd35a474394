import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends
from sqlmodel import desc, or_

from app.api.dependencies import get_identity
from app.db.row_store import RowStore
from app.models.enums.listing_status import ListingStatus
from app.models.enums.transaction_status import TransactionStatus
from app.models.listing_model import Listing
from app.models.transaction_model import Transaction
from app.schemas.transaction_schema import TransactionCreate, TransactionStatusUpdate
from app.services.auth.guards import PartyRole, require_auth_with_id, require_party
from app.services.auth.identity import Identity
from app.services.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from app.services.validators import parse_id, validate_input

logger = logging.getLogger(__name__)

# funds are held from the moment the buyer commits, there is no payment step
INITIAL_STATUS = TransactionStatus.FUNDS_SECURED

# (from, to) -> party allowed to make the move
ESCROW_TRANSITIONS: dict[tuple[TransactionStatus, TransactionStatus], PartyRole] = {
    (TransactionStatus.FUNDS_SECURED, TransactionStatus.SHIPPED): PartyRole.SELLER,
    (TransactionStatus.SHIPPED, TransactionStatus.COMPLETED): PartyRole.BUYER,
}


class EscrowService:
    """
    Buyer-protection lifecycle of a purchase.

    funds_secured -> shipped (seller) -> completed (buyer). Funds custody is
    simulated; no refund or cancellation path exists.
    """

    def __init__(self, store: RowStore, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    async def create_transaction(
        self, buyer_id: Any, seller_id: Any, listing_id: Any, amount: Any
    ) -> Transaction:
        data = validate_input(
            TransactionCreate,
            buyer_id=buyer_id,
            seller_id=seller_id,
            listing_id=listing_id,
            amount=amount,
        )
        require_auth_with_id(self.identity.id, data.buyer_id)
        if data.buyer_id == data.seller_id:
            raise ValidationError("You cannot buy your own listing")

        listing = await self.store.select_one(Listing, Listing.id == data.listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        if listing.user_id != data.seller_id:
            raise ValidationError("Seller does not own this listing")
        if listing.listing_status != ListingStatus.ACTIVE:
            raise ValidationError("Listing is no longer available")

        transaction = Transaction.model_validate(
            data.model_dump() | {"status": INITIAL_STATUS}
        )
        transaction = await self.store.insert(transaction)
        logger.info(
            "Transaction %s opened for listing %s at %s",
            transaction.id,
            transaction.listing_id,
            transaction.status.value,
        )
        return transaction

    async def get_transaction(self, transaction_id: Any) -> Transaction:
        transaction_id = parse_id(transaction_id, "transaction ID")

        transaction = await self.store.select_one(
            Transaction, Transaction.id == transaction_id
        )
        if transaction is None:
            raise NotFoundError("Transaction not found")
        require_party(self.identity.id, transaction, PartyRole.BUYER, PartyRole.SELLER)
        return transaction

    async def list_user_transactions(self) -> list[Transaction]:
        """Transactions where the caller is buyer or seller, newest first."""
        return await self.store.select_all(
            Transaction,
            or_(
                Transaction.buyer_id == self.identity.id,
                Transaction.seller_id == self.identity.id,
            ),
            order_by=[desc(Transaction.created_at)],
        )

    async def update_transaction_status(
        self, transaction_id: Any, new_status: Any
    ) -> Transaction:
        """
        Move a transaction one step forward.

        :raises NotFoundError: unknown transaction.
        :raises AuthorizationError: the caller is not a party, or not the party
            that owns this step.
        :raises InvalidTransitionError: no edge from the current status to
            ``new_status``, or another request moved it first.
        """
        data = validate_input(
            TransactionStatusUpdate, transaction_id=transaction_id, status=new_status
        )
        transaction = await self.get_transaction(data.transaction_id)
        return await self._advance(transaction, data.status)

    async def confirm_shipping(self, transaction_id: Any) -> Transaction:
        transaction = await self.get_transaction(transaction_id)
        require_party(self.identity.id, transaction, PartyRole.SELLER)
        return await self._advance(transaction, TransactionStatus.SHIPPED)

    async def confirm_receipt(self, transaction_id: Any) -> Transaction:
        transaction = await self.get_transaction(transaction_id)
        require_party(self.identity.id, transaction, PartyRole.BUYER)
        return await self._advance(transaction, TransactionStatus.COMPLETED)

    async def _advance(
        self, transaction: Transaction, new_status: TransactionStatus
    ) -> Transaction:
        current = transaction.status
        role = ESCROW_TRANSITIONS.get((current, new_status))
        if role is None:
            raise InvalidTransitionError(
                f"Cannot move a transaction from {current.value} to {new_status.value}"
            )
        require_party(self.identity.id, transaction, role)

        changed = await self.store.update_where(
            Transaction,
            Transaction.id == transaction.id,
            Transaction.status == current,
            values={"status": new_status, "updated_at": datetime.now(timezone.utc)},
        )
        if not changed:
            raise InvalidTransitionError(
                "Transaction was updated by someone else, reload and try again"
            )

        logger.info(
            "Transaction %s moved %s -> %s by %s",
            transaction.id,
            current.value,
            new_status.value,
            role.value,
        )
        return await self.get_transaction(transaction.id)

    @classmethod
    async def get_dependency(
        cls,
        store: RowStore = Depends(RowStore.get_dependency),
        identity: Identity = Depends(get_identity),
    ) -> "EscrowService":
        return cls(store, identity)
