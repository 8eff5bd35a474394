from uuid import uuid4

import pytest

from app.db.row_store import RowStore
from app.models.enums.listing_status import ListingStatus
from app.models.enums.transaction_status import TransactionStatus
from app.models.transaction_model import Transaction
from app.services.escrow.escrow_service import EscrowService
from app.services.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from app.tests.factories import create_listing, identity_of

LIFECYCLE = list(TransactionStatus)


def service_for(store, profile) -> EscrowService:
    return EscrowService(store, identity_of(profile))


async def open_transaction(store, listing, seller, buyer, amount=1200) -> Transaction:
    return await service_for(store, buyer).create_transaction(
        buyer.id, seller.id, listing.id, amount
    )


@pytest.mark.asyncio
async def test_purchase_lifecycle(store, listing, seller, buyer):
    seen = []

    transaction = await open_transaction(store, listing, seller, buyer)
    seen.append(transaction.status)
    assert transaction.status == TransactionStatus.FUNDS_SECURED
    assert transaction.amount == 1200

    shipped = await service_for(store, seller).confirm_shipping(transaction.id)
    seen.append(shipped.status)
    assert shipped.status == TransactionStatus.SHIPPED

    completed = await service_for(store, buyer).confirm_receipt(transaction.id)
    seen.append(completed.status)
    assert completed.status == TransactionStatus.COMPLETED

    with pytest.raises(InvalidTransitionError):
        await service_for(store, buyer).confirm_receipt(transaction.id)

    # observed statuses only ever move forward
    ranks = [LIFECYCLE.index(status) for status in seen]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == len(ranks)


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -5, 12.5, 1200.0, "1200", True, None])
async def test_create_transaction_rejects_bad_amount(store, listing, seller, buyer, amount):
    with pytest.raises(ValidationError, match="amount"):
        await open_transaction(store, listing, seller, buyer, amount=amount)


@pytest.mark.asyncio
async def test_create_transaction_rejects_malformed_ids(store, seller, buyer):
    with pytest.raises(ValidationError, match="listing_id"):
        await service_for(store, buyer).create_transaction(
            buyer.id, seller.id, "L1", 1200
        )


@pytest.mark.asyncio
async def test_create_transaction_only_by_buyer(store, listing, seller, buyer, stranger):
    with pytest.raises(AuthorizationError):
        await service_for(store, stranger).create_transaction(
            buyer.id, seller.id, listing.id, 1200
        )


@pytest.mark.asyncio
async def test_create_transaction_for_own_listing(store, listing, seller):
    with pytest.raises(ValidationError, match="your own listing"):
        await open_transaction(store, listing, seller, seller)


@pytest.mark.asyncio
async def test_create_transaction_unknown_listing(store, seller, buyer):
    with pytest.raises(NotFoundError):
        await service_for(store, buyer).create_transaction(
            buyer.id, seller.id, uuid4(), 1200
        )


@pytest.mark.asyncio
async def test_create_transaction_seller_must_own_listing(
    store, listing, buyer, stranger
):
    with pytest.raises(ValidationError, match="does not own"):
        await open_transaction(store, listing, stranger, buyer)


@pytest.mark.asyncio
async def test_create_transaction_for_sold_listing(session, store, seller, buyer):
    sold = await create_listing(session, seller, listing_status=ListingStatus.SOLD)
    with pytest.raises(ValidationError, match="no longer available"):
        await open_transaction(store, sold, seller, buyer)


@pytest.mark.asyncio
async def test_get_transaction_by_parties(store, listing, seller, buyer):
    transaction = await open_transaction(store, listing, seller, buyer)

    for party in (buyer, seller):
        found = await service_for(store, party).get_transaction(str(transaction.id))
        assert found.id == transaction.id


@pytest.mark.asyncio
async def test_get_transaction_rejects_non_party(store, listing, seller, buyer, stranger):
    transaction = await open_transaction(store, listing, seller, buyer)

    with pytest.raises(AuthorizationError):
        await service_for(store, stranger).get_transaction(transaction.id)


@pytest.mark.asyncio
async def test_get_transaction_unknown(store, buyer):
    with pytest.raises(NotFoundError):
        await service_for(store, buyer).get_transaction(uuid4())
    with pytest.raises(ValidationError):
        await service_for(store, buyer).get_transaction("txn-1")


@pytest.mark.asyncio
async def test_buyer_cannot_confirm_shipping(store, listing, seller, buyer):
    transaction = await open_transaction(store, listing, seller, buyer)

    with pytest.raises(AuthorizationError):
        await service_for(store, buyer).confirm_shipping(transaction.id)
    with pytest.raises(AuthorizationError):
        await service_for(store, buyer).update_transaction_status(
            transaction.id, "shipped"
        )


@pytest.mark.asyncio
async def test_seller_cannot_confirm_receipt(store, listing, seller, buyer):
    transaction = await open_transaction(store, listing, seller, buyer)
    await service_for(store, seller).confirm_shipping(transaction.id)

    with pytest.raises(AuthorizationError):
        await service_for(store, seller).confirm_receipt(transaction.id)


@pytest.mark.asyncio
async def test_receipt_before_shipping(store, listing, seller, buyer):
    transaction = await open_transaction(store, listing, seller, buyer)

    with pytest.raises(InvalidTransitionError):
        await service_for(store, buyer).confirm_receipt(transaction.id)


@pytest.mark.asyncio
async def test_update_rejects_non_party(store, listing, seller, buyer, stranger):
    transaction = await open_transaction(store, listing, seller, buyer)

    with pytest.raises(AuthorizationError):
        await service_for(store, stranger).update_transaction_status(
            transaction.id, "shipped"
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("new_status", ["escrow_pending", "funds_secured", "completed"])
async def test_update_rejects_edges_from_funds_secured(
    store, listing, seller, buyer, new_status
):
    transaction = await open_transaction(store, listing, seller, buyer)

    for party in (buyer, seller):
        with pytest.raises(InvalidTransitionError):
            await service_for(store, party).update_transaction_status(
                transaction.id, new_status
            )


@pytest.mark.asyncio
@pytest.mark.parametrize("new_status", ["escrow_pending", "funds_secured", "shipped"])
async def test_completed_is_terminal(store, listing, seller, buyer, new_status):
    transaction = await open_transaction(store, listing, seller, buyer)
    await service_for(store, seller).confirm_shipping(transaction.id)
    await service_for(store, buyer).confirm_receipt(transaction.id)

    for party in (buyer, seller):
        with pytest.raises(InvalidTransitionError):
            await service_for(store, party).update_transaction_status(
                transaction.id, new_status
            )


@pytest.mark.asyncio
async def test_update_rejects_unknown_status(store, listing, seller, buyer):
    transaction = await open_transaction(store, listing, seller, buyer)
    with pytest.raises(ValidationError):
        await service_for(store, seller).update_transaction_status(
            transaction.id, "refunded"
        )


@pytest.mark.asyncio
async def test_lost_race_is_rejected(session_factory, session, listing, seller, buyer):
    transaction = await open_transaction(RowStore(session), listing, seller, buyer)

    class RacingStore(RowStore):
        async def update_where(self, model, *filters, values):
            # a duplicate request ships the item between our read and write
            async with session_factory() as other:
                await RowStore(other).update_where(
                    Transaction,
                    Transaction.id == transaction.id,
                    values={"status": TransactionStatus.SHIPPED},
                )
            return await super().update_where(model, *filters, values=values)

    with pytest.raises(InvalidTransitionError, match="someone else"):
        await service_for(RacingStore(session), seller).confirm_shipping(
            transaction.id
        )

    current = await service_for(RowStore(session), seller).get_transaction(
        transaction.id
    )
    assert current.status == TransactionStatus.SHIPPED


@pytest.mark.asyncio
async def test_list_user_transactions(session, store, listing, seller, buyer, stranger):
    other_listing = await create_listing(session, seller)
    first = await open_transaction(store, listing, seller, buyer)
    second = await open_transaction(store, other_listing, seller, buyer, amount=800)

    as_buyer = await service_for(store, buyer).list_user_transactions()
    as_seller = await service_for(store, seller).list_user_transactions()

    assert {t.id for t in as_buyer} == {first.id, second.id}
    assert {t.id for t in as_seller} == {first.id, second.id}
    assert await service_for(store, stranger).list_user_transactions() == []


class CountingStore(RowStore):
    def __init__(self, session) -> None:
        super().__init__(session)
        self.transaction_reads = 0

    async def select_one(self, model, *filters, options=()):
        if model is Transaction:
            self.transaction_reads += 1
        return await super().select_one(model, *filters, options=options)


@pytest.mark.asyncio
async def test_confirm_steps_read_transaction_once_before_writing(
    session, listing, seller, buyer
):
    transaction = await open_transaction(RowStore(session), listing, seller, buyer)

    store = CountingStore(session)
    await service_for(store, seller).confirm_shipping(transaction.id)
    # one read to check the move, one to return the new state
    assert store.transaction_reads == 2

    store = CountingStore(session)
    await service_for(store, buyer).confirm_receipt(transaction.id)
    assert store.transaction_reads == 2
