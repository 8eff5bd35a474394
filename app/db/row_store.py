import logging
from typing import Any, Sequence, Type, TypeVar

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from app.api.dependencies import get_async_session
from app.services.exceptions import ConstraintViolationError, StoreError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=SQLModel)


class RowStore:
    """
    Thin select/insert/update layer over an ``AsyncSession``.

    Every failure of the underlying database is rolled back and re-raised as
    :class:`StoreError` carrying the driver message, so services never see
    SQLAlchemy exceptions.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def select_one(
        self, model: Type[RowT], *filters: Any, options: Sequence[Any] = ()
    ) -> RowT | None:
        query = select(model).where(*filters).execution_options(populate_existing=True)
        if options:
            query = query.options(*options)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise await self._store_error(e)
        return result.scalars().one_or_none()

    async def select_all(
        self,
        model: Type[RowT],
        *filters: Any,
        order_by: Sequence[Any] = (),
        options: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[RowT]:
        query = select(model).where(*filters).execution_options(populate_existing=True)
        if order_by:
            query = query.order_by(*order_by)
        if options:
            query = query.options(*options)
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise await self._store_error(e)
        return list(result.scalars().all())

    async def insert(self, row: RowT) -> RowT:
        self.session.add(row)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConstraintViolationError(str(e.orig)) from e
        except SQLAlchemyError as e:
            raise await self._store_error(e)

        await self.session.refresh(row)
        return row

    async def update_where(
        self, model: Type[RowT], *filters: Any, values: dict[str, Any]
    ) -> int:
        """
        Apply ``values`` to every row matching ``filters`` and commit.

        Returns the number of rows changed. Putting the expected current
        status into ``filters`` turns this into a compare-and-swap: a
        concurrent writer that got there first leaves nothing to match.
        """
        statement = update(model).where(*filters).values(**values)
        try:
            result = await self.session.execute(statement)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._store_error(e)
        return result.rowcount

    async def _store_error(self, error: SQLAlchemyError) -> StoreError:
        logger.exception("Row store operation failed")
        await self.session.rollback()
        message = str(getattr(error, "orig", None) or error)
        return StoreError(message)

    @classmethod
    async def get_dependency(
        cls, session: AsyncSession = Depends(get_async_session)
    ) -> "RowStore":
        return cls(session)
