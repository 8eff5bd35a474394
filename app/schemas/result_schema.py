from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ActionResult(BaseModel, Generic[DataT]):
    """Outcome of an action: either ``data`` or ``error`` is set, never both."""

    data: DataT | None = None
    error: str | None = None
    code: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
