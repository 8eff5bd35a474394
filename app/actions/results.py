import functools
import logging
from typing import Any, Awaitable, Callable

from app.schemas.result_schema import ActionResult
from app.services.exceptions import AppError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."


def action(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[ActionResult]]:
    """
    Turn a service call into an ``ActionResult``.

    Known errors keep their message and code. Anything else is logged and
    reported with a generic message so internals do not leak to the caller.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
        try:
            data = await func(*args, **kwargs)
        except AppError as e:
            return ActionResult(error=e.message, code=e.code)
        except Exception:
            logger.exception("Unexpected error in %s", func.__name__)
            return ActionResult(error=UNEXPECTED_ERROR, code=AppError.code)
        return ActionResult(data=data)

    return wrapper
