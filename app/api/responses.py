from fastapi import status
from fastapi.responses import JSONResponse

from app.schemas.result_schema import ActionResult
from app.services.exceptions import (
    AppError,
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    StoreError,
    ValidationError,
)

ERROR_STATUS_CODES = {
    error.code: error.status_code
    for error in (
        AppError,
        ValidationError,
        InvalidTransitionError,
        AuthorizationError,
        NotFoundError,
        StoreError,
    )
}


def respond(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Send an action result as ``{data, error, code}`` with a matching status."""
    if result.ok:
        status_code = success_status
    else:
        status_code = ERROR_STATUS_CODES.get(
            result.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
