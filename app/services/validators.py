from typing import Any, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.services.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_id(value: Any, name: str = "id") -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {name}")


def validate_input(schema: Type[SchemaT], **data: Any) -> SchemaT:
    """Validate plain arguments against ``schema``, raising our ValidationError."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(format_errors(e)) from e


def format_errors(error: PydanticValidationError) -> str:
    messages = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"])
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(messages)
