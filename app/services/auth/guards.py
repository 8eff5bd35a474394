from enum import Enum
from typing import Any
from uuid import UUID

from app.services.exceptions import AuthorizationError


class PartyRole(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"


def require_auth_with_id(caller_id: UUID, user_id: UUID) -> None:
    """Raise AuthorizationError unless the caller is ``user_id``."""
    if caller_id != user_id:
        raise AuthorizationError("Unauthorized: User ID mismatch")


def require_party(caller_id: UUID, record: Any, *roles: PartyRole) -> PartyRole:
    """
    Check that the caller holds one of ``roles`` on ``record``.

    ``record`` is any row with ``buyer_id``/``seller_id`` columns. Roles are
    tried in order and the first match is returned.

    :raises AuthorizationError: if the caller holds none of the roles.
    """
    roles = roles or tuple(PartyRole)
    for role in roles:
        if getattr(record, f"{role.value}_id") == caller_id:
            return role

    allowed = " or ".join(role.value for role in roles)
    raise AuthorizationError(f"Unauthorized: only the {allowed} can do this")
