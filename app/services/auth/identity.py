from uuid import UUID

from pydantic import BaseModel


class Identity(BaseModel):
    """The authenticated caller of a request."""

    id: UUID
    email: str | None = None


def identity_from_claims(claims: dict | None) -> Identity | None:
    """
    Build the caller identity from verified token claims.

    Returns None when there are no claims or the ``uid`` claim is not a UUID;
    profile ids and auth ids are the same value.
    """
    if not claims:
        return None

    uid = claims.get("uid") or claims.get("user_id")
    try:
        user_id = UUID(str(uid))
    except ValueError:
        return None

    return Identity(id=user_id, email=claims.get("email"))
