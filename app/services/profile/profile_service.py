import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends

from app.api.dependencies import get_identity
from app.db.row_store import RowStore
from app.models.profile_model import Profile
from app.schemas.profile_schema import ProfileUpdate, VerifyIdentityResult
from app.services.auth.guards import require_auth_with_id
from app.services.auth.identity import Identity
from app.services.exceptions import NotFoundError
from app.services.validators import parse_id, validate_input

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store: RowStore, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    async def get_profile(self, user_id: Any) -> Profile:
        user_id = parse_id(user_id, "user ID")
        profile = await self.store.select_one(Profile, Profile.id == user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def get_current_profile(self) -> Profile:
        return await self.get_profile(self.identity.id)

    async def update_profile(self, **changes: Any) -> Profile:
        data = validate_input(ProfileUpdate, **changes)
        profile = await self.get_current_profile()

        # phone may be cleared, the other fields may only be changed
        values = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "phone"
        }
        if not values:
            return profile

        values["updated_at"] = datetime.now(timezone.utc)
        await self.store.update_where(Profile, Profile.id == profile.id, values=values)
        return await self.get_current_profile()

    async def verify_identity(self, user_id: Any) -> VerifyIdentityResult:
        """
        KYC stub: marks the caller's profile as verified without any check.
        """
        user_id = parse_id(user_id, "user ID")
        require_auth_with_id(self.identity.id, user_id)

        profile = await self.get_profile(user_id)
        if not profile.is_verified:
            await self.store.update_where(
                Profile,
                Profile.id == profile.id,
                values={"is_verified": True, "updated_at": datetime.now(timezone.utc)},
            )
            logger.info("Profile %s marked as verified", profile.id)

        return VerifyIdentityResult(verified=True)

    async def is_user_verified(self, user_id: Any) -> bool:
        try:
            profile = await self.get_profile(user_id)
        except NotFoundError:
            return False
        return profile.is_verified

    @classmethod
    async def get_dependency(
        cls,
        store: RowStore = Depends(RowStore.get_dependency),
        identity: Identity = Depends(get_identity),
    ) -> "ProfileService":
        return cls(store, identity)
