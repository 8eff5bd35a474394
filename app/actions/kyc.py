from typing import Any

from app.actions.results import action
from app.schemas.profile_schema import ProfileRead, VerifyIdentityResult
from app.services.profile.profile_service import ProfileService


@action
async def verify_identity(service: ProfileService, user_id: Any) -> VerifyIdentityResult:
    return await service.verify_identity(user_id)


@action
async def get_profile(service: ProfileService, user_id: Any) -> ProfileRead:
    profile = await service.get_profile(user_id)
    return ProfileRead.model_validate(profile, from_attributes=True)


@action
async def get_current_profile(service: ProfileService) -> ProfileRead:
    profile = await service.get_current_profile()
    return ProfileRead.model_validate(profile, from_attributes=True)


@action
async def update_profile(service: ProfileService, **changes: Any) -> ProfileRead:
    profile = await service.update_profile(**changes)
    return ProfileRead.model_validate(profile, from_attributes=True)


@action
async def is_user_verified(service: ProfileService, user_id: Any) -> bool:
    return await service.is_user_verified(user_id)
