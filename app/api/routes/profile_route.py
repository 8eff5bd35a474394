from typing import Any

from fastapi import APIRouter, Body, Depends

from app.actions import kyc as kyc_actions
from app.api.responses import respond
from app.services.profile.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/", summary="Profile of the current user")
async def get_current_profile(
    profile_service: ProfileService = Depends(ProfileService.get_dependency),
):
    return respond(await kyc_actions.get_current_profile(profile_service))


@router.put("/", summary="Update the current user's profile")
async def update_profile(
    changes: dict[str, Any] = Body(...),
    profile_service: ProfileService = Depends(ProfileService.get_dependency),
):
    # unknown fields are rejected by the service
    result = await kyc_actions.update_profile(profile_service, **changes)
    return respond(result)


@router.get("/{user_id}", summary="Public profile of a user")
async def get_profile(
    user_id: str,
    profile_service: ProfileService = Depends(ProfileService.get_dependency),
):
    return respond(await kyc_actions.get_profile(profile_service, user_id))


@router.post(
    "/{user_id}/verify",
    summary="Verify identity",
    description="KYC stub, marks the profile as verified without a real check.",
)
async def verify_identity(
    user_id: str,
    profile_service: ProfileService = Depends(ProfileService.get_dependency),
):
    return respond(await kyc_actions.verify_identity(profile_service, user_id))


@router.get("/{user_id}/verified", summary="Whether a user is verified")
async def is_user_verified(
    user_id: str,
    profile_service: ProfileService = Depends(ProfileService.get_dependency),
):
    return respond(await kyc_actions.is_user_verified(profile_service, user_id))
