import os

os.environ["TESTING"] = "1"

import pytest
from fastapi import status
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_verify_identity(async_client: AsyncClient, login, buyer):
    login(buyer)
    response = await async_client.get("/profile/")
    assert response.json()["data"]["is_verified"] is False

    response = await async_client.post(f"/profile/{buyer.id}/verify")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == {"verified": True}

    response = await async_client.get(f"/profile/{buyer.id}/verified")
    assert response.json()["data"] is True


@pytest.mark.asyncio
async def test_verify_other_profile(async_client: AsyncClient, login, buyer, seller):
    login(buyer)
    response = await async_client.post(f"/profile/{seller.id}/verify")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_update_profile(async_client: AsyncClient, login, buyer):
    login(buyer)
    response = await async_client.put("/profile/", json={"phone": "+27 82 111 2222"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["phone"] == "+27821112222"

    response = await async_client.put("/profile/", json={"is_verified": True})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
