import os

os.environ["TESTING"] = "1"

import pytest
from fastapi import status
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_browse_and_details(async_client: AsyncClient, login, listing, buyer):
    login(buyer)
    response = await async_client.get("/listings/", params={"search": "trail"})
    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()["data"]] == [str(listing.id)]

    response = await async_client.get("/listings/categories")
    assert response.json()["data"] == ["Hiking"]

    response = await async_client.get("/listings/featured")
    assert len(response.json()["data"]) == 1

    response = await async_client.get(f"/listings/{listing.id}")
    details = response.json()["data"]
    assert details["seller_name"] == "Sarah Seller"
    assert details["seller_phone"] is None
    assert details["is_owner"] is False


@pytest.mark.asyncio
async def test_hide_listing(async_client: AsyncClient, login, listing, seller, buyer):
    login(buyer)
    response = await async_client.post(f"/listings/{listing.id}/hide")
    assert response.status_code == status.HTTP_403_FORBIDDEN

    login(seller)
    response = await async_client.post(f"/listings/{listing.id}/hide")
    assert response.json()["data"]["listing_status"] == "hidden"

    response = await async_client.get(f"/listings/user/{seller.id}")
    assert len(response.json()["data"]) == 1

    login(buyer)
    response = await async_client.get(f"/listings/{listing.id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_create_and_edit_listing(async_client: AsyncClient, login, seller, buyer):
    login(seller)
    response = await async_client.post(
        "/listings/",
        json={"title": "Climbing Rope 60m", "price": 900, "category": "Climbing"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()["data"]
    assert created["user_id"] == str(seller.id)
    assert created["listing_status"] == "active"

    response = await async_client.patch(
        f"/listings/{created['id']}", json={"price": 750, "condition": "Slightly used"}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["price"] == 750
    assert response.json()["data"]["condition"] == "Slightly used"

    response = await async_client.get("/listings/", params={"condition": "Slightly used"})
    assert [item["id"] for item in response.json()["data"]] == [created["id"]]

    login(buyer)
    response = await async_client.patch(f"/listings/{created['id']}", json={"price": 1})
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await async_client.post(
        "/listings/", json={"title": "Rope", "price": -1, "category": "Climbing"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_hidden_filter_does_not_leak(async_client: AsyncClient, login, listing, seller, buyer):
    login(seller)
    await async_client.post(f"/listings/{listing.id}/hide")

    login(buyer)
    response = await async_client.get("/listings/", params={"listing_status": "hidden"})
    assert response.json()["data"] == []
