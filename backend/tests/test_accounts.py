"""Registration, login, nurse profiles, patients and support."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient
from jose import jwt

from homecare.exceptions import Invalid
from homecare.models.support import FAQ
from homecare.schemas.account import NurseRegister
from homecare.services.identity_service import identity_service


@pytest.mark.asyncio
async def test_client_register_and_login(async_client: AsyncClient) -> None:
    response = await async_client.post(
        "/api/users/register",
        json={"name": "Carmen", "user_name": "carmen", "password": "s3cret"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "client"
    assert body["user"]["user_name"] == "carmen"
    assert "password" not in body["user"] and "password_hash" not in body["user"]

    response = await async_client.post("/api/users/login", json={"user_name": "carmen", "password": "s3cret"})
    assert response.status_code == 200
    token = response.json()
    assert token["token_type"] == "bearer"
    assert token["role"] == "client"
    claims = jwt.get_unverified_claims(token["access_token"])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["role"] == "client"


@pytest.mark.asyncio
async def test_bad_credentials_share_one_answer(api: Any, async_client: AsyncClient) -> None:
    await api.register_client("carmen", password="right")

    wrong_password = await async_client.post("/api/users/login", json={"user_name": "carmen", "password": "wrong"})
    unknown_user = await async_client.post("/api/users/login", json={"user_name": "nobody", "password": "right"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"message": "Incorrect credentials"}


@pytest.mark.asyncio
async def test_client_credentials_do_not_log_in_a_nurse(api: Any, async_client: AsyncClient) -> None:
    await api.register_client("carmen", password="right")
    response = await async_client.post("/api/nurses/login", json={"user_name": "carmen", "password": "right"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_duplicate_user_name_is_invalid(api: Any, async_client: AsyncClient) -> None:
    await api.register_client("carmen")
    response = await async_client.post(
        "/api/users/register",
        json={"name": "Other", "user_name": "carmen", "password": "x"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_taken_between_check_and_insert_is_invalid(
    api: Any, session_factory, monkeypatch: pytest.MonkeyPatch
) -> None:
    await api.register_nurse("nadia")

    async def login_looks_free(*args: Any) -> None:
        return None

    monkeypatch.setattr(identity_service, "_ensure_login_free", login_looks_free)
    async with session_factory() as session:
        with pytest.raises(Invalid):
            await identity_service.register_nurse(
                session, NurseRegister(name="Other", user_name="nadia", password="x")
            )
        await session.rollback()


@pytest.mark.asyncio
async def test_nurse_register_login_and_profile(api: Any, async_client: AsyncClient) -> None:
    nurse = await api.register_nurse(
        "nadia",
        rate=45,
        specialty="wound care",
        certificates=["RN"],
        availability=[{"day": "monday", "start": "08:00", "end": "14:00"}],
    )

    response = await async_client.post("/api/nurses/login", json={"user_name": "nadia", "password": "nurse-password"})
    assert response.status_code == 200
    assert response.json()["role"] == "nurse"

    response = await async_client.put(
        "/api/nurses/me", json={"rate": 55, "location": "Valencia"}, headers=nurse["headers"]
    )
    assert response.status_code == 200
    body = response.json()
    assert body["rate"] == 55
    assert body["location"] == "Valencia"
    assert body["specialty"] == "wound care"

    response = await async_client.put(
        "/api/nurses/me/availability",
        json={"availability": [{"day": "friday", "start": "09:00", "end": "17:00"}]},
        headers=nurse["headers"],
    )
    assert response.status_code == 200
    assert response.json()["availability"] == [{"day": "friday", "start": "09:00", "end": "17:00"}]


@pytest.mark.asyncio
async def test_nurse_directory_hides_credentials(api: Any, async_client: AsyncClient) -> None:
    client = await api.register_client("carmen")
    await api.register_nurse("nadia", specialty="pediatrics")

    response = await async_client.get("/api/nurses", headers=client["headers"])
    assert response.status_code == 200
    (entry,) = response.json()
    assert entry["specialty"] == "pediatrics"
    assert "user_name" not in entry
    assert "password_hash" not in entry


@pytest.mark.asyncio
async def test_nurse_profile_fields_cannot_be_nulled(api: Any, async_client: AsyncClient) -> None:
    nurse = await api.register_nurse("nadia", certificates=["RN"])

    for payload in ({"name": None}, {"certificates": None}):
        response = await async_client.put("/api/nurses/me", json=payload, headers=nurse["headers"])
        assert response.status_code == 400, payload
        assert response.json() == {"message": "Invalid request payload"}

    response = await async_client.put("/api/nurses/me", json={"specialty": None}, headers=nurse["headers"])
    assert response.status_code == 200
    assert response.json()["name"] == "Nadia"
    assert response.json()["certificates"] == ["RN"]


@pytest.mark.asyncio
async def test_client_cannot_edit_nurse_profile(api: Any, async_client: AsyncClient) -> None:
    client = await api.register_client("carmen")
    response = await async_client.put("/api/nurses/me", json={"rate": 1}, headers=client["headers"])
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_patients_are_private_to_their_owner(api: Any, async_client: AsyncClient) -> None:
    carmen = await api.register_client("carmen")
    sofia = await api.register_client("sofia")
    nurse = await api.register_nurse("nadia")
    await api.add_patient(carmen, name="Rosa")
    await api.add_patient(sofia, name="Luis")

    response = await async_client.get("/api/patients", headers=carmen["headers"])
    assert [p["name"] for p in response.json()] == ["Rosa"]

    response = await async_client.get("/api/patients", headers=nurse["headers"])
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_support_faq_and_request(api: Any, async_client: AsyncClient, session_factory) -> None:
    async with session_factory() as session:
        session.add(FAQ(question="How do I pay?", answer="After the nurse accepts."))
        await session.commit()

    response = await async_client.get("/api/support/faq")
    assert response.status_code == 200
    assert response.json()[0]["question"] == "How do I pay?"

    nurse = await api.register_nurse("nadia")
    response = await async_client.post(
        "/api/support/request",
        json={"subject": "Payout", "message": "When is my payment released?"},
        headers=nurse["headers"],
    )
    assert response.status_code == 201
    body = response.json()
    assert body["requester_id"] == nurse["id"]
    assert body["requester_role"] == "nurse"
    assert body["status"] == "open"

    response = await async_client.post("/api/support/request", json={"subject": "x", "message": "y"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/health")
    assert response.json()["status"] == "healthy"
