"""Shared pytest fixtures for API tests."""

from __future__ import annotations

import os
import secrets
import tempfile
from collections.abc import AsyncIterator, Callable
from datetime import date
from pathlib import Path
from typing import Any

# Settings are read once at import time; point them at a throwaway database
# and a random signing key before anything from ``homecare`` is imported.
_DB_PATH = Path(tempfile.mkdtemp(prefix="homecare-tests-")) / "homecare.sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = secrets.token_urlsafe(32)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from homecare import models  # noqa: E402,F401
from homecare.database import Base, async_session, engine  # noqa: E402
from homecare.main import create_app  # noqa: E402


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def bearer() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a raw token."""
    return _bearer


@pytest_asyncio.fixture()
async def schema() -> AsyncIterator[None]:
    """Recreate every table for the test, then drop pooled connections."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return create_app()


@pytest_asyncio.fixture()
async def async_client(app: FastAPI, schema: None) -> AsyncIterator[AsyncClient]:
    """Provide an HTTPX async client bound to the FastAPI app."""

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def session_factory(schema: None):
    return async_session


class Api:
    """Small client-side helpers for building fixtures through the HTTP API."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def register_client(self, user_name: str, password: str = "client-password") -> dict[str, Any]:
        response = await self.client.post(
            "/api/users/register",
            json={"name": user_name.title(), "user_name": user_name, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"id": body["user"]["id"], "token": body["token"], "headers": _bearer(body["token"])}

    async def register_nurse(self, user_name: str, password: str = "nurse-password", **extra: Any) -> dict[str, Any]:
        payload = {"name": user_name.title(), "user_name": user_name, "password": password, **extra}
        response = await self.client.post("/api/nurses/register", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        return {"id": body["nurse"]["id"], "token": body["token"], "headers": _bearer(body["token"])}

    async def add_patient(self, owner: dict[str, Any], name: str = "Rosa") -> int:
        response = await self.client.post(
            "/api/patients",
            json={"name": name, "date_of_birth": "1941-03-02", "gender": "female"},
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def create_request(
        self,
        owner: dict[str, Any],
        nurse: dict[str, Any],
        patient_ids: list[int],
        rate: float = 50.0,
    ) -> dict[str, Any]:
        response = await self.client.post(
            "/api/service-requests",
            json={
                "nurse_id": nurse["id"],
                "patient_ids": patient_ids,
                "details": "Evening medication round",
                "scheduled_date": date(2026, 11, 2).isoformat(),
                "rate": rate,
            },
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()


@pytest.fixture()
def api(async_client: AsyncClient) -> Api:
    return Api(async_client)


@pytest_asyncio.fixture()
async def engagement(api: Api) -> dict[str, Any]:
    """A client with one patient, an assigned nurse and a pending request."""

    client = await api.register_client("carmen")
    nurse = await api.register_nurse("nadia", rate=50, specialty="geriatrics")
    patient_id = await api.add_patient(client)
    request = await api.create_request(client, nurse, [patient_id])
    return {"client": client, "nurse": nurse, "patient_id": patient_id, "request": request}
