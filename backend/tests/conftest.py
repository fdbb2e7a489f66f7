"""Shared test fixtures: a fake record store and ASGI test clients.

The fake store is served through ``httpx.MockTransport`` so no network is
involved; apps and clients built by the factories are closed on teardown.
"""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from employee_api.config import Settings
from employee_api.main import create_app
from tests.fakes import FakeRecordStore


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def store_transport(store: FakeRecordStore) -> httpx.MockTransport:
    return httpx.MockTransport(store.handler)


@pytest.fixture
async def store_client(store_transport: httpx.MockTransport) -> AsyncIterator[httpx.AsyncClient]:
    client = httpx.AsyncClient(base_url="http://store.test", transport=store_transport)
    yield client
    await client.aclose()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def factory(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "environment": "production",
            "record_store_url": "http://store.test",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture
async def make_app(
    make_settings: Callable[..., Settings],
    store_transport: httpx.MockTransport,
) -> AsyncIterator[Callable[..., FastAPI]]:
    apps: list[FastAPI] = []

    def factory(**overrides: Any) -> FastAPI:
        app = create_app(make_settings(**overrides), store_transport=store_transport)
        apps.append(app)
        return app

    yield factory
    for app in apps:
        await app.state.store_client.aclose()


@pytest.fixture
async def make_client() -> AsyncIterator[Callable[[FastAPI], AsyncClient]]:
    clients: list[AsyncClient] = []

    def factory(app: FastAPI) -> AsyncClient:
        client = AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://testserver",
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()


@pytest.fixture
async def app(make_app: Callable[..., FastAPI]) -> FastAPI:
    return make_app()


@pytest.fixture
async def client(app: FastAPI, make_client: Callable[[FastAPI], AsyncClient]) -> AsyncClient:
    return make_client(app)
