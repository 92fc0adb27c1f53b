from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from sparxstar_gluon.plugin import GluonPlugin
from sparxstar_gluon.server.main import create_app

EDITOR_HEADERS = {"X-Gluon-User": "7", "X-Gluon-Capabilities": "read, edit_posts"}


@pytest.fixture
def app(plugin: GluonPlugin) -> FastAPI:
    """Application around the booted test plugin.

    ASGITransport does not run the lifespan, so the plugin is booted up front.
    """
    return create_app(plugin)


@pytest_asyncio.fixture(name="client")
async def client_fixture(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client


@pytest.fixture
def editor_headers() -> dict:
    return dict(EDITOR_HEADERS)
