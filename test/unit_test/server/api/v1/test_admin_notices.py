import pytest
from httpx import ASGITransport, AsyncClient

from sparxstar_gluon.plugin import GluonPlugin
from sparxstar_gluon.server.main import create_app

pytestmark = pytest.mark.asyncio

NOTICES = "/api/v1/admin/notices"


async def test_mcp_adapter_hint_without_adapter(client: AsyncClient):
    response = await client.get(NOTICES)

    assert response.status_code == 200
    [notice] = response.json()["notices"]
    assert notice["level"] == "info"
    assert "MCP Adapter" in notice["message"]


async def test_no_notices_when_fully_configured(fake_summarizer):
    plugin = GluonPlugin(summarizer=fake_summarizer, mcp_adapter="http://localhost:9000/mcp")
    plugin.boot()

    async with AsyncClient(transport=ASGITransport(app=create_app(plugin)), base_url="http://localhost") as client:
        response = await client.get(NOTICES)

    assert response.json() == {"notices": []}


async def test_compatibility_errors_are_listed(fake_summarizer):
    plugin = GluonPlugin(summarizer=fake_summarizer, python_version=(3, 8), abilities_enabled=False)
    plugin.boot()

    async with AsyncClient(transport=ASGITransport(app=create_app(plugin)), base_url="http://localhost") as client:
        notices = (await client.get(NOTICES)).json()["notices"]

    assert {n["level"] for n in notices} == {"error"}
    messages = [n["message"] for n in notices]
    assert any("Python 3.10+" in m for m in messages)
    assert any("Abilities API plugin" in m for m in messages)
    assert all(m.startswith("[SPARXSTAR-Gluon] ") for m in messages)
