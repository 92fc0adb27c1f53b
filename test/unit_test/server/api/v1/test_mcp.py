import pytest
from httpx import ASGITransport, AsyncClient

from sparxstar_gluon.abilities.ai_manager import SUMMARIZE_CONTENT
from sparxstar_gluon.plugin import GluonPlugin
from sparxstar_gluon.server.main import create_app

pytestmark = pytest.mark.asyncio


async def test_list_mcp_servers(client: AsyncClient):
    response = await client.get("/api/v1/mcp/servers")

    assert response.status_code == 200
    [server] = response.json()
    assert server["id"] == "sky-server"
    assert server["namespace"] == "sparxstar-sky"
    assert server["route"] == "mcp"
    assert server["name"] == "Sky"
    assert server["tools"] == [SUMMARIZE_CONTENT]


async def test_no_mcp_servers_without_abilities(fake_summarizer):
    plugin = GluonPlugin(summarizer=fake_summarizer, abilities_enabled=False)
    plugin.boot()

    async with AsyncClient(transport=ASGITransport(app=create_app(plugin)), base_url="http://localhost") as client:
        response = await client.get("/api/v1/mcp/servers")

    assert response.json() == []
