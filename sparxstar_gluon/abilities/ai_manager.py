from __future__ import annotations

"""AI abilities.

``AIManager`` owns the plugin's AI-facing capabilities:

- the ``ai-content-tools`` category,
- ``sparxstar-gluon/summarize-content``, which turns a post into a
  two-sentence summary,
- the description of the MCP server that exposes those capabilities to
  external agents.

It depends on the abilities subsystem. When the host has none, the manager
posts an admin notice and subscribes to nothing.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from sparxstar_gluon.capabilities.base import (
    CallerContext,
    CancellationToken,
    CapabilityDescriptor,
    CategoryDescriptor,
)
from sparxstar_gluon.capabilities.registry import CapabilityRegistry
from sparxstar_gluon.content.posts import PostRepository
from sparxstar_gluon.content.summarizer import Summarizer
from sparxstar_gluon.core.environment import HostCapabilities
from sparxstar_gluon.core.hooks import ABILITIES_CATEGORIES_INIT, ABILITIES_INIT, HookRegistry
from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.core.notices import AdminNotices, NoticeLevel
from sparxstar_gluon.errors import CapabilityFailure
from sparxstar_gluon.schemas.base import BaseSchema

logger = get_logger(__name__)

AI_CONTENT_TOOLS = "ai-content-tools"
SUMMARIZE_CONTENT = "sparxstar-gluon/summarize-content"

ABILITIES_API_URL = "https://github.com/WordPress/abilities-api"
MCP_ADAPTER_URL = "https://github.com/WordPress/mcp-adapter"

SUMMARIZE_INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "post_id": {"type": "integer", "description": "The ID of the post to summarize."},
    },
    "required": ["post_id"],
}

SUMMARIZE_OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {"summary": {"type": "string"}},
}


def can_edit_posts(caller: CallerContext) -> bool:
    return caller.can("edit_posts")


class McpServerDescriptor(BaseSchema):
    """What an MCP adapter needs to create the plugin's server."""

    id: str
    namespace: str
    route: str
    name: str
    description: str
    version: str
    tools: List[str] = Field(default_factory=list)
    resources: Dict[str, Any] = Field(default_factory=dict)
    prompts: Dict[str, Any] = Field(default_factory=dict)


class AIManager:
    """Registers AI abilities and describes the MCP server exposing them."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        posts: PostRepository,
        summarizer: Summarizer,
        capabilities: HostCapabilities,
        notices: AdminNotices,
        version: str = "1.0.0",
    ) -> None:
        self._registry = registry
        self._posts = posts
        self._summarizer = summarizer
        self._capabilities = capabilities
        self._notices = notices
        self._version = version
        self._enabled = self.confirm_dependencies()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def confirm_dependencies(self) -> bool:
        """Check the abilities subsystem (required) and MCP adapter (recommended)."""
        if not self._capabilities.has_abilities_subsystem:
            self._notices.add("Abilities API required for actions.", NoticeLevel.error, link=ABILITIES_API_URL)
            return False
        if not self._capabilities.has_mcp_adapter:
            self._notices.add(
                "Install MCP Adapter to allow external AI agents to control SkyOS.",
                NoticeLevel.info,
                link=MCP_ADAPTER_URL,
            )
        return True

    def register_hooks(self, hooks: HookRegistry) -> None:
        if not self._enabled:
            logger.info("AI abilities disabled: abilities subsystem unavailable")
            return
        hooks.add_action(ABILITIES_CATEGORIES_INIT, self.register_category)
        hooks.add_action(ABILITIES_INIT, self.register_abilities)

    def register_category(self) -> None:
        self._registry.register_category(
            CategoryDescriptor(
                name=AI_CONTENT_TOOLS,
                label="AI Content Tools",
                description="AI-powered tools for content manipulation and analysis.",
            )
        )

    def register_abilities(self) -> None:
        self._registry.register(
            CapabilityDescriptor(
                name=SUMMARIZE_CONTENT,
                label="Summarize Content",
                description="Takes a post ID and returns a 2-sentence summary of the text.",
                category=AI_CONTENT_TOOLS,
                execute_callback=self.summarize,
                permission_callback=can_edit_posts,
                input_schema=SUMMARIZE_INPUT_SCHEMA,
                output_schema=SUMMARIZE_OUTPUT_SCHEMA,
                show_in_rest=True,
            )
        )

    async def summarize(self, input: Dict[str, Any], token: CancellationToken) -> Dict[str, Any]:
        """Execute callback for ``sparxstar-gluon/summarize-content``."""
        post = self._posts.get_post(int(input["post_id"]))
        if post is None:
            raise CapabilityFailure("invalid_post", "Post not found.", {"post_id": input["post_id"]})

        token.raise_if_cancelled()
        summary = await self._summarizer.summarize(post.content)
        return {"summary": summary}

    def mcp_server(self, tools: Optional[List[str]] = None) -> McpServerDescriptor:
        """Describe the ``sky-server`` MCP server.

        Only capabilities that are registered and visible are listed as tools.
        """
        wanted = tools if tools is not None else [SUMMARIZE_CONTENT]
        visible = {d.name for d in self._registry.list(visible_only=True)}
        return McpServerDescriptor(
            id="sky-server",
            namespace="sparxstar-sky",
            route="mcp",
            name="Sky",
            description="Direct access to the Sky engine.",
            version=self._version,
            tools=[name for name in wanted if name in visible],
            resources={
                "description": "Resources available to Sky for performing tasks.",
                "type": "array",
                "items": {"type": "string"},
            },
            prompts={
                "description": "Use these prompts to interact with Sky.",
                "type": "array",
                "items": {"type": "string"},
            },
        )
