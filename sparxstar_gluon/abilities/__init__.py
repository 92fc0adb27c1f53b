"""Capabilities shipped by the plugin."""

from .ai_manager import AI_CONTENT_TOOLS, SUMMARIZE_CONTENT, AIManager, McpServerDescriptor

__all__ = ["AI_CONTENT_TOOLS", "SUMMARIZE_CONTENT", "AIManager", "McpServerDescriptor"]
