# Claude-shaped platform adapters (Claude Code, Copilot, Antigravity)
from typing import Any

from agent_sync.converters import to_claude_mcp
from agent_sync.models import ServerMap
from agent_sync.platforms.base import JsonPlatformAdapter


class ClaudeAdapter(JsonPlatformAdapter):
    """Adapter for Claude Code (~/.mcp.json).

    ABOUTME: Uses mcpServers key, creates config file if missing
    """

    name = "Claude"
    key = "mcpServers"
    relative_path = (".mcp.json",)
    create_missing = True

    def convert(self, servers: ServerMap) -> Any:
        return to_claude_mcp(servers)["mcpServers"]


class CopilotAdapter(ClaudeAdapter):
    """Adapter for GitHub Copilot CLI (~/.copilot/mcp-config.json)."""

    name = "Copilot"
    relative_path = (".copilot", "mcp-config.json")


class AntigravityAdapter(ClaudeAdapter):
    """Adapter for Antigravity (~/.gemini/antigravity/mcp_config.json)."""

    name = "Antigravity"
    relative_path = (".gemini", "antigravity", "mcp_config.json")
