# Gemini CLI platform adapter
from typing import Any

from agent_sync.converters import to_claude_mcp
from agent_sync.models import ServerMap
from agent_sync.platforms.base import JsonPlatformAdapter


class GeminiAdapter(JsonPlatformAdapter):
    """Adapter for Gemini CLI (~/.gemini/settings.json).

    ABOUTME: Preserves other settings like selectedAuthType, theme
    ABOUTME: Missing settings.json means Gemini CLI is not installed
    """

    name = "Gemini"
    key = "mcpServers"
    relative_path = (".gemini", "settings.json")
    create_missing = False

    def convert(self, servers: ServerMap) -> Any:
        return to_claude_mcp(servers)["mcpServers"]
