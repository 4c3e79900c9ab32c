# OpenCode platform adapter
from typing import Any

from agent_sync.converters import to_opencode_mcp
from agent_sync.models import ServerMap
from agent_sync.platforms.base import JsonPlatformAdapter


class OpenCodeAdapter(JsonPlatformAdapter):
    """Adapter for OpenCode (~/.config/opencode/opencode.json).

    ABOUTME: Servers live under the "mcp" key without an mcpServers wrapper
    ABOUTME: Missing opencode.json means OpenCode is not installed
    """

    name = "OpenCode"
    key = "mcp"
    relative_path = (".config", "opencode", "opencode.json")
    create_missing = False

    def convert(self, servers: ServerMap) -> Any:
        return to_opencode_mcp(servers)
