# Format converters from the canonical ServerMap to downstream CLI shapes
from typing import Any

from agent_sync.models import MCPServer, ServerMap
from agent_sync.utils.toml_writer import render_mcp_servers


def server_to_dict(server: MCPServer) -> dict[str, Any]:
    """Convert MCPServer to the {command, args, env?} entry shape.

    ABOUTME: Omits empty env dict for cleaner output
    ABOUTME: Always writes args, even when empty
    """
    result: dict[str, Any] = {
        "command": server.command,
        "args": list(server.args),
    }
    if server.env:
        result["env"] = dict(server.env)
    return result


def dict_to_server(name: str, data: dict[str, Any]) -> MCPServer:
    """Convert an entry dict back to MCPServer.

    ABOUTME: Handles missing args/env fields gracefully
    ABOUTME: Validates required command field
    """
    if not isinstance(data, dict) or "command" not in data:
        raise ValueError(f"Server '{name}' missing required 'command' field")

    return MCPServer(
        name=name,
        command=str(data["command"]),
        args=[str(arg) for arg in data.get("args") or []],
        env={str(key): str(value) for key, value in (data.get("env") or {}).items()},
    )


def to_server_entries(servers: ServerMap) -> dict[str, dict[str, Any]]:
    """Map every server to its entry dict, keeping insertion order."""
    return {name: server_to_dict(server) for name, server in servers.items()}


def from_mcp_servers(data: dict[str, Any]) -> ServerMap:
    """Parse a {name: {command, args, env}} mapping into a ServerMap.

    Raises:
        ValueError: If the mapping or one of its entries is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Expected a mapping of server names to server specs")

    return {name: dict_to_server(name, entry) for name, entry in data.items()}


def to_claude_mcp(servers: ServerMap) -> dict[str, Any]:
    """Claude/Copilot/Gemini/Antigravity shape: {"mcpServers": {...}}."""
    return {"mcpServers": to_server_entries(servers)}


def to_opencode_mcp(servers: ServerMap) -> dict[str, Any]:
    """OpenCode shape: bare {name: {...}}, stored under the "mcp" key."""
    return to_server_entries(servers)


def to_codex_toml(servers: ServerMap) -> str:
    """Codex shape: one [mcp_servers.<name>] TOML section per server.

    Examples:
        >>> to_codex_toml({"foo": MCPServer(name="foo", command="npx", args=["-y", "bar"])})
        '[mcp_servers.foo]\\ncommand = "npx"\\nargs = ["-y", "bar"]\\n\\n'
    """
    return render_mcp_servers(to_server_entries(servers))
