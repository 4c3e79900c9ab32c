# Minimal TOML writer and section patcher for Codex config.toml
import re
from typing import Any

# ABOUTME: Keys matching this pattern can be written without quotes
BARE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# ABOUTME: One [mcp_servers] or [mcp_servers.*] section, from its header up to the
# ABOUTME: next non-mcp_servers header or end of file, headers may be indented
MCP_SECTION_PATTERN = re.compile(
    r"^[ \t]*\[[ \t]*mcp_servers[ \t]*(?:\.[^\]\n]*)?\][\s\S]*?"
    r"(?=\n[ \t]*\[(?![ \t]*\[?[ \t]*mcp_servers[ \t]*[.\]])|\Z)",
    re.MULTILINE,
)


def render_mcp_servers(mcp_servers: dict[str, dict[str, Any]]) -> str:
    """Render [mcp_servers.<name>] blocks for Codex CLI.

    ABOUTME: Minimal TOML writer handling only our subset (command, args, env)
    ABOUTME: Every block ends with a blank line, servers keep insertion order

    Args:
        mcp_servers: Server name -> {"command", "args", "env"} mapping

    Example output:
        [mcp_servers.filesystem]
        command = "npx"
        args = ["-y", "@modelcontextprotocol/server-filesystem", "/path"]

        [mcp_servers.github]
        command = "npx"
        [mcp_servers.github.env]
        GITHUB_TOKEN = "ghp_xxxx"

    """
    lines: list[str] = []

    for server_name, server_config in mcp_servers.items():
        section = f"mcp_servers.{_format_key(server_name)}"
        lines.append(f"[{section}]")
        lines.append(f"command = {_format_string(server_config.get('command', ''))}")

        args = server_config.get("args") or []
        if args:
            lines.append(f"args = {_format_array(args)}")

        env = server_config.get("env") or {}
        if env:
            lines.append(f"[{section}.env]")
            for key, value in env.items():
                lines.append(f"{_format_key(key)} = {_format_string(value)}")

        lines.append("")

    return "".join(line + "\n" for line in lines)


def patch_mcp_servers(existing: str, new_blocks: str) -> str:
    """Replace every [mcp_servers.*] section of a TOML document.

    ABOUTME: Textual transform, everything outside mcp_servers is kept verbatim
    ABOUTME: Fresh blocks are appended after a blank line

    Args:
        existing: Current config.toml content
        new_blocks: Output of render_mcp_servers()

    Returns:
        Patched document text
    """
    cleaned = MCP_SECTION_PATTERN.sub("", existing).rstrip()
    if not cleaned:
        return new_blocks
    return cleaned + "\n\n" + new_blocks


def _format_key(key: str) -> str:
    if BARE_KEY_PATTERN.match(key):
        return key
    return _format_string(key)


def _format_string(value: str) -> str:
    """Format str as a TOML basic string."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _format_array(items: list[Any]) -> str:
    """Format list as TOML array.

    ABOUTME: Converts Python list to ["item1", "item2"] format
    """
    if not items:
        return "[]"

    formatted_items = []
    for item in items:
        if isinstance(item, str):
            formatted_items.append(_format_string(item))
        else:
            formatted_items.append(str(item))

    return "[" + ", ".join(formatted_items) + "]"
