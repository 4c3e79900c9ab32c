# Codex CLI platform adapter
import logging
from pathlib import Path
from typing import Any

import tomli

from agent_sync.converters import from_mcp_servers, to_codex_toml
from agent_sync.models import ServerMap
from agent_sync.platforms.base import write_text_if_changed
from agent_sync.utils.toml_writer import patch_mcp_servers

logger = logging.getLogger(__name__)


def parse_toml(text: str, path: Path) -> dict[str, Any]:
    """Parse TOML text, raising ValueError naming the file on failure."""
    try:
        return tomli.loads(text)
    except tomli.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


class CodexAdapter:
    """Adapter for Codex CLI (~/.codex/config.toml).

    ABOUTME: Uses snake_case [mcp_servers.<name>] sections (not mcpServers)
    ABOUTME: Patches sections textually so comments and other tables survive
    ABOUTME: Missing config.toml means Codex is not installed
    """

    name = "Codex"
    create_missing = False

    def __init__(self, config_path: Path | None = None, user_home: Path | None = None) -> None:
        """Initialize adapter with optional custom config path.

        ABOUTME: Defaults to ~/.codex/config.toml if not provided
        """
        if config_path:
            self._config_path = config_path
        else:
            self._config_path = (user_home or Path.home()) / ".codex" / "config.toml"

    @property
    def path(self) -> Path:
        """Path to platform config file."""
        return self._config_path

    def load(self) -> ServerMap:
        """Load existing MCP servers from platform config.

        ABOUTME: Returns empty dict if config doesn't exist
        ABOUTME: Parses 'mcp_servers' table from TOML
        """
        if not self._config_path.exists():
            return {}

        with open(self._config_path, "rb") as f:
            try:
                data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {self._config_path}: {e}") from e

        return from_mcp_servers(data.get("mcp_servers") or {})

    def save(self, servers: ServerMap) -> bool:
        """Replace the [mcp_servers.*] sections of config.toml.

        ABOUTME: Existing file must parse, otherwise it is left untouched
        ABOUTME: Patched text is parsed again and every table outside
        ABOUTME: mcp_servers must be unchanged before it is written

        Returns:
            True if the file content changed

        Raises:
            ValueError: If the existing or patched document is not valid TOML,
                or the patch would alter settings outside mcp_servers
        """
        existing = ""
        before: dict[str, Any] = {}
        if self._config_path.exists():
            existing = self._config_path.read_text(encoding="utf-8")
            before = parse_toml(existing, self._config_path)

        patched = patch_mcp_servers(existing, to_codex_toml(servers))
        after = parse_toml(patched, self._config_path)

        if _without_mcp_servers(after) != _without_mcp_servers(before):
            raise ValueError(
                f"Refusing to patch {self._config_path}: settings outside mcp_servers would change"
            )

        changed = write_text_if_changed(self._config_path, patched)
        logger.debug(f"{self.name}: {'updated' if changed else 'unchanged'} {self._config_path}")
        return changed


def _without_mcp_servers(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key != "mcp_servers"}
