# Platform adapter base utilities
import json
import logging
from pathlib import Path
from typing import Any, cast

from agent_sync.converters import from_mcp_servers
from agent_sync.models import ServerMap

logger = logging.getLogger(__name__)


def read_json_file(path: Path) -> dict[str, Any]:
    """Read JSON object file with error handling.

    ABOUTME: Returns empty dict if file doesn't exist
    ABOUTME: Raises ValueError for invalid JSON or a non-object top level
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            result = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(result, dict):
        raise ValueError(f"Invalid JSON in {path}: top-level value is not an object")
    return cast(dict[str, Any], result)


def write_text_if_changed(path: Path, content: str) -> bool:
    """Write content unless the file already holds exactly these bytes.

    ABOUTME: Creates parent directories if needed
    ABOUTME: Returns True if the file was written
    """
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def write_json_file(path: Path, data: dict[str, Any]) -> bool:
    """Write JSON file pretty-printed with 4-space indentation.

    ABOUTME: Keeps key insertion order, adds trailing newline
    ABOUTME: Returns True if the file content changed
    """
    content = json.dumps(data, indent=4, ensure_ascii=False) + "\n"
    return write_text_if_changed(path, content)


def patch_json_file(path: Path, key: str, value: Any) -> bool:
    """Replace one top-level key of a JSON file, keeping every other key.

    ABOUTME: Absent file starts from an empty object
    ABOUTME: Unparseable file raises ValueError and is left untouched

    Args:
        path: JSON config file
        key: Top-level key owned by agent-sync ("mcpServers" or "mcp")
        value: New value for that key

    Returns:
        True if the file content changed
    """
    existing = read_json_file(path)
    existing[key] = value
    return write_json_file(path, existing)


class JsonPlatformAdapter:
    """Shared implementation for CLIs storing MCP servers under one JSON key.

    ABOUTME: Subclasses set name, key, relative_path, create_missing
    ABOUTME: save() patches only the owned key, load() reads it back
    """

    name: str = ""
    key: str = "mcpServers"
    relative_path: tuple[str, ...] = ()
    create_missing: bool = True

    def __init__(self, config_path: Path | None = None, user_home: Path | None = None) -> None:
        """Initialize adapter with optional custom config path.

        ABOUTME: Defaults to <user_home>/<relative_path> if not provided
        """
        if config_path:
            self._config_path = config_path
        else:
            self._config_path = (user_home or Path.home()).joinpath(*self.relative_path)

    @property
    def path(self) -> Path:
        """Path to platform config file, whether or not it exists."""
        return self._config_path

    def convert(self, servers: ServerMap) -> Any:
        """Value stored under self.key for the given servers."""
        raise NotImplementedError

    def load(self) -> ServerMap:
        """Load existing MCP servers from platform config.

        ABOUTME: Returns empty dict if config doesn't exist
        """
        data = read_json_file(self._config_path)
        return from_mcp_servers(data.get(self.key) or {})

    def save(self, servers: ServerMap) -> bool:
        """Patch MCP servers into platform config.

        ABOUTME: Preserves all other top-level keys
        """
        changed = patch_json_file(self._config_path, self.key, self.convert(servers))
        logger.debug(f"{self.name}: {'updated' if changed else 'unchanged'} {self._config_path}")
        return changed
