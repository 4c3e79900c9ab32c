# Configuration paths and canonical store for agent-sync
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from agent_sync.converters import from_mcp_servers, to_server_entries
from agent_sync.models import ServerMap

logger = logging.getLogger(__name__)

# ABOUTME: Environment variable overriding the agent-sync home directory
HOME_ENV_VAR = "AGENT_SYNC_HOME"

# ABOUTME: Default home directory name under the user's home
DEFAULT_HOME_NAME = ".agent-sync"


@dataclass(frozen=True)
class SyncPaths:
    """Filesystem locations used by one agent-sync run.

    ABOUTME: Threaded explicitly through every core function
    ABOUTME: home holds the canonical store, user_home holds downstream CLI configs
    """
    home: Path
    user_home: Path

    @property
    def mcp_path(self) -> Path:
        """Canonical MCP store (mcp.json)."""
        return self.home / "mcp.json"

    @property
    def skills_dir(self) -> Path:
        return self.home / "skills"

    @property
    def backups_dir(self) -> Path:
        return self.home / "backups"


def get_sync_paths(
    environ: dict[str, str] | None = None,
    user_home: Path | None = None,
) -> SyncPaths:
    """Resolve agent-sync paths from the environment.

    ABOUTME: Honors AGENT_SYNC_HOME, expanding a leading ~ to the user home
    ABOUTME: Falls back to ~/.agent-sync

    Args:
        environ: Environment mapping (defaults to os.environ)
        user_home: User home directory (defaults to Path.home())

    Returns:
        SyncPaths with absolute directories
    """
    env = os.environ if environ is None else environ
    base = user_home if user_home is not None else Path.home()

    override = env.get(HOME_ENV_VAR)
    if override:
        if override == "~" or override.startswith("~/"):
            override = str(base) + override[1:]
        home = Path(override).absolute()
    else:
        home = base / DEFAULT_HOME_NAME

    return SyncPaths(home=home, user_home=base)


def ensure_home(paths: SyncPaths) -> Path:
    """Create the agent-sync home and skills directory if missing.

    Returns:
        Path to home directory (guaranteed to exist)
    """
    paths.home.mkdir(parents=True, exist_ok=True)
    paths.skills_dir.mkdir(parents=True, exist_ok=True)
    return paths.home


def load_mcp_config(paths: SyncPaths) -> ServerMap:
    """Load the canonical MCP store.

    ABOUTME: Absent or unparseable store starts from an empty map
    ABOUTME: Parse failures are logged, never raised

    Args:
        paths: Resolved agent-sync paths

    Returns:
        ServerMap in file order
    """
    path = paths.mcp_path
    if not path.exists():
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level value is not an object")
        return from_mcp_servers(data.get("servers") or {})
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable MCP store {path}: {e}")
        return {}


def save_mcp_config(paths: SyncPaths, servers: ServerMap) -> Path:
    """Write the canonical MCP store, replacing the whole file.

    ABOUTME: 4-space indentation with trailing newline
    ABOUTME: Creates the home directory if needed

    Raises:
        OSError: If file cannot be written
    """
    ensure_home(paths)
    data = {"servers": to_server_entries(servers)}

    with paths.mcp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, ensure_ascii=False)
        f.write("\n")

    logger.debug(f"Saved {len(servers)} server(s) to {paths.mcp_path}")
    return paths.mcp_path
