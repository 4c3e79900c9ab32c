# MCP sync orchestration for agent-sync
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from agent_sync.config import SyncPaths, load_mcp_config, save_mcp_config
from agent_sync.converters import from_mcp_servers
from agent_sync.models import MCPServer, McpCandidate, ServerMap, Status
from agent_sync.platforms import get_all_platforms
from agent_sync.platforms.codex import CodexAdapter

logger = logging.getLogger(__name__)

# ABOUTME: Discovery label of the canonical store
AGENT_SYNC_LABEL = "agent-sync"


@dataclass
class PlatformResult:
    """Outcome of syncing one downstream CLI config."""
    platform: str
    path: Path
    status: Status
    action: str
    message: str = ""


@dataclass
class SyncReport:
    """Report from sync operation.

    ABOUTME: Tracks success/skip/failure across platforms
    ABOUTME: One PlatformResult per downstream target, in sync order
    """
    platforms_total: int
    results: list[PlatformResult] = field(default_factory=list)

    @property
    def platforms_synced(self) -> int:
        """Targets whose config now matches the canonical servers."""
        return sum(1 for r in self.results if r.status == "ok")

    @property
    def errors(self) -> list[str]:
        return [f"{r.platform}: {r.message}" for r in self.results if r.status == "error"]

    def add_platform_result(self, result: PlatformResult) -> None:
        """Record the outcome for a platform.

        ABOUTME: Errors are non-fatal, sync continues
        """
        self.results.append(result)


def default_servers() -> ServerMap:
    """Starter server map written when no MCP config exists anywhere."""
    return {
        "context7": MCPServer(
            name="context7",
            command="npx",
            args=["-y", "@upstash/context7-mcp"],
        ),
    }


def create_default_config(paths: SyncPaths) -> Path:
    """Write the starter config to the canonical store."""
    return save_mcp_config(paths, default_servers())


def import_servers(candidate: McpCandidate, paths: SyncPaths) -> ServerMap:
    """Read the servers of a discovered MCP config.

    ABOUTME: The agent-sync store is loaded as-is
    ABOUTME: JSON files are read from mcpServers, servers or mcp, TOML from mcp_servers

    Args:
        candidate: Candidate returned by detect_mcp_configs()
        paths: Resolved agent-sync paths

    Returns:
        ServerMap found in the candidate file

    Raises:
        ValueError: If the candidate file cannot be parsed
        OSError: If the candidate file cannot be read
    """
    if candidate.label == AGENT_SYNC_LABEL:
        return load_mcp_config(paths)

    if candidate.path.suffix == ".toml":
        return CodexAdapter(config_path=candidate.path).load()

    try:
        with open(candidate.path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {candidate.path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid JSON in {candidate.path}: top-level value is not an object")
    return from_mcp_servers(data.get("mcpServers") or data.get("servers") or data.get("mcp") or {})


def sync_all(servers: ServerMap, paths: SyncPaths) -> SyncReport:
    """Sync servers to every downstream CLI config.

    ABOUTME: Each target is patched independently, failures don't block others
    ABOUTME: Missing Codex/Gemini/OpenCode configs are skipped as not installed
    ABOUTME: Claude/Copilot/Antigravity configs are created when absent

    Args:
        servers: Canonical server map
        paths: Resolved agent-sync paths

    Returns:
        SyncReport with one result per platform

    Examples:
        >>> report = sync_all(load_mcp_config(paths), paths)
        >>> print(f"Synced to {report.platforms_synced}/{report.platforms_total} CLIs.")
        Synced to 4/6 CLIs.
    """
    platforms = get_all_platforms(paths.user_home)
    report = SyncReport(platforms_total=len(platforms))

    for platform in platforms:
        path = platform.path
        if not platform.create_missing and not path.exists():
            logger.debug(f"{platform.name}: {path} not found, skipping")
            report.add_platform_result(PlatformResult(
                platform=platform.name, path=path, status="skip",
                action="not_installed", message=f"{path.name} not found, skipping",
            ))
            continue

        existed = path.exists()
        try:
            changed = platform.save(servers)
        except (OSError, ValueError) as e:
            logger.debug(f"{platform.name}: sync failed: {e}")
            report.add_platform_result(PlatformResult(
                platform=platform.name, path=path, status="error",
                action="error", message=str(e),
            ))
            continue

        if not changed:
            action = "unchanged"
        elif existed:
            action = "updated"
        else:
            action = "created"
        report.add_platform_result(PlatformResult(
            platform=platform.name, path=path, status="ok", action=action,
        ))

    return report
