# agent-sync - MCP, skills and AGENTS.md sync for AI coding agents
# ABOUTME: Version information
__version__ = "0.1.4"

# ABOUTME: Export core data models and configuration
from agent_sync.config import SyncPaths, get_sync_paths, load_mcp_config, save_mcp_config
from agent_sync.models import (
    LinkResult,
    MCPServer,
    McpCandidate,
    PromptCandidate,
    ServerMap,
    SkillCandidate,
    TargetAdapter,
)

# ABOUTME: Export reconciliation and sync entry points
from agent_sync.symlink import ensure_symlink_safe
from agent_sync.sync import SyncReport, sync_all
from agent_sync.utils import BackupContext, copy_dir_recursive, create_backup_context, move_path_to_backup

__all__ = [
    "__version__",
    "MCPServer",
    "ServerMap",
    "LinkResult",
    "McpCandidate",
    "PromptCandidate",
    "SkillCandidate",
    "TargetAdapter",
    "SyncPaths",
    "get_sync_paths",
    "load_mcp_config",
    "save_mcp_config",
    "ensure_symlink_safe",
    "SyncReport",
    "sync_all",
    "BackupContext",
    "create_backup_context",
    "move_path_to_backup",
    "copy_dir_recursive",
]
