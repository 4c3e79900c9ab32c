# ABOUTME: Utility modules for agent-sync
# ABOUTME: Exports backup store, directory mirror, and TOML helpers

from agent_sync.utils.backup import (
    BackupContext,
    create_backup_context,
    flatten_path,
    move_path_to_backup,
)
from agent_sync.utils.mirror import copy_dir_recursive
from agent_sync.utils.toml_writer import patch_mcp_servers, render_mcp_servers

__all__ = [
    "BackupContext",
    "create_backup_context",
    "flatten_path",
    "move_path_to_backup",
    "copy_dir_recursive",
    "patch_mcp_servers",
    "render_mcp_servers",
]
