# ABOUTME: Backup store for paths displaced by link reconciliation.
# ABOUTME: Conflicting paths are moved into <home>/backups/<YYYY-MM-DD>/ with a per-run counter.
import logging
import os
import re
import shutil
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agent_sync.config import SyncPaths

logger = logging.getLogger(__name__)

# ABOUTME: Both separators are flattened so Windows paths stay single-segment
SEPARATOR_PATTERN = re.compile(r"[\\/]")


@dataclass
class BackupContext:
    """Staging area for one reconciliation run.

    ABOUTME: root is keyed by date, count makes names unique within the run
    ABOUTME: root is created lazily on first move
    """
    root: Path
    count: int = 0


def create_backup_context(paths: "SyncPaths", today: date | None = None) -> BackupContext:
    """Create a backup context rooted at <home>/backups/<ISO-date>.

    ABOUTME: Does not touch the filesystem

    Args:
        paths: Resolved agent-sync paths
        today: Date used for the root directory (defaults to today)

    Returns:
        BackupContext with counter at zero

    Examples:
        >>> ctx = create_backup_context(paths, date(2026, 1, 8))
        >>> ctx.root.name
        '2026-01-08'
    """
    day = today or date.today()
    return BackupContext(root=paths.backups_dir / day.isoformat())


def flatten_path(path: Path) -> str:
    """Flatten a path into one file name, separators become '__'.

    Examples:
        >>> flatten_path(Path("/proj/.claude/skills"))
        '__proj__.claude__skills'
    """
    return SEPARATOR_PATTERN.sub("__", str(path).replace(":", ""))


def move_path_to_backup(path: Path, context: BackupContext) -> Path:
    """Move a conflicting path into the backup root.

    ABOUTME: Name is <flattened-path>_<counter>, counter increments per move
    ABOUTME: Skips counter values already taken by an earlier run the same day
    ABOUTME: Renames when possible, copies then deletes across filesystems

    Args:
        path: File or directory to move away
        context: Backup context for this run

    Returns:
        Destination path inside the backup root

    Raises:
        OSError: If the move fails
    """
    context.root.mkdir(parents=True, exist_ok=True)
    base = flatten_path(path)

    destination = context.root / f"{base}_{context.count}"
    context.count += 1
    while os.path.lexists(destination):
        destination = context.root / f"{base}_{context.count}"
        context.count += 1

    shutil.move(str(path), str(destination))
    logger.debug(f"Moved {path} to backup {destination}")
    return destination
