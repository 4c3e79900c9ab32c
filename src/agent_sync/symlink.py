# Safe symlink reconciliation with conflict backup
import logging
import os
import shutil
import stat
import sys
from pathlib import Path
from typing import Literal

from agent_sync.models import LinkMethod, LinkResult
from agent_sync.utils.backup import BackupContext, move_path_to_backup
from agent_sync.utils.mirror import copy_dir_recursive

logger = logging.getLogger(__name__)

# ABOUTME: What to do when a real file or directory sits at the link path
ConflictPolicy = Literal["backup", "skip"]

# ABOUTME: Prefix Windows adds to junction targets returned by readlink
WINDOWS_EXTENDED_PREFIX = "\\\\?\\"


def normalize_path(path: Path | str) -> Path:
    """Absolute, normalised form used for target comparison."""
    return Path(os.path.normpath(os.path.abspath(path)))


def resolve_symlink_target(link_path: Path, raw_target: str) -> Path:
    """Resolve a raw readlink() value against the link's directory.

    ABOUTME: Absolute targets are taken verbatim
    ABOUTME: Relative targets are resolved against the link's parent

    Examples:
        >>> resolve_symlink_target(Path("/proj/.claude/skills"), "../.agent/skills")
        PosixPath('/proj/.agent/skills')
    """
    if raw_target.startswith(WINDOWS_EXTENDED_PREFIX):
        raw_target = raw_target[len(WINDOWS_EXTENDED_PREFIX):]
    if os.path.isabs(raw_target):
        return normalize_path(raw_target)
    return normalize_path(link_path.parent / raw_target)


def create_link_with_fallback(target: Path, link_path: Path) -> tuple[LinkMethod, list[Path]]:
    """Create link_path pointing at target.

    ABOUTME: Tries symlink, then junction (Windows only), then a directory copy
    ABOUTME: The copy keeps content correct but edits no longer propagate

    Returns:
        Method used and, for copies, the source entries that were skipped

    Raises:
        OSError: If even the copy fallback cannot create link_path
    """
    try:
        os.symlink(target, link_path, target_is_directory=target.is_dir())
        return "symlink", []
    except OSError as e:
        logger.debug(f"symlink {link_path} -> {target} failed: {e}")

    if sys.platform == "win32":
        try:
            import _winapi

            _winapi.CreateJunction(str(target), str(link_path))
            return "junction", []
        except OSError as e:
            logger.debug(f"junction {link_path} -> {target} failed: {e}")

    logger.warning(f"Links unavailable, copying {target} to {link_path}")
    if target.is_file():
        shutil.copyfile(target, link_path)
        return "copy", []
    return "copy", copy_dir_recursive(target, link_path)


def ensure_symlink_safe(
    target: Path,
    link_path: Path,
    backup_context: BackupContext,
    on_conflict: ConflictPolicy = "backup",
    name: str = "link",
) -> LinkResult:
    """Converge link_path so it resolves to target.

    ABOUTME: Never raises for I/O problems, every outcome is a LinkResult
    ABOUTME: Real files/directories are moved to the backup store before replacement
    ABOUTME: Re-running with the same arguments yields already_correct

    Actions:
        created          nothing existed, link created
        already_correct  symlink already resolves to target (status skip)
        replace_symlink  symlink pointed elsewhere, recreated
        skip_conflict    real path present and on_conflict="skip" (status skip)
        backup_and_link  real path moved to backup, link created
        error            an OSError occurred (status error)

    Args:
        target: Desired real target (directory or file)
        link_path: Path that should resolve to target
        backup_context: Backup context shared across one run
        on_conflict: "backup" to move real paths away, "skip" to leave them
        name: Label carried into the result for reporting

    Returns:
        LinkResult describing the decision taken

    Raises:
        ValueError: If on_conflict is not "backup" or "skip"
    """
    if on_conflict not in ("backup", "skip"):
        raise ValueError(f"Invalid on_conflict policy '{on_conflict}'. Must be 'backup' or 'skip'.")

    target = normalize_path(target)
    link_path = normalize_path(link_path)

    def result(status, action, **extra) -> LinkResult:
        return LinkResult(
            status=status, action=action, name=name,
            link_path=link_path, target=target, **extra,
        )

    try:
        link_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            st = link_path.lstat()
        except FileNotFoundError:
            st = None

        if st is None:
            method, skipped = create_link_with_fallback(target, link_path)
            return result("ok", "created", method=method, skipped=skipped)

        if _is_link(st):
            current = resolve_symlink_target(link_path, os.readlink(link_path))
            if current == target:
                return result("skip", "already_correct")

            logger.debug(f"Replacing {link_path} -> {current} with {target}")
            _remove_link(link_path)
            method, skipped = create_link_with_fallback(target, link_path)
            return result("ok", "replace_symlink", method=method, skipped=skipped)

        if on_conflict == "skip":
            return result("skip", "skip_conflict")

        backup_path = move_path_to_backup(link_path, backup_context)
        logger.info(f"Backed up {link_path} to {backup_path}")
        method, skipped = create_link_with_fallback(target, link_path)
        return result("ok", "backup_and_link", method=method, skipped=skipped)

    except OSError as e:
        logger.debug(f"Reconciling {link_path} failed: {e}")
        return result("error", "error", error=str(e))


def _is_link(st: os.stat_result) -> bool:
    if stat.S_ISLNK(st.st_mode):
        return True
    # Windows junctions are reparse points, not symlinks
    mount_point = getattr(stat, "IO_REPARSE_TAG_MOUNT_POINT", None)
    return mount_point is not None and getattr(st, "st_reparse_tag", 0) == mount_point


def _remove_link(link_path: Path) -> None:
    # Junctions are directories to os.unlink on Windows
    try:
        link_path.unlink()
    except (IsADirectoryError, PermissionError):
        os.rmdir(link_path)
