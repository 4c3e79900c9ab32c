# ABOUTME: Best-effort recursive directory copy.
# ABOUTME: Used when neither a symlink nor a junction can be created.
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_dir_recursive(src: Path, dst: Path) -> list[Path]:
    """Recursively copy src into dst, skipping entries that cannot be read.

    ABOUTME: Follows symlinks and copies their resolved content
    ABOUTME: Per-entry OSErrors (broken links, permissions) are skipped, not raised
    ABOUTME: Special files (fifos, sockets) are skipped

    Args:
        src: Directory to copy from
        dst: Directory to create and copy into

    Returns:
        Source paths of entries that were skipped

    Raises:
        OSError: If dst cannot be created or src cannot be listed
    """
    dst.mkdir(parents=True, exist_ok=True)
    skipped: list[Path] = []

    for entry in sorted(src.iterdir()):
        target = dst / entry.name
        try:
            if entry.is_dir():
                skipped.extend(copy_dir_recursive(entry, target))
            elif entry.is_file():
                shutil.copyfile(entry, target)
            else:
                logger.debug(f"Skipping non-regular entry {entry}")
                skipped.append(entry)
        except OSError as e:
            logger.debug(f"Skipping {entry}: {e}")
            skipped.append(entry)

    return skipped
