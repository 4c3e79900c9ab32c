# ABOUTME: Shared fixtures for agent-sync tests
# ABOUTME: Every test gets isolated agent-sync and user home directories under tmp_path
from pathlib import Path

import pytest

from agent_sync.config import SyncPaths


@pytest.fixture
def paths(tmp_path: Path) -> SyncPaths:
    """SyncPaths rooted in tmp_path, user home created."""
    user_home = tmp_path / "home"
    user_home.mkdir()
    return SyncPaths(home=user_home / ".agent-sync", user_home=user_home)
