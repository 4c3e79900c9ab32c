# ABOUTME: Tests for the link reconciler
# ABOUTME: Covers every action, idempotence, conflict backup and the copy fallback
import os
from datetime import date
from pathlib import Path

import pytest

from agent_sync.config import SyncPaths
from agent_sync.symlink import ensure_symlink_safe, resolve_symlink_target
from agent_sync.utils.backup import create_backup_context, flatten_path


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Canonical skills directory with one skill."""
    path = tmp_path / "proj" / ".agent" / "skills"
    (path / "review").mkdir(parents=True)
    (path / "review" / "SKILL.md").write_text("# review")
    return path


def snapshot(root: Path) -> dict[str, str]:
    """Map of relative path -> link target or file content, without following links."""
    state: dict[str, str] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = str(path.relative_to(root))
            if path.is_symlink():
                state[rel] = "-> " + os.readlink(path)
            elif path.is_file():
                state[rel] = path.read_text()
            else:
                state[rel] = "<dir>"
    return state


class TestResolveSymlinkTarget:
    """Tests for resolve_symlink_target()."""

    def test_relative_target(self):
        resolved = resolve_symlink_target(Path("/proj/.claude/skills"), "../.agent/skills")

        assert resolved == Path("/proj/.agent/skills")

    def test_absolute_target(self):
        resolved = resolve_symlink_target(Path("/proj/.claude/skills"), "/elsewhere/skills")

        assert resolved == Path("/elsewhere/skills")


class TestEnsureSymlinkSafe:
    """Tests for ensure_symlink_safe()."""

    def test_creates_missing_link_and_parents(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"

        result = ensure_symlink_safe(target, link, create_backup_context(paths), name="claude_skills")

        assert result.status == "ok"
        assert result.action == "created"
        assert result.method == "symlink"
        assert result.name == "claude_skills"
        assert link.is_symlink()
        assert Path(os.readlink(link)) == target
        assert (link / "review" / "SKILL.md").read_text() == "# review"

    def test_idempotent(self, paths: SyncPaths, target: Path, tmp_path: Path):
        """Test created then already_correct with identical filesystem state."""
        link = tmp_path / "proj" / ".claude" / "skills"
        context = create_backup_context(paths)

        first = ensure_symlink_safe(target, link, context)
        state_after_first = snapshot(tmp_path)
        second = ensure_symlink_safe(target, link, context)

        assert first.action == "created"
        assert second.status == "skip"
        assert second.action == "already_correct"
        assert snapshot(tmp_path) == state_after_first

    def test_relative_link_already_correct(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"
        link.parent.mkdir(parents=True)
        os.symlink(os.path.join("..", ".agent", "skills"), link)

        result = ensure_symlink_safe(target, link, create_backup_context(paths))

        assert result.action == "already_correct"
        assert os.readlink(link) == os.path.join("..", ".agent", "skills")

    def test_replaces_stale_symlink(self, paths: SyncPaths, target: Path, tmp_path: Path):
        other = tmp_path / "other"
        other.mkdir()
        link = tmp_path / "proj" / ".claude" / "skills"
        link.parent.mkdir(parents=True)
        os.symlink(other, link)

        result = ensure_symlink_safe(target, link, create_backup_context(paths))

        assert result.status == "ok"
        assert result.action == "replace_symlink"
        assert Path(os.readlink(link)) == target
        assert other.is_dir()

    def test_replaces_broken_symlink(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"
        link.parent.mkdir(parents=True)
        os.symlink(tmp_path / "gone", link)

        result = ensure_symlink_safe(target, link, create_backup_context(paths))

        assert result.action == "replace_symlink"
        assert link.resolve() == target.resolve()

    def test_backup_and_link_scenario(self, paths: SyncPaths, target: Path, tmp_path: Path):
        """Real directory at link path is moved to <home>/backups/<today>/ then linked."""
        link = tmp_path / "proj" / ".claude" / "skills"
        link.mkdir(parents=True)
        (link / "x.md").write_text("user data")

        result = ensure_symlink_safe(target, link, create_backup_context(paths), on_conflict="backup")

        assert result.status == "ok"
        assert result.action == "backup_and_link"
        assert link.is_symlink()
        assert Path(os.readlink(link)) == target

        backup = paths.backups_dir / date.today().isoformat() / f"{flatten_path(link)}_0"
        assert backup.name.startswith("__")
        assert (backup / "x.md").read_text() == "user data"

    def test_backup_preserves_every_file(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"
        (link / "nested").mkdir(parents=True)
        (link / "a.md").write_bytes(b"a-bytes")
        (link / "nested" / "b.md").write_bytes(b"b-bytes")
        before = snapshot(link)
        context = create_backup_context(paths)

        ensure_symlink_safe(target, link, context)

        backup = context.root / f"{flatten_path(link)}_0"
        assert snapshot(backup) == before

    def test_backup_of_real_file(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"
        link.parent.mkdir(parents=True)
        link.write_text("not a directory")
        context = create_backup_context(paths)

        result = ensure_symlink_safe(target, link, context)

        assert result.action == "backup_and_link"
        assert (context.root / f"{flatten_path(link)}_0").read_text() == "not a directory"

    def test_skip_conflict_leaves_path_untouched(self, paths: SyncPaths, target: Path, tmp_path: Path):
        link = tmp_path / "proj" / ".claude" / "skills"
        link.mkdir(parents=True)
        (link / "x.md").write_text("keep me")

        result = ensure_symlink_safe(target, link, create_backup_context(paths), on_conflict="skip")

        assert result.status == "skip"
        assert result.action == "skip_conflict"
        assert not link.is_symlink()
        assert (link / "x.md").read_text() == "keep me"
        assert not paths.backups_dir.exists()

    def test_io_error_is_reported_not_raised(self, paths: SyncPaths, target: Path, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        link = blocker / "skills"

        result = ensure_symlink_safe(target, link, create_backup_context(paths))

        assert result.status == "error"
        assert result.action == "error"
        assert result.error

    def test_invalid_policy_raises(self, paths: SyncPaths, target: Path, tmp_path: Path):
        with pytest.raises(ValueError, match="Invalid on_conflict"):
            ensure_symlink_safe(
                target, tmp_path / "link", create_backup_context(paths),
                on_conflict="overwrite",  # type: ignore[arg-type]
            )

    def test_falls_back_to_copy(self, paths: SyncPaths, target: Path, tmp_path: Path, monkeypatch):
        """Test that the directory is mirrored when links cannot be created."""
        def no_symlink(*args, **kwargs):
            raise OSError("symlinks not permitted")

        monkeypatch.setattr("agent_sync.symlink.sys.platform", "linux")
        monkeypatch.setattr("agent_sync.symlink.os.symlink", no_symlink)
        link = tmp_path / "proj" / ".claude" / "skills"

        result = ensure_symlink_safe(target, link, create_backup_context(paths))

        assert result.status == "ok"
        assert result.action == "created"
        assert result.method == "copy"
        assert not link.is_symlink()
        assert (link / "review" / "SKILL.md").read_text() == "# review"
