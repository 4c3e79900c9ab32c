# Tests for the best-effort directory mirror
import os
from pathlib import Path

from agent_sync.utils.mirror import copy_dir_recursive


def test_copies_nested_tree(tmp_path: Path):
    src = tmp_path / "src"
    (src / "skill-a").mkdir(parents=True)
    (src / "skill-a" / "SKILL.md").write_text("# A")
    (src / "top.txt").write_bytes(b"\x00\x01binary")

    dst = tmp_path / "out" / "dst"
    skipped = copy_dir_recursive(src, dst)

    assert skipped == []
    assert (dst / "skill-a" / "SKILL.md").read_text() == "# A"
    assert (dst / "top.txt").read_bytes() == b"\x00\x01binary"


def test_copies_symlink_content_not_link(tmp_path: Path):
    real = tmp_path / "real.txt"
    real.write_text("content")
    src = tmp_path / "src"
    src.mkdir()
    os.symlink(real, src / "link.txt")

    dst = tmp_path / "dst"
    copy_dir_recursive(src, dst)

    assert not (dst / "link.txt").is_symlink()
    assert (dst / "link.txt").read_text() == "content"


def test_skips_broken_symlink(tmp_path: Path):
    """Test that one bad entry does not abort the whole copy."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "good.txt").write_text("ok")
    os.symlink(tmp_path / "missing", src / "broken")

    dst = tmp_path / "dst"
    skipped = copy_dir_recursive(src, dst)

    assert skipped == [src / "broken"]
    assert (dst / "good.txt").read_text() == "ok"
    assert not os.path.lexists(dst / "broken")


def test_empty_source_creates_destination(tmp_path: Path):
    src = tmp_path / "src"
    src.mkdir()

    dst = tmp_path / "a" / "b" / "dst"
    copy_dir_recursive(src, dst)

    assert dst.is_dir()
