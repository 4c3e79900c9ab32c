# Tests for paths resolution and the canonical MCP store
import json
from pathlib import Path

from agent_sync.config import (
    HOME_ENV_VAR,
    SyncPaths,
    ensure_home,
    get_sync_paths,
    load_mcp_config,
    save_mcp_config,
)
from agent_sync.models import MCPServer


class TestGetSyncPaths:
    """Tests for get_sync_paths()."""

    def test_default_home(self, tmp_path: Path):
        paths = get_sync_paths(environ={}, user_home=tmp_path)

        assert paths.home == tmp_path / ".agent-sync"
        assert paths.user_home == tmp_path
        assert paths.mcp_path == tmp_path / ".agent-sync" / "mcp.json"

    def test_env_override(self, tmp_path: Path):
        custom = tmp_path / "custom"
        paths = get_sync_paths(environ={HOME_ENV_VAR: str(custom)}, user_home=tmp_path)

        assert paths.home == custom

    def test_env_override_expands_tilde(self, tmp_path: Path):
        paths = get_sync_paths(environ={HOME_ENV_VAR: "~/sync-home"}, user_home=tmp_path)

        assert paths.home == tmp_path / "sync-home"

    def test_empty_override_uses_default(self, tmp_path: Path):
        paths = get_sync_paths(environ={HOME_ENV_VAR: ""}, user_home=tmp_path)

        assert paths.home == tmp_path / ".agent-sync"

    def test_relative_override_is_made_absolute(self, tmp_path: Path):
        paths = get_sync_paths(environ={HOME_ENV_VAR: "relative/home"}, user_home=tmp_path)

        assert paths.home.is_absolute()

    def test_derived_directories(self, tmp_path: Path):
        paths = SyncPaths(home=tmp_path / "h", user_home=tmp_path)

        assert paths.skills_dir == tmp_path / "h" / "skills"
        assert paths.backups_dir == tmp_path / "h" / "backups"


def test_ensure_home_creates_directories(paths: SyncPaths):
    """Test that ensure_home creates home and skills directories."""
    result = ensure_home(paths)

    assert result == paths.home
    assert paths.home.is_dir()
    assert paths.skills_dir.is_dir()


class TestLoadMcpConfig:
    """Tests for load_mcp_config()."""

    def test_missing_file_returns_empty(self, paths: SyncPaths):
        assert load_mcp_config(paths) == {}

    def test_loads_servers_in_order(self, paths: SyncPaths):
        paths.home.mkdir(parents=True)
        paths.mcp_path.write_text(json.dumps({
            "servers": {
                "zeta": {"command": "npx", "args": ["-y", "zeta"]},
                "alpha": {"command": "uvx", "env": {"TOKEN": "abc"}},
            }
        }))

        servers = load_mcp_config(paths)

        assert list(servers) == ["zeta", "alpha"]
        assert servers["zeta"] == MCPServer(name="zeta", command="npx", args=["-y", "zeta"])
        assert servers["alpha"].args == []
        assert servers["alpha"].env == {"TOKEN": "abc"}

    def test_invalid_json_returns_empty(self, paths: SyncPaths):
        """Test that a corrupt canonical store starts from empty."""
        paths.home.mkdir(parents=True)
        paths.mcp_path.write_text("{not json")

        assert load_mcp_config(paths) == {}

    def test_non_object_returns_empty(self, paths: SyncPaths):
        paths.home.mkdir(parents=True)
        paths.mcp_path.write_text("[1, 2]")

        assert load_mcp_config(paths) == {}

    def test_missing_command_returns_empty(self, paths: SyncPaths):
        paths.home.mkdir(parents=True)
        paths.mcp_path.write_text(json.dumps({"servers": {"bad": {"args": []}}}))

        assert load_mcp_config(paths) == {}


class TestSaveMcpConfig:
    """Tests for save_mcp_config()."""

    def test_writes_four_space_indent_with_newline(self, paths: SyncPaths):
        servers = {"foo": MCPServer(name="foo", command="npx", args=["-y", "bar"])}

        save_mcp_config(paths, servers)

        content = paths.mcp_path.read_text()
        expected = json.dumps(
            {"servers": {"foo": {"command": "npx", "args": ["-y", "bar"]}}}, indent=4
        ) + "\n"
        assert content == expected

    def test_overwrites_whole_file(self, paths: SyncPaths):
        paths.home.mkdir(parents=True)
        paths.mcp_path.write_text(json.dumps({"servers": {}, "extra": True}))

        save_mcp_config(paths, {})

        assert json.loads(paths.mcp_path.read_text()) == {"servers": {}}

    def test_round_trip(self, paths: SyncPaths):
        servers = {
            "a": MCPServer(name="a", command="npx", args=["-y", "a"], env={"K": "v"}),
            "b": MCPServer(name="b", command="node"),
        }

        save_mcp_config(paths, servers)

        assert load_mcp_config(paths) == servers
