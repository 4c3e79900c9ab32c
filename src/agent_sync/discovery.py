# ABOUTME: Read-only discovery of MCP configs, skill directories and prompt files.
# ABOUTME: Missing paths and parse failures mean "no candidate", never an error.
import json
import logging
import os
from pathlib import Path

import tomli

from agent_sync.config import SyncPaths
from agent_sync.models import McpCandidate, PromptCandidate, SkillCandidate
from agent_sync.platforms import (
    AntigravityAdapter,
    ClaudeAdapter,
    CodexAdapter,
    CopilotAdapter,
    GeminiAdapter,
    OpenCodeAdapter,
)

logger = logging.getLogger(__name__)

# ABOUTME: Prompt files looked up directly in the project root
PROMPT_FILE_NAMES = [
    "AGENTS.md",
    "CLAUDE.md",
    "COPILOT.md",
    "INSTRUCTIONS.md",
    "PROMPT.md",
    "CODEX.md",
    ".github/copilot-instructions.md",
]

# ABOUTME: Skill registry file that sits beside skill folders
SKILL_REGISTRY_FILE = "registry.json"


def detect_mcp_configs(paths: SyncPaths) -> list[McpCandidate]:
    """Find MCP configs that define at least one server.

    ABOUTME: Checks the agent-sync store first, then every downstream CLI
    ABOUTME: JSON counts mcpServers/servers/mcp entries, TOML counts mcp_servers tables

    Args:
        paths: Resolved agent-sync paths

    Returns:
        Candidates in check order
    """
    home = paths.user_home
    checks: list[tuple[str, Path]] = [
        ("agent-sync", paths.mcp_path),
        ("Claude", ClaudeAdapter(user_home=home).path),
        ("Codex", CodexAdapter(user_home=home).path),
        ("Gemini", GeminiAdapter(user_home=home).path),
        ("Copilot", CopilotAdapter(user_home=home).path),
        ("Antigravity", AntigravityAdapter(user_home=home).path),
        ("OpenCode", OpenCodeAdapter(user_home=home).path),
    ]

    candidates: list[McpCandidate] = []
    for label, path in checks:
        count = _count_servers(path)
        if count > 0:
            candidates.append(McpCandidate(label=label, path=path, count=count))
    return candidates


def _count_servers(path: Path) -> int:
    try:
        raw = path.read_text(encoding="utf-8")
        if path.suffix == ".toml":
            servers = tomli.loads(raw).get("mcp_servers") or {}
        else:
            data = json.loads(raw)
            servers = data.get("mcpServers") or data.get("servers") or data.get("mcp") or {}
    except (OSError, ValueError, AttributeError) as e:
        logger.debug(f"No MCP candidate at {path}: {e}")
        return 0
    return len(servers) if isinstance(servers, dict) else 0


def detect_skill_sources(cwd: Path) -> list[SkillCandidate]:
    """Find skill directories in the project.

    ABOUTME: Checks .agent/.agents/.claude skills, skills_ref/ and <subdir>/skills_ref
    ABOUTME: Deduplicates by real path, so links to one directory count once

    Args:
        cwd: Project root

    Returns:
        Candidates with at least one skill folder
    """
    checks: list[tuple[str, Path]] = [
        ("Project .agent/skills", cwd / ".agent" / "skills"),
        ("Project .agents/skills", cwd / ".agents" / "skills"),
        ("Project .claude/skills", cwd / ".claude" / "skills"),
        ("Project skills_ref/", cwd / "skills_ref"),
    ]

    # One level of subdirectories for monorepo layouts
    try:
        for entry in sorted(cwd.iterdir()):
            if entry.name.startswith(".") or not entry.is_dir():
                continue
            sub = entry / "skills_ref"
            if sub.exists():
                checks.append((f"{entry.name}/skills_ref", sub))
    except OSError as e:
        logger.debug(f"Cannot list {cwd}: {e}")

    candidates: list[SkillCandidate] = []
    seen: set[Path] = set()
    for label, path in checks:
        try:
            real_path = path.resolve(strict=True)
            if not real_path.is_dir() or real_path in seen:
                continue
            count = len(list_skills(real_path))
        except (OSError, RuntimeError) as e:
            logger.debug(f"No skill candidate at {path}: {e}")
            continue
        if count > 0:
            seen.add(real_path)
            candidates.append(SkillCandidate(label=label, path=path, count=count))
    return candidates


def list_skills(skills_dir: Path) -> list[str]:
    """List skill folder names in a skills directory.

    ABOUTME: Skips hidden entries and registry.json
    ABOUTME: Returns [] if the directory cannot be read
    """
    try:
        names = sorted(os.listdir(skills_dir))
    except OSError:
        return []

    return [
        name for name in names
        if not name.startswith(".")
        and name != SKILL_REGISTRY_FILE
        and (skills_dir / name).is_dir()
    ]


def detect_prompt_files(cwd: Path) -> list[PromptCandidate]:
    """Find non-empty prompt files in the project root.

    ABOUTME: Only the fixed file names in PROMPT_FILE_NAMES, no subdirectory scan
    ABOUTME: Size is reported in KB, rounded half up
    """
    candidates: list[PromptCandidate] = []
    for name in PROMPT_FILE_NAMES:
        path = cwd / name
        try:
            if not path.is_file():
                continue
            size = path.stat().st_size
        except OSError:
            continue
        if size > 0:
            candidates.append(PromptCandidate(label=name, path=path, size_kb=(size + 512) // 1024))
    return candidates
