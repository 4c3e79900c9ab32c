# AGENTS.md generation (project-level)
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# ABOUTME: Sentinel a user types to skip manual prompt entry
SKIP_SENTINEL = "SKIP"


@dataclass
class AgentsMdResult:
    """Files written and the number of characters in each."""
    targets: list[Path]
    size: int


def is_skip_content(content: str) -> bool:
    """True if manually entered prompt text means "skip this step"."""
    stripped = content.strip()
    return stripped == "" or stripped == SKIP_SENTINEL


def generate_agents_md(cwd: Path, content: str) -> AgentsMdResult:
    """Write AGENTS.md to the project root.

    ABOUTME: Codex, Copilot and OpenCode discover AGENTS.md in the project root
    ABOUTME: Overwrites an existing AGENTS.md, the caller confirms first

    Args:
        cwd: Project root
        content: Prompt text, written verbatim

    Returns:
        AgentsMdResult listing written files

    Raises:
        OSError: If the file cannot be written
    """
    targets = [cwd / "AGENTS.md"]

    for target in targets:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug(f"Written: {target}")

    return AgentsMdResult(targets=targets, size=len(content))
