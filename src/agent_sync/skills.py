# Skills directory sync (project-level)
import logging
from dataclasses import dataclass, field
from pathlib import Path

from agent_sync.models import LinkResult
from agent_sync.symlink import ensure_symlink_safe, normalize_path
from agent_sync.utils.backup import BackupContext

logger = logging.getLogger(__name__)


@dataclass
class SkillSyncResult:
    """Result of converging the project skill directories onto one source."""
    source: Path
    links: list[LinkResult] = field(default_factory=list)

    @property
    def errors(self) -> list[LinkResult]:
        return [link for link in self.links if link.status == "error"]


def skill_targets(cwd: Path) -> list[tuple[str, Path]]:
    """Skill locations each agent reads, canonical .agent/skills first."""
    return [
        ("agent_skills", cwd / ".agent" / "skills"),
        ("agents_skills", cwd / ".agents" / "skills"),
        ("claude_skills", cwd / ".claude" / "skills"),
    ]


def canonical_skills_dir(cwd: Path) -> Path:
    return cwd / ".agent" / "skills"


def create_default_skills_dir(cwd: Path) -> Path:
    """Create an empty .agent/skills directory for the user to fill."""
    path = canonical_skills_dir(cwd)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sync_skills(cwd: Path, source: Path, backup_context: BackupContext) -> SkillSyncResult:
    """Link every agent skill location to the chosen source.

    ABOUTME: The source is resolved to its real directory first, so a source
    ABOUTME: reached through an earlier link is never mistaken for a conflict
    ABOUTME: .agent/skills links to the source unless it is the source
    ABOUTME: .agents/skills and .claude/skills link to .agent/skills
    ABOUTME: Conflicting real directories are moved to the backup store

    Args:
        cwd: Project root
        source: Skill directory chosen from detect_skill_sources()
        backup_context: Backup context shared by the three targets

    Returns:
        SkillSyncResult with one LinkResult per target
    """
    source = normalize_path(source.resolve())
    canonical = normalize_path(canonical_skills_dir(cwd))
    result = SkillSyncResult(source=source)

    for name, target_path in skill_targets(cwd):
        target_path = normalize_path(target_path)

        # Parent directories resolved, the entry itself left as is
        if normalize_path(target_path.parent.resolve() / target_path.name) == source:
            result.links.append(LinkResult(
                status="skip", action="is_source", name=name,
                link_path=target_path, target=source,
            ))
            continue

        desired = source if target_path == canonical else canonical
        link = ensure_symlink_safe(
            desired, target_path, backup_context, on_conflict="backup", name=name,
        )
        logger.debug(f"{name}: {link.action} {link.link_path} -> {link.target}")
        result.links.append(link)

    return result
