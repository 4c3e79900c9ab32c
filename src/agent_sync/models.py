# Core data models for agent-sync
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

# ABOUTME: Outcome classification shared by link and platform results
Status = Literal["ok", "skip", "error"]

# ABOUTME: How a link was materialised on disk
LinkMethod = Literal["symlink", "junction", "copy"]


@dataclass(frozen=True)
class MCPServer:
    """Immutable MCP server launch specification.

    ABOUTME: Uses frozen dataclass to prevent accidental mutation
    ABOUTME: Only includes fields portable across all downstream CLIs
    """
    name: str
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


# ABOUTME: Server name -> spec, insertion ordered
ServerMap = dict[str, MCPServer]


@dataclass
class LinkResult:
    """Outcome of reconciling one link path against its desired target.

    ABOUTME: Every reconciliation returns one of these, never raises
    ABOUTME: status is ok/skip/error, action names the decision taken
    """
    status: Status
    action: str
    name: str
    link_path: Path
    target: Path
    error: str | None = None
    method: LinkMethod | None = None
    skipped: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class PromptCandidate:
    """Prompt file found in the project root."""
    label: str
    path: Path
    size_kb: int


@dataclass(frozen=True)
class SkillCandidate:
    """Skill directory found in or below the project root."""
    label: str
    path: Path
    count: int


@dataclass(frozen=True)
class McpCandidate:
    """MCP config file with at least one server defined."""
    label: str
    path: Path
    count: int


@runtime_checkable
class TargetAdapter(Protocol):
    """Protocol for downstream CLI config adapters.

    ABOUTME: Defines interface all platform adapters must implement
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    @property
    def name(self) -> str:
        """Human-readable platform name."""
        ...

    @property
    def path(self) -> Path:
        """Location of the platform config file, whether or not it exists."""
        ...

    @property
    def create_missing(self) -> bool:
        """True if the file is created when absent, False if absence means not installed."""
        ...

    def load(self) -> ServerMap:
        """Load MCP servers currently defined in the platform config."""
        ...

    def save(self, servers: ServerMap) -> bool:
        """Patch MCP servers into the platform config.

        ABOUTME: Returns True if the file content changed
        """
        ...
