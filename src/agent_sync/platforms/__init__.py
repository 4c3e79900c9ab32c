# Platform adapter registry
from pathlib import Path

from agent_sync.models import TargetAdapter
from agent_sync.platforms.claude import AntigravityAdapter, ClaudeAdapter, CopilotAdapter
from agent_sync.platforms.codex import CodexAdapter
from agent_sync.platforms.gemini import GeminiAdapter
from agent_sync.platforms.opencode import OpenCodeAdapter

# Registry of all downstream targets, in sync order
ALL_PLATFORMS: list[type[TargetAdapter]] = [
    ClaudeAdapter,
    CodexAdapter,
    GeminiAdapter,
    OpenCodeAdapter,
    CopilotAdapter,
    AntigravityAdapter,
]

__all__ = [
    "TargetAdapter",
    "ClaudeAdapter",
    "CodexAdapter",
    "GeminiAdapter",
    "OpenCodeAdapter",
    "CopilotAdapter",
    "AntigravityAdapter",
    "ALL_PLATFORMS",
    "get_all_platforms",
]


def get_all_platforms(user_home: Path | None = None) -> list[TargetAdapter]:
    """Instantiate and return all platform adapters.

    ABOUTME: Creates instances of all registered adapters rooted at user_home
    ABOUTME: Returns list for easy iteration
    """
    return [platform_cls(user_home=user_home) for platform_cls in ALL_PLATFORMS]
