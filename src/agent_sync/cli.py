# CLI interface for agent-sync
import argparse
import logging
import sys
from pathlib import Path

from agent_sync import __version__
from agent_sync.agents_md import generate_agents_md, is_skip_content
from agent_sync.config import SyncPaths, ensure_home, get_sync_paths, save_mcp_config
from agent_sync.discovery import (
    detect_mcp_configs,
    detect_prompt_files,
    detect_skill_sources,
    list_skills,
)
from agent_sync.skills import create_default_skills_dir, sync_skills
from agent_sync.sync import AGENT_SYNC_LABEL, create_default_config, import_servers, sync_all
from agent_sync.utils.backup import create_backup_context

# ABOUTME: Exit codes
# 0 = success, 1 = partial success, 2 = config error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def choose(prompt: str, count: int, interactive: bool) -> int:
    """Ask for a 1-based choice, or take choice 1 when not interactive.

    ABOUTME: Re-prompts until the answer is a number in range
    ABOUTME: Empty answer selects 1
    """
    if not interactive:
        return 1

    while True:
        answer = input(f"  {prompt} [1-{count}] (1): ").strip()
        if not answer:
            return 1
        if answer.isdigit() and 1 <= int(answer) <= count:
            return int(answer)
        print(f"  Invalid choice. Enter a number between 1 and {count}.")


def read_multiline() -> str:
    """Read prompt text from stdin until EOF (Ctrl+D)."""
    return sys.stdin.read()


def print_choice(n: int, label: str, detail: str = "") -> None:
    print(f"  {n}) {label} {detail}".rstrip())


def step_agents(cwd: Path, interactive: bool) -> int:
    """Generate AGENTS.md from a detected prompt file or typed text."""
    candidates = detect_prompt_files(cwd)

    for i, candidate in enumerate(candidates, start=1):
        print_choice(i, candidate.label, f"({candidate.size_kb}KB)")
    print_choice(len(candidates) + 1, "NONE", "(enter raw prompt manually)")

    if not candidates and not interactive:
        print("  No prompt files detected, skipped AGENTS.md generation.")
        return EXIT_SUCCESS

    selection = choose("Select prompt source", len(candidates) + 1, interactive)

    if selection <= len(candidates):
        chosen = candidates[selection - 1]
        print(f"  Using: {chosen.label}")
        content = chosen.path.read_text(encoding="utf-8")
    else:
        print('  Enter your prompt content (Ctrl+D to finish, "SKIP" to skip):')
        content = read_multiline()
        if is_skip_content(content):
            print("  Skipped AGENTS.md generation.")
            return EXIT_SUCCESS
        if (cwd / "AGENTS.md").exists():
            answer = input("  AGENTS.md already exists. Overwrite? [y/N]: ").strip().lower()
            if answer != "y":
                print("  Skipped (not overwriting).")
                return EXIT_SUCCESS

    result = generate_agents_md(cwd, content)
    for target in result.targets:
        print(f"  Written: {target} ({result.size} chars)")
    return EXIT_SUCCESS


def step_skills(cwd: Path, paths: SyncPaths, interactive: bool) -> int:
    """Link .agent/.agents/.claude skill directories to one source."""
    candidates = detect_skill_sources(cwd)

    for i, candidate in enumerate(candidates, start=1):
        print_choice(i, candidate.label, f"({candidate.count} skills)")
    print_choice(len(candidates) + 1, "NONE", "(create empty skill directory)")

    if candidates:
        selection = choose("Select skill source", len(candidates) + 1, interactive)
    else:
        selection = 1

    if selection > len(candidates):
        created = create_default_skills_dir(cwd)
        print(f"  Created: {created}")
        print("  Place your SKILL.md folders here and run agent-sync again.")
        return EXIT_SUCCESS

    chosen = candidates[selection - 1]
    print(f"  Using: {chosen.label} ({chosen.count} skills)")
    print("  Syncing...")

    result = sync_skills(cwd, chosen.path, create_backup_context(paths))
    for link in result.links:
        if link.status == "ok":
            print(f"  {link.name}: {link.link_path} -> {link.target} ({link.action})")
        elif link.status == "skip":
            print(f"  {link.name}: {link.action}")
        else:
            print(f"  Error: {link.name}: {link.error}")

    print(f"  Active skills: {', '.join(list_skills(chosen.path))}")
    return EXIT_PARTIAL if result.errors else EXIT_SUCCESS


def step_mcp(paths: SyncPaths, interactive: bool) -> int:
    """Import the chosen MCP config into the canonical store and sync it out."""
    candidates = detect_mcp_configs(paths)

    for i, candidate in enumerate(candidates, start=1):
        print_choice(i, candidate.label, f"({candidate.count} servers) {candidate.path}")
    print_choice(len(candidates) + 1, "NONE", "(create default MCP config)")

    if candidates:
        selection = choose("Select MCP source", len(candidates) + 1, interactive)
    else:
        selection = 1

    if selection > len(candidates):
        created = create_default_config(paths)
        print(f"  Created: {created}")
        print("  Edit this file to add your MCP servers, then run agent-sync again.")
        return EXIT_SUCCESS

    chosen = candidates[selection - 1]
    print(f"  Using: {chosen.label} ({chosen.count} servers)")

    try:
        servers = import_servers(chosen, paths)
    except (OSError, ValueError) as e:
        print(f"  Error: Failed to parse selected config: {e}")
        return EXIT_CONFIG_ERROR

    if chosen.label != AGENT_SYNC_LABEL:
        save_mcp_config(paths, servers)
        print(f"  Imported to {paths.mcp_path}")

    print("  Syncing to all CLIs...")
    report = sync_all(servers, paths)
    for result in report.results:
        if result.status == "ok":
            print(f"  {result.platform}: {result.path} ({result.action})")
        elif result.status == "skip":
            print(f"  {result.platform}: {result.message}")
        else:
            print(f"  Error: {result.platform}: {result.message}")

    print(f"  Synced to {report.platforms_synced}/{report.platforms_total} CLIs.")
    return EXIT_PARTIAL if report.errors else EXIT_SUCCESS


def cmd_detect(cwd: Path, paths: SyncPaths) -> int:
    """Print every candidate source without changing anything."""
    print("Prompt files:")
    for prompt in detect_prompt_files(cwd):
        print(f"  {prompt.label} ({prompt.size_kb}KB)")

    print("Skill directories:")
    for skill in detect_skill_sources(cwd):
        print(f"  {skill.label} ({skill.count} skills) {skill.path}")

    print("MCP configs:")
    for mcp in detect_mcp_configs(paths):
        print(f"  {mcp.label} ({mcp.count} servers) {mcp.path}")

    return EXIT_SUCCESS


def run_all(cwd: Path, paths: SyncPaths, interactive: bool) -> int:
    """Run AGENTS.md, skills and MCP steps in order.

    ABOUTME: Returns the worst exit code of the three steps
    """
    codes = []

    print("Step 1/3 - AGENTS.md (Prompt File)")
    codes.append(step_agents(cwd, interactive))
    print()

    print("Step 2/3 - Skills Sync")
    codes.append(step_skills(cwd, paths, interactive))
    print()

    print("Step 3/3 - MCP Config Sync (Global)")
    codes.append(step_mcp(paths, interactive))
    print()

    if max(codes) == EXIT_SUCCESS:
        print("All done! Your agent configs are synced.")
    return max(codes)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-sync",
        description="Sync MCP servers, skills, and AGENTS.md across AI coding agents"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"agent-sync v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project directory (default: current directory)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in [
        ("mcp", "MCP config sync (global -> 6 CLIs)"),
        ("skills", "Skills symlink sync (project-level)"),
        ("agents", "AGENTS.md generation (project-level)"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--yes", "-y",
            action="store_true",
            help="Use the first detected source without prompting"
        )

    subparsers.add_parser(
        "all",
        help="Run all steps with detected defaults"
    )
    subparsers.add_parser(
        "detect",
        help="List detected sources without changing anything"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: No command runs the interactive wizard
    ABOUTME: Returns exit code for sys.exit()
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cwd = (args.project or Path.cwd()).absolute()
    paths = get_sync_paths()

    try:
        if args.command == "detect":
            return cmd_detect(cwd, paths)

        ensure_home(paths)
        interactive = not getattr(args, "yes", False)

        if args.command is None:
            print(f"agent-sync v{__version__}")
            print()
            return run_all(cwd, paths, interactive=True)
        elif args.command == "all":
            return run_all(cwd, paths, interactive=False)
        elif args.command == "mcp":
            return step_mcp(paths, interactive)
        elif args.command == "skills":
            return step_skills(cwd, paths, interactive)
        else:
            return step_agents(cwd, interactive)

    except (EOFError, KeyboardInterrupt):
        print()
        print("Operation cancelled.")
        return EXIT_FATAL
    except (OSError, ValueError) as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
