"""Command-line interface for claude-skills."""

import argparse
import logging
import sys
from pathlib import Path

from claude_skills.core.config import Config, load_environment
from claude_skills.core.installer import InstallPlan, install_skills
from claude_skills.skills.registry import SkillRegistry
from claude_skills.skills.validator import validate_tree
from claude_skills.utils.errors import SkillsDirectoryNotFoundError

DOCS_URL = "https://github.com/nguyenthanhtat/screen1-claude"

# Progress labels for the bundled suites
SKILL_LABELS = {
    "bigquery": "BigQuery Skill Suite",
    "test-fully": "Test-Fully Skill",
    "git": "Git Skill Suite",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="claude-skills",
        description="Install, validate and inspect Claude Code skills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  claude-skills install
  claude-skills install --skill git --skill bigquery
  claude-skills validate ./skills
  claude-skills list --format table
  claude-skills show git/branching
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to run",
        required=True,
    )

    # Install command
    install_parser = subparsers.add_parser(
        "install",
        help="Clone or update the skills repository and copy skills into place",
    )
    install_parser.add_argument(
        "--repo-url",
        help="Skills repository URL (default: CLAUDE_SKILLS_REPO_URL or upstream)",
    )
    install_parser.add_argument(
        "--branch",
        help="Branch to pull when the checkout exists (default: main)",
    )
    install_parser.add_argument(
        "--checkout-dir",
        type=Path,
        help="Local clone location (default: ~/claude-skills)",
    )
    install_parser.add_argument(
        "--target-dir",
        type=Path,
        help="Skills directory to install into (default: ~/.claude/skills)",
    )
    install_parser.add_argument(
        "--skill",
        dest="skills",
        action="append",
        metavar="NAME",
        help="Skill folder to install; repeatable (default: bigquery, test-fully, git)",
    )
    install_parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Install from the existing checkout without running git",
    )

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check SKILL.md files for frontmatter and naming problems",
    )
    validate_parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Skills root or single skill folder (default: installed skills)",
    )
    validate_parser.add_argument(
        "--max-lines",
        type=int,
        help="Soft SKILL.md line limit (default: 500)",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures",
    )

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="List skills and sub-skills with their descriptions",
    )
    list_parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Skills root (default: installed skills)",
    )
    list_parser.add_argument(
        "--format",
        default="list",
        choices=["list", "table"],
        help="Output format (default: list)",
    )

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print a skill's instructions or one of its reference files",
    )
    show_parser.add_argument(
        "skill_id",
        help="Skill ID, e.g. git or git/branching",
    )
    show_parser.add_argument(
        "--root",
        type=Path,
        help="Skills root (default: installed skills)",
    )
    show_parser.add_argument(
        "--resource",
        help="Reference file to print instead of SKILL.md (e.g. README)",
    )

    return parser


def _load_registry(root: Path) -> SkillRegistry:
    if not root.is_dir():
        raise SkillsDirectoryNotFoundError(root)
    registry = SkillRegistry()
    registry.load_from_directory(root)
    return registry


def run_install_command(args: argparse.Namespace, config: Config) -> int:
    """Run the install command.

    Args:
        args: Parsed command-line arguments
        config: Loaded configuration

    Returns:
        Process exit code
    """
    plan = InstallPlan.from_config(
        config,
        repo_url=args.repo_url,
        branch=args.branch,
        checkout_dir=args.checkout_dir,
        target_dir=args.target_dir,
        skills=args.skills,
        skip_fetch=args.no_fetch or None,
    )

    def on_step(step: str, detail: str) -> None:
        if step == "fetch":
            print("📦 Cloning repository...")
            if detail == "update":
                print(f"⚠️  {plan.checkout_dir} already exists. Updating...")
        elif step == "copy":
            print(f"📋 Installing {SKILL_LABELS.get(detail, detail)}...")

    print("🚀 Installing Claude Code Skills...\n")
    result = install_skills(plan, on_step=on_step)

    print("\n✅ Installation complete!\n")
    print("📖 Test your installation:")
    for name in result.installed:
        print(f"   /{name}")
    print(f"\n📚 Documentation: {DOCS_URL}\n")
    return 0


def run_validate_command(args: argparse.Namespace, config: Config) -> int:
    """Run the validate command.

    Returns:
        0 when no errors (and no warnings with --strict), 1 otherwise
    """
    root = args.path or config.target_dir
    max_lines = args.max_lines if args.max_lines is not None else config.max_lines
    report = validate_tree(root, max_lines=max_lines)

    for issue in report.issues:
        marker = "❌" if issue.severity == "error" else "⚠️ "
        print(f"{marker} {issue.path}: {issue.message}")

    print(
        f"\nChecked {len(report.checked)} skill folders: "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )

    failed = not report.ok or (args.strict and report.warnings)
    if not failed:
        print("✅ All skills valid")
    return 1 if failed else 0


def run_list_command(args: argparse.Namespace, config: Config) -> int:
    """Run the list command."""
    registry = _load_registry(args.path or config.target_dir)
    print(registry.get_descriptions(format=args.format))
    return 0


def run_show_command(args: argparse.Namespace, config: Config) -> int:
    """Run the show command."""
    registry = _load_registry(args.root or config.target_dir)
    skill = registry.require(args.skill_id)

    if args.resource:
        print(skill.get_detail(args.resource))
        return 0

    print(f"# {skill.name} ({skill.id})")
    print(f"{skill.description}\n")
    print(skill.get_core_content())

    sub_skills = registry.get_sub_skills(skill.id)
    if sub_skills:
        print(f"\n{'='*60}")
        print("Sub-skills:")
        for sub in sub_skills:
            print(f"  - {sub.id}: {' '.join(sub.description.split())}")
    if skill.resources:
        print(f"\n{'='*60}")
        print(f"Resources: {', '.join(sorted(skill.resources))}")
    return 0


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    command_map = {
        "install": run_install_command,
        "validate": run_validate_command,
        "list": run_list_command,
        "show": run_show_command,
    }

    try:
        load_environment()
        config = Config.from_env()
        configure_logging("DEBUG" if args.verbose else config.log_level)

        command_func = command_map.get(args.command)
        if command_func:
            sys.exit(command_func(args, config))
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
