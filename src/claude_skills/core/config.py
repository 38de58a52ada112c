"""Configuration and environment handling."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from claude_skills.utils.errors import ConfigurationError

DEFAULT_REPO_URL = "https://github.com/nguyenthanhtat/screen1-claude.git"
DEFAULT_BRANCH = "main"
DEFAULT_CHECKOUT_DIR = "~/claude-skills"
DEFAULT_TARGET_DIR = "~/.claude/skills"
DEFAULT_SKILLS = ["bigquery", "test-fully", "git"]
DEFAULT_MAX_LINES = 500


def _parse_skill_list(value: str) -> list[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


@dataclass
class Config:
    """Configuration for claude-skills.

    Attributes:
        repo_url: Git URL of the skills repository
        branch: Branch pulled when the checkout already exists
        checkout_dir: Local clone of the skills repository
        target_dir: Directory the assistant reads skills from
        skills: Skill folders copied by install, in order
        max_lines: Soft line limit for SKILL.md files
        log_level: Logging level name
    """

    repo_url: str = DEFAULT_REPO_URL
    branch: str = DEFAULT_BRANCH
    checkout_dir: Path = field(default_factory=lambda: Path(DEFAULT_CHECKOUT_DIR).expanduser())
    target_dir: Path = field(default_factory=lambda: Path(DEFAULT_TARGET_DIR).expanduser())
    skills: list[str] = field(default_factory=lambda: list(DEFAULT_SKILLS))
    max_lines: int = DEFAULT_MAX_LINES
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Create Config from environment variables.

        Returns:
            Config instance with values from environment or defaults
        """
        return cls(
            repo_url=get_repo_url(),
            branch=get_branch(),
            checkout_dir=get_checkout_dir(),
            target_dir=get_target_dir(),
            skills=get_install_skills(),
            max_lines=get_max_lines(),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )


def load_environment() -> None:
    """Load environment variables from .env file.

    Looks for .env file in current directory and parent directories.
    Silently succeeds if .env file is not found.
    """
    env_path = Path(".env")

    if env_path.exists():
        load_dotenv(env_path, override=True)
    else:
        load_dotenv(override=True)


def get_repo_url() -> str:
    """Get the skills repository URL.

    Returns:
        Repository URL (defaults to the upstream skills repository)
    """
    return os.getenv("CLAUDE_SKILLS_REPO_URL") or DEFAULT_REPO_URL


def get_branch() -> str:
    """Get the branch used when updating an existing checkout."""
    return os.getenv("CLAUDE_SKILLS_BRANCH") or DEFAULT_BRANCH


def get_checkout_dir() -> Path:
    """Get the local checkout directory.

    Returns:
        Expanded path (defaults to ~/claude-skills)
    """
    return Path(os.getenv("CLAUDE_SKILLS_CHECKOUT_DIR") or DEFAULT_CHECKOUT_DIR).expanduser()


def get_target_dir() -> Path:
    """Get the directory skills are installed into.

    Returns:
        Expanded path (defaults to ~/.claude/skills)
    """
    return Path(os.getenv("CLAUDE_SKILLS_TARGET_DIR") or DEFAULT_TARGET_DIR).expanduser()


def get_install_skills() -> list[str]:
    """Get the skill folders to install.

    Returns:
        Skill names parsed from CLAUDE_SKILLS_INSTALL, or the default suites
    """
    skills = _parse_skill_list(os.getenv("CLAUDE_SKILLS_INSTALL", ""))
    return skills or list(DEFAULT_SKILLS)


def get_max_lines() -> int:
    """Get the soft SKILL.md line limit.

    Raises:
        ConfigurationError: If CLAUDE_SKILLS_MAX_LINES is not a positive integer
    """
    value = os.getenv("CLAUDE_SKILLS_MAX_LINES") or str(DEFAULT_MAX_LINES)
    try:
        max_lines = int(value)
    except ValueError as e:
        raise ConfigurationError("CLAUDE_SKILLS_MAX_LINES", value, "a positive integer") from e
    if max_lines < 1:
        raise ConfigurationError("CLAUDE_SKILLS_MAX_LINES", value, "a positive integer")
    return max_lines
