"""Utility modules for claude-skills."""

from claude_skills.utils.errors import (
    ClaudeSkillsError,
    ConfigurationError,
    GitCommandError,
    SkillSourceMissingError,
    SkillNotFoundError,
    InvalidSkillError,
    SkillsDirectoryNotFoundError,
    get_git_install_instructions,
)

__all__ = [
    "ClaudeSkillsError",
    "ConfigurationError",
    "GitCommandError",
    "SkillSourceMissingError",
    "SkillNotFoundError",
    "InvalidSkillError",
    "SkillsDirectoryNotFoundError",
    "get_git_install_instructions",
]
