"""Core modules for claude-skills."""

from claude_skills.core.config import Config, load_environment
from claude_skills.core.installer import InstallPlan, InstallResult, install_skills, run_git

__all__ = [
    "Config",
    "load_environment",
    "InstallPlan",
    "InstallResult",
    "install_skills",
    "run_git",
]
