"""Claude Skills - install, validate and inspect Claude Code skills

Skills are directories of markdown instructions (SKILL.md plus reference
files) read by Claude Code from ~/.claude/skills. This package installs
them from the skills repository, checks their packaging, and lists what
is installed.
"""

__version__ = "0.1.0"

from claude_skills.core.config import Config, load_environment
from claude_skills.core.installer import InstallPlan, InstallResult, install_skills
from claude_skills.skills.registry import SkillDefinition, SkillRegistry
from claude_skills.skills.validator import ValidationReport, validate_skill, validate_tree

from claude_skills.cli import main

__all__ = [
    "__version__",
    "Config",
    "load_environment",
    "InstallPlan",
    "InstallResult",
    "install_skills",
    "SkillDefinition",
    "SkillRegistry",
    "ValidationReport",
    "validate_skill",
    "validate_tree",
    "main",
]
