"""Skill discovery and packaging checks.

Each skill directory contains:
- SKILL.md: Frontmatter (name, description) and core instructions
- Additional .md files: Reference resources
- Nested directories with their own SKILL.md: Sub-skills

Example structure:
    skills/
    ├── git/
    │   ├── SKILL.md          # Router for the git suite
    │   ├── README.md
    │   └── branching/
    │       └── SKILL.md      # Sub-skill "git/branching"
    └── test-fully/
        ├── SKILL.md
        └── references/
            └── checklist.md  # Resource "references/checklist"
"""

from claude_skills.skills.frontmatter import SkillFrontmatter, read_skill_md, split_frontmatter
from claude_skills.skills.registry import SkillDefinition, SkillRegistry
from claude_skills.skills.validator import (
    ValidationIssue,
    ValidationReport,
    validate_skill,
    validate_tree,
)

__all__ = [
    "SkillFrontmatter",
    "read_skill_md",
    "split_frontmatter",
    "SkillDefinition",
    "SkillRegistry",
    "ValidationIssue",
    "ValidationReport",
    "validate_skill",
    "validate_tree",
]
