"""Skill registry for installed skill directories.

This module discovers skills on disk and exposes them for listing and
inspection. A skill is a directory holding a SKILL.md file; nested
directories with their own SKILL.md are sub-skills of the enclosing skill.

Progressive disclosure levels map onto the files of a skill:
- Level 1 (Metadata): frontmatter name and description
- Level 2 (Core): SKILL.md body
- Level 3 (Details): other markdown files, loaded only when requested
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from claude_skills.skills.frontmatter import SKILL_FILENAME, read_skill_md
from claude_skills.utils.errors import SkillNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class SkillDefinition:
    """A skill discovered on disk.

    Attributes:
        id: Path of the skill directory relative to the skills root
            (e.g., "git", "git/branching")
        name: Frontmatter name
        description: Frontmatter description (Level 1)
        path: Skill directory
        body: SKILL.md markdown body (Level 2)
        allowed_tools: Tools listed under allowed-tools, if any
        metadata: Remaining frontmatter keys
        parent_id: Id of the enclosing skill for sub-skills
        sub_skills: Ids of direct sub-skills
        resources: Reference files (Level 3) mapped to lazy loaders
    """

    id: str
    name: str
    description: str
    path: Path
    body: str = ""
    allowed_tools: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    parent_id: Optional[str] = None
    sub_skills: list[str] = field(default_factory=list)
    resources: dict[str, Callable[[], str]] = field(default_factory=dict)

    @property
    def depth(self) -> int:
        """Nesting level, 0 for top-level skills."""
        return self.id.count("/")

    def get_core_content(self) -> str:
        """Get the SKILL.md body.

        Returns:
            The core skill content (Level 2)
        """
        return self.body

    def get_detail(self, resource: str) -> str:
        """Get a reference resource.

        Args:
            resource: Resource name (file path relative to the skill, no .md)

        Returns:
            The resource content (Level 3) or error message if not found
        """
        if resource not in self.resources:
            available = ", ".join(sorted(self.resources)) or "none"
            return f"Unknown resource: {resource}. Available: {available}"

        return self.resources[resource]()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "path": str(self.path),
            "allowed_tools": list(self.allowed_tools),
            "parent_id": self.parent_id,
            "sub_skills": list(self.sub_skills),
            "resources": sorted(self.resources),
        }


class SkillRegistry:
    """Central registry for skill definitions.

    The registry supports loading skills from:
    - Direct registration via register()
    - A skills root on disk via load_from_directory()

    Example:
        registry = SkillRegistry()
        registry.load_from_directory(Path("~/.claude/skills").expanduser())

        registry.get_descriptions()
        # Returns: "- git: Git workflows ...\n  - git/branching: ..."

        registry.get_sub_skills("git")
        # Returns: [SkillDefinition(id="git/branching", ...), ...]
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._skills: dict[str, SkillDefinition] = {}

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: str) -> bool:
        return skill_id in self._skills

    def register(self, skill: SkillDefinition) -> None:
        """Register a skill definition.

        Args:
            skill: The skill definition to register
        """
        if skill.id in self._skills:
            logger.warning(f"Overwriting existing skill: {skill.id}")

        self._skills[skill.id] = skill
        logger.debug(f"Registered skill: {skill.id} ({skill.name})")

    def unregister(self, skill_id: str) -> bool:
        """Unregister a skill.

        Args:
            skill_id: The skill ID to unregister

        Returns:
            True if the skill was removed, False if not found
        """
        if skill_id not in self._skills:
            return False

        skill = self._skills.pop(skill_id)
        if skill.parent_id and skill.parent_id in self._skills:
            parent = self._skills[skill.parent_id]
            if skill_id in parent.sub_skills:
                parent.sub_skills.remove(skill_id)

        logger.debug(f"Unregistered skill: {skill_id}")
        return True

    def get(self, skill_id: str) -> Optional[SkillDefinition]:
        """Get a skill by ID.

        Args:
            skill_id: The skill ID to retrieve

        Returns:
            The skill definition or None if not found
        """
        return self._skills.get(skill_id.strip("/"))

    def require(self, skill_id: str) -> SkillDefinition:
        """Get a skill by ID, raising if it is unknown.

        Raises:
            SkillNotFoundError: If no skill has this ID
        """
        skill = self.get(skill_id)
        if skill is None:
            raise SkillNotFoundError(skill_id, [s.id for s in self.top_level()])
        return skill

    def list_skills(self) -> list[SkillDefinition]:
        """Get all registered skills, sorted by ID.

        Returns:
            List of all skill definitions
        """
        return [self._skills[skill_id] for skill_id in sorted(self._skills)]

    def top_level(self) -> list[SkillDefinition]:
        """Get skills that are not nested in another skill."""
        return [skill for skill in self.list_skills() if skill.parent_id is None]

    def get_sub_skills(self, skill_id: str) -> list[SkillDefinition]:
        """Get the direct sub-skills of a skill.

        Raises:
            SkillNotFoundError: If no skill has this ID
        """
        skill = self.require(skill_id)
        return [self._skills[sub_id] for sub_id in sorted(skill.sub_skills) if sub_id in self._skills]

    def get_descriptions(self, format: str = "list") -> str:
        """Get formatted descriptions of all skills.

        Args:
            format: Output format - "list" for indented bullet points,
                "table" for markdown table

        Returns:
            Formatted string of skill descriptions
        """
        if not self._skills:
            return "No skills available."

        if format == "table":
            lines = ["| Skill | Description |", "|-------|-------------|"]
            for skill in self.list_skills():
                description = skill.description.replace("|", "\\|").replace("\n", " ")
                lines.append(f"| {skill.id} | {description} |")
            return "\n".join(lines)

        lines = []
        for skill in self.list_skills():
            indent = "  " * skill.depth
            description = " ".join(skill.description.split())
            lines.append(f"{indent}- {skill.id}: {description}")
        return "\n".join(lines)

    def load_from_directory(self, directory: Path) -> int:
        """Load skills from SKILL.md files under a skills root.

        Expected structure:
            directory/
            ├── git/
            │   ├── SKILL.md          # Contains frontmatter + core content
            │   ├── README.md         # Detail resource
            │   └── branching/
            │       └── SKILL.md      # Sub-skill "git/branching"
            └── bigquery/
                └── SKILL.md

        Hidden folders (such as .git) are ignored. Skills whose SKILL.md
        cannot be parsed are logged and skipped; their sub-skills are still
        loaded.

        Args:
            directory: Path to the skills root

        Returns:
            Number of skills loaded
        """
        if not directory.exists():
            logger.warning(f"Skills directory does not exist: {directory}")
            return 0

        count = 0
        for skill_dir in sorted(directory.iterdir()):
            if skill_dir.is_dir() and not skill_dir.name.startswith("."):
                count += self._load_tree(directory, skill_dir, parent_id=None)

        logger.info(f"Loaded {count} skills from {directory}")
        return count

    def _load_tree(self, root: Path, directory: Path, parent_id: Optional[str]) -> int:
        count = 0
        current_parent = parent_id

        skill_md = directory / SKILL_FILENAME
        if skill_md.is_file():
            try:
                skill = self._parse_skill_md(root, directory, parent_id)
            except Exception as e:
                logger.error(f"Failed to load skill from {skill_md}: {e}")
            else:
                self.register(skill)
                if parent_id and parent_id in self._skills:
                    self._skills[parent_id].sub_skills.append(skill.id)
                current_parent = skill.id
                count += 1

        for child in sorted(directory.iterdir()):
            if child.is_dir() and not child.name.startswith("."):
                count += self._load_tree(root, child, current_parent)

        return count

    def _parse_skill_md(
        self, root: Path, skill_dir: Path, parent_id: Optional[str]
    ) -> SkillDefinition:
        """Parse a skill directory into a SkillDefinition.

        Args:
            root: Skills root the ID is relative to
            skill_dir: Path to the skill directory
            parent_id: ID of the enclosing skill, if any

        Returns:
            Parsed SkillDefinition
        """
        metadata, body = read_skill_md(skill_dir / SKILL_FILENAME)
        metadata = dict(metadata)

        name = metadata.pop("name", None) or skill_dir.name
        description = metadata.pop("description", None) or ""
        allowed_tools = metadata.pop("allowed-tools", None) or []
        if isinstance(allowed_tools, str):
            allowed_tools = [tool.strip() for tool in allowed_tools.split(",") if tool.strip()]

        return SkillDefinition(
            id=skill_dir.relative_to(root).as_posix(),
            name=str(name),
            description=str(description).strip(),
            path=skill_dir,
            body=body,
            allowed_tools=[str(tool) for tool in allowed_tools],
            metadata=metadata,
            parent_id=parent_id,
            resources=self._collect_resources(skill_dir),
        )

    def _collect_resources(self, skill_dir: Path) -> dict[str, Callable[[], str]]:
        """Map reference markdown files of a skill to lazy loaders.

        Files inside nested sub-skill directories belong to those sub-skills.
        Hidden files and folders are ignored.
        """
        resources: dict[str, Callable[[], str]] = {}
        pending = [skill_dir]
        while pending:
            current = pending.pop()
            for entry in sorted(current.iterdir()):
                if entry.name.startswith("."):
                    continue
                if entry.is_dir():
                    if not (entry / SKILL_FILENAME).is_file():
                        pending.append(entry)
                    continue
                if entry.suffix != ".md" or entry == skill_dir / SKILL_FILENAME:
                    continue
                resource_name = entry.relative_to(skill_dir).with_suffix("").as_posix()
                resources[resource_name] = lambda f=entry: f.read_text(encoding="utf-8")
        return resources
