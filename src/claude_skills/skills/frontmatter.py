"""SKILL.md frontmatter parsing.

A SKILL.md file starts with a YAML block delimited by ``---`` lines:

    ---
    name: git-branching
    description: Branch strategies, naming and cleanup
    allowed-tools: Bash, Read
    ---

    # Git Branching
    ...

Everything after the closing delimiter is the markdown body.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from claude_skills.utils.errors import InvalidSkillError

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
KEBAB_CASE_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024


class SkillFrontmatter(BaseModel):
    """Frontmatter fields the assistant reads from SKILL.md."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        description="Skill name (kebab-case, matches folder name)",
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        pattern=KEBAB_CASE_PATTERN,
    )
    description: str = Field(
        ...,
        description="What the skill does and when to use it",
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
    )
    allowed_tools: Optional[Union[str, list[str]]] = Field(
        None,
        alias="allowed-tools",
        description="Tools the assistant may use while the skill is active",
    )

    @property
    def extra_metadata(self) -> dict[str, Any]:
        """Frontmatter keys not covered by the declared fields."""
        return dict(self.model_extra or {})


def split_frontmatter(content: str, source: Path | str = SKILL_FILENAME) -> tuple[dict[str, Any], str]:
    """Split SKILL.md content into frontmatter mapping and body.

    Args:
        content: Full SKILL.md text
        source: Path used in error messages

    Returns:
        Tuple of (frontmatter dict, stripped markdown body)

    Raises:
        InvalidSkillError: If the frontmatter block is missing, unterminated,
            not valid YAML, or not a mapping
    """
    lines = content.lstrip("\ufeff").split("\n")
    if not lines or lines[0].strip() != "---":
        raise InvalidSkillError(source, "missing YAML frontmatter")

    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        raise InvalidSkillError(source, "unterminated YAML frontmatter")

    raw = "\n".join(lines[1:end_idx])
    try:
        metadata = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise InvalidSkillError(source, f"invalid YAML frontmatter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise InvalidSkillError(source, "frontmatter must be a mapping of keys to values")

    body = "\n".join(lines[end_idx + 1:]).strip()
    return metadata, body


def read_skill_md(path: Path) -> tuple[dict[str, Any], str]:
    """Read and split a SKILL.md file.

    Args:
        path: Path to the SKILL.md file

    Returns:
        Tuple of (frontmatter dict, markdown body)

    Raises:
        InvalidSkillError: If the file is not UTF-8 or has bad frontmatter
    """
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidSkillError(path, f"not valid UTF-8 ({e.reason})") from e

    return split_frontmatter(content, path)
