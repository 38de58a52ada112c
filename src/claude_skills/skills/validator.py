"""Packaging checks for skill directories.

Checks applied to every skill folder:
- a SKILL.md file exists
- SKILL.md is UTF-8 with YAML frontmatter holding name and description
- name is kebab-case and equals the folder name
- SKILL.md stays under the soft line limit (warning only)

Every immediate child directory of a skills root is a skill folder. Deeper
directories are sub-skills only when they contain a SKILL.md.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from claude_skills.core.config import DEFAULT_MAX_LINES
from claude_skills.skills.frontmatter import SKILL_FILENAME, SkillFrontmatter, read_skill_md
from claude_skills.utils.errors import InvalidSkillError, SkillsDirectoryNotFoundError

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass
class ValidationIssue:
    """A single problem found in a skill folder."""

    path: Path
    message: str
    severity: str = ERROR

    def __str__(self) -> str:
        return f"[{self.severity}] {self.path}: {self.message}"


@dataclass
class ValidationReport:
    """Result of validating one or more skill folders.

    Attributes:
        checked: Skill folders that were inspected
        issues: Everything found, errors and warnings
    """

    checked: list[Path] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, path: Path, message: str, severity: str = ERROR) -> None:
        self.issues.append(ValidationIssue(path=path, message=message, severity=severity))

    def merge(self, other: "ValidationReport") -> None:
        self.checked.extend(other.checked)
        self.issues.extend(other.issues)


def _describe_error(error: dict, data: dict) -> str:
    """Turn a pydantic error entry into a checklist-style message."""
    loc = error.get("loc") or ("frontmatter",)
    field_name = str(loc[0])
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"frontmatter is missing required field '{field_name}'"
    if kind == "string_pattern_mismatch" and field_name == "name":
        return f"name '{data.get('name')}' is not kebab-case (lowercase letters, digits, hyphens)"
    if kind == "string_too_short":
        return f"frontmatter field '{field_name}' is empty"
    if kind == "string_too_long":
        return f"frontmatter field '{field_name}' exceeds {ctx.get('max_length')} characters"
    if field_name == "allowed-tools":
        return "allowed-tools must be a string or a list of strings"
    return f"frontmatter field '{field_name}': {error.get('msg', 'invalid value')}"


def _check_skill_md(skill_dir: Path, max_lines: int, report: ValidationReport) -> None:
    skill_md = skill_dir / SKILL_FILENAME
    report.checked.append(skill_dir)

    if not skill_md.is_file():
        report.add(skill_dir, f"missing {SKILL_FILENAME}")
        return

    try:
        data, _ = read_skill_md(skill_md)
    except InvalidSkillError as e:
        report.add(skill_md, e.reason)
        return

    try:
        SkillFrontmatter.model_validate(data)
    except ValidationError as e:
        # Union fields report one entry per member type
        messages = dict.fromkeys(_describe_error(error, data) for error in e.errors())
        for message in messages:
            report.add(skill_md, message)

    name = data.get("name")
    if isinstance(name, str) and name.strip() and name.strip() != skill_dir.name:
        report.add(skill_md, f"name '{name.strip()}' does not match folder name '{skill_dir.name}'")

    line_count = len(skill_md.read_text(encoding="utf-8").splitlines())
    if line_count > max_lines:
        report.add(
            skill_md,
            f"{line_count} lines exceeds the recommended limit of {max_lines}; "
            f"move detail into reference files",
            severity=WARNING,
        )


def _walk_sub_skills(directory: Path, max_lines: int, report: ValidationReport) -> None:
    for child in sorted(directory.iterdir()):
        if not child.is_dir() or child.name.startswith("."):
            continue
        if (child / SKILL_FILENAME).is_file():
            _check_skill_md(child, max_lines, report)
        _walk_sub_skills(child, max_lines, report)


def validate_skill(skill_dir: Path, max_lines: int = DEFAULT_MAX_LINES) -> ValidationReport:
    """Validate a skill folder and all of its sub-skills.

    Args:
        skill_dir: The skill directory
        max_lines: Soft SKILL.md line limit

    Returns:
        ValidationReport for the skill and its sub-skills
    """
    report = ValidationReport()
    _check_skill_md(skill_dir, max_lines, report)
    _walk_sub_skills(skill_dir, max_lines, report)
    logger.debug(f"Validated {skill_dir}: {len(report.errors)} errors, {len(report.warnings)} warnings")
    return report


def validate_tree(root: Path, max_lines: int = DEFAULT_MAX_LINES) -> ValidationReport:
    """Validate every skill under a skills root.

    A root that itself contains SKILL.md is validated as a single skill.

    Args:
        root: Skills root or skill directory
        max_lines: Soft SKILL.md line limit

    Returns:
        Combined ValidationReport

    Raises:
        SkillsDirectoryNotFoundError: If root does not exist
    """
    if not root.is_dir():
        raise SkillsDirectoryNotFoundError(root)

    if (root / SKILL_FILENAME).is_file():
        return validate_skill(root, max_lines)

    report = ValidationReport()
    for skill_dir in sorted(root.iterdir()):
        if skill_dir.is_dir() and not skill_dir.name.startswith("."):
            report.merge(validate_skill(skill_dir, max_lines))

    if not report.checked:
        report.add(root, "no skill folders found", severity=WARNING)

    logger.info(
        f"Validated {len(report.checked)} skills under {root}: "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )
    return report
