"""Shared fixtures for claude-skills tests."""

from pathlib import Path

import pytest


def write_skill(
    root: Path,
    rel_path: str,
    name: str | None = None,
    description: str = "A skill used in tests",
    body: str = "# Instructions\n\nDo the thing.",
    extra: str = "",
) -> Path:
    """Create a skill folder with a SKILL.md under root."""
    skill_dir = root / rel_path
    skill_dir.mkdir(parents=True, exist_ok=True)
    name = name if name is not None else skill_dir.name
    frontmatter = f"name: {name}\ndescription: {description}\n{extra}"
    (skill_dir / "SKILL.md").write_text(f"---\n{frontmatter}---\n\n{body}\n", encoding="utf-8")
    return skill_dir


@pytest.fixture
def skills_root(tmp_path):
    """Create a skills tree resembling the bundled suites.

    skills/
    ├── bigquery/SKILL.md (+ README.md, sub-skill optimization)
    ├── git/SKILL.md (+ sub-skills branching, commits)
    └── test-fully/SKILL.md (+ references/checklist.md)
    """
    root = tmp_path / "skills"
    bigquery = write_skill(root, "bigquery", description="BigQuery SQL router")
    (bigquery / "README.md").write_text("# BigQuery suite\n", encoding="utf-8")
    write_skill(root, "bigquery/optimization", description="Query cost and speed tuning")

    write_skill(root, "git", description="Git workflows router", extra="allowed-tools: Bash, Read\n")
    write_skill(root, "git/branching", description="Branch naming and cleanup")
    write_skill(root, "git/commits", description="Commit message conventions")

    test_fully = write_skill(root, "test-fully", description="Write complete test suites")
    references = test_fully / "references"
    references.mkdir()
    (references / "checklist.md").write_text("- [ ] name matches folder\n", encoding="utf-8")
    return root


@pytest.fixture
def make_skill():
    """Factory fixture exposing write_skill to tests."""
    return write_skill
