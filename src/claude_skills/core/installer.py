"""Skill installation from the skills git repository.

Install steps, in order:
1. Clone the repository into the checkout directory, or pull the configured
   branch when the checkout already exists
2. Create the target skills directory
3. Copy each selected skill folder from <checkout>/skills into the target

Any failing step raises and stops the install. A git failure therefore
leaves the target untouched. Copies overwrite existing files but never
remove files that are no longer present upstream.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from claude_skills.core.config import Config
from claude_skills.utils.errors import GitCommandError, SkillSourceMissingError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 300


@dataclass
class InstallPlan:
    """What to fetch and where to put it."""

    repo_url: str
    branch: str
    checkout_dir: Path
    target_dir: Path
    skills: list[str]
    skip_fetch: bool = False

    @classmethod
    def from_config(cls, config: Config, **overrides) -> "InstallPlan":
        """Build a plan from config, with non-None overrides taking precedence."""
        values = {
            "repo_url": config.repo_url,
            "branch": config.branch,
            "checkout_dir": config.checkout_dir,
            "target_dir": config.target_dir,
            "skills": list(config.skills),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        values["checkout_dir"] = Path(values["checkout_dir"]).expanduser()
        values["target_dir"] = Path(values["target_dir"]).expanduser()
        return cls(**values)

    @property
    def source_root(self) -> Path:
        return self.checkout_dir / "skills"


@dataclass
class InstallResult:
    """Outcome of an install run.

    Attributes:
        repository_action: "cloned", "updated", or "skipped"
        installed: Skill name mapped to its destination directory
    """

    repository_action: str
    installed: dict[str, Path] = field(default_factory=dict)


def run_git(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run a git command and return its stdout.

    Args:
        args: Arguments after "git"
        cwd: Working directory

    Returns:
        Captured standard output

    Raises:
        GitCommandError: If git is missing, times out, or exits non-zero
    """
    cmd = ["git", *args]
    logger.debug(f"Running {' '.join(cmd)} (cwd={cwd})")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except FileNotFoundError as e:
        raise GitCommandError(cmd, None) from e
    except subprocess.TimeoutExpired as e:
        raise GitCommandError(cmd, -1, f"timed out after {GIT_TIMEOUT_SECONDS} seconds") from e

    if result.returncode != 0:
        raise GitCommandError(cmd, result.returncode, result.stderr or "")

    return result.stdout


def sync_repository(plan: InstallPlan) -> str:
    """Clone the skills repository or update an existing checkout.

    Returns:
        "updated" if the checkout existed, "cloned" otherwise
    """
    if plan.checkout_dir.is_dir():
        logger.info(f"{plan.checkout_dir} already exists, pulling {plan.branch}")
        run_git(["pull", "origin", plan.branch], cwd=plan.checkout_dir)
        return "updated"

    plan.checkout_dir.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Cloning {plan.repo_url} into {plan.checkout_dir}")
    run_git(["clone", plan.repo_url, str(plan.checkout_dir)])
    return "cloned"


def _unlink_replaced_links(source: Path, destination: Path) -> None:
    """Remove destination entries that a source symlink will be recreated over.

    copytree recreates symlinks with os.symlink, which refuses to overwrite.
    """
    if not destination.is_dir():
        return
    for link in source.rglob("*"):
        if not link.is_symlink():
            continue
        existing = destination / link.relative_to(source)
        if existing.is_symlink() or existing.is_file():
            existing.unlink()


def copy_skill(source_root: Path, name: str, target_dir: Path) -> Path:
    """Copy one skill folder into the target directory.

    Existing files are overwritten; files present only in the target are kept.
    Symlinks are copied as links, as cp -r does.

    Raises:
        SkillSourceMissingError: If the skill folder is not in source_root
    """
    source = source_root / name
    if not source.is_dir():
        raise SkillSourceMissingError(name, source)

    destination = target_dir / name
    _unlink_replaced_links(source, destination)
    shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
    logger.info(f"Copied {source} -> {destination}")
    return destination


def install_skills(
    plan: InstallPlan,
    on_step: Optional[Callable[[str, str], None]] = None,
) -> InstallResult:
    """Fetch the skills repository and install the selected skills.

    Args:
        plan: Install plan
        on_step: Called with (step, detail) before each step; step is one of
            "fetch" or "copy"

    Returns:
        InstallResult describing what was done

    Raises:
        GitCommandError: If cloning or pulling fails (nothing is copied)
        SkillSourceMissingError: If a selected skill is absent from the checkout
        OSError: If creating or copying into the target fails
    """
    notify = on_step or (lambda step, detail: None)

    if plan.skip_fetch:
        action = "skipped"
        logger.info(f"Using existing checkout at {plan.checkout_dir}")
    else:
        notify("fetch", "update" if plan.checkout_dir.is_dir() else "clone")
        action = sync_repository(plan)

    plan.target_dir.mkdir(parents=True, exist_ok=True)

    result = InstallResult(repository_action=action)
    for name in plan.skills:
        notify("copy", name)
        result.installed[name] = copy_skill(plan.source_root, name, plan.target_dir)

    logger.info(f"Installed {len(result.installed)} skills into {plan.target_dir}")
    return result
