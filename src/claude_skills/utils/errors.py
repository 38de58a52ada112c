"""Custom exception classes and error handling utilities."""

from pathlib import Path


class ClaudeSkillsError(Exception):
    """Base exception for claude-skills."""

    pass


class ConfigurationError(ClaudeSkillsError):
    """Raised when an environment setting has an invalid value."""

    def __init__(self, variable: str, value: str, expected: str):
        self.variable = variable
        self.value = value
        message = f"Invalid value for {variable}: '{value}' (expected {expected})"
        super().__init__(message)


class GitCommandError(ClaudeSkillsError):
    """Raised when a git command fails or git is not available."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        joined = " ".join(command)
        if returncode is None:
            message = (
                f"Could not run '{joined}': git executable not found.\n\n"
                f"{get_git_install_instructions()}"
            )
        else:
            message = f"'{joined}' failed with exit code {returncode}"
            if stderr.strip():
                message += f":\n{stderr.strip()}"
        super().__init__(message)


class SkillSourceMissingError(ClaudeSkillsError):
    """Raised when a skill selected for install is absent from the checkout."""

    def __init__(self, skill: str, path: Path):
        self.skill = skill
        self.path = path
        message = f"Skill '{skill}' not found in repository checkout: {path}"
        super().__init__(message)


class SkillNotFoundError(ClaudeSkillsError):
    """Raised when a skill is not found in the registry."""

    def __init__(self, skill_id: str, available: list[str] | None = None):
        self.skill_id = skill_id
        self.available = available or []
        message = f"Skill '{skill_id}' not found"
        if self.available:
            message += f". Available skills: {', '.join(self.available)}"
        super().__init__(message)


class InvalidSkillError(ClaudeSkillsError):
    """Raised when a SKILL.md file cannot be parsed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid skill file {path}: {reason}")


class SkillsDirectoryNotFoundError(ClaudeSkillsError):
    """Raised when a skills root directory does not exist."""

    def __init__(self, path: Path):
        self.path = path
        message = (
            f"Skills directory not found: {path}\n"
            f"Run 'claude-skills install' first or pass an existing directory."
        )
        super().__init__(message)


def get_git_install_instructions() -> str:
    """Get setup instructions for installing git.

    Returns:
        Setup instructions string
    """
    return (
        "Install git and make sure it is on your PATH:\n"
        "- macOS: xcode-select --install (or brew install git)\n"
        "- Debian/Ubuntu: sudo apt install git\n"
        "- Windows: https://git-scm.com/download/win"
    )
