"""Tests for the claude-skills command-line interface."""

from unittest.mock import patch

import pytest

from claude_skills.cli import create_parser, main
from claude_skills.core.installer import InstallResult
from claude_skills.utils.errors import GitCommandError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point the default target at an empty temp directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("CLAUDE_SKILLS_TARGET_DIR", str(tmp_path / "installed"))
    monkeypatch.delenv("CLAUDE_SKILLS_INSTALL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def run_cli(argv):
    """Run main() and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# =============================================================================
# Parser Tests
# =============================================================================

class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        """Test running without a command fails."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_install_repeatable_skill(self):
        """Test --skill may be given several times."""
        args = create_parser().parse_args(["install", "--skill", "git", "--skill", "bigquery"])
        assert args.skills == ["git", "bigquery"]
        assert args.no_fetch is False

    def test_list_format_choices(self):
        """Test only list and table formats are accepted."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["list", "--format", "json"])


# =============================================================================
# validate Command Tests
# =============================================================================

class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_tree(self, skills_root, capsys):
        """Test a clean tree exits 0."""
        assert run_cli(["validate", str(skills_root)]) == 0
        out = capsys.readouterr().out
        assert "Checked 6 skill folders: 0 errors, 0 warnings" in out
        assert "All skills valid" in out

    def test_errors_exit_1(self, skills_root, make_skill, capsys):
        """Test a name mismatch fails validation."""
        make_skill(skills_root, "git/rebasing", name="rebase")
        assert run_cli(["validate", str(skills_root)]) == 1
        assert "does not match folder name" in capsys.readouterr().out

    def test_strict_fails_on_warnings(self, skills_root):
        """Test --strict turns line-limit warnings into failures."""
        assert run_cli(["validate", str(skills_root), "--max-lines", "3"]) == 0
        assert run_cli(["validate", str(skills_root), "--max-lines", "3", "--strict"]) == 1

    def test_missing_directory(self, tmp_path, capsys):
        """Test a missing path is reported as an error."""
        assert run_cli(["validate", str(tmp_path / "absent")]) == 1
        assert "Skills directory not found" in capsys.readouterr().err

    def test_defaults_to_installed_dir(self, skills_root, monkeypatch, capsys):
        """Test the configured target directory is used without a path."""
        monkeypatch.setenv("CLAUDE_SKILLS_TARGET_DIR", str(skills_root))
        assert run_cli(["validate"]) == 0

    def test_invalid_max_lines_setting(self, skills_root, monkeypatch, capsys):
        """Test a non-numeric line limit setting is reported, not raised."""
        monkeypatch.setenv("CLAUDE_SKILLS_MAX_LINES", "abc")
        assert run_cli(["validate", str(skills_root)]) == 1
        assert "Invalid value for CLAUDE_SKILLS_MAX_LINES: 'abc'" in capsys.readouterr().err


# =============================================================================
# list and show Command Tests
# =============================================================================

class TestListAndShow:
    """Tests for inspecting installed skills."""

    def test_list(self, skills_root, capsys):
        """Test list prints nested descriptions."""
        assert run_cli(["list", str(skills_root)]) == 0
        out = capsys.readouterr().out
        assert "- bigquery: BigQuery SQL router" in out
        assert "  - git/commits: Commit message conventions" in out

    def test_list_table(self, skills_root, capsys):
        """Test markdown table output."""
        assert run_cli(["list", str(skills_root), "--format", "table"]) == 0
        assert "| test-fully | Write complete test suites |" in capsys.readouterr().out

    def test_show_skill(self, skills_root, capsys):
        """Test show prints body and sub-skills."""
        assert run_cli(["show", "git", "--root", str(skills_root)]) == 0
        out = capsys.readouterr().out
        assert "# git (git)" in out
        assert "Do the thing." in out
        assert "  - git/branching: Branch naming and cleanup" in out

    def test_show_resource(self, skills_root, capsys):
        """Test show --resource prints a reference file."""
        code = run_cli(["show", "test-fully", "--root", str(skills_root), "--resource", "references/checklist"])
        assert code == 0
        assert "name matches folder" in capsys.readouterr().out

    def test_show_unknown_skill(self, skills_root, capsys):
        """Test unknown skills exit 1 with the available list."""
        assert run_cli(["show", "docker", "--root", str(skills_root)]) == 1
        err = capsys.readouterr().err
        assert "Skill 'docker' not found" in err
        assert "bigquery, git, test-fully" in err


# =============================================================================
# install Command Tests
# =============================================================================

class TestInstallCommand:
    """Tests for the install command output and error handling."""

    def test_install_prints_progress(self, tmp_path, capsys):
        """Test progress lines and the post-install hints."""
        def fake_install(plan, on_step=None):
            on_step("fetch", "clone")
            installed = {}
            for name in plan.skills:
                on_step("copy", name)
                installed[name] = plan.target_dir / name
            return InstallResult(repository_action="cloned", installed=installed)

        with patch("claude_skills.cli.install_skills", side_effect=fake_install) as mock_install:
            code = run_cli(["install", "--checkout-dir", str(tmp_path / "repo")])

        assert code == 0
        plan = mock_install.call_args.args[0]
        assert plan.checkout_dir == tmp_path / "repo"
        assert plan.target_dir == tmp_path / "installed"

        out = capsys.readouterr().out
        assert "📋 Installing BigQuery Skill Suite..." in out
        assert "📋 Installing Test-Fully Skill..." in out
        assert "📋 Installing Git Skill Suite..." in out
        assert "✅ Installation complete!" in out
        assert "   /test-fully" in out

    def test_install_git_failure(self, capsys):
        """Test git errors exit 1 with the message on stderr."""
        error = GitCommandError(["git", "clone", "url", "dest"], 128, "Could not resolve host")
        with patch("claude_skills.cli.install_skills", side_effect=error):
            assert run_cli(["install"]) == 1
        assert "Could not resolve host" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys):
        """Test Ctrl-C exits cleanly."""
        with patch("claude_skills.cli.install_skills", side_effect=KeyboardInterrupt):
            assert run_cli(["install"]) == 0
        assert "Interrupted by user" in capsys.readouterr().out
