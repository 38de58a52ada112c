"""CLI entry point for claude-skills.

Allows running the package as a module:
    python -m claude_skills
"""

from claude_skills.cli import main

if __name__ == "__main__":
    main()
