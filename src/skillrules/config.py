"""Project layout and logging setup for skillrules."""

import logging
import sys
from pathlib import Path

# Paths relative to a project root
CLAUDE_DIR = ".claude"
SKILLS_DIR = Path(CLAUDE_DIR) / "skills"
RULES_FILENAME = "skill-rules.json"
RULES_PATH = SKILLS_DIR / RULES_FILENAME
SETTINGS_PATH = Path(CLAUDE_DIR) / "settings.json"

# Hook events and the commands registered for them by `skillrules init`
HOOK_COMMANDS = {
    "UserPromptSubmit": ["skillrules hook prompt"],
    "PostToolUse": ["skillrules hook files", "skillrules hook lint"],
}
EDIT_TOOL_MATCHER = "Edit|MultiEdit|Write"

LINT_TIMEOUT = 120  # seconds per lint command

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def claude_dir(project_root: Path) -> Path:
    """Return the assistant configuration directory of a project."""
    return project_root / CLAUDE_DIR


def rules_path(project_root: Path) -> Path:
    """Return the well-known location of a project's skill-rules.json."""
    return project_root / RULES_PATH


def settings_path(project_root: Path) -> Path:
    return project_root / SETTINGS_PATH


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; stdout is reserved for hook output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
