"""Register skillrules hook commands in a project's .claude/settings.json."""

import json
import logging
from pathlib import Path

from skillrules.config import EDIT_TOOL_MATCHER, HOOK_COMMANDS, settings_path

logger = logging.getLogger(__name__)


def _registered_commands(entries: list) -> set[str]:
    commands = set()
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("hooks"), list):
            continue
        for hook in entry["hooks"]:
            if isinstance(hook, dict) and "command" in hook:
                commands.add(hook["command"])
    return commands


def _inject_hooks(config: dict) -> list[str]:
    """Add missing hook commands to a settings dict. Returns what was added."""
    hooks = config.get("hooks")
    if not isinstance(hooks, dict):
        if hooks is not None:
            logger.warning("Replacing malformed hooks section: %r", hooks)
        hooks = config["hooks"] = {}
    added = []
    for event, commands in HOOK_COMMANDS.items():
        entries = hooks.get(event)
        if not isinstance(entries, list):
            if entries is not None:
                logger.warning("Replacing malformed %s hooks: %r", event, entries)
            entries = hooks[event] = []
        missing = [c for c in commands if c not in _registered_commands(entries)]
        if not missing:
            continue
        entry: dict = {"hooks": [{"type": "command", "command": c} for c in missing]}
        if event == "PostToolUse":
            entry = {"matcher": EDIT_TOOL_MATCHER, **entry}
        entries.append(entry)
        added += missing
    return added


def install_hooks(project_path: Path) -> list[str]:
    """Read/merge/write hook registrations. Returns the commands added."""
    path = settings_path(project_path)
    config: dict = {}
    if path.exists():
        try:
            config = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            config = {}
    if not isinstance(config, dict):
        config = {}

    added = _inject_hooks(config)
    if added or not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config, indent=2) + "\n")
    return added


def remove_hooks(project_path: Path) -> bool:
    """Remove skillrules hook commands. Returns True if anything was removed."""
    path = settings_path(project_path)
    if not path.exists():
        return False
    try:
        config = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return False

    ours = {c for commands in HOOK_COMMANDS.values() for c in commands}
    hooks = config.get("hooks") if isinstance(config, dict) else None
    if not isinstance(hooks, dict):
        return False
    removed = False
    for event in list(hooks):
        if not isinstance(hooks[event], list):
            continue
        kept_entries = []
        for entry in hooks[event]:
            if isinstance(entry, dict) and isinstance(entry.get("hooks"), list):
                kept = [
                    h
                    for h in entry.get("hooks", [])
                    if not (isinstance(h, dict) and h.get("command") in ours)
                ]
                if len(kept) != len(entry.get("hooks", [])):
                    removed = True
                    if not kept:
                        continue
                    entry = {**entry, "hooks": kept}
            kept_entries.append(entry)
        if kept_entries:
            hooks[event] = kept_entries
        else:
            del hooks[event]

    if removed:
        path.write_text(json.dumps(config, indent=2) + "\n")
    return removed
