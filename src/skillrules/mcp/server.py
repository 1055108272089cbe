"""MCP server exposing skill matching to agents."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from skillrules.config import rules_path
from skillrules.errors import RuleSetInvalid
from skillrules.rules import loader, matcher

mcp = FastMCP("skillrules")


def _grouped(matches: list[matcher.SkillMatch]) -> dict:
    groups = matcher.group_by_priority(matches)
    return {
        "matched": [m.name for m in matches],
        "groups": groups.names(),
        "skills": {
            m.name: {
                "priority": m.priority.value,
                "enforcement": m.enforcement.value,
                "description": m.rule.description,
                "trigger": m.trigger.value,
            }
            for m in matches
        },
    }


@mcp.tool()
def match_prompt(prompt: str, project_path: str) -> dict | str:
    """Find the skills a user prompt should activate in a project.

    Call this before starting on a request to learn which project skills
    (documentation snippets in .claude/skills) apply to it.

    Args:
        prompt: The user's request, verbatim
        project_path: Absolute path to the project root
    """
    try:
        rules = loader.load_rule_set(rules_path(Path(project_path)))
    except RuleSetInvalid as e:
        return f"Skill rules invalid: {e}"
    return _grouped(matcher.match_prompt(prompt, rules))


@mcp.tool()
def match_files(file_paths: list[str], project_path: str) -> dict | str:
    """Find the skills triggered by a set of files being edited.

    Args:
        file_paths: Paths of edited files, absolute or relative to the project
        project_path: Absolute path to the project root
    """
    root = Path(project_path)
    try:
        rules = loader.load_rule_set(rules_path(root))
    except RuleSetInvalid as e:
        return f"Skill rules invalid: {e}"
    return _grouped(matcher.match_files(file_paths, rules, root=root))


@mcp.tool()
def list_rules(project_path: str) -> list[dict] | str:
    """List the skill rules configured for a project.

    Args:
        project_path: Absolute path to the project root
    """
    try:
        rules = loader.load_rule_set(rules_path(Path(project_path)))
    except RuleSetInvalid as e:
        return f"Skill rules invalid: {e}"
    return [
        {
            "name": name,
            "priority": rule.priority.value,
            "enforcement": rule.enforcement.value,
            "description": rule.description,
            "prompt_triggers": rule.prompt_triggers is not None,
            "file_triggers": rule.file_triggers is not None,
        }
        for name, rule in rules.skills.items()
    ]
