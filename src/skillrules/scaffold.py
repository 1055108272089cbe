"""Scaffold a starter skill-rules.json and skill directories into a project."""

import json
from pathlib import Path

from skillrules.config import SKILLS_DIR, rules_path

SKILL_TEMPLATE = """---
name: {name}
description: {description}
---

# {title}

[Add your skill instructions here]
"""

STARTER_SKILLS: dict[str, dict] = {
    "backend-dev-guidelines": {
        "type": "domain",
        "enforcement": "suggest",
        "priority": "high",
        "description": "Backend development patterns for {backend}",
        "promptTriggers": {
            "keywords": ["backend", "api", "endpoint", "route", "service"],
            "intentPatterns": [
                "(create|add|implement|build).*?(route|endpoint|API|service|schema)",
                "(fix|handle|debug).*?(error|exception|backend)",
                "(how to|best practice).*?(backend|api)",
            ],
        },
        "fileTriggers": {
            "pathPatterns": ["{backend}/**/*.py", "{backend}/**/*.ts"],
            "pathExclusions": [
                "**/*test*.py",
                "**/*.test.*",
                "**/node_modules/**",
                "**/__pycache__/**",
            ],
        },
    },
    "frontend-dev-guidelines": {
        "type": "domain",
        "enforcement": "suggest",
        "priority": "high",
        "description": "Frontend development patterns for {frontend}",
        "promptTriggers": {
            "keywords": ["frontend", "component", "_ADD_YOUR_FRAMEWORK_KEYWORDS_HERE_"],
            "intentPatterns": [
                "(create|add|make|build|update).*?(component|UI|page|modal|form)",
                "(how to|best practice).*?(component|frontend)",
                "(style|design|layout).*?(component|UI)",
            ],
        },
        "fileTriggers": {
            "pathPatterns": [
                "{frontend}/**/*.tsx",
                "{frontend}/**/*.ts",
                "{frontend}/**/*.vue",
            ],
            "pathExclusions": ["**/*.test.*", "**/*.spec.*", "**/node_modules/**"],
        },
        "skipConditions": {"sessionSkillUsed": True, "fileMarkers": ["@skip-validation"]},
    },
}


def _fill(value, **layout):
    if isinstance(value, str):
        return value.format(**layout)
    if isinstance(value, list):
        return [_fill(v, **layout) for v in value]
    if isinstance(value, dict):
        return {k: _fill(v, **layout) for k, v in value.items()}
    return value


def starter_rules(
    project_name: str, frontend_path: str = "frontend", backend_path: str = "backend"
) -> dict:
    """Build a starter rule document for a frontend/backend project layout."""
    return {
        "version": "1.0",
        "description": f"Skill activation triggers for {project_name}",
        "projectConfig": {
            "frontendPath": frontend_path,
            "backendPath": backend_path,
        },
        "skills": {
            name: _fill(skill, frontend=frontend_path, backend=backend_path)
            for name, skill in STARTER_SKILLS.items()
        },
    }


def write_skill(project_path: Path, name: str, description: str) -> Path:
    """Write a SKILL.md for a skill unless one already exists."""
    dest = project_path / SKILLS_DIR / name
    dest.mkdir(parents=True, exist_ok=True)
    skill_file = dest / "SKILL.md"
    if not skill_file.exists():
        title = name.replace("-", " ").title()
        skill_file.write_text(
            SKILL_TEMPLATE.format(name=name, description=description, title=title)
        )
    return skill_file


def scaffold_project(
    project_path: Path,
    frontend_path: str = "frontend",
    backend_path: str = "backend",
    force: bool = False,
) -> dict[str, bool]:
    """Write starter rules and skill files. Returns {relative path: written}."""
    results: dict[str, bool] = {}
    document = starter_rules(project_path.name, frontend_path, backend_path)

    target = rules_path(project_path)
    rel = target.relative_to(project_path).as_posix()
    if target.exists() and not force:
        results[rel] = False
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(document, indent=2) + "\n")
        results[rel] = True

    for name, skill in document["skills"].items():
        skill_file = project_path / SKILLS_DIR / name / "SKILL.md"
        existed = skill_file.exists()
        write_skill(project_path, name, skill["description"])
        results[skill_file.relative_to(project_path).as_posix()] = not existed

    return results
