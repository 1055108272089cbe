"""Shared fixtures: rule documents written into temp projects."""

import json

import pytest

from skillrules.rules.loader import parse_rule_set


def rule(priority="medium", enforcement="suggest", **extra):
    return {"type": "domain", "enforcement": enforcement, "priority": priority, **extra}


SAMPLE_RULES = {
    "version": "1.0",
    "description": "Test rules",
    "projectConfig": {"frontendPath": "frontend", "backendPath": "backend"},
    "skills": {
        "_comment": "Entries starting with underscore are ignored",
        "backend-dev-guidelines": rule(
            "high",
            description="Backend patterns",
            promptTriggers={
                "keywords": ["endpoint", "fastapi"],
                "intentPatterns": ["(create|add).*?(route|endpoint)"],
            },
            fileTriggers={
                "pathPatterns": ["backend/**/*.py"],
                "pathExclusions": ["**/*test*.py"],
            },
        ),
        "frontend-dev-guidelines": rule(
            "medium",
            promptTriggers={"keywords": ["component", "_ADD_KEYWORDS_"]},
            fileTriggers={"pathPatterns": ["frontend/**/*.tsx"]},
        ),
        "security-review": rule(
            "critical",
            "block",
            blockMessage="Read the security skill before touching auth code.",
            promptTriggers={"keywords": ["password", "auth"]},
        ),
    },
}


@pytest.fixture
def project(tmp_path):
    """A temp project containing .claude/skills/skill-rules.json."""

    def write(document=SAMPLE_RULES, text=None):
        path = tmp_path / ".claude" / "skills" / "skill-rules.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text if text is not None else json.dumps(document))
        return tmp_path

    return write


@pytest.fixture
def sample_rules():
    return parse_rule_set(json.dumps(SAMPLE_RULES))
