"""Load skill-rules.json into an immutable RuleSet."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skillrules.errors import RuleSetInvalid
from skillrules.rules.models import RuleSet

logger = logging.getLogger(__name__)


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """json object hook that refuses repeated keys instead of keeping the last."""
    result: dict[str, Any] = {}
    duplicates = []
    for key, value in pairs:
        if key in result:
            duplicates.append(key)
        result[key] = value
    if duplicates:
        raise RuleSetInvalid(None, [f"duplicate key {k!r}" for k in duplicates])
    return result


def _format_errors(exc: ValidationError) -> list[str]:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}")
    return problems


def parse_rule_set(text: str, path: Path | None = None) -> RuleSet:
    """Parse and validate a skill-rules document.

    Raises json.JSONDecodeError when the text is not JSON at all, and
    RuleSetInvalid when it is JSON but not a usable rule set.
    """
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicates)
    except RuleSetInvalid as e:
        raise RuleSetInvalid(path, e.problems) from None

    if not isinstance(data, dict):
        raise RuleSetInvalid(path, ["top level must be a JSON object"])

    skills = data.get("skills", {})
    if not isinstance(skills, dict):
        raise RuleSetInvalid(path, ["skills: must be an object"])

    # Underscore entries are comments or metadata, not rules
    data = {**data, "skills": {k: v for k, v in skills.items() if not k.startswith("_")}}

    try:
        return RuleSet.model_validate(data)
    except ValidationError as e:
        raise RuleSetInvalid(path, _format_errors(e)) from None


def load_rule_set(path: Path) -> RuleSet:
    """Load a rule set from disk.

    A missing, unreadable or non-JSON file is not an error: it yields an
    empty RuleSet so hooks stay silent. A structurally broken document
    raises RuleSetInvalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No skill rules at %s", path)
        return RuleSet()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read skill rules at %s: %s", path, e)
        return RuleSet()

    try:
        rule_set = parse_rule_set(text, path)
    except json.JSONDecodeError as e:
        logger.debug("Skill rules at %s are not valid JSON: %s", path, e)
        return RuleSet()

    logger.debug("Loaded %d skill rules from %s", len(rule_set.skills), path)
    return rule_set
