"""Skill rule models, loading and trigger matching."""

from skillrules.rules.loader import load_rule_set
from skillrules.rules.matcher import (
    PriorityGroups,
    SkillMatch,
    group_by_priority,
    match_files,
    match_prompt,
)
from skillrules.rules.models import Enforcement, Priority, RuleSet, SkillRule

__all__ = [
    "Enforcement",
    "Priority",
    "PriorityGroups",
    "RuleSet",
    "SkillMatch",
    "SkillRule",
    "group_by_priority",
    "load_rule_set",
    "match_files",
    "match_prompt",
]
