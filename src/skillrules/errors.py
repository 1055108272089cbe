"""Exceptions raised by skillrules."""

from pathlib import Path


class SkillRulesError(Exception):
    """Base exception for all skillrules errors."""


class RuleSetInvalid(SkillRulesError):
    """Raised when a skill-rules document is structurally broken.

    Duplicate skill names, unknown priority or enforcement values and
    wrongly shaped fields all land here. The rule set is rejected as a
    whole so that nothing is ever matched against a partial configuration.
    """

    def __init__(self, path: Path | None, problems: list[str]):
        self.path = path
        self.problems = problems
        where = f" in {path}" if path else ""
        super().__init__(f"rule set invalid{where}: " + "; ".join(problems))


class HookInputError(SkillRulesError):
    """Raised when a hook payload on stdin is not the expected JSON object."""
