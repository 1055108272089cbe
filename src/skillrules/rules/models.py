"""Skill rule data models."""

import re
from enum import Enum
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from skillrules.rules.patterns import CompiledPattern, compile_globs, compile_patterns


class Enforcement(str, Enum):
    """Advisory strength of a matched skill. Does not affect matching."""

    SUGGEST = "suggest"
    WARN = "warn"
    BLOCK = "block"


class Priority(str, Enum):
    """Output bucket of a matched skill, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _RuleModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class PromptTriggers(_RuleModel):
    keywords: tuple[str, ...] = ()
    intent_patterns: tuple[str, ...] = Field(default=(), alias="intentPatterns")

    @cached_property
    def active_keywords(self) -> tuple[str, ...]:
        """Lowercased keywords, minus ``_`` placeholders."""
        return tuple(kw.lower() for kw in self.keywords if not kw.startswith("_"))

    @cached_property
    def compiled_intents(self) -> tuple[CompiledPattern, ...]:
        return compile_patterns(self.intent_patterns, re.IGNORECASE)


class FileTriggers(_RuleModel):
    path_patterns: tuple[str, ...] = Field(default=(), alias="pathPatterns")
    path_exclusions: tuple[str, ...] = Field(default=(), alias="pathExclusions")
    content_patterns: tuple[str, ...] = Field(default=(), alias="contentPatterns")

    @cached_property
    def compiled_paths(self) -> tuple[CompiledPattern, ...]:
        return compile_globs(self.path_patterns)

    @cached_property
    def compiled_exclusions(self) -> tuple[CompiledPattern, ...]:
        return compile_globs(self.path_exclusions)

    @cached_property
    def compiled_contents(self) -> tuple[CompiledPattern, ...]:
        return compile_patterns(self.content_patterns)


class SkipConditions(_RuleModel):
    # Kept for round-tripping configuration; only file_markers is acted on.
    session_skill_used: bool = Field(default=False, alias="sessionSkillUsed")
    file_markers: tuple[str, ...] = Field(default=(), alias="fileMarkers")
    env_override: str | None = Field(default=None, alias="envOverride")


class SkillRule(_RuleModel):
    """Trigger configuration for one skill."""

    type: str = "domain"
    enforcement: Enforcement
    priority: Priority
    description: str = ""
    prompt_triggers: PromptTriggers | None = Field(default=None, alias="promptTriggers")
    file_triggers: FileTriggers | None = Field(default=None, alias="fileTriggers")
    block_message: str | None = Field(default=None, alias="blockMessage")
    skip_conditions: SkipConditions = Field(
        default_factory=SkipConditions, alias="skipConditions"
    )


class ProjectConfig(_RuleModel):
    """Project layout hints written by the codebase analyzer."""

    frontend_path: str = Field(default="frontend", alias="frontendPath")
    backend_path: str = Field(default="backend", alias="backendPath")
    frontend_lint_command: str | None = Field(default=None, alias="frontendLintCommand")
    backend_lint_command: str | None = Field(default=None, alias="backendLintCommand")


class RuleSet(_RuleModel):
    """An immutable, validated skill-rules document.

    ``skills`` keeps the declaration order of the source document; the
    matcher relies on it for stable output.
    """

    version: str = ""
    description: str = ""
    generated_at: str | None = Field(default=None, alias="generatedAt")
    project_config: ProjectConfig | None = Field(default=None, alias="projectConfig")
    skills: dict[str, SkillRule] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.skills
